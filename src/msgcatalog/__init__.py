"""msgcatalog - Pluggable message catalogs with ICU MessageFormat rendering.

Loads translation catalogs through named loader plugins, merges them into
one immutable catalog, and formats messages per locale through a named
formatter plugin. CLDR-aware number, date and plural handling is backed
by Babel.

Public API:
    CatalogManager - Loads catalogs, registers plugins, creates locale facades
    LocaleFacade - Single-locale message formatting
    CatalogConfig - Immutable manager configuration
    FileSystemLoader - Built-in ``fs`` loader (JSON files per locale)
    MemoryLoader - Static in-memory loader
    IcuMessageFormatter - Built-in ``icu`` formatter
    SimpleFormatter - Built-in ``simple`` formatter

Exceptions:
    CatalogError - Base exception class
    UnknownLoaderError - Configured loader is not registered
    InvalidFormatterError - Configured formatter is not registered
    CatalogFormatError - Loader returned a malformed catalog
    MessageFormatError - Template or data could not be rendered

Submodules:
    msgcatalog.localization - Loading, merging, registries, manager and facade
    msgcatalog.runtime - Formatters and Babel-backed LocaleContext
    msgcatalog.diagnostics - Error types and codes
    msgcatalog.events - Event emitter protocol
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

# Essential Public API - Minimal exports for clean namespace
from .config import CatalogConfig, LoaderConfig
from .diagnostics import (
    CatalogError,
    CatalogFormatError,
    InvalidFormatterError,
    MessageFormatError,
    PluginNotFoundError,
    UnknownLoaderError,
)
from .enums import PluginKind
from .events import EventEmitter
from .localization import (
    CatalogManager,
    CatalogStore,
    FileSystemLoader,
    LocaleFacade,
    MemoryLoader,
    MessageLoader,
)
from .runtime import IcuMessageFormatter, MessageFormatter, SimpleFormatter

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("msgcatalog")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "CatalogConfig",
    "CatalogError",
    "CatalogFormatError",
    "CatalogManager",
    "CatalogStore",
    "EventEmitter",
    "FileSystemLoader",
    "IcuMessageFormatter",
    "InvalidFormatterError",
    "LoaderConfig",
    "LocaleFacade",
    "MemoryLoader",
    "MessageFormatError",
    "MessageFormatter",
    "MessageLoader",
    "PluginKind",
    "PluginNotFoundError",
    "SimpleFormatter",
    "UnknownLoaderError",
    "__version__",
]
