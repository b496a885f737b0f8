"""Catalog loading, merging and per-locale formatting.

Submodules:
    types    - PEP 695 type aliases (MessageId, LocaleCode, Template, MessageCatalog)
    loading  - MessageLoader protocol, FileSystemLoader, MemoryLoader,
               LoadResult, LoadSummary
    registry - LoaderRegistry and FormatterRegistry
    store    - CatalogStore (immutable merged catalog)
    facade   - LocaleFacade (single-locale formatting)
    manager  - CatalogManager (load passes and plugin extension)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from msgcatalog.localization.facade import LocaleFacade
from msgcatalog.localization.loading import (
    FileSystemLoader,
    LoadResult,
    LoadSummary,
    MemoryLoader,
    MessageLoader,
    flatten_messages,
    validate_catalog,
)
from msgcatalog.localization.manager import CatalogManager
from msgcatalog.localization.registry import (
    FormatterFactory,
    FormatterRegistry,
    LoaderFactory,
    LoaderRegistry,
    PluginRegistry,
)
from msgcatalog.localization.store import CatalogStore
from msgcatalog.localization.types import (
    LocaleCode,
    LocaleMessages,
    MessageCatalog,
    MessageData,
    MessageId,
    Template,
)

__all__ = [
    # Orchestration
    "CatalogManager",
    "LocaleFacade",
    "CatalogStore",
    # Loader protocol and implementations
    "MessageLoader",
    "FileSystemLoader",
    "MemoryLoader",
    "flatten_messages",
    "validate_catalog",
    # Load tracking
    "LoadResult",
    "LoadSummary",
    # Plugin registries
    "PluginRegistry",
    "LoaderRegistry",
    "FormatterRegistry",
    "LoaderFactory",
    "FormatterFactory",
    # Type aliases for user code type annotations
    "LocaleCode",
    "LocaleMessages",
    "MessageCatalog",
    "MessageData",
    "MessageId",
    "Template",
]
