"""Diagnostic system for msgcatalog errors.

Provides structured error diagnostics with stable codes and hints.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, ErrorCode
from .errors import (
    CatalogError,
    CatalogFormatError,
    InvalidFormatterError,
    MessageFormatError,
    PluginNotFoundError,
    UnknownLoaderError,
)

__all__ = [
    "CatalogError",
    "CatalogFormatError",
    "Diagnostic",
    "ErrorCode",
    "InvalidFormatterError",
    "MessageFormatError",
    "PluginNotFoundError",
    "UnknownLoaderError",
]
