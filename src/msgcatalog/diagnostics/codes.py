"""Diagnostic codes and data structures.

Defines error codes and the structured diagnostic carried by every
msgcatalog exception.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import StrEnum

__all__ = [
    "Diagnostic",
    "ErrorCode",
]


class ErrorCode(StrEnum):
    """Stable error codes prefixed to exception messages.

    Codes are strings so that logs and error reports carry the code verbatim,
    e.g. ``E_INVALID_INTL_LOADER: Invalid loader "memory"``.

    Codes:
        INVALID_LOADER: Configured loader name has no registry entry
        INVALID_FORMATTER: Configured formatter name has no registry entry
        INVALID_CATALOG: Loader output or catalog file has the wrong shape
        FORMAT_FAILED: Template could not be parsed or rendered with the data
    """

    INVALID_LOADER = "E_INVALID_INTL_LOADER"
    INVALID_FORMATTER = "E_INVALID_INTL_FORMATTER"
    INVALID_CATALOG = "E_INVALID_INTL_CATALOG"
    FORMAT_FAILED = "E_INTL_FORMAT_FAILED"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        locale: Locale being processed when the error occurred
        identifier: Message identifier being processed (format errors)
        source: Loader name or file path that produced bad data (catalog errors)
    """

    code: ErrorCode
    message: str
    hint: str | None = None
    locale: str | None = None
    identifier: str | None = None
    source: str | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic as ``CODE: message``.

        Example output:
            E_INVALID_INTL_LOADER: Invalid loader "memory"

        Returns:
            Formatted error message
        """
        return f"{self.code}: {self.message}"
