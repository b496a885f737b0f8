"""Enumerations for msgcatalog type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so ``PluginKind.LOADER == "loader"``.

Python 3.13+.
"""

from enum import StrEnum


class PluginKind(StrEnum):
    """Kind of plugin a CatalogManager can be extended with.

    StrEnum provides automatic string conversion: str(PluginKind.LOADER) == "loader"
    """

    LOADER = "loader"
    """Produces raw per-locale message templates: fs, memory, ..."""

    FORMATTER = "formatter"
    """Renders a template plus data into final text: icu, simple, ..."""


class NumberStyle(StrEnum):
    """Named number styles accepted by ICU ``{n, number, <style>}`` arguments."""

    DECIMAL = "decimal"
    INTEGER = "integer"
    PERCENT = "percent"
    CURRENCY = "currency"


class DateTimeStyle(StrEnum):
    """CLDR date/time format lengths shared by Babel and ICU."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"
    FULL = "full"


__all__ = [
    "DateTimeStyle",
    "NumberStyle",
    "PluginKind",
]
