"""Shared constants for msgcatalog.

Centralized configuration constants used across the localization and
runtime packages. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Plugin names: built-in loader and formatter registrations
- Cache limits: Memory bounds for caching subsystems
- Fallback strings: Rendered text for missing content
- Events: Names of events announced to the host application

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Plugin names
    "FS_LOADER_NAME",
    "ICU_FORMATTER_NAME",
    "SIMPLE_FORMATTER_NAME",
    "DEFAULT_MESSAGES_FORMAT",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
    "MAX_TEMPLATE_CACHE_SIZE",
    # Fallback strings
    "FALLBACK_MISSING_TRANSLATION",
    "FALLBACK_LOCALE",
    "FALLBACK_CURRENCY",
    # Identifier separator
    "IDENTIFIER_SEPARATOR",
    # Events
    "EVENT_MISSING_LOCALE",
    "EVENT_MISSING_TRANSLATION",
]

# ============================================================================
# PLUGIN NAMES
# ============================================================================

# Loader pre-registered by every CatalogManager.
FS_LOADER_NAME: str = "fs"

# Formatters pre-registered by every CatalogManager.
ICU_FORMATTER_NAME: str = "icu"
SIMPLE_FORMATTER_NAME: str = "simple"

# Formatter used when the configuration does not name one.
DEFAULT_MESSAGES_FORMAT: str = ICU_FORMATTER_NAME

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum cached LocaleContext instances.
# 128 covers typical multi-region applications (major locales + variants).
MAX_LOCALE_CACHE_SIZE: int = 128

# Maximum parsed ICU templates kept per formatter instance.
# Typical UIs render well under a thousand distinct templates.
MAX_TEMPLATE_CACHE_SIZE: int = 1024

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Rendered in place of a message that no catalog provides.
# Format string - use .format(locale=..., identifier=...)
FALLBACK_MISSING_TRANSLATION: str = "translation missing: {locale}, {identifier}"

# Babel locale used when a requested locale has no CLDR data.
FALLBACK_LOCALE: str = "en_US"

# Currency used by {n, number, currency} when the locale's region has none.
FALLBACK_CURRENCY: str = "USD"

# ============================================================================
# IDENTIFIERS
# ============================================================================

# Joins nested keys (and file names) into message identifiers.
IDENTIFIER_SEPARATOR: str = "."

# ============================================================================
# EVENTS
# ============================================================================

# Emitted by CatalogManager.locale() when the requested locale has no entries.
# Payload: {"locale": str}
EVENT_MISSING_LOCALE: str = "i18n:missing:locale"

# Emitted by LocaleFacade.format_message() when a message is not found.
# Payload: {"locale": str, "identifier": str}
EVENT_MISSING_TRANSLATION: str = "i18n:missing:translation"
