"""Locale utilities for BCP-47 to POSIX conversion and negotiation.

Centralizes locale format normalization used throughout the codebase.
Catalog keys keep whatever spelling loaders produced ("en", "pt-BR");
only Babel-facing calls and negotiation use the normalized POSIX form.

Python 3.13+.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "negotiate_locale",
    "normalize_locale",
]


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 locale code to POSIX format for Babel.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Args:
        locale_code: BCP-47 locale code (e.g., "en-US", "pt-BR")

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.strip().replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Parses the locale code once and caches the result. This avoids repeated
    parsing overhead in hot paths like plural rule selection.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def clear_locale_cache() -> None:
    """Clear the cached Babel Locale objects."""
    get_babel_locale.cache_clear()


def negotiate_locale(
    requested: str | Iterable[str],
    available: Iterable[str],
) -> str | None:
    """Pick the best available locale for one or more requested locales.

    Requested locales are tried in order. Matching is case-insensitive and
    accepts both BCP-47 and POSIX spellings. A regional request falls back to
    its language ("fr-CA" matches "fr"), and a bare language matches its
    CLDR default region ("de" matches "de_DE") through Babel's alias table.

    Args:
        requested: Locale code or codes in preference order
        available: Supported locale codes, as spelled in the catalog

    Returns:
        The matching entry from ``available`` (original spelling), or None

    Example:
        >>> negotiate_locale(["fr-CA", "en"], ["en", "fr"])
        'fr'
        >>> negotiate_locale("it", ["en", "fr"]) is None
        True
    """
    from babel import negotiate_locale as babel_negotiate  # noqa: PLC0415

    if isinstance(requested, str):
        requested = [requested]

    # normalized lowercase key -> original spelling, first spelling wins
    lookup: dict[str, str] = {}
    for code in available:
        lookup.setdefault(normalize_locale(code).lower(), code)
    if not lookup:
        return None

    preferred = [normalize_locale(code) for code in requested if code and code.strip()]
    match = babel_negotiate(preferred, list(lookup), sep="_")
    if match is None:
        return None
    return lookup.get(normalize_locale(match).lower())
