"""CLDR plural rules implementation using Babel.

Provides cardinal and ordinal plural category selection for all locales
using Babel's CLDR data. Used by the ICU formatter for ``plural`` and
``selectordinal`` arguments.

Python 3.13+. Depends on Babel for CLDR data.

Reference: https://www.unicode.org/cldr/charts/47/supplemental/language_plural_rules.html
"""

from decimal import Decimal

from babel.core import UnknownLocaleError

from msgcatalog.locale_utils import get_babel_locale

__all__ = ["PLURAL_CATEGORIES", "select_plural_category"]

PLURAL_CATEGORIES: frozenset[str] = frozenset({"zero", "one", "two", "few", "many", "other"})


def select_plural_category(
    n: int | float | Decimal,
    locale: str,
    *,
    ordinal: bool = False,
) -> str:
    """Select CLDR plural category for number using Babel's CLDR data.

    Args:
        n: Number to categorize
        locale: Locale code (e.g., "lv_LV", "en-US", "ar")
        ordinal: Use ordinal rules (1st, 2nd, 3rd) instead of cardinal rules

    Returns:
        Plural category: "zero", "one", "two", "few", "many", or "other"

    Examples:
        >>> select_plural_category(1, "en")
        'one'
        >>> select_plural_category(5, "ru")
        'many'
        >>> select_plural_category(2, "en", ordinal=True)
        'two'
        >>> select_plural_category(42, "ja")
        'other'

    If locale parsing fails, cardinal selection falls back to the simple
    one/other rule and ordinal selection to "other".
    """
    try:
        locale_obj = get_babel_locale(locale)
    except (UnknownLocaleError, ValueError, TypeError):
        if ordinal:
            return "other"
        return "one" if abs(n) == 1 else "other"

    rule = locale_obj.ordinal_form if ordinal else locale_obj.plural_form
    return rule(n)
