"""Message rendering runtime.

Provides the formatter strategies (ICU MessageFormat and literal
substitution) and the Babel-backed locale formatting they share.

Python 3.13+.
"""

from .formatters import MessageFormatter, SimpleFormatter
from .icu import IcuMessageFormatter, parse_template
from .locale_context import LocaleContext
from .plural_rules import PLURAL_CATEGORIES, select_plural_category

__all__ = [
    "PLURAL_CATEGORIES",
    "IcuMessageFormatter",
    "LocaleContext",
    "MessageFormatter",
    "SimpleFormatter",
    "parse_template",
    "select_plural_category",
]
