"""Locale context for locale-aware value formatting.

Provides number, currency, date, time and list formatting without global
state mutation. Uses Babel for CLDR-compliant output. The ICU formatter
renders ``number``/``date``/``time`` arguments through a LocaleContext,
and LocaleFacade exposes the same helpers to application code.

Architecture:
    - LocaleContext: Immutable locale configuration container
    - Formatters use Babel (thread-safe, CLDR-based)
    - No dependency on Python's locale module (avoids global state)

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from decimal import Decimal, InvalidOperation
from threading import RLock
from typing import ClassVar, Literal

from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import lists as babel_lists
from babel import numbers as babel_numbers
from babel.core import get_global

from msgcatalog.constants import FALLBACK_CURRENCY, FALLBACK_LOCALE, MAX_LOCALE_CACHE_SIZE
from msgcatalog.diagnostics import MessageFormatError
from msgcatalog.enums import DateTimeStyle
from msgcatalog.locale_utils import normalize_locale

__all__ = ["DateValue", "LocaleContext", "NumberValue"]

logger = logging.getLogger(__name__)

type NumberValue = int | float | Decimal
"""Numbers accepted by the formatting helpers."""

type DateValue = datetime | date | time | str | int | float
"""Dates accepted by the formatting helpers: objects, ISO 8601 strings, POSIX timestamps."""

_STYLES = frozenset(DateTimeStyle)


@dataclass(frozen=True, slots=True)
class LocaleContext:
    """Immutable locale configuration for formatting operations.

    Use LocaleContext.create() to construct instances; it caches one
    instance per normalized locale code and falls back to en_US for locales
    Babel does not know.

    Examples:
        >>> ctx = LocaleContext.create('en-US')
        >>> ctx.format_number(1234.5)
        '1,234.5'

        >>> ctx = LocaleContext.create('de')
        >>> ctx.format_number(1234.5)
        '1.234,5'

        >>> ctx = LocaleContext.create('xx')
        >>> ctx.is_fallback
        True
    """

    _cache: ClassVar[OrderedDict[str, LocaleContext]] = OrderedDict()
    _cache_lock: ClassVar[RLock] = RLock()

    locale_code: str
    _babel_locale: Locale
    is_fallback: bool = False

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the locale context cache."""
        with cls._cache_lock:
            cls._cache.clear()

    @classmethod
    def cache_size(cls) -> int:
        """Get current number of cached LocaleContext instances."""
        with cls._cache_lock:
            return len(cls._cache)

    @classmethod
    def create(cls, locale_code: str) -> LocaleContext:
        """Create LocaleContext with graceful fallback for invalid locales.

        For unknown or invalid locales, logs a warning and falls back to
        en_US while preserving the original locale_code.

        Args:
            locale_code: BCP 47 or POSIX locale identifier (e.g., 'en-US', 'fr')

        Returns:
            Cached LocaleContext instance
        """
        cache_key = normalize_locale(locale_code)

        with cls._cache_lock:
            if cache_key in cls._cache:
                cls._cache.move_to_end(cache_key)
                return cls._cache[cache_key]

        used_fallback = False
        try:
            babel_locale = Locale.parse(cache_key)
        except UnknownLocaleError as e:
            logger.warning(
                "Unknown locale '%s': %s. Falling back to %s", locale_code, e, FALLBACK_LOCALE
            )
            babel_locale = Locale.parse(FALLBACK_LOCALE)
            used_fallback = True
        except (ValueError, TypeError) as e:
            logger.warning(
                "Invalid locale format '%s': %s. Falling back to %s",
                locale_code,
                e,
                FALLBACK_LOCALE,
            )
            babel_locale = Locale.parse(FALLBACK_LOCALE)
            used_fallback = True

        ctx = cls(locale_code=locale_code, _babel_locale=babel_locale, is_fallback=used_fallback)

        with cls._cache_lock:
            if cache_key in cls._cache:
                return cls._cache[cache_key]
            if len(cls._cache) >= MAX_LOCALE_CACHE_SIZE:
                cls._cache.popitem(last=False)
            cls._cache[cache_key] = ctx
            return ctx

    @property
    def babel_locale(self) -> Locale:
        """Get pre-validated Babel Locale object for this context."""
        return self._babel_locale

    def _fail(self, message: str) -> MessageFormatError:
        return MessageFormatError(message, locale_code=self.locale_code)

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def format_number(
        self,
        value: NumberValue,
        *,
        minimum_fraction_digits: int = 0,
        maximum_fraction_digits: int = 3,
        use_grouping: bool = True,
        pattern: str | None = None,
    ) -> str:
        """Format number with locale-specific separators.

        Args:
            value: Number to format (int, float, or Decimal)
            minimum_fraction_digits: Minimum decimal places (default: 0)
            maximum_fraction_digits: Maximum decimal places (default: 3)
            use_grouping: Use thousands separator (default: True)
            pattern: CLDR number pattern (overrides other parameters)

        Returns:
            Formatted number string according to locale rules

        Raises:
            MessageFormatError: If value is not a number or pattern is invalid

        Examples:
            >>> LocaleContext.create('en').format_number(1234.5)
            '1,234.5'
            >>> LocaleContext.create('en').format_number(3.14159, maximum_fraction_digits=2)
            '3.14'
        """
        value = self._require_number(value)
        if pattern is None:
            integer_part = "#,##0" if use_grouping else "0"
            if maximum_fraction_digits <= 0:
                pattern = integer_part
            else:
                required = "0" * minimum_fraction_digits
                optional = "#" * max(maximum_fraction_digits - minimum_fraction_digits, 0)
                pattern = f"{integer_part}.{required}{optional}"
        try:
            return str(
                babel_numbers.format_decimal(value, format=pattern, locale=self._babel_locale)
            )
        except (ValueError, TypeError, InvalidOperation, KeyError) as e:
            msg = f"Number formatting failed for '{value}': {e}"
            raise self._fail(msg) from e

    def format_percent(self, value: NumberValue, *, pattern: str | None = None) -> str:
        """Format a ratio as a percentage (0.25 -> '25%').

        Raises:
            MessageFormatError: If value is not a number or pattern is invalid
        """
        value = self._require_number(value)
        try:
            return str(
                babel_numbers.format_percent(value, format=pattern, locale=self._babel_locale)
            )
        except (ValueError, TypeError, InvalidOperation, KeyError) as e:
            msg = f"Percent formatting failed for '{value}': {e}"
            raise self._fail(msg) from e

    def format_currency(
        self,
        value: NumberValue,
        currency: str | None = None,
        *,
        currency_display: Literal["symbol", "code", "name"] = "symbol",
        pattern: str | None = None,
    ) -> str:
        """Format currency with locale-specific rules.

        Args:
            value: Monetary amount (int, float, or Decimal)
            currency: ISO 4217 currency code; defaults to the currency of the
                locale's region (USD when the region has none)
            currency_display: "symbol" (default), "code" or "name"
            pattern: CLDR currency pattern (overrides currency_display)

        Returns:
            Formatted currency string according to locale rules

        Raises:
            MessageFormatError: If value is not a number or the currency is unknown

        Examples:
            >>> LocaleContext.create('en-US').format_currency(123.45, 'EUR')
            '€123.45'
            >>> LocaleContext.create('en-US').format_currency(5)
            '$5.00'
        """
        value = self._require_number(value)
        code = currency or self.default_currency()
        try:
            if pattern is not None:
                return str(
                    babel_numbers.format_currency(
                        value, code, format=pattern, locale=self._babel_locale
                    )
                )
            if currency_display == "name":
                return str(
                    babel_numbers.format_currency(
                        value, code, locale=self._babel_locale, format_type="name"
                    )
                )
            if currency_display == "code":
                standard = self._babel_locale.currency_formats.get("standard")
                raw_pattern = getattr(standard, "pattern", None)
                # Single U+00A4 = symbol, Double U+00A4 U+00A4 = ISO code per CLDR
                if raw_pattern and "\xa4" in raw_pattern:
                    return str(
                        babel_numbers.format_currency(
                            value,
                            code,
                            format=raw_pattern.replace("\xa4", "\xa4\xa4"),
                            locale=self._babel_locale,
                        )
                    )
            return str(babel_numbers.format_currency(value, code, locale=self._babel_locale))
        except (ValueError, TypeError, InvalidOperation, KeyError) as e:
            msg = f"Currency formatting failed for '{code} {value}': {e}"
            raise self._fail(msg) from e

    def default_currency(self) -> str:
        """Currency of the locale's region, resolving a bare language via CLDR likely subtags.

        Example:
            >>> LocaleContext.create('fr').default_currency()
            'EUR'
        """
        territory = self._babel_locale.territory
        try:
            if territory is None:
                likely = get_global("likely_subtags").get(self._babel_locale.language)
                if likely:
                    territory = Locale.parse(likely).territory
            if territory:
                currencies = babel_numbers.get_territory_currencies(territory)
                if currencies:
                    return str(currencies[0])
        except (UnknownLocaleError, ValueError, KeyError):
            logger.debug("No regional currency for locale %s", self.locale_code)
        return FALLBACK_CURRENCY

    def _require_number(self, value: object) -> NumberValue:
        if isinstance(value, bool) or not isinstance(value, int | float | Decimal):
            msg = f"Expected a number, got {type(value).__name__} ({value!r})"
            raise self._fail(msg)
        return value

    # ------------------------------------------------------------------
    # Dates and times
    # ------------------------------------------------------------------

    def format_date(self, value: DateValue, style: str | None = None) -> str:
        """Format the date part of a value.

        Args:
            value: date, datetime, ISO 8601 string or POSIX timestamp
            style: "short", "medium" (default), "long", "full" or a CLDR pattern

        Raises:
            MessageFormatError: If the value is not a date or the pattern is invalid

        Example:
            >>> LocaleContext.create('en').format_date(date(2025, 10, 27), 'short')
            '10/27/25'
        """
        moment = self._coerce_datetime(value)
        try:
            return str(
                babel_dates.format_date(
                    moment, format=style or DateTimeStyle.MEDIUM, locale=self._babel_locale
                )
            )
        except (ValueError, TypeError, AttributeError, KeyError, OverflowError) as e:
            msg = f"Date formatting failed for '{value}': {e}"
            raise self._fail(msg) from e

    def format_time(self, value: DateValue, style: str | None = None) -> str:
        """Format the time part of a value.

        Args:
            value: time, datetime, ISO 8601 string or POSIX timestamp
            style: "short", "medium" (default), "long", "full" or a CLDR pattern

        Raises:
            MessageFormatError: If the value is not a time or the pattern is invalid
        """
        moment = value if isinstance(value, time) else self._coerce_datetime(value)
        try:
            return str(
                babel_dates.format_time(
                    moment, format=style or DateTimeStyle.MEDIUM, locale=self._babel_locale
                )
            )
        except (ValueError, TypeError, AttributeError, KeyError, OverflowError) as e:
            msg = f"Time formatting failed for '{value}': {e}"
            raise self._fail(msg) from e

    def format_datetime(self, value: DateValue, style: str | None = None) -> str:
        """Format date and time together using the locale's combining pattern.

        Raises:
            MessageFormatError: If the value is not a datetime or the pattern is invalid
        """
        moment = self._coerce_datetime(value)
        try:
            return str(
                babel_dates.format_datetime(
                    moment, format=style or DateTimeStyle.MEDIUM, locale=self._babel_locale
                )
            )
        except (ValueError, TypeError, AttributeError, KeyError, OverflowError) as e:
            msg = f"DateTime formatting failed for '{value}': {e}"
            raise self._fail(msg) from e

    def format_skeleton(self, value: DateValue, skeleton: str) -> str:
        """Format a date using a CLDR skeleton (e.g. "yMMMd", "Hm").

        The locale picks the best matching pattern for the requested fields.

        Raises:
            MessageFormatError: If the value is not a date or the skeleton is unknown

        Example:
            >>> LocaleContext.create('en').format_skeleton(date(2025, 10, 27), 'yMMMd')
            'Oct 27, 2025'
        """
        moment = self._coerce_datetime(value)
        try:
            return str(babel_dates.format_skeleton(skeleton, moment, locale=self._babel_locale))
        except (ValueError, TypeError, AttributeError, KeyError, OverflowError) as e:
            msg = f"Skeleton '{skeleton}' formatting failed for '{value}': {e}"
            raise self._fail(msg) from e

    def _coerce_datetime(self, value: DateValue) -> datetime | date:
        match value:
            case datetime() | date():
                return value
            case bool():
                pass
            case int() | float():
                try:
                    return datetime.fromtimestamp(value, tz=UTC)
                except (OverflowError, OSError, ValueError) as e:
                    msg = f"Invalid timestamp {value!r}: {e}"
                    raise self._fail(msg) from e
            case str():
                try:
                    return datetime.fromisoformat(value)
                except ValueError as e:
                    msg = f"Invalid datetime string '{value}': not ISO 8601 format"
                    raise self._fail(msg) from e
        msg = f"Expected a date, got {type(value).__name__} ({value!r})"
        raise self._fail(msg)

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def format_list(
        self,
        items: Sequence[object],
        style: Literal["standard", "standard-short", "or", "or-short", "unit"] = "standard",
    ) -> str:
        """Join items with the locale's list pattern.

        Example:
            >>> LocaleContext.create('en').format_list(['a', 'b', 'c'])
            'a, b, and c'
        """
        try:
            return str(
                babel_lists.format_list(
                    [str(item) for item in items], style=style, locale=self._babel_locale
                )
            )
        except (ValueError, KeyError) as e:
            msg = f"List formatting failed: {e}"
            raise self._fail(msg) from e

    @staticmethod
    def is_style(value: str | None) -> bool:
        """Check whether a date/time format is a named CLDR length."""
        return value in _STYLES
