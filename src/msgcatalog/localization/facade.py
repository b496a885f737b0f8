"""Per-locale formatting facade.

LocaleFacade binds one locale, one formatter and one published CatalogStore.
It is what CatalogManager.locale() hands to application code:

    facade = manager.locale("en")
    facade.format_message("messages.greeting", {"name": "Anna"})

A facade is a snapshot. Reloading the manager or extending its registries
does not change a facade that was already handed out.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Literal

from msgcatalog.constants import EVENT_MISSING_TRANSLATION, FALLBACK_MISSING_TRANSLATION
from msgcatalog.events import emit_event
from msgcatalog.runtime.locale_context import LocaleContext
from msgcatalog.runtime.plural_rules import select_plural_category

if TYPE_CHECKING:
    from msgcatalog.events import EventEmitter
    from msgcatalog.localization.store import CatalogStore
    from msgcatalog.localization.types import LocaleCode, MessageData, MessageId, Template
    from msgcatalog.runtime.formatters import MessageFormatter
    from msgcatalog.runtime.locale_context import DateValue, NumberValue

__all__ = ["LocaleFacade"]

logger = logging.getLogger(__name__)


class LocaleFacade:
    """Formats catalog messages for a single locale.

    Lookup order for format_message():

    1. the bound locale's catalog entry
    2. the configured fallback locale's entry (if any)
    3. the missing-translation text ``translation missing: <locale>, <identifier>``

    Step 3 never raises. Formatter errors for messages that *were* found
    propagate to the caller unchanged.

    Example:
        >>> store = CatalogStore({"en": {"messages.greeting": "hello {name}"}})
        >>> facade = LocaleFacade("en", store, IcuMessageFormatter())
        >>> facade.format_message("messages.greeting", {"name": "world"})
        'hello world'
        >>> facade.format_message("messages.unknown")
        'translation missing: en, messages.unknown'
    """

    __slots__ = ("_emitter", "_fallback_locale", "_formatter", "_locale", "_store")

    def __init__(
        self,
        locale: LocaleCode,
        store: CatalogStore,
        formatter: MessageFormatter,
        *,
        fallback_locale: LocaleCode | None = None,
        emitter: EventEmitter | None = None,
    ) -> None:
        """Bind a locale to a catalog snapshot and formatter.

        Args:
            locale: Locale code messages are looked up and formatted for
            store: Published catalog snapshot
            formatter: Formatter instance used for every message
            fallback_locale: Locale consulted when a message is missing
            emitter: Event bus notified about missing translations
        """
        self._locale = locale
        self._store = store
        self._formatter = formatter
        self._fallback_locale = fallback_locale
        self._emitter = emitter

    @property
    def locale(self) -> LocaleCode:
        """Locale this facade formats for."""
        return self._locale

    @property
    def formatter(self) -> MessageFormatter:
        """Formatter instance bound at creation."""
        return self._formatter

    @property
    def fallback_locale(self) -> LocaleCode | None:
        """Locale consulted for missing messages, or None."""
        return self._fallback_locale

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LocaleFacade(locale={self._locale!r}, "
            f"formatter={getattr(self._formatter, 'name', self._formatter)!r}, "
            f"fallback_locale={self._fallback_locale!r})"
        )

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def format_message(self, identifier: MessageId, data: MessageData | None = None) -> str:
        """Format a catalog message.

        Args:
            identifier: Dot-delimited message identifier (e.g. "messages.greeting")
            data: Placeholder values passed to the formatter

        Returns:
            Formatted message, or the missing-translation text when neither
            the locale nor its fallback provides the identifier

        Raises:
            Exception: Whatever the formatter raises for a found template
        """
        resolved = self._resolve(identifier)
        if resolved is None:
            emit_event(
                self._emitter,
                EVENT_MISSING_TRANSLATION,
                {"locale": self._locale, "identifier": identifier},
            )
            return FALLBACK_MISSING_TRANSLATION.format(locale=self._locale, identifier=identifier)

        locale, template = resolved
        return self._formatter.format(template, data if data is not None else {}, locale)

    def _resolve(self, identifier: MessageId) -> tuple[LocaleCode, Template] | None:
        template = self._store.get(self._locale, identifier)
        if template is not None:
            return (self._locale, template)

        if self._fallback_locale is not None:
            template = self._store.get(self._fallback_locale, identifier)
            if template is not None:
                logger.debug(
                    "Message '%s' resolved from fallback locale %s (requested %s)",
                    identifier,
                    self._fallback_locale,
                    self._locale,
                )
                return (self._fallback_locale, template)
        return None

    def has_message(self, identifier: MessageId) -> bool:
        """Check whether the bound locale itself defines ``identifier``."""
        return self._store.has_message(self._locale, identifier)

    def has_fallback_message(self, identifier: MessageId) -> bool:
        """Check whether ``identifier`` resolves through the locale or its fallback."""
        return self._resolve(identifier) is not None

    # ------------------------------------------------------------------
    # Locale-aware helpers (Babel)
    # ------------------------------------------------------------------

    def _context(self) -> LocaleContext:
        return LocaleContext.create(self._locale)

    def format_number(
        self,
        value: NumberValue,
        *,
        minimum_fraction_digits: int = 0,
        maximum_fraction_digits: int = 3,
        use_grouping: bool = True,
    ) -> str:
        """Format a number with the locale's separators.

        Example:
            >>> manager.locale("de").format_number(1234.5)
            '1.234,5'
        """
        return self._context().format_number(
            value,
            minimum_fraction_digits=minimum_fraction_digits,
            maximum_fraction_digits=maximum_fraction_digits,
            use_grouping=use_grouping,
        )

    def format_currency(
        self,
        value: NumberValue,
        currency: str | None = None,
        *,
        currency_display: Literal["symbol", "code", "name"] = "symbol",
    ) -> str:
        """Format a monetary amount; the currency defaults to the locale's region."""
        return self._context().format_currency(
            value, currency, currency_display=currency_display
        )

    def format_date(self, value: DateValue, style: str | None = None) -> str:
        """Format a date ("short", "medium", "long", "full" or a CLDR pattern)."""
        return self._context().format_date(value, style)

    def format_time(self, value: DateValue, style: str | None = None) -> str:
        """Format a time ("short", "medium", "long", "full" or a CLDR pattern)."""
        return self._context().format_time(value, style)

    def format_plural_category(self, value: NumberValue, *, ordinal: bool = False) -> str:
        """CLDR plural category of ``value`` in this locale.

        Example:
            >>> manager.locale("ru").format_plural_category(5)
            'many'
        """
        return select_plural_category(value, self._locale, ordinal=ordinal)

    def format_list(
        self,
        items: Sequence[object],
        style: Literal["standard", "standard-short", "or", "or-short", "unit"] = "standard",
    ) -> str:
        """Join items with the locale's list pattern."""
        return self._context().format_list(items, style)

    def messages(self) -> Mapping[MessageId, Template]:
        """Read-only view of the bound locale's raw templates."""
        return self._store.messages(self._locale)
