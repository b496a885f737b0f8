"""Immutable merged message catalog.

A CatalogStore is one generation of loaded data: the layered union of every
loader fragment from a single load pass. Stores are never mutated after
construction; CatalogManager publishes a new store by swapping a reference,
so readers never observe a partially merged catalog.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from msgcatalog.localization.types import (
    LocaleCode,
    LocaleMessages,
    MessageCatalog,
    MessageId,
    Template,
)

__all__ = ["CatalogStore"]

_EMPTY: Mapping[MessageId, Template] = MappingProxyType({})


class CatalogStore:
    """Read-only locale -> identifier -> template mapping.

    Locales keep the order in which they were first seen while merging.

    Example:
        >>> store = CatalogStore.merge([
        ...     {"en": {"greeting": "hello", "bye": "bye"}},
        ...     {"en": {"greeting": "hi"}, "fr": {"greeting": "salut"}},
        ... ])
        >>> store.get("en", "greeting")
        'hi'
        >>> store.locales
        ('en', 'fr')
    """

    __slots__ = ("_locales", "_messages")

    def __init__(self, messages: MessageCatalog | None = None) -> None:
        """Initialize from an already merged catalog.

        Args:
            messages: Locale to templates mapping (copied)
        """
        self._messages: Mapping[LocaleCode, Mapping[MessageId, Template]] = MappingProxyType(
            {
                locale: MappingProxyType(dict(entries))
                for locale, entries in (messages or {}).items()
            }
        )
        self._locales: tuple[LocaleCode, ...] = tuple(self._messages)

    @classmethod
    def merge(cls, fragments: Iterable[MessageCatalog]) -> CatalogStore:
        """Layer fragments into a new store.

        Fragments are applied in order; for the same locale and identifier a
        later fragment replaces an earlier one. Identifiers that only an
        earlier fragment provides are kept.

        Args:
            fragments: Loader outputs in configuration order

        Returns:
            New CatalogStore
        """
        merged: dict[LocaleCode, dict[MessageId, Template]] = {}
        for fragment in fragments:
            for locale, entries in fragment.items():
                merged.setdefault(locale, {}).update(entries)
        return cls(merged)

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales with an entry, in first-seen order."""
        return self._locales

    def has_locale(self, locale: LocaleCode) -> bool:
        """Check whether any loader returned the locale."""
        return locale in self._messages

    def messages(self, locale: LocaleCode) -> LocaleMessages:
        """Get the read-only templates of a locale (empty if unknown)."""
        return self._messages.get(locale, _EMPTY)

    def get(self, locale: LocaleCode, identifier: MessageId) -> Template | None:
        """Get a template, or None if the locale or identifier is unknown."""
        return self.messages(locale).get(identifier)

    def has_message(self, locale: LocaleCode, identifier: MessageId) -> bool:
        """Check whether a template exists."""
        return identifier in self.messages(locale)

    def as_dict(self) -> dict[LocaleCode, dict[MessageId, Template]]:
        """Return a mutable deep copy of the catalog."""
        return {locale: dict(entries) for locale, entries in self._messages.items()}

    @property
    def message_count(self) -> int:
        """Total number of templates across locales."""
        return sum(len(entries) for entries in self._messages.values())

    def __contains__(self, locale: object) -> bool:
        """Check whether a locale has an entry (supports 'in' operator)."""
        return locale in self._messages

    def __iter__(self) -> Iterator[LocaleCode]:
        """Iterate over locales in first-seen order."""
        return iter(self._locales)

    def __len__(self) -> int:
        """Number of locales."""
        return len(self._locales)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"CatalogStore(locales={self._locales!r}, messages={self.message_count})"
