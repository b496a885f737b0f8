"""Tests for CatalogStore merging and lookups.

Includes Hypothesis properties for the layered union merge.
"""

from __future__ import annotations

from types import MappingProxyType

import pytest
from hypothesis import given
from hypothesis import strategies as st

from msgcatalog.localization import CatalogStore

# ============================================================================
# HYPOTHESIS STRATEGIES
# ============================================================================

locales = st.sampled_from(["en", "fr", "de", "lv", "ja"])
identifiers = st.sampled_from(["a", "b", "messages.greeting", "auth.failed", "x.y.z"])
templates = st.text(max_size=10)
fragments = st.dictionaries(locales, st.dictionaries(identifiers, templates), max_size=4)


class TestMerge:
    """Test CatalogStore.merge()."""

    def test_union_of_disjoint_fragments(self) -> None:
        """Different identifiers from different loaders are combined."""
        store = CatalogStore.merge(
            [{"en": {"messages.greeting": "hello"}}, {"en": {"messages.foo": "foo"}}]
        )

        assert store.as_dict() == {"en": {"messages.greeting": "hello", "messages.foo": "foo"}}

    def test_later_fragment_wins(self) -> None:
        """On collision the later fragment's template is kept."""
        store = CatalogStore.merge([{"en": {"x": "1"}}, {"en": {"x": "2"}}])

        assert store.get("en", "x") == "2"

    def test_first_seen_locale_order(self) -> None:
        """Locales are ordered by first appearance across fragments."""
        store = CatalogStore.merge([{"fr": {"a": "A"}}, {"en": {"a": "A"}, "fr": {"b": "B"}}])

        assert store.locales == ("fr", "en")

    def test_empty_merge(self) -> None:
        """Merging nothing yields an empty store."""
        store = CatalogStore.merge([])

        assert store.locales == ()
        assert store.message_count == 0

    @given(parts=st.lists(fragments, max_size=5))
    def test_merge_matches_sequential_update(self, parts: list[dict[str, dict[str, str]]]) -> None:
        """Merging equals applying dict.update per locale in order."""
        expected: dict[str, dict[str, str]] = {}
        for part in parts:
            for locale, messages in part.items():
                expected.setdefault(locale, {}).update(messages)

        assert CatalogStore.merge(parts).as_dict() == expected

    @given(parts=st.lists(fragments, min_size=1, max_size=5))
    def test_every_identifier_resolves_to_last_provider(
        self, parts: list[dict[str, dict[str, str]]]
    ) -> None:
        """Each (locale, identifier) maps to the last fragment that provides it."""
        store = CatalogStore.merge(parts)

        for locale in store.locales:
            for identifier in store.messages(locale):
                providers = [
                    p[locale][identifier] for p in parts if identifier in p.get(locale, {})
                ]
                assert store.get(locale, identifier) == providers[-1]

    @given(parts=st.lists(fragments, max_size=5))
    def test_locales_are_first_seen_union(self, parts: list[dict[str, dict[str, str]]]) -> None:
        """Locale order is the first-seen union across fragments."""
        seen: list[str] = []
        for part in parts:
            seen.extend(locale for locale in part if locale not in seen)

        assert list(CatalogStore.merge(parts).locales) == seen


class TestLookups:
    """Test read access."""

    @pytest.fixture
    def store(self) -> CatalogStore:
        """Store with two locales."""
        return CatalogStore({"en": {"hi": "Hi", "bye": "Bye"}, "fr": {"hi": "Salut"}})

    def test_get(self, store: CatalogStore) -> None:
        """get() returns templates or None."""
        assert store.get("en", "hi") == "Hi"
        assert store.get("fr", "bye") is None
        assert store.get("de", "hi") is None

    def test_has_locale_and_message(self, store: CatalogStore) -> None:
        """Membership checks for locales and identifiers."""
        assert store.has_locale("fr")
        assert not store.has_locale("de")
        assert store.has_message("en", "bye")
        assert not store.has_message("fr", "bye")
        assert "en" in store
        assert "de" not in store

    def test_messages_of_unknown_locale_is_empty(self, store: CatalogStore) -> None:
        """messages() returns an empty mapping for unknown locales."""
        assert dict(store.messages("de")) == {}

    def test_store_is_read_only(self, store: CatalogStore) -> None:
        """Views cannot be mutated."""
        messages = store.messages("en")

        assert isinstance(messages, MappingProxyType)
        with pytest.raises(TypeError):
            messages["hi"] = "changed"  # type: ignore[index]

    def test_input_mutation_does_not_leak(self) -> None:
        """The store copies its input."""
        source = {"en": {"hi": "Hi"}}
        store = CatalogStore(source)

        source["en"]["hi"] = "changed"

        assert store.get("en", "hi") == "Hi"

    def test_counts_and_iteration(self, store: CatalogStore) -> None:
        """len() counts locales; message_count counts templates."""
        assert len(store) == 2
        assert list(store) == ["en", "fr"]
        assert store.message_count == 3

    def test_repr(self, store: CatalogStore) -> None:
        """repr shows locales and message count."""
        assert repr(store) == "CatalogStore(locales=('en', 'fr'), messages=3)"
