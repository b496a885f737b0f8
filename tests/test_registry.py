"""Tests for loader and formatter plugin registries."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from msgcatalog.config import CatalogConfig, LoaderConfig
from msgcatalog.diagnostics import (
    InvalidFormatterError,
    PluginNotFoundError,
    UnknownLoaderError,
)
from msgcatalog.enums import PluginKind
from msgcatalog.localization import FormatterRegistry, LoaderRegistry, MemoryLoader
from msgcatalog.runtime import IcuMessageFormatter, SimpleFormatter


class TestRegistration:
    """Test register() semantics."""

    def test_register_and_resolve(self) -> None:
        """A registered factory is used to build the plugin."""
        registry = FormatterRegistry()
        registry.register("icu", IcuMessageFormatter)

        formatter = registry.resolve("icu", CatalogConfig(default_locale="en"))

        assert isinstance(formatter, IcuMessageFormatter)

    def test_resolve_creates_new_instance(self) -> None:
        """Each resolve() calls the factory again."""
        registry = LoaderRegistry()
        registry.register("memory", lambda: MemoryLoader({"en": {"a": "A"}}))

        first = registry.resolve("memory", LoaderConfig())
        second = registry.resolve("memory", LoaderConfig())

        assert first is not second

    def test_last_registration_wins(self) -> None:
        """Registering a name again replaces the previous factory."""
        registry = FormatterRegistry()
        registry.register("fmt", IcuMessageFormatter)
        registry.register("fmt", SimpleFormatter)

        formatter = registry.resolve("fmt", CatalogConfig(default_locale="en"))

        assert isinstance(formatter, SimpleFormatter)
        assert registry.names() == ("fmt",)

    def test_factory_with_config_argument(self) -> None:
        """Factories with a positional parameter receive the configuration."""
        seen: list[Any] = []
        registry = LoaderRegistry()
        registry.register("memory", lambda config: seen.append(config) or MemoryLoader())
        config = LoaderConfig(options={"x": 1})

        registry.resolve("memory", config)

        assert seen == [config]

    def test_factory_with_varargs(self) -> None:
        """*args factories receive the configuration."""
        seen: list[tuple[Any, ...]] = []

        def factory(*args: Any) -> MemoryLoader:
            seen.append(args)
            return MemoryLoader()

        registry = LoaderRegistry()
        registry.register("memory", factory)
        config = LoaderConfig()

        registry.resolve("memory", config)

        assert seen == [(config,)]

    def test_optional_positional_parameter_not_filled(self) -> None:
        """Classes whose positional parameters all have defaults are called bare."""
        registry = LoaderRegistry()
        registry.register("memory", MemoryLoader)

        loader = registry.resolve("memory", LoaderConfig(options={"x": 1}))

        assert isinstance(loader, MemoryLoader)
        assert repr(loader) == "MemoryLoader(locales=())"

    def test_optional_parameter_after_required_one(self) -> None:
        """A required first parameter still receives the configuration."""
        seen: list[Any] = []

        def factory(config: Any, prefix: str = ">") -> MemoryLoader:
            seen.append((config, prefix))
            return MemoryLoader()

        registry = LoaderRegistry()
        registry.register("memory", factory)
        config = LoaderConfig()

        registry.resolve("memory", config)

        assert seen == [(config, ">")]

    def test_zero_argument_factory(self) -> None:
        """Factories without parameters are called without the configuration."""
        calls: list[str] = []

        def factory() -> MemoryLoader:
            calls.append("called")
            return MemoryLoader()

        registry = LoaderRegistry()
        registry.register("memory", factory)

        registry.resolve("memory", LoaderConfig())

        assert calls == ["called"]

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, name: str) -> None:
        """Blank names raise ValueError."""
        with pytest.raises(ValueError, match="Loader name must be a non-empty string"):
            LoaderRegistry().register(name, MemoryLoader)

    def test_non_callable_rejected(self) -> None:
        """Non-callable factories raise TypeError."""
        with pytest.raises(TypeError, match="must be callable"):
            FormatterRegistry().register("x", "not callable")  # type: ignore[arg-type]

    def test_registration_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Registrations and replacements are logged at debug level."""
        registry = FormatterRegistry()

        with caplog.at_level(logging.DEBUG, logger="msgcatalog.localization.registry"):
            registry.register("icu", IcuMessageFormatter)
            registry.register("icu", IcuMessageFormatter)

        messages = [record.getMessage() for record in caplog.records]
        assert "Registered formatter 'icu'" in messages
        assert "Replaced formatter 'icu'" in messages


class TestNotFound:
    """Test lookups of unknown names."""

    def test_unknown_loader(self) -> None:
        """LoaderRegistry raises UnknownLoaderError."""
        with pytest.raises(UnknownLoaderError) as exc_info:
            LoaderRegistry().resolve("memory", LoaderConfig())

        error = exc_info.value
        assert isinstance(error, PluginNotFoundError)
        assert error.kind is PluginKind.LOADER
        assert error.name == "memory"
        assert str(error) == 'E_INVALID_INTL_LOADER: Invalid loader "memory"'

    def test_unknown_formatter(self) -> None:
        """FormatterRegistry raises InvalidFormatterError."""
        with pytest.raises(InvalidFormatterError) as exc_info:
            FormatterRegistry().resolve("simple", CatalogConfig(default_locale="en"))

        assert str(exc_info.value) == 'E_INVALID_INTL_FORMATTER: Invalid formatter "simple"'
        assert exc_info.value.diagnostic.hint is not None


class TestIntrospection:
    """Test dict-like helpers."""

    def test_contains_iter_len(self) -> None:
        """Registries support in, iteration and len()."""
        registry = LoaderRegistry()
        registry.register("a", MemoryLoader)
        registry.register("b", MemoryLoader)

        assert "a" in registry
        assert "c" not in registry
        assert list(registry) == ["a", "b"]
        assert len(registry) == 2

    def test_copy_is_independent(self) -> None:
        """A copy does not see later registrations of the original."""
        registry = LoaderRegistry()
        registry.register("a", MemoryLoader)

        clone = registry.copy()
        registry.register("b", MemoryLoader)

        assert isinstance(clone, LoaderRegistry)
        assert clone.names() == ("a",)

    def test_repr(self) -> None:
        """repr lists registered names."""
        registry = FormatterRegistry()
        registry.register("icu", IcuMessageFormatter)

        assert repr(registry) == "FormatterRegistry(names=('icu',))"
