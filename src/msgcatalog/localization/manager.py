"""Catalog orchestration: plugin registries, load passes and locale facades.

CatalogManager owns the loader and formatter registries and the published
CatalogStore. A load pass resolves every enabled loader, runs them
concurrently, validates and merges their fragments in configuration order,
and then publishes the new store with a single assignment:

    manager = CatalogManager({
        "defaultLocale": "en",
        "messagesFormat": "icu",
        "loaders": {"fs": {"enabled": True, "location": "resources/lang"}},
    })
    await manager.load_messages()
    manager.locale("en").format_message("messages.greeting", {"name": "Anna"})

Failure semantics:
    - Unknown loader names are detected before any loader runs.
    - A loader failure aborts the pass; the previously published store (and
      the supported locales derived from it) stay in place.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Self

from msgcatalog.config import CatalogConfig
from msgcatalog.constants import (
    EVENT_MISSING_LOCALE,
    FS_LOADER_NAME,
    ICU_FORMATTER_NAME,
    SIMPLE_FORMATTER_NAME,
)
from msgcatalog.enums import PluginKind
from msgcatalog.events import emit_event
from msgcatalog.locale_utils import negotiate_locale
from msgcatalog.localization.facade import LocaleFacade
from msgcatalog.localization.loading import (
    FileSystemLoader,
    LoadResult,
    LoadSummary,
    validate_catalog,
)
from msgcatalog.localization.registry import FormatterRegistry, LoaderRegistry
from msgcatalog.localization.store import CatalogStore
from msgcatalog.runtime.formatters import SimpleFormatter
from msgcatalog.runtime.icu import IcuMessageFormatter

if TYPE_CHECKING:
    from collections.abc import Callable

    from msgcatalog.events import EventEmitter
    from msgcatalog.localization.loading import MessageLoader
    from msgcatalog.localization.types import LocaleCode, MessageCatalog

__all__ = ["CatalogManager"]

logger = logging.getLogger(__name__)


class CatalogManager:
    """Loads message catalogs and hands out per-locale formatting facades.

    Built-in plugins registered at construction:
        - loader ``fs``: FileSystemLoader (JSON files, one directory per locale)
        - formatter ``icu``: IcuMessageFormatter
        - formatter ``simple``: SimpleFormatter

    A manager has a single owner and no internal locking. Facades returned
    by locale() are snapshots and are not affected by later reloads.

    Example:
        >>> manager = CatalogManager({"defaultLocale": "en", "loaders": {}})
        >>> manager.extend("memory", "loader", lambda: MemoryLoader({"en": {"hi": "Hi"}}))
        >>> await manager.load_messages()
        >>> manager.locale("en").format_message("hi")
        'Hi'
    """

    __slots__ = (
        "_config",
        "_derived_locales",
        "_emitter",
        "_formatters",
        "_load_summary",
        "_loaded",
        "_loaders",
        "_store",
    )

    def __init__(
        self,
        config: CatalogConfig | Mapping[str, Any],
        *,
        emitter: EventEmitter | None = None,
    ) -> None:
        """Initialize the manager and register built-in plugins.

        Args:
            config: CatalogConfig or the plain-mapping configuration surface
            emitter: Host event bus notified about missing locales and
                translations (optional)

        Raises:
            TypeError: If config is neither a CatalogConfig nor a mapping
            ValueError: If the configuration is structurally invalid
        """
        self._config = CatalogConfig.from_mapping(config)
        self._emitter = emitter

        self._loaders = LoaderRegistry()
        self._loaders.register(FS_LOADER_NAME, FileSystemLoader.from_config)

        self._formatters = FormatterRegistry()
        self._formatters.register(ICU_FORMATTER_NAME, IcuMessageFormatter)
        self._formatters.register(SIMPLE_FORMATTER_NAME, SimpleFormatter)

        self._store = CatalogStore()
        self._derived_locales: tuple[LocaleCode, ...] = ()
        self._load_summary = LoadSummary()
        self._loaded = False

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> CatalogConfig:
        """Immutable manager configuration."""
        return self._config

    @property
    def default_locale(self) -> LocaleCode:
        """Configured default locale."""
        return self._config.default_locale

    @property
    def catalog(self) -> CatalogStore:
        """Currently published catalog snapshot."""
        return self._store

    @property
    def loaded(self) -> bool:
        """Whether at least one load pass has completed successfully."""
        return self._loaded

    @property
    def loaders(self) -> LoaderRegistry:
        """Loader registry (prefer extend() for registration)."""
        return self._loaders

    @property
    def formatters(self) -> FormatterRegistry:
        """Formatter registry (prefer extend() for registration)."""
        return self._formatters

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(CatalogManager({"defaultLocale": "en"}))
            "CatalogManager(default_locale='en', messages_format='icu', locales=(), loaded=False)"
        """
        return (
            f"CatalogManager(default_locale={self.default_locale!r}, "
            f"messages_format={self._config.messages_format!r}, "
            f"locales={self._store.locales!r}, loaded={self._loaded})"
        )

    # ------------------------------------------------------------------
    # Plugins
    # ------------------------------------------------------------------

    def extend(
        self,
        name: str,
        kind: PluginKind | str,
        factory: Callable[..., Any],
    ) -> Self:
        """Register a loader or formatter factory.

        Registering an existing name replaces it, including the built-ins.
        The factory is called with the loader's LoaderConfig (loaders) or the
        CatalogConfig (formatters), or without arguments if it takes none.

        Args:
            name: Plugin name referenced from configuration
            kind: "loader" or "formatter"
            factory: Callable producing the plugin instance

        Returns:
            self, for chaining

        Raises:
            ValueError: If kind is unknown or name is empty
            TypeError: If factory is not callable

        Example:
            >>> (
            ...     manager.extend("memory", "loader", lambda: MemoryLoader(messages))
            ...     .extend("upper", PluginKind.FORMATTER, UpperFormatter)
            ... )
        """
        try:
            plugin_kind = PluginKind(kind)
        except ValueError:
            msg = f"Unknown plugin kind '{kind}'; expected 'loader' or 'formatter'"
            raise ValueError(msg) from None

        match plugin_kind:
            case PluginKind.LOADER:
                self._loaders.register(name, factory)
            case PluginKind.FORMATTER:
                self._formatters.register(name, factory)
        return self

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load_messages(self) -> None:
        """Run a load pass and publish the merged catalog.

        Raises:
            UnknownLoaderError: If an enabled loader name is not registered;
                raised before any loader runs
            CatalogFormatError: If a loader returns a malformed catalog
            Exception: Any loader failure, propagated unchanged

        On failure the previously published catalog is left untouched.
        """
        await self._run_load_pass()

    async def reload_messages(self) -> None:
        """Rebuild the catalog from scratch.

        Discards nothing until the new pass succeeds: the rebuilt store and
        its derived locales replace the previous generation together, and a
        failing reload leaves the previous generation published.

        Raises:
            Same as load_messages()
        """
        logger.debug("Reloading message catalogs")
        await self._run_load_pass()

    async def _run_load_pass(self) -> None:
        started = time.perf_counter()

        names = self._config.enabled_loaders()
        # Resolve every loader before any I/O so an unknown name fails fast
        loaders: list[tuple[str, MessageLoader]] = [
            (name, self._loaders.resolve(name, self._config.loaders[name])) for name in names
        ]

        # A failing loader cancels its siblings before the pass raises
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(self._run_loader(name, loader)) for name, loader in loaders
                ]
        except ExceptionGroup as group_error:
            if len(group_error.exceptions) > 1:
                logger.debug(
                    "%d loaders failed; raising the first", len(group_error.exceptions)
                )
            raise group_error.exceptions[0] from None
        fragments = [task.result() for task in tasks]

        store = CatalogStore.merge(fragments)
        results = tuple(
            LoadResult(
                loader=name,
                locales=tuple(fragment),
                message_count=sum(len(entries) for entries in fragment.values()),
            )
            for (name, _), fragment in zip(loaders, fragments, strict=True)
        )

        # Publish
        self._store = store
        self._derived_locales = store.locales
        self._load_summary = LoadSummary(
            results=results, duration=time.perf_counter() - started
        )
        self._loaded = True

        logger.info(
            "Loaded %d messages for %d locales from %d loaders",
            store.message_count,
            len(store),
            len(loaders),
        )

    @staticmethod
    async def _run_loader(name: str, loader: MessageLoader) -> MessageCatalog:
        result = loader.load()
        if inspect.isawaitable(result):
            result = await result
        fragment = validate_catalog(result, source=f"loader '{name}'")
        logger.debug("Loader '%s' returned locales %s", name, tuple(fragment))
        return fragment

    def get_load_summary(self) -> LoadSummary:
        """Per-loader results of the latest successful load pass.

        Returns:
            LoadSummary; empty before the first successful pass

        Example:
            >>> await manager.load_messages()
            >>> manager.get_load_summary().get_by_loader("fs").locales
            ('en', 'fr')
        """
        return self._load_summary

    # ------------------------------------------------------------------
    # Locales
    # ------------------------------------------------------------------

    def supported_locales(self) -> list[LocaleCode]:
        """Locales the application supports.

        Returns the configured ``supported_locales`` when present, otherwise
        the locales of the latest successful load pass in first-seen order.
        The returned list is a copy.
        """
        if self._config.supported_locales is not None:
            return list(self._config.supported_locales)
        return list(self._derived_locales)

    def get_supported_locale_for(self, requested: str | Iterable[str]) -> LocaleCode | None:
        """Negotiate the best supported locale for one or more requested codes.

        Args:
            requested: Locale code or codes in preference order (BCP-47 or
                POSIX, case-insensitive)

        Returns:
            Matching supported locale, or None if nothing matches

        Example:
            >>> manager.supported_locales()
            ['en', 'fr']
            >>> manager.get_supported_locale_for(["de-DE", "fr-CA"])
            'fr'
        """
        return negotiate_locale(requested, self.supported_locales())

    def locale(self, code: LocaleCode) -> LocaleFacade:
        """Create a formatting facade for ``code``.

        The configured formatter is resolved on every call, so a formatter
        registered through extend() is picked up by the next facade.

        Args:
            code: Locale code; locales without catalog entries still get a
                facade (every message renders as missing)

        Returns:
            LocaleFacade bound to the current catalog snapshot

        Raises:
            InvalidFormatterError: If messages_format names no registered
                formatter, whether or not messages were loaded
        """
        formatter = self._formatters.resolve(self._config.messages_format, self._config)

        if not self._store.has_locale(code):
            logger.debug("No messages loaded for locale '%s'", code)
            emit_event(self._emitter, EVENT_MISSING_LOCALE, {"locale": code})

        return LocaleFacade(
            code,
            self._store,
            formatter,
            fallback_locale=self._config.fallback_locales.get(code),
            emitter=self._emitter,
        )
