"""Message loading infrastructure for CatalogManager.

Provides the protocol for message loaders, the built-in filesystem and
in-memory loaders, shape validation for loader output, and result/summary
data structures describing a load pass.

Components:
    MessageLoader - Protocol for loading catalog fragments (structural typing)
    FileSystemLoader - JSON-file loader, one directory per locale
    MemoryLoader - Loader serving a static in-memory catalog
    validate_catalog - Check and copy a loader's output
    LoadResult - Immutable result of one loader within a load pass
    LoadSummary - Immutable aggregate of a load pass

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from msgcatalog.constants import IDENTIFIER_SEPARATOR
from msgcatalog.diagnostics import CatalogFormatError
from msgcatalog.localization.types import LocaleCode, MessageCatalog, MessageId, Template

if TYPE_CHECKING:
    from msgcatalog.config import LoaderConfig

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "MessageLoader",
    # Concrete loaders
    "FileSystemLoader",
    "MemoryLoader",
    # Output validation
    "flatten_messages",
    "validate_catalog",
    # Load result types
    "LoadResult",
    "LoadSummary",
]

logger = logging.getLogger(__name__)


class MessageLoader(Protocol):
    """Protocol for loaders producing catalog fragments.

    A loader returns templates for whatever locales it knows about. It must
    not mutate global state, and repeated calls must not depend on data
    memoized from an earlier call: CatalogManager.reload_messages() relies on
    every load() re-reading the loader's source.

    This is a Protocol (structural typing) rather than ABC, so any object
    with an async ``load()`` method works, including ad-hoc classes returned
    by a factory passed to CatalogManager.extend().

    Example:
        >>> class DatabaseLoader:
        ...     async def load(self) -> MessageCatalog:
        ...         rows = await fetch_translations()
        ...         return {row.locale: {row.key: row.text} for row in rows}
    """

    async def load(self) -> MessageCatalog:
        """Load a catalog fragment.

        Returns:
            Mapping of locale code to mapping of identifier to template

        Raises:
            Exception: Loader-defined; aborts the load pass unchanged
        """
        ...  # pragma: no cover  # Protocol stub - not executable


def flatten_messages(
    data: Mapping[str, Any],
    prefix: str = "",
    *,
    source: str | None = None,
) -> dict[MessageId, Template]:
    """Flatten nested message objects into dot-delimited identifiers.

    Args:
        data: Nested mapping whose leaves are template strings
        prefix: Identifier prefix (e.g. the file name "messages")
        source: Origin of the data, used in error messages

    Returns:
        Flat mapping of identifier to template

    Raises:
        CatalogFormatError: If a leaf is not a string or a key is not a string

    Example:
        >>> flatten_messages({"auth": {"failed": "Bad login"}}, "messages")
        {'messages.auth.failed': 'Bad login'}
    """
    flat: dict[MessageId, Template] = {}
    for key, value in data.items():
        if not isinstance(key, str) or not key:
            msg = f"Message keys must be non-empty strings, got {key!r}"
            raise CatalogFormatError(msg, source=source)
        identifier = f"{prefix}{IDENTIFIER_SEPARATOR}{key}" if prefix else key
        match value:
            case str():
                flat[identifier] = value
            case Mapping():
                flat.update(flatten_messages(value, identifier, source=source))
            case _:
                msg = (
                    f"Message '{identifier}' must be a string or an object, "
                    f"got {type(value).__name__}"
                )
                raise CatalogFormatError(msg, source=source)
    return flat


def validate_catalog(
    fragment: object, *, source: str | None = None
) -> dict[LocaleCode, dict[MessageId, Template]]:
    """Check a loader's output and return a private copy.

    Copying isolates the published catalog from later mutation of the
    loader's own data structures.

    Args:
        fragment: Value returned by MessageLoader.load()
        source: Loader name, used in error messages

    Returns:
        Plain dict copy of the fragment

    Raises:
        CatalogFormatError: If the fragment is not a mapping of locale code
            to mapping of identifier to template string
    """
    if not isinstance(fragment, Mapping):
        msg = f"Loader must return a mapping of locales, got {type(fragment).__name__}"
        raise CatalogFormatError(msg, source=source)

    catalog: dict[LocaleCode, dict[MessageId, Template]] = {}
    for locale, messages in fragment.items():
        if not isinstance(locale, str) or not locale.strip():
            msg = f"Locale codes must be non-empty strings, got {locale!r}"
            raise CatalogFormatError(msg, source=source)
        if not isinstance(messages, Mapping):
            msg = f"Messages for locale '{locale}' must be a mapping, got {type(messages).__name__}"
            raise CatalogFormatError(msg, source=source)
        for identifier, template in messages.items():
            if not isinstance(identifier, str) or not isinstance(template, str):
                msg = (
                    f"Locale '{locale}' has a non-string entry: "
                    f"{identifier!r} -> {type(template).__name__}"
                )
                raise CatalogFormatError(msg, source=source)
        catalog[locale] = dict(messages)
    return catalog


@dataclass(frozen=True, slots=True)
class FileSystemLoader:
    """Filesystem loader reading JSON files, one directory per locale.

    Layout::

        <location>/
            en/
                messages.json      {"greeting": "hello world"}
                auth/errors.json   {"failed": "Bad login"}
            fr/
                messages.json

    produces ``{"en": {"messages.greeting": ..., "auth.errors.failed": ...}, "fr": ...}``.
    The file path relative to the locale directory becomes the identifier
    prefix and nested objects are flattened with ".".

    Files are read on every load() call; nothing is memoized, so a reload
    always sees the current files. Reading happens in a worker thread to keep
    the event loop responsive.

    Attributes:
        location: Directory holding one sub-directory per locale
    """

    location: str | Path
    _root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Resolve the root directory once at construction."""
        object.__setattr__(self, "_root", Path(self.location))

    @classmethod
    def from_config(cls, config: LoaderConfig) -> FileSystemLoader:
        """Build from a loader configuration entry.

        Args:
            config: Loader configuration with a ``location`` option

        Returns:
            FileSystemLoader instance

        Raises:
            ValueError: If the ``location`` option is missing
        """
        location = config.get("location")
        if not location:
            msg = "The fs loader requires a 'location' option"
            raise ValueError(msg)
        return cls(location)

    async def load(self) -> MessageCatalog:
        """Read every locale directory under ``location``.

        Returns:
            Catalog fragment; empty if ``location`` does not exist

        Raises:
            CatalogFormatError: If a file is not valid JSON or not an object
            OSError: If a file cannot be read
        """
        return await asyncio.to_thread(self._read_catalog)

    def _read_catalog(self) -> dict[LocaleCode, dict[MessageId, Template]]:
        if not self._root.is_dir():
            logger.warning("Messages directory not found: %s", self._root)
            return {}

        catalog: dict[LocaleCode, dict[MessageId, Template]] = {}
        for locale_dir in sorted(p for p in self._root.iterdir() if p.is_dir()):
            files = sorted(locale_dir.rglob("*.json"))
            if not files:
                continue
            messages: dict[MessageId, Template] = {}
            for path in files:
                prefix = IDENTIFIER_SEPARATOR.join(
                    path.relative_to(locale_dir).with_suffix("").parts
                )
                messages.update(flatten_messages(self._read_json(path), prefix, source=str(path)))
            catalog[locale_dir.name] = messages
            logger.debug(
                "Read %d messages for locale '%s' from %s",
                len(messages),
                locale_dir.name,
                locale_dir,
            )
        return catalog

    @staticmethod
    def _read_json(path: Path) -> Mapping[str, Any]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            msg = f"Invalid JSON: {e}"
            raise CatalogFormatError(msg, source=str(path)) from e
        if not isinstance(data, Mapping):
            msg = f"Top-level JSON value must be an object, got {type(data).__name__}"
            raise CatalogFormatError(msg, source=str(path))
        return data


class MemoryLoader:
    """Loader serving a static in-memory catalog.

    Each load() returns a fresh copy, so callers cannot mutate the
    loader's data through the returned fragment.

    Example:
        >>> loader = MemoryLoader({"en": {"messages.foo": "hello foo"}})
        >>> manager.extend("memory", "loader", lambda config: loader)
    """

    __slots__ = ("_messages",)

    def __init__(self, messages: MessageCatalog | None = None) -> None:
        """Initialize with a catalog.

        Args:
            messages: Catalog to serve (copied)
        """
        self._messages = validate_catalog(messages or {}, source="memory")

    async def load(self) -> MessageCatalog:
        """Return a copy of the catalog."""
        return {locale: dict(messages) for locale, messages in self._messages.items()}

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"MemoryLoader(locales={tuple(self._messages)!r})"


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Outcome of one loader within a successful load pass.

    Attributes:
        loader: Loader name from configuration
        locales: Locale codes in the loader's fragment, in returned order
        message_count: Total number of templates in the fragment
    """

    loader: str
    locales: tuple[LocaleCode, ...]
    message_count: int


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of the latest successful load pass.

    Attributes:
        results: Per-loader results in configuration order
        duration: Wall-clock seconds spent in the pass

    Example:
        >>> await manager.load_messages()
        >>> summary = manager.get_load_summary()
        >>> summary.loaders
        ('fs', 'memory')
    """

    results: tuple[LoadResult, ...] = ()
    duration: float = 0.0

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(loaders={self.loaders!r}, "
            f"messages={self.message_count}, "
            f"duration={self.duration:.3f}s)"
        )

    @property
    def loaders(self) -> tuple[str, ...]:
        """Names of the loaders that ran."""
        return tuple(r.loader for r in self.results)

    @property
    def message_count(self) -> int:
        """Templates returned across all loaders, before merging."""
        return sum(r.message_count for r in self.results)

    def get_by_loader(self, name: str) -> LoadResult | None:
        """Get the result of a loader by name."""
        return next((r for r in self.results if r.loader == name), None)
