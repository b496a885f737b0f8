"""Plugin registries for loaders and formatters.

Each registry maps a plugin name to a factory producing a plugin instance.
Registration is last-write-wins: registering a name again replaces the
previous factory without error. Lookups of unknown names raise the
registry's kind-specific PluginNotFoundError subclass.

Factories may accept the plugin configuration as a required first positional
argument or take no arguments at all. Classes whose constructor arguments
all have defaults are called with no arguments:

    registry.register("memory", lambda config: MemoryLoader(...))
    registry.register("memory", lambda: MemoryLoader(...))
    registry.register("memory", MemoryLoader)

Loader factories receive the loader's LoaderConfig; formatter factories
receive the manager's CatalogConfig.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from inspect import Parameter, signature
from typing import TYPE_CHECKING, Any, ClassVar

from msgcatalog.diagnostics import (
    InvalidFormatterError,
    PluginNotFoundError,
    UnknownLoaderError,
)
from msgcatalog.enums import PluginKind

if TYPE_CHECKING:
    from msgcatalog.config import CatalogConfig, LoaderConfig
    from msgcatalog.localization.loading import MessageLoader
    from msgcatalog.runtime.formatters import MessageFormatter

__all__ = [
    "FormatterFactory",
    "FormatterRegistry",
    "LoaderFactory",
    "LoaderRegistry",
    "PluginRegistry",
]

logger = logging.getLogger(__name__)

type LoaderFactory = Callable[[LoaderConfig], MessageLoader] | Callable[[], MessageLoader]
"""Builds a loader from its configuration entry."""

type FormatterFactory = (
    Callable[[CatalogConfig], MessageFormatter] | Callable[[], MessageFormatter]
)
"""Builds a formatter from the manager configuration."""

_POSITIONAL = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)


def _accepts_config(factory: Callable[..., Any]) -> bool:
    """Check whether a factory requires a positional configuration argument.

    Only a required first positional parameter (or ``*args``) receives the
    configuration; factories whose positional parameters all have defaults
    are called with no arguments.
    """
    try:
        params = signature(factory).parameters.values()
    except (TypeError, ValueError):
        # Builtins without introspectable signatures: assume the documented form
        return True
    for p in params:
        if p.kind is Parameter.VAR_POSITIONAL:
            return True
        if p.kind in _POSITIONAL:
            return p.default is Parameter.empty
    return False


@dataclass(frozen=True, slots=True)
class PluginEntry:
    """Registered factory and its calling convention.

    Attributes:
        name: Plugin name
        factory: Callable producing a plugin instance
        takes_config: Whether the factory is called with the configuration
    """

    name: str
    factory: Callable[..., Any]
    takes_config: bool

    def create(self, config: object) -> Any:
        """Instantiate the plugin."""
        if self.takes_config:
            return self.factory(config)
        return self.factory()


class PluginRegistry[P, C]:
    """Name -> factory mapping for one plugin kind.

    Supports dict-like introspection:
        - names(): Registered names in registration order
        - __iter__: Iterate over names
        - __len__: Count registered plugins
        - __contains__: Check if a name is registered (supports 'in' operator)

    Subclasses set ``kind`` and ``_not_found``.
    """

    kind: ClassVar[PluginKind]

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._entries: dict[str, PluginEntry] = {}

    def register(self, name: str, factory: Callable[..., P]) -> None:
        """Store or replace the factory for ``name``.

        Args:
            name: Plugin name referenced from configuration
            factory: Callable taking the configuration (or nothing) and
                returning a plugin instance

        Raises:
            ValueError: If name is empty
            TypeError: If factory is not callable
        """
        if not isinstance(name, str) or not name.strip():
            msg = f"{self.kind.capitalize()} name must be a non-empty string"
            raise ValueError(msg)
        if not callable(factory):
            msg = f"{self.kind.capitalize()} factory for '{name}' must be callable"
            raise TypeError(msg)

        replaced = name in self._entries
        self._entries[name] = PluginEntry(
            name=name, factory=factory, takes_config=_accepts_config(factory)
        )
        logger.debug(
            "%s %s '%s'", "Replaced" if replaced else "Registered", self.kind, name
        )

    def resolve(self, name: str, config: C) -> P:
        """Instantiate the plugin registered under ``name``.

        Args:
            name: Plugin name
            config: Configuration handed to the factory

        Returns:
            New plugin instance

        Raises:
            PluginNotFoundError: If nothing is registered under ``name``
        """
        entry = self._entries.get(name)
        if entry is None:
            raise self._not_found(name)
        plugin: P = entry.create(config)
        return plugin

    def _not_found(self, name: str) -> PluginNotFoundError:
        raise NotImplementedError

    def names(self) -> tuple[str, ...]:
        """Registered names in registration order."""
        return tuple(self._entries)

    def copy(self) -> PluginRegistry[P, C]:
        """Create a shallow copy of this registry.

        Returns:
            New registry of the same class with the same factories.
        """
        new_registry = type(self)()
        new_registry._entries = self._entries.copy()
        return new_registry

    def __contains__(self, name: object) -> bool:
        """Check if a plugin is registered (supports 'in' operator)."""
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        """Iterate over registered names."""
        return iter(self._entries)

    def __len__(self) -> int:
        """Number of registered plugins."""
        return len(self._entries)

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(LoaderRegistry())
            'LoaderRegistry(names=())'
        """
        return f"{type(self).__name__}(names={self.names()!r})"


class LoaderRegistry(PluginRegistry["MessageLoader", "LoaderConfig"]):
    """Registry of loader factories; unknown names raise UnknownLoaderError."""

    kind = PluginKind.LOADER

    __slots__ = ()

    def _not_found(self, name: str) -> PluginNotFoundError:
        return UnknownLoaderError(name)


class FormatterRegistry(PluginRegistry["MessageFormatter", "CatalogConfig"]):
    """Registry of formatter factories; unknown names raise InvalidFormatterError."""

    kind = PluginKind.FORMATTER

    __slots__ = ()

    def _not_found(self, name: str) -> PluginNotFoundError:
        return InvalidFormatterError(name)
