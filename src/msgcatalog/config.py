"""Configuration for CatalogManager.

Two frozen dataclasses describe a manager: CatalogConfig (locales, the
active formatter, loaders) and LoaderConfig (one loader entry). Both can be
built directly or from the plain-mapping configuration surface used by
applications::

    {
        "defaultLocale": "en",
        "messagesFormat": "icu",
        "supportedLocales": ["en", "fr"],      # optional
        "fallbackLocales": {"fr-CA": "fr"},    # optional
        "loaders": {
            "fs": {"enabled": True, "location": "resources/lang"},
        },
    }

snake_case keys (``default_locale`` ...) are accepted as well.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from msgcatalog.constants import DEFAULT_MESSAGES_FORMAT

__all__ = ["CatalogConfig", "LoaderConfig"]


def _pick(raw: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    """Read a key in camelCase or snake_case spelling."""
    if camel in raw:
        return raw[camel]
    return raw.get(snake, default)


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Immutable configuration for one loader entry.

    Attributes:
        enabled: Only enabled loaders take part in a load pass
        options: Loader-specific options passed to the loader factory
            (e.g. ``{"location": "resources/lang"}`` for ``fs``)

    Example:
        >>> config = LoaderConfig.from_mapping({"enabled": True, "location": "lang"})
        >>> config.enabled
        True
        >>> config.get("location")
        'lang'
    """

    enabled: bool = True
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Validate and freeze configuration values.

        Raises:
            TypeError: If enabled is not a bool or options is not a mapping
        """
        if not isinstance(self.enabled, bool):
            msg = f"enabled must be a bool, got {type(self.enabled).__name__}"
            raise TypeError(msg)
        if not isinstance(self.options, Mapping):
            msg = f"options must be a mapping, got {type(self.options).__name__}"
            raise TypeError(msg)
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | LoaderConfig) -> LoaderConfig:
        """Build from ``{"enabled": bool, **options}``.

        A missing ``enabled`` key means enabled.

        Args:
            raw: Loader entry from application configuration

        Returns:
            LoaderConfig instance

        Raises:
            TypeError: If raw is not a mapping
        """
        if isinstance(raw, LoaderConfig):
            return raw
        if not isinstance(raw, Mapping):
            msg = f"Loader configuration must be a mapping, got {type(raw).__name__}"
            raise TypeError(msg)
        options = {key: value for key, value in raw.items() if key != "enabled"}
        return cls(enabled=raw.get("enabled", True), options=options)

    def get(self, key: str, default: Any = None) -> Any:
        """Read a loader option."""
        return self.options.get(key, default)


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Immutable configuration for a CatalogManager.

    Attributes:
        default_locale: Locale used when the application does not pick one
        messages_format: Name of the formatter used by every locale facade
        supported_locales: Explicit supported locale list. When None, the
            list is derived from the locales loaders return.
        fallback_locales: Per-locale fallback for missing messages
            (e.g. ``{"fr-CA": "fr"}``). Empty by default: a message missing in
            the requested locale renders the missing-translation text.
        loaders: Loader entries in declaration order. Later loaders override
            earlier ones when both provide the same message.

    Example:
        >>> config = CatalogConfig(
        ...     default_locale="en",
        ...     loaders={"fs": LoaderConfig(options={"location": "lang"})},
        ... )
        >>> config.messages_format
        'icu'
        >>> config.enabled_loaders()
        ('fs',)
    """

    default_locale: str
    messages_format: str = DEFAULT_MESSAGES_FORMAT
    supported_locales: tuple[str, ...] | None = None
    fallback_locales: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    loaders: Mapping[str, LoaderConfig] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Validate and freeze configuration values.

        Raises:
            ValueError: If default_locale or messages_format is blank, or a
                supported locale is blank
            TypeError: If a field has the wrong type
        """
        if not isinstance(self.default_locale, str) or not self.default_locale.strip():
            msg = "default_locale must be a non-empty string"
            raise ValueError(msg)
        if not isinstance(self.messages_format, str) or not self.messages_format.strip():
            msg = "messages_format must be a non-empty string"
            raise ValueError(msg)

        if self.supported_locales is not None:
            if isinstance(self.supported_locales, str):
                msg = "supported_locales must be a sequence of locale codes, not a string"
                raise TypeError(msg)
            locales = tuple(self.supported_locales)
            if any(not isinstance(code, str) or not code.strip() for code in locales):
                msg = f"supported_locales must contain non-empty strings, got {locales!r}"
                raise ValueError(msg)
            # dict.fromkeys() removes duplicates while maintaining insertion order
            object.__setattr__(self, "supported_locales", tuple(dict.fromkeys(locales)))

        if not isinstance(self.fallback_locales, Mapping):
            msg = "fallback_locales must be a mapping of locale to fallback locale"
            raise TypeError(msg)
        object.__setattr__(
            self, "fallback_locales", MappingProxyType(dict(self.fallback_locales))
        )

        if not isinstance(self.loaders, Mapping):
            msg = "loaders must be a mapping of loader name to loader configuration"
            raise TypeError(msg)
        loaders = {
            name: LoaderConfig.from_mapping(entry) for name, entry in self.loaders.items()
        }
        object.__setattr__(self, "loaders", MappingProxyType(loaders))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | CatalogConfig) -> CatalogConfig:
        """Build from the plain-mapping configuration surface.

        Args:
            raw: Application configuration (camelCase or snake_case keys)

        Returns:
            CatalogConfig instance

        Raises:
            TypeError: If raw is not a mapping
            ValueError: If a required value is missing or blank
        """
        if isinstance(raw, CatalogConfig):
            return raw
        if not isinstance(raw, Mapping):
            msg = f"Configuration must be a mapping, got {type(raw).__name__}"
            raise TypeError(msg)

        supported: Iterable[str] | None = _pick(raw, "supportedLocales", "supported_locales")
        return cls(
            default_locale=_pick(raw, "defaultLocale", "default_locale", ""),
            messages_format=_pick(
                raw, "messagesFormat", "messages_format", DEFAULT_MESSAGES_FORMAT
            ),
            supported_locales=(
                supported if supported is None or isinstance(supported, str)
                else tuple(supported)
            ),
            fallback_locales=_pick(raw, "fallbackLocales", "fallback_locales", {}) or {},
            loaders=raw.get("loaders") or {},
        )

    def enabled_loaders(self) -> tuple[str, ...]:
        """Names of enabled loaders in declaration order."""
        return tuple(name for name, entry in self.loaders.items() if entry.enabled)
