"""Formatter protocol and the literal-substitution formatter.

A formatter renders a raw template plus data for a locale. Formatters are
interchangeable strategies selected by name through CatalogConfig's
``messages_format``; they must be pure functions of their inputs.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Protocol

from msgcatalog.constants import SIMPLE_FORMATTER_NAME

if TYPE_CHECKING:
    from msgcatalog.localization.types import LocaleCode, MessageData, Template

__all__ = ["MessageFormatter", "SimpleFormatter"]


class MessageFormatter(Protocol):
    """Protocol for message formatters.

    This is a Protocol (structural typing) rather than ABC: any object with a
    ``name`` and a matching ``format`` method can be registered through
    CatalogManager.extend().

    Example:
        >>> class UpperFormatter:
        ...     name = "upper"
        ...     def format(self, template, data, locale):
        ...         return template.upper()
        >>> manager.extend("upper", "formatter", UpperFormatter)
    """

    name: str

    def format(self, template: Template, data: MessageData, locale: LocaleCode) -> str:
        """Render ``template`` with ``data`` for ``locale``.

        Raises:
            Exception: Formatter-defined; propagated to the caller of
                LocaleFacade.format_message() unmasked
        """
        ...  # pragma: no cover  # Protocol stub - not executable


_PLACEHOLDER = re.compile(r"\{\s*([A-Za-z_][\w.-]*)\s*\}")


class SimpleFormatter:
    """Literal-substitution formatter.

    Replaces ``{name}`` placeholders with ``str(data["name"])``. Placeholders
    without a matching key are left as written, and no plural, select,
    number or date handling takes place.

    Example:
        >>> SimpleFormatter().format("Hello {name}", {"name": "Anna"}, "en")
        'Hello Anna'
        >>> SimpleFormatter().format("Hello {name}", {}, "en")
        'Hello {name}'
    """

    __slots__ = ()

    name = SIMPLE_FORMATTER_NAME

    def format(self, template: Template, data: MessageData, locale: LocaleCode) -> str:  # noqa: ARG002
        """Substitute placeholders present in ``data``."""
        if not data:
            return template

        def substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            if key in data:
                return str(data[key])
            return match.group(0)

        return _PLACEHOLDER.sub(substitute, template)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return "SimpleFormatter()"
