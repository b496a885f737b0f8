"""ICU MessageFormat formatter.

Templates are parsed by ``pyicumessageformat`` into a tree of literal
strings and argument nodes; this module renders that tree against the
caller's data, using Babel (through LocaleContext) for CLDR numbers, dates
and plural categories.

Supported arguments::

    {name}                                    plain value
    {n, number}  {n, number, integer|percent|currency|<pattern>|::<skeleton>}
    {d, date}    {d, date, short|medium|long|full|<pattern>|::<skeleton>}
    {t, time}    {t, time, short|medium|long|full|<pattern>|::<skeleton>}
    {n, plural, offset:1 =0 {none} one {# item} other {# items}}
    {n, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}
    {g, select, female {she} male {he} other {they}}

Python 3.13+. Depends on pyicumessageformat and Babel.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from pyicumessageformat import Parser

from msgcatalog.constants import ICU_FORMATTER_NAME, MAX_TEMPLATE_CACHE_SIZE
from msgcatalog.diagnostics import MessageFormatError
from msgcatalog.enums import NumberStyle
from msgcatalog.runtime.locale_context import LocaleContext, NumberValue
from msgcatalog.runtime.plural_rules import select_plural_category

if TYPE_CHECKING:
    from msgcatalog.localization.types import LocaleCode, MessageData, Template

__all__ = ["IcuMessageFormatter", "parse_template"]

type Node = str | Mapping[str, Any]
"""Parsed template element: literal text or an argument mapping."""

_FRACTION_SKELETON = re.compile(r"^\.(0*)(#*)$")


@lru_cache(maxsize=MAX_TEMPLATE_CACHE_SIZE)
def parse_template(template: Template) -> tuple[Node, ...]:
    """Parse an ICU template into its element tree (cached per template).

    Args:
        template: ICU MessageFormat source

    Returns:
        Tuple of literal strings and argument mappings

    Raises:
        MessageFormatError: If the template is not valid ICU MessageFormat
    """
    try:
        return tuple(Parser().parse(template))
    except (SyntaxError, ValueError, TypeError) as e:
        msg = f"Invalid ICU message '{template}': {e}"
        raise MessageFormatError(msg, template=template) from e


class IcuMessageFormatter:
    """Formatter for ICU MessageFormat templates.

    Rendering is a pure function of template, data and locale. Errors are
    raised as MessageFormatError and never replaced by fallback text:

    - the template does not parse
    - an argument referenced by the template is missing from ``data``
    - a number/date argument receives a value of the wrong type
    - no plural/select option matches and there is no ``other`` option

    Example:
        >>> icu = IcuMessageFormatter()
        >>> icu.format("You have {n, plural, one {# message} other {# messages}}", {"n": 3}, "en")
        'You have 3 messages'
        >>> icu.format("{g, select, female {She} other {They}} replied", {"g": "female"}, "en")
        'She replied'
    """

    __slots__ = ()

    name = ICU_FORMATTER_NAME

    def format(self, template: Template, data: MessageData | None, locale: LocaleCode) -> str:
        """Render ``template`` with ``data`` for ``locale``.

        Raises:
            MessageFormatError: See class docstring
        """
        if not isinstance(template, str):
            msg = f"Template must be a string, got {type(template).__name__}"
            raise MessageFormatError(msg, locale_code=locale)
        if data is not None and not isinstance(data, Mapping):
            msg = f"Message data must be a mapping, got {type(data).__name__}"
            raise MessageFormatError(msg, template=template, locale_code=locale)

        nodes = parse_template(template)
        renderer = _Renderer(template, data or {}, locale)
        return renderer.render(nodes, None)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return "IcuMessageFormatter()"


class _Renderer:
    """Renders one parsed template against one data mapping."""

    __slots__ = ("_ctx", "_data", "_locale", "_template")

    def __init__(self, template: Template, data: MessageData, locale: LocaleCode) -> None:
        self._template = template
        self._data = data
        self._locale = locale
        self._ctx = LocaleContext.create(locale)

    def _fail(self, message: str) -> MessageFormatError:
        return MessageFormatError(message, template=self._template, locale_code=self._locale)

    def render(self, nodes: Sequence[Node], plural_value: NumberValue | None) -> str:
        """Render a node list; ``plural_value`` is what ``#`` prints."""
        return "".join(
            node if isinstance(node, str) else self._render_argument(node, plural_value)
            for node in nodes
        )

    def _render_argument(self, node: Mapping[str, Any], plural_value: NumberValue | None) -> str:
        if node.get("hash"):
            if plural_value is None:
                return "#"
            return self._ctx.format_number(plural_value)

        name = node.get("name")
        if name not in self._data:
            msg = f'The value for argument "{name}" was not provided'
            raise self._fail(msg)
        value = self._data[name]
        style = node.get("format")
        if isinstance(style, str):
            style = style.strip()

        match node.get("type"):
            case None:
                return self._render_plain(value)
            case "number":
                return self._render_number(self._to_number(name, value), style)
            case "date":
                return self._render_date(value, style, time_only=False)
            case "time":
                return self._render_date(value, style, time_only=True)
            case "plural" | "selectordinal" as kind:
                return self._render_plural(node, name, value, ordinal=kind == "selectordinal")
            case "select":
                return self._render_select(node, name, value, plural_value)
            case unknown:
                msg = f'Unsupported argument type "{unknown}" for "{name}"'
                raise self._fail(msg)

    def _render_plain(self, value: object) -> str:
        match value:
            case None:
                return ""
            case bool():
                return "true" if value else "false"
            case datetime():
                return self._ctx.format_datetime(value)
            case date():
                return self._ctx.format_date(value)
            case _:
                return str(value)

    def _to_number(self, name: str, value: object) -> NumberValue:
        if isinstance(value, bool):
            msg = f'Argument "{name}" must be a number, got bool'
            raise self._fail(msg)
        if isinstance(value, int | float | Decimal):
            return value
        if isinstance(value, str):
            try:
                return Decimal(value.strip())
            except InvalidOperation:
                pass
        msg = f'Argument "{name}" must be a number, got {type(value).__name__} ({value!r})'
        raise self._fail(msg)

    def _render_number(self, value: NumberValue, style: str | None) -> str:
        match style:
            case None | "" | NumberStyle.DECIMAL:
                return self._ctx.format_number(value)
            case NumberStyle.INTEGER:
                return self._ctx.format_number(value, maximum_fraction_digits=0)
            case NumberStyle.PERCENT:
                return self._ctx.format_percent(value)
            case NumberStyle.CURRENCY:
                return self._ctx.format_currency(value)
            case str() if style.startswith("::"):
                return self._render_number_skeleton(value, style[2:])
            case _:
                return self._ctx.format_number(value, pattern=style)

    def _render_number_skeleton(self, value: NumberValue, skeleton: str) -> str:
        """Render the supported subset of ICU number skeletons.

        Tokens: ``percent``, ``currency/XXX``, ``integer``/``precision-integer``,
        ``group-off``, and fraction precision such as ``.00`` or ``.0#``.
        """
        percent = False
        currency: str | None = None
        minimum, maximum = 0, 3
        grouping = True

        for token in skeleton.split():
            if token == "percent":
                percent = True
            elif token.startswith("currency/"):
                currency = token.partition("/")[2].upper()
            elif token in ("integer", "precision-integer"):
                minimum = maximum = 0
            elif token == "group-off":
                grouping = False
            elif match := _FRACTION_SKELETON.match(token):
                minimum = len(match.group(1))
                maximum = minimum + len(match.group(2))
            else:
                msg = f'Unsupported number skeleton token "{token}"'
                raise self._fail(msg)

        if currency is not None:
            return self._ctx.format_currency(value, currency)
        if percent:
            integer_part = "#,##0" if grouping else "0"
            fraction = "0" * minimum + "#" * (maximum - minimum) if maximum else ""
            pattern = f"{integer_part}.{fraction}%" if fraction else f"{integer_part}%"
            return self._ctx.format_percent(value, pattern=pattern)
        return self._ctx.format_number(
            value,
            minimum_fraction_digits=minimum,
            maximum_fraction_digits=maximum,
            use_grouping=grouping,
        )

    def _render_date(self, value: object, style: str | None, *, time_only: bool) -> str:
        if style and style.startswith("::"):
            return self._ctx.format_skeleton(value, style[2:].strip())  # type: ignore[arg-type]
        pattern = style or None
        if time_only:
            return self._ctx.format_time(value, pattern)  # type: ignore[arg-type]
        return self._ctx.format_date(value, pattern)  # type: ignore[arg-type]

    def _render_plural(
        self,
        node: Mapping[str, Any],
        name: str,
        value: object,
        *,
        ordinal: bool,
    ) -> str:
        number = self._to_number(name, value)
        options: Mapping[str, Sequence[Node]] = node.get("options") or {}
        offset = node.get("offset") or 0

        # Exact matches compare the raw value, before the offset is applied
        for key, branch in options.items():
            if key.startswith("=") and self._equals(key[1:], number):
                return self.render(branch, number - offset)

        category = select_plural_category(number - offset, self._locale, ordinal=ordinal)
        branch = options.get(category)
        if branch is None:
            branch = options.get("other")
        if branch is None:
            msg = f'No "{category}" or "other" option for argument "{name}"'
            raise self._fail(msg)
        return self.render(branch, number - offset)

    @staticmethod
    def _equals(literal: str, number: NumberValue) -> bool:
        try:
            return Decimal(literal.strip()) == Decimal(str(number))
        except InvalidOperation:
            return False

    def _render_select(
        self,
        node: Mapping[str, Any],
        name: str,
        value: object,
        plural_value: NumberValue | None,
    ) -> str:
        options: Mapping[str, Sequence[Node]] = node.get("options") or {}
        key = self._render_plain(value) if isinstance(value, bool) else str(value)
        branch = options.get(key)
        if branch is None:
            branch = options.get("other")
        if branch is None:
            msg = f'No "{key}" or "other" option for argument "{name}"'
            raise self._fail(msg)
        return self.render(branch, plural_value)
