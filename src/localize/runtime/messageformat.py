"""ICU-style message formatting backed by Babel.

The default formatting strategy hands templates that received arguments
to format_message(). It understands the ICU MessageFormat subset that
localization bundles use in practice:

    Hello, {name}!                              simple placeholder
    {0}, {1}                                    positional placeholders
    {amount, number}                            locale number format
    {ratio, number, percent}                    percent / integer / Babel pattern
    {count, plural, =0{none} one{# item} other{# items}}
    {count, plural, offset:1 =0{nobody} =1{{host}} other{{host} and # others}}
    {place, selectordinal, one{#st} two{#nd} few{#rd} other{#th}}
    {gender, select, female{she} male{he} other{they}}
    It''s '{literal}'                           apostrophe quoting

Plural categories come from Babel's CLDR rules for the bundle's locale;
numbers are formatted with babel.numbers. An argument a template refers
to but the request does not carry is rendered back as ``{name}``.

Parsed templates are cached; parsing is pure and keyed only by the
template string.
Arguments nest at most MAX_DEPTH levels deep; deeper templates are
rejected as malformed, which also bounds the recursion of rendering.

Python 3.13+. Depends on Babel for CLDR data.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Final

from babel import Locale
from babel.dates import format_date, format_datetime, format_time
from babel.numbers import format_decimal, format_percent

from localize.constants import (
    FALLBACK_LOCALE,
    FALLBACK_MISSING_ARGUMENT,
    MAX_DEPTH,
    NULL_ARGUMENT,
)
from localize.diagnostics import Diagnostic, DiagnosticCode, MessageFormatError
from localize.locale_utils import get_babel_locale
from localize.runtime.plural_rules import select_plural_category

__all__ = ["format_message"]

_PLURAL_KINDS: Final = frozenset({"plural", "selectordinal"})
_CHOICE_KINDS: Final = _PLURAL_KINDS | {"select"}
_PARSE_CACHE_SIZE: Final = 512


@dataclass(frozen=True, slots=True)
class _Pound:
    """The ``#`` marker inside a plural branch."""


@dataclass(frozen=True, slots=True)
class _Placeholder:
    name: str
    kind: str = ""
    style: str = ""
    offset: Decimal = Decimal(0)
    branches: tuple[tuple[str, tuple[_Node, ...]], ...] = ()


type _Node = str | _Pound | _Placeholder

_POUND: Final = _Pound()


class _TemplateParser:
    """Single-use recursive-descent parser over one template string."""

    __slots__ = ("_depth", "_pos", "_template")

    def __init__(self, template: str) -> None:
        self._template = template
        self._pos = 0
        self._depth = 0

    def parse(self) -> tuple[_Node, ...]:
        return self._message(in_plural=False, nested=False)

    def _error(self, message: str) -> MessageFormatError:
        diagnostic = Diagnostic(
            code=DiagnosticCode.TEMPLATE_INVALID,
            message=f"{message} at offset {self._pos} in template {self._template!r}",
        )
        return MessageFormatError(diagnostic, template=self._template, position=self._pos)

    def _peek(self, offset: int = 0) -> str:
        index = self._pos + offset
        return self._template[index] if index < len(self._template) else ""

    def _skip_whitespace(self) -> None:
        while self._peek().isspace():
            self._pos += 1

    def _expect(self, char: str) -> None:
        if self._peek() != char:
            found = self._peek() or "end of template"
            raise self._error(f"Expected '{char}', found '{found}'")
        self._pos += 1

    def _read_until(self, stops: str) -> str:
        start = self._pos
        while self._peek() and self._peek() not in stops:
            self._pos += 1
        if not self._peek():
            raise self._error("Unterminated placeholder")
        return self._template[start : self._pos]

    def _message(self, *, in_plural: bool, nested: bool) -> tuple[_Node, ...]:
        nodes: list[_Node] = []
        text: list[str] = []

        def flush() -> None:
            if text:
                nodes.append("".join(text))
                text.clear()

        while char := self._peek():
            if char == "'":
                text.append(self._quoted(in_plural=in_plural))
            elif char == "{":
                flush()
                nodes.append(self._placeholder(in_plural=in_plural))
            elif char == "}":
                if not nested:
                    raise self._error("Unmatched '}'")
                break
            elif char == "#" and in_plural:
                flush()
                nodes.append(_POUND)
                self._pos += 1
            else:
                text.append(char)
                self._pos += 1

        if nested and not self._peek():
            raise self._error("Unterminated branch")
        flush()
        return tuple(nodes)

    def _quoted(self, *, in_plural: bool) -> str:
        following = self._peek(1)
        if following == "'":
            self._pos += 2
            return "'"
        if following not in ("{", "}") and not (in_plural and following == "#"):
            self._pos += 1
            return "'"

        # Quoted literal runs to the next lone apostrophe, or to the end
        self._pos += 1
        literal: list[str] = []
        while char := self._peek():
            if char == "'":
                if self._peek(1) == "'":
                    literal.append("'")
                    self._pos += 2
                    continue
                self._pos += 1
                break
            literal.append(char)
            self._pos += 1
        return "".join(literal)

    def _placeholder(self, *, in_plural: bool) -> _Placeholder:
        self._expect("{")
        name = self._read_until(",}").strip()
        if not name:
            raise self._error("Empty argument name")
        if self._peek() == "}":
            self._pos += 1
            return _Placeholder(name)

        self._expect(",")
        kind = self._read_until(",}").strip().lower()

        if kind == "number":
            style = ""
            if self._peek() == ",":
                self._pos += 1
                style = self._read_until("}").strip()
            self._expect("}")
            return _Placeholder(name, kind, style=style)

        if kind in _CHOICE_KINDS:
            self._expect(",")
            offset, branches = self._branches(kind, in_plural=in_plural)
            self._expect("}")
            return _Placeholder(name, kind, offset=offset, branches=branches)

        raise self._error(f"Unsupported argument type '{kind}'")

    def _branches(
        self, kind: str, *, in_plural: bool
    ) -> tuple[Decimal, tuple[tuple[str, tuple[_Node, ...]], ...]]:
        offset = Decimal(0)
        branches: list[tuple[str, tuple[_Node, ...]]] = []
        plural = kind in _PLURAL_KINDS

        while True:
            self._skip_whitespace()
            if self._peek() in ("}", ""):
                break
            start = self._pos
            while self._peek() and not self._peek().isspace() and self._peek() not in "{}":
                self._pos += 1
            selector = self._template[start : self._pos]

            if plural and not branches and selector.startswith("offset:"):
                offset = self._decimal(selector.removeprefix("offset:"))
                continue
            if not selector:
                raise self._error("Expected branch selector")
            if plural and selector.startswith("="):
                self._decimal(selector[1:])

            self._skip_whitespace()
            self._expect("{")
            branch = self._branch(in_plural=plural or in_plural)
            self._expect("}")
            branches.append((selector, branch))

        if not any(selector == "other" for selector, _ in branches):
            raise self._error(f"{kind} argument requires an 'other' branch")
        return offset, tuple(branches)

    def _branch(self, *, in_plural: bool) -> tuple[_Node, ...]:
        if self._depth >= MAX_DEPTH:
            raise self._error(f"Template nests deeper than {MAX_DEPTH} arguments")
        self._depth += 1
        try:
            return self._message(in_plural=in_plural, nested=True)
        finally:
            self._depth -= 1

    def _decimal(self, text: str) -> Decimal:
        try:
            return Decimal(text.strip())
        except InvalidOperation:
            raise self._error(f"Invalid number '{text}'") from None


@functools.lru_cache(maxsize=_PARSE_CACHE_SIZE)
def _parse(template: str) -> tuple[_Node, ...]:
    return _TemplateParser(template).parse()


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _format_value(value: Any, locale: Locale) -> str:
    if value is None:
        return NULL_ARGUMENT
    if _is_number(value):
        return format_decimal(value, locale=locale)
    if isinstance(value, datetime):
        return format_datetime(value, "short", locale=locale)
    if isinstance(value, date):
        return format_date(value, "short", locale=locale)
    if isinstance(value, time):
        return format_time(value, "short", locale=locale)
    return str(value)


def _require_number(placeholder: _Placeholder, value: Any) -> int | float | Decimal:
    if not _is_number(value):
        diagnostic = Diagnostic(
            code=DiagnosticCode.PROCESSING_FAILED,
            message=(
                f"Argument '{placeholder.name}' of type {type(value).__name__} "
                f"cannot be used as a {placeholder.kind or 'number'}"
            ),
            hint="Pass an int, float, or Decimal",
        )
        raise MessageFormatError(diagnostic)
    return value


def _format_number(placeholder: _Placeholder, value: Any, locale: Locale) -> str:
    number = _require_number(placeholder, value)
    match placeholder.style:
        case "":
            return format_decimal(number, locale=locale)
        case "integer":
            return format_decimal(number, format="#,##0", locale=locale)
        case "percent":
            return format_percent(number, locale=locale)
        case pattern:
            try:
                return format_decimal(number, format=pattern, locale=locale)
            except ValueError as e:
                msg = f"Invalid number pattern {pattern!r}: {e}"
                raise MessageFormatError(msg) from e


def _is_finite(number: int | float | Decimal) -> bool:
    if isinstance(number, Decimal):
        return number.is_finite()
    return isinstance(number, int) or math.isfinite(number)


def _apply_offset(number: int | float | Decimal, offset: Decimal) -> int | float | Decimal:
    if not offset:
        return number
    if isinstance(number, float):
        return number - float(offset)
    if isinstance(number, int) and offset == offset.to_integral_value():
        return number - int(offset)
    return Decimal(number) - offset


def _pick_branch(
    placeholder: _Placeholder, value: Any, locale: Locale
) -> tuple[tuple[_Node, ...], Any]:
    """Return the chosen branch and the value ``#`` renders inside it."""
    branches = dict(placeholder.branches)

    if placeholder.kind == "select":
        selector = NULL_ARGUMENT if value is None else str(value)
        return branches.get(selector, branches["other"]), None

    number = _require_number(placeholder, value)
    adjusted = _apply_offset(number, placeholder.offset)
    exact = Decimal(str(number))
    for selector, branch in placeholder.branches:
        if selector.startswith("=") and Decimal(selector[1:]) == exact:
            return branch, adjusted

    if not _is_finite(adjusted):
        return branches["other"], adjusted
    category = select_plural_category(
        adjusted, locale, ordinal=placeholder.kind == "selectordinal"
    )
    return branches.get(category, branches["other"]), adjusted


def _render(
    nodes: tuple[_Node, ...],
    arguments: Mapping[str, Any],
    locale: Locale,
    pound: Any,
) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, str):
            parts.append(node)
        elif isinstance(node, _Pound):
            parts.append("#" if pound is None else _format_value(pound, locale))
        elif node.name not in arguments:
            parts.append(FALLBACK_MISSING_ARGUMENT.format(name=node.name))
        else:
            value = arguments[node.name]
            match node.kind:
                case "":
                    parts.append(_format_value(value, locale))
                case "number":
                    parts.append(_format_number(node, value, locale))
                case _:
                    branch, branch_pound = _pick_branch(node, value, locale)
                    if branch_pound is None:
                        branch_pound = pound
                    parts.append(_render(branch, arguments, locale, branch_pound))
    return "".join(parts)


def format_message(
    template: str,
    arguments: Mapping[str, Any],
    locale: Locale | None = None,
) -> str:
    """Substitute ``arguments`` into an ICU-style ``template``.

    Args:
        template: Message template
        arguments: Argument values by name; positional arguments use "0", "1", ...
        locale: Locale for plural rules and number formatting; None uses en_US

    Returns:
        Formatted string

    Raises:
        MessageFormatError: If the template is malformed, or a plural/number
            placeholder receives a non-numeric value

    Example:
        >>> format_message("{0}-{1}", {"0": "X", "1": "Y"})
        'X-Y'
        >>> format_message(
        ...     "Clicked {n, plural, one{# time} other{# times}}!",
        ...     {"n": 2},
        ...     Locale.parse("en"),
        ... )
        'Clicked 2 times!'
    """
    if locale is None:
        locale = get_babel_locale(FALLBACK_LOCALE)
    return _render(_parse(template), arguments, locale, None)
