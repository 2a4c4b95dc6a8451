"""Style model for the ``style`` attribute of a tag.

A :class:`Style` maps CSS property names to values that already carry their
unit. Values are normalized on the way in:

* ``"0"`` is stored unchanged.
* Any other bare number gets a ``px`` suffix, unless the property takes a
  number that is not a length (``z-index``, ``font-weight`` and friends).
* A value of the form ``"<op> <number>"`` with ``op`` one of ``+ - * /``
  applies the operation in place to every number found in the current
  value, keeping each number's unit. ``Style().set("height", "4em").set("height", "* 2")``
  leaves ``height:8em``.

The encoded form sorts properties by name so that output is stable and
testable.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from .errors import ValidationError

LENGTH_UNIT = "px"

# properties that take a number that is not a length
NON_LENGTH_NUMERICS = frozenset(
    {
        "volume",
        "speech-rate",
        "orphans",
        "widows",
        "pitch-range",
        "font-weight",
        "z-index",
        "counter-increment",
        "counter-reset",
    }
)

ARITHMETIC_OPERATORS = ("+", "-", "*", "/")

NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d+)?|\.\d+)")

ROUND_DIGITS = 6

_DIGITS = frozenset("0123456789")


def is_numeric(value: str) -> bool:
    """Return True for a bare number such as ``4``, ``-2.5`` or ``.5``."""

    body = value[1:] if value.startswith("-") else value
    whole, dot, fraction = body.partition(".")
    if dot and not fraction:
        return False
    if not whole and not fraction:
        return False
    return _DIGITS.issuperset(whole) and _DIGITS.issuperset(fraction)


def round_float(value: float, digits: int = ROUND_DIGITS) -> float:
    """Round away the floating point noise left behind by length arithmetic."""

    scaled = value * 10**digits
    if abs(scaled) < 0.5:
        return 0.0
    return int(scaled + math.copysign(0.5, scaled)) / 10**digits


def format_number(value: float) -> str:
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _apply(op: str, current: float, operand: float) -> float:
    if op == "+":
        return current + operand
    if op == "-":
        return current - operand
    if op == "*":
        return current * operand
    return current / operand


class Style(MutableMapping[str, str]):
    """CSS properties of a single tag.

    A mapping given to the constructor is taken as-is. Assigning an item goes
    through :meth:`set_changed`, so unit inference and arithmetic apply.
    """

    def __init__(self, properties: Mapping[str, str] | None = None) -> None:
        self._properties: dict[str, str] = dict(properties or {})

    def __getitem__(self, name: str) -> str:
        return self._properties[name]

    def __setitem__(self, name: str, value: str) -> None:
        self.set_changed(name, value)

    def __delitem__(self, name: str) -> None:
        del self._properties[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def __str__(self) -> str:
        return self.encode()

    def __repr__(self) -> str:
        return f"Style({self._properties!r})"

    def copy(self) -> Style:
        return Style(self._properties)

    def has(self, name: str) -> bool:
        return name in self._properties

    def remove(self, name: str) -> None:
        self._properties.pop(name, None)

    def merge(self, other: Mapping[str, str] | None) -> Style:
        """Copy every property of ``other`` over this style. ``other`` wins conflicts."""

        if other:
            self._properties.update(other)
        return self

    def _store(self, name: str, value: str) -> bool:
        previous = self._properties.get(name)
        self._properties[name] = value
        return previous != value

    def set_changed(self, name: str, value: str) -> bool:
        """Set a property and report whether the stored value changed."""

        if " " in name:
            raise ValidationError(f"style property names cannot contain spaces: {name!r}")

        if value[:1] in ARITHMETIC_OPERATORS and value[1:2] == " ":
            # the space tells an operation apart from a negative number
            return self._math_op(name, value[0], value[2:])

        if value != "0" and is_numeric(value) and name not in NON_LENGTH_NUMERICS:
            value += LENGTH_UNIT
        return self._store(name, value)

    def set(self, name: str, value: str) -> Style:
        self.set_changed(name, value)
        return self

    def _math_op(self, name: str, op: str, operand_text: str) -> bool:
        current = self._properties.get(name) or "0"
        try:
            operand = float(operand_text)
        except ValueError as exc:
            raise ValidationError(
                f"style arithmetic needs a number, got {operand_text!r}"
            ) from exc
        if not math.isfinite(operand):
            raise ValidationError(f"style arithmetic needs a finite number, got {operand_text!r}")
        if op == "/" and operand == 0:
            raise ValidationError(f"style arithmetic on {name!r} divides by zero")

        def replace(match: re.Match[str]) -> str:
            result = _apply(op, float(match.group(0)), operand)
            if not math.isfinite(result * 10**ROUND_DIGITS):
                raise ValidationError(f"style arithmetic on {name!r} overflows")
            return format_number(round_float(result))

        return self._store(name, NUMBER_RE.sub(replace, current))

    def parse(self, text: str) -> bool:
        """Replace the contents with the declarations in a css style string.

        ``"width: 4px; border: 1px solid black"`` sets two properties. On a
        malformed declaration the style is left empty and the error raised.
        """

        self._properties.clear()
        changed = False
        try:
            for declaration in text.split(";"):
                if not declaration.strip():
                    continue
                fields = declaration.split(":")
                if len(fields) != 2:
                    raise ValidationError(
                        f"css must be a name/value pair separated by a colon, {text!r} was given"
                    )
                changed = self.set_changed(fields[0].strip(), fields[1].strip()) or changed
        except ValidationError:
            self._properties.clear()
            raise
        return changed

    def encode(self) -> str:
        return ";".join(f"{name}:{self._properties[name]}" for name in sorted(self._properties))

    @classmethod
    def from_string(cls, text: str) -> Style:
        style = cls()
        style.parse(text)
        return style


def style_string(value: Any) -> str:
    """Convert a python value into something :meth:`Style.set` accepts.

    Numbers become pixel lengths; strings pass through unchanged.
    """

    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int):
        return f"{value}px"
    if isinstance(value, float):
        return f"{value:g}px"
    return str(value)


def merge_style_strings(first: str, second: str) -> str:
    """Merge two css style strings, ``second`` winning conflicts."""

    merged = Style.from_string(first)
    merged.merge(Style.from_string(second))
    return merged.encode()


__all__ = [
    "LENGTH_UNIT",
    "NON_LENGTH_NUMERICS",
    "Style",
    "is_numeric",
    "merge_style_strings",
    "round_float",
    "style_string",
]
