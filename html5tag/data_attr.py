"""Conversion between camelCase keys and kebab-case data-* attribute names.

Browsers expose ``data-test-case`` to javascript as ``dataset.testCase``. The
library accepts the camelCase form from callers and stores the kebab-case
form, so both directions are validated and names outside the subset that
converts cleanly are rejected rather than coerced.
"""

from __future__ import annotations

import string

from .errors import ValidationError

_LOWER = frozenset(string.ascii_lowercase)
_UPPER = frozenset(string.ascii_uppercase)
_WORD = frozenset(string.ascii_letters + string.digits + "_")
_KEBAB = frozenset(string.ascii_lowercase + string.digits + "-")


def to_data_attr(name: str) -> str:
    """Convert a camelCase key to the kebab-case suffix of a data-* attribute.

    >>> to_data_attr("thisIsMyTest")
    'this-is-my-test'
    """

    if name and name[0] not in _LOWER:
        raise ValidationError(f"{name!r} is not an acceptable camelCase name")

    parts: list[str] = []
    previous_upper = False
    for char in name:
        if char not in _WORD:
            raise ValidationError(f"{name!r} is not an acceptable camelCase name")
        if char in _UPPER:
            if previous_upper:
                raise ValidationError(f"{name!r} is not an acceptable camelCase name")
            parts.append("-" + char.lower())
            previous_upper = True
        else:
            parts.append(char)
            previous_upper = False
    return "".join(parts)


def to_data_key(name: str) -> str:
    """Convert a kebab-case data-* suffix back to its camelCase key.

    >>> to_data_key("this-is-my-test")
    'thisIsMyTest'
    """

    if any(char not in _KEBAB for char in name):
        raise ValidationError(f"{name!r} is not an acceptable kebab-case name")
    if not name:
        return name

    pieces = name.split("-")
    for piece in pieces:
        if len(piece) < 2:
            raise ValidationError(
                f"{name!r}: individual kebab words must be at least 2 characters long"
            )
    return pieces[0] + "".join(piece[0].upper() + piece[1:] for piece in pieces[1:])


__all__ = ["to_data_attr", "to_data_key"]
