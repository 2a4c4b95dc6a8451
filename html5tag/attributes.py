"""Attribute store for an HTML tag.

:class:`Attributes` is a mutable mapping of attribute names to values. Most
names are stored as given, but a few are special:

``id``
    An empty value removes the attribute; values cannot contain spaces.
``class``
    A space separated word list. ``"+ a b"`` appends words, ``"- a"`` removes
    them, anything else replaces the list. An empty value removes it.
``style``
    Parsed through :class:`~html5tag.style.Style` and stored in its sorted,
    canonical encoding.
``data-*``
    The part after ``data-`` is a camelCase key, stored in kebab-case.

Every setter reports whether the attribute set actually changed, which lets
callers skip redrawing markup after a no-op update. An empty value renders as
a boolean attribute (``disabled``); :data:`FALSE_VALUE` removes the attribute
instead, so ``attrs.set("disabled", value_string(flag))`` toggles it.
"""

from __future__ import annotations

import html
import io
import re
from collections.abc import Iterator, Mapping, MutableMapping
from enum import Enum
from typing import Any

from .data_attr import to_data_attr, to_data_key
from .errors import ValidationError
from .style import Style, merge_style_strings
from .words import has_word, has_word_with_prefix, merge_words, remove_words, remove_words_with_prefix
from .writer import Sink, write_string

FALSE_VALUE = "**HTML5TAG-FALSE**"

DATA_PREFIX = "data-"

# id first, then pairs that read best side by side, then everything else by name
SORT_PRIORITY = {
    "id": 1,
    "class": 2,
    "style": 3,
    "name": 4,
    "value": 5,
    "src": 6,
    "alt": 7,
    "width": 8,
    "height": 9,
}

ATTRIBUTE_PAIR_RE = re.compile(r'([\w-]+)="(.*?)"', re.DOTALL)


class AttributeKind(Enum):
    """How :meth:`Attributes.set_changed` treats a given attribute name."""

    PLAIN = "plain"
    ID = "id"
    CLASS = "class"
    STYLE = "style"
    DATA = "data"


def classify(name: str) -> tuple[AttributeKind, str]:
    """Return the kind of ``name`` and, for data attributes, the key after ``data-``."""

    if name == "id":
        return AttributeKind.ID, ""
    if name == "class":
        return AttributeKind.CLASS, ""
    if name == "style":
        return AttributeKind.STYLE, ""
    if name.startswith(DATA_PREFIX):
        return AttributeKind.DATA, name[len(DATA_PREFIX):]
    return AttributeKind.PLAIN, ""


def _sort_key(name: str) -> tuple[int, int, str]:
    priority = SORT_PRIORITY.get(name)
    if priority is None:
        return (1, 0, name)
    return (0, priority, name)


def data_attribute_name(key: str) -> str:
    """Return the ``data-*`` attribute name for a camelCase key.

    Only keys that convert back to themselves are accepted, so ``aB`` (which
    would render as ``data-a-b``) is rejected along with malformed keys.
    """

    if not key:
        raise ValidationError("data attribute keys cannot be empty")
    suffix = to_data_attr(key)
    if to_data_key(suffix) != key:
        raise ValidationError(f"{key!r} does not survive conversion to a data attribute name")
    return DATA_PREFIX + suffix


def _data_name(key: str) -> str | None:
    try:
        return data_attribute_name(key)
    except ValidationError:
        return None


class Attributes(MutableMapping[str, str]):
    """HTML attribute manager.

    ``Attributes({"id": "theId", "class": "myClass"})`` copies the mapping
    as-is. Assigning an item, or calling :meth:`set`, goes through the
    validated setter.
    """

    def __init__(self, attributes: Mapping[str, str] | None = None) -> None:
        self._attrs: dict[str, str] = dict(attributes or {})

    def __getitem__(self, name: str) -> str:
        return self._attrs[name]

    def __setitem__(self, name: str, value: str) -> None:
        self.set_changed(name, value)

    def __delitem__(self, name: str) -> None:
        del self._attrs[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._attrs)

    def __len__(self) -> int:
        return len(self._attrs)

    def __str__(self) -> str:
        return self.encode()

    def __repr__(self) -> str:
        return f"Attributes({self._attrs!r})"

    def copy(self) -> Attributes:
        return Attributes(self._attrs)

    def has(self, name: str) -> bool:
        return name in self._attrs

    def _store(self, name: str, value: str) -> bool:
        previous = self._attrs.get(name)
        self._attrs[name] = value
        return previous != value

    # -- general setters -------------------------------------------------

    def set_changed(self, name: str, value: str) -> bool:
        """Set an attribute and report whether anything changed.

        Raises :class:`ValidationError` if the name or value is not valid for
        the attribute; the set is left untouched in that case.
        """

        if any(char.isspace() for char in name):
            raise ValidationError(f"attribute names cannot contain spaces: {name!r}")

        kind, data_key = classify(name)
        if value == FALSE_VALUE:
            if kind is AttributeKind.DATA:
                return self.remove_attribute(data_attribute_name(data_key))
            return self.remove_attribute(name)

        if kind is AttributeKind.STYLE:
            return self._set_style_attribute(value)
        if kind is AttributeKind.ID:
            return self.set_id_changed(value)
        if kind is AttributeKind.CLASS:
            return self.set_class_changed(value)
        if kind is AttributeKind.DATA:
            return self.set_data_changed(data_key, value)
        return self._store(name, value)

    def set(self, name: str, value: str) -> Attributes:
        """Chainable :meth:`set_changed`; validation errors propagate."""

        self.set_changed(name, value)
        return self

    def remove_attribute(self, name: str) -> bool:
        """Remove ``name`` and return True if it was present."""

        return self._attrs.pop(name, None) is not None

    def _set_style_attribute(self, value: str) -> bool:
        styles = Style.from_string(value)
        if not styles:
            return self.remove_attribute("style")
        # compare decoded properties, the stored string may order them differently
        if self.has("style") and styles == self._current_style():
            return False
        self._attrs["style"] = styles.encode()
        return True

    def _current_style(self) -> Style | None:
        try:
            return self.style_map()
        except ValidationError:
            # a malformed literal style is replaced, never compared
            return None

    # -- merging ---------------------------------------------------------

    def override(self, overrides: Mapping[str, str] | None) -> Attributes:
        """Copy ``overrides`` over these attributes, replacing on conflict."""

        if overrides:
            self._attrs.update(overrides)
        return self

    def merge(self, other: Mapping[str, str] | None) -> Attributes:
        """Merge ``other`` into these attributes.

        ``other`` wins conflicts, except that styles merge property by
        property and classes end up as the union of both lists. See
        :meth:`override` for a merge that replaces them outright.
        """

        if not other:
            return self
        merged: dict[str, str] = {}
        for name, value in other.items():
            current = self._attrs.get(name)
            if name == "style":
                value = merge_style_strings(current or "", value)
            elif name == "class" and current is not None:
                value = merge_words(current, value)
            merged[name] = value
        for name, value in merged.items():
            if name == "style" and not value:
                self.remove_attribute(name)
            else:
                self._attrs[name] = value
        return self

    def override_string(self, text: str) -> Attributes:
        """Override from an attribute string of the form ``a="b" c="d"``."""

        if text:
            self.override(parse_attribute_string(text))
        return self

    def merge_string(self, text: str) -> Attributes:
        """Merge from an attribute string of the form ``a="b" c="d"``."""

        if text:
            self.merge(parse_attribute_string(text))
        return self

    # -- encoding --------------------------------------------------------

    def sorted_keys(self) -> list[str]:
        return sorted(self._attrs, key=_sort_key)

    def iter_sorted(self) -> Iterator[tuple[str, str]]:
        """Yield name/value pairs in the same order :meth:`sorted_string` uses."""

        for name in self.sorted_keys():
            yield name, self._attrs[name]

    def write_to(self, sink: Sink, *, sort: bool = False) -> int:
        """Write the escaped attribute string to ``sink``.

        Returns the characters written. On a sink failure the raised
        :class:`SinkError` reports what was written up to that point.
        """

        names = self.sorted_keys() if sort else list(self._attrs)
        n = 0
        for index, name in enumerate(names):
            if index:
                n = write_string(sink, " ", n)
            n = write_string(sink, _encode_pair(name, self._attrs[name]), n)
        return n

    def encode(self, sort: bool = False) -> str:
        buffer = io.StringIO()
        self.write_to(buffer, sort=sort)
        return buffer.getvalue()

    def sorted_string(self) -> str:
        return self.encode(sort=True)

    # -- id --------------------------------------------------------------

    def set_id_changed(self, value: str) -> bool:
        if value == "":
            return self.remove_attribute("id")
        if any(char.isspace() for char in value):
            raise ValidationError(f"id attributes cannot contain spaces: {value!r}")
        return self._store("id", value)

    def set_id(self, value: str) -> Attributes:
        self.set_id_changed(value)
        return self

    @property
    def id(self) -> str:
        return self._attrs.get("id", "")

    # -- class and other word lists --------------------------------------

    def set_class_changed(self, value: str) -> bool:
        """Set, extend or trim the class list. See the module docstring."""

        if value == "":
            return self.remove_attribute("class")
        if value.startswith("+ "):
            return self.add_class_changed(value[2:])
        if value.startswith("- "):
            return self.remove_class(value[2:])
        return self._store("class", value)

    def set_class(self, value: str) -> Attributes:
        self.set_class_changed(value)
        return self

    @property
    def class_(self) -> str:
        return self._attrs.get("class", "")

    def _replace_words(self, name: str, words: str) -> bool:
        if words == self._attrs[name]:
            return False
        if words:
            self._attrs[name] = words
        else:
            del self._attrs[name]
        return True

    def remove_class(self, value: str) -> bool:
        """Remove the given classes. Returns True if the class list changed."""

        if not self.has("class"):
            return False
        return self._replace_words("class", remove_words(self._attrs["class"], value))

    def remove_classes_with_prefix(self, prefix: str) -> bool:
        if not self.has("class"):
            return False
        return self._replace_words("class", remove_words_with_prefix(self._attrs["class"], prefix))

    def add_values_changed(self, name: str, values: str) -> bool:
        """Append space separated values to a multi-valued attribute.

        Values already present keep their position. Useful for ``class`` as
        well as ``aria-labelledby`` and ``aria-describedby``.
        """

        if not values:
            return False
        current = self._attrs.get(name)
        if current is None:
            self._attrs[name] = values
            return True
        return self._store(name, merge_words(current, values))

    def add_values(self, name: str, values: str) -> Attributes:
        self.add_values_changed(name, values)
        return self

    def add_class_changed(self, value: str) -> bool:
        return self.add_values_changed("class", value)

    def add_class(self, value: str) -> Attributes:
        self.add_class_changed(value)
        return self

    def has_attribute_value(self, name: str, value: str) -> bool:
        return has_word(self._attrs.get(name, ""), value)

    def has_class(self, value: str) -> bool:
        return self.has_attribute_value("class", value)

    def has_class_with_prefix(self, prefix: str) -> bool:
        return has_word_with_prefix(self._attrs.get("class", ""), prefix)

    # -- data-* ----------------------------------------------------------

    def set_data_changed(self, key: str, value: str) -> bool:
        """Set a ``data-*`` attribute from its camelCase key.

        ``set_data("testCase", "x")`` renders ``data-test-case="x"``, which
        javascript reads back as ``element.dataset.testCase``.
        """

        return self._store(data_attribute_name(key), value)

    def set_data(self, key: str, value: str) -> Attributes:
        self.set_data_changed(key, value)
        return self

    def data_attribute(self, key: str) -> str:
        name = _data_name(key)
        if name is None:
            return ""
        return self._attrs.get(name, "")

    def has_data_attribute(self, key: str) -> bool:
        name = _data_name(key)
        return name is not None and name in self._attrs

    def remove_data_attribute(self, key: str) -> bool:
        name = _data_name(key)
        return name is not None and self.remove_attribute(name)

    # -- style -----------------------------------------------------------

    @property
    def style_string(self) -> str:
        return self._attrs.get("style", "")

    def style_map(self) -> Style:
        return Style.from_string(self.style_string)

    def _store_style(self, styles: Style) -> bool:
        if not styles:
            return self.remove_attribute("style")
        return self._store("style", styles.encode())

    def set_style_changed(self, name: str, value: str) -> bool:
        """Set one style property; arithmetic such as ``"* 2"`` applies in place."""

        styles = self.style_map()
        changed = styles.set_changed(name, value)
        self._store_style(styles)
        return changed

    def set_style(self, name: str, value: str) -> Attributes:
        self.set_style_changed(name, value)
        return self

    def set_styles(self, styles: Mapping[str, str]) -> Attributes:
        """Merge ``styles`` into the current style, ``styles`` winning conflicts."""

        merged = self.style_map().merge(styles)
        self._store_style(merged)
        return self

    def set_styles_to(self, text: str) -> Attributes:
        """Replace the style with the declarations in a css style string."""

        self._store_style(Style.from_string(text))
        return self

    def get_style(self, name: str) -> str:
        return self.style_map().get(name, "")

    def has_style(self, name: str) -> bool:
        return name in self.style_map()

    def remove_style(self, name: str) -> bool:
        styles = self.style_map()
        if name not in styles:
            return False
        styles.remove(name)
        self._store_style(styles)
        return True

    # -- common flags ----------------------------------------------------

    def set_disabled(self, disabled: bool) -> Attributes:
        if disabled:
            self.set("disabled", "")
        else:
            self.remove_attribute("disabled")
        return self

    def is_disabled(self) -> bool:
        return self.has("disabled")

    def set_display(self, display: str) -> Attributes:
        return self.set_style("display", display)

    def is_displayed(self) -> bool:
        """False only when the ``display`` style is exactly ``none``."""

        return self.get_style("display") != "none"


def _encode_pair(name: str, value: str) -> str:
    if value == "":
        return name
    return f'{name}="{html.escape(value, quote=True)}"'


def parse_attribute_string(text: str) -> Attributes:
    """Extract ``name="value"`` pairs from ``text``; anything else is skipped.

    ``data-*`` names may be written in their rendered kebab-case form or with
    a camelCase key, so the output of :meth:`Attributes.encode` parses back.
    """

    attributes = Attributes()
    for name, value in ATTRIBUTE_PAIR_RE.findall(text):
        value = html.unescape(value)
        kind, data_key = classify(name)
        if kind is AttributeKind.DATA and _is_kebab_key(data_key):
            attributes._store(name, value)
        else:
            attributes.set(name, value)
    return attributes


def _is_kebab_key(key: str) -> bool:
    if not key:
        return False
    try:
        to_data_key(key)
    except ValidationError:
        return False
    return True


def value_string(value: Any) -> str:
    """Convert a python value into an attribute value for :meth:`Attributes.set`.

    True becomes an empty value (a boolean attribute) and False becomes
    :data:`FALSE_VALUE`, which removes the attribute.
    """

    if isinstance(value, bool):
        return "" if value else FALSE_VALUE
    return str(value)


def attributes_or_empty(attributes: Mapping[str, str] | None) -> Attributes:
    if attributes is None:
        return Attributes()
    if isinstance(attributes, Attributes):
        return attributes
    return Attributes(attributes)


__all__ = [
    "AttributeKind",
    "Attributes",
    "DATA_PREFIX",
    "FALSE_VALUE",
    "SORT_PRIORITY",
    "attributes_or_empty",
    "classify",
    "data_attribute_name",
    "parse_attribute_string",
    "value_string",
]
