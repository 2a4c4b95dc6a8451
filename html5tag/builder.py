"""Fluent construction of a single tag.

    str(TagBuilder().tag("div").class_("box").inner_text("a < b"))

renders ``<div class="box">\\na &lt; b\\n</div>``.
"""

from __future__ import annotations

import html

from .attributes import Attributes
from .tag import VOID_TAGS, render_tag, render_void_tag


class TagBuilder:
    def __init__(self) -> None:
        self._tag = ""
        self._attributes = Attributes()
        self._inner_html = ""
        self._is_void = False

    def tag(self, tag: str) -> TagBuilder:
        """Set the tag name; known void tags render without a closing tag."""

        self._tag = tag
        self._is_void = tag in VOID_TAGS
        return self

    def set(self, name: str, value: str) -> TagBuilder:
        self._attributes.set(name, value)
        return self

    def id(self, value: str) -> TagBuilder:
        self._attributes.set_id(value)
        return self

    def class_(self, value: str) -> TagBuilder:
        """Set the class list, with the ``+ ``/``- `` forms of :meth:`Attributes.set_class`."""

        self._attributes.set_class(value)
        return self

    def link(self, href: str) -> TagBuilder:
        """Turn the tag into an anchor pointing at ``href``."""

        self._tag = "a"
        self._is_void = False
        self._attributes.set("href", href)
        return self

    def void(self) -> TagBuilder:
        self._is_void = True
        return self

    def inner_html(self, markup: str) -> TagBuilder:
        self._inner_html = markup
        return self

    def inner_text(self, text: str) -> TagBuilder:
        self._inner_html = html.escape(text)
        return self

    def render(self) -> str:
        if not self._tag:
            raise ValueError("TagBuilder needs a tag name before rendering")
        if self._is_void:
            return render_void_tag(self._tag, self._attributes)
        return render_tag(self._tag, self._attributes, self._inner_html)

    def __str__(self) -> str:
        return self.render()


__all__ = ["TagBuilder"]
