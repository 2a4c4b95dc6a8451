"""Writing HTML tags.

The ``write_*`` functions stream a tag into a caller supplied text sink and
return the number of characters written. If the sink fails part way, the
:class:`~html5tag.errors.SinkError` they raise reports exactly how much was
written before the failure. The ``render_*`` functions build the same markup
in memory and return it as a string.

Inner content is markup and must already be escaped where needed. Unless
``no_space`` is given, it is surrounded by newlines so that tags are laid out
consistently; for inline tags this puts a visible space between the tag and
its neighbors.
"""

from __future__ import annotations

import html
import io
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .attributes import Attributes, attributes_or_empty
from .errors import SinkError
from .io_utils import warn
from .writer import Content, Sink, chain_content, write_content, write_string

if TYPE_CHECKING:  # pragma: no cover
    from .models import TagRenderRequest

VOID_TAGS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "command",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

INDENT = "  "
TEXTAREA_OPEN = "<textarea"
TEXTAREA_CLOSE = "</textarea>"


class LabelMode(Enum):
    """Where a label goes relative to its control.

    CSS frameworks differ in what they expect, and few are forgiving about it.
    """

    #: ``<label>Title</label> <input>``
    BEFORE = "before"
    #: ``<input> <label>Title</label>``
    AFTER = "after"
    #: ``<label>Title <input></label>``
    WRAP_BEFORE = "wrap_before"
    #: ``<label><input> Title</label>``
    WRAP_AFTER = "wrap_after"


def is_void_tag(tag: str) -> bool:
    return tag in VOID_TAGS


def _write_tag(
    sink: Sink,
    tag: str,
    attributes: Mapping[str, str] | None,
    content: Content | None,
    *,
    is_void: bool,
    no_space: bool,
    sort_attributes: bool,
    pretty_print: bool,
) -> int:
    n = write_string(sink, "<" + tag)
    if attributes:
        n = write_string(sink, " ", n)
        try:
            n += attributes_or_empty(attributes).write_to(sink, sort=sort_attributes)
        except SinkError as exc:
            exc.written += n
            raise
    n = write_string(sink, ">", n)

    if is_void:
        return n

    if content is not None:
        if pretty_print:
            # indentation needs the whole content, so buffer it before writing
            buffer = io.StringIO()
            if not no_space:
                buffer.write("\n")
            write_content(buffer, content)
            if not no_space:
                buffer.write("\n")
            text = buffer.getvalue()
            if not no_space:
                text = indent(text)
            n = write_string(sink, text, n)
        else:
            if not no_space:
                n = write_string(sink, "\n", n)
            n = write_content(sink, content, n)
            if not no_space:
                n = write_string(sink, "\n", n)

    return write_string(sink, "</" + tag + ">", n)


def write_tag(
    sink: Sink,
    tag: str,
    attributes: Mapping[str, str] | None = None,
    content: Content | None = None,
    *,
    is_void: bool = False,
    no_space: bool = False,
    formatted: bool = False,
) -> int:
    """Write ``<tag attrs>content</tag>`` to ``sink``.

    Args:
        sink: Text writer receiving the markup.
        tag: Tag name.
        attributes: Attributes of the tag, or None for none.
        content: Inner markup: a string, a readable object, an iterable of
            string chunks, or None for no content.
        is_void: Write only the opening tag; ``content`` is ignored.
        no_space: Do not surround the content with newlines.
        formatted: Sort the attributes and indent the content.

    Returns:
        Number of characters written.

    Raises:
        SinkError: The sink failed; ``written`` holds what got through.
    """

    return _write_tag(
        sink,
        tag,
        attributes,
        content,
        is_void=is_void,
        no_space=no_space,
        sort_attributes=formatted,
        pretty_print=formatted,
    )


def write_void_tag(sink: Sink, tag: str, attributes: Mapping[str, str] | None = None) -> int:
    return write_tag(sink, tag, attributes, is_void=True)


def write_tag_formatted(
    sink: Sink,
    tag: str,
    attributes: Mapping[str, str] | None = None,
    content: Content | None = None,
) -> int:
    """Write the tag with sorted attributes and indented content.

    Do not use this for tags whose appearance depends on the exact
    whitespace of their content.
    """

    return write_tag(sink, tag, attributes, content, formatted=True)


def write_tag_no_space(
    sink: Sink,
    tag: str,
    attributes: Mapping[str, str] | None = None,
    content: Content | None = None,
) -> int:
    """Write the tag with its content directly against the opening and closing tags."""

    return write_tag(sink, tag, attributes, content, no_space=True)


def write_tag_no_space_formatted(
    sink: Sink,
    tag: str,
    attributes: Mapping[str, str] | None = None,
    content: Content | None = None,
) -> int:
    """Like :func:`write_tag_no_space`, but with the attributes sorted."""

    return write_tag(sink, tag, attributes, content, no_space=True, formatted=True)


def write_request(sink: Sink, request: TagRenderRequest) -> int:
    options = request.options
    return _write_tag(
        sink,
        request.tag,
        request.attributes,
        request.content,
        is_void=request.void,
        no_space=options.no_space,
        sort_attributes=options.sort_attributes,
        pretty_print=options.pretty_print,
    )


def _render(write, *args, **kwargs) -> str:
    buffer = io.StringIO()
    write(buffer, *args, **kwargs)
    return buffer.getvalue()


def render_tag(tag: str, attributes: Mapping[str, str] | None = None, inner_html: str = "") -> str:
    """Render a tag with a closing tag. ``inner_html`` must already be escaped."""

    return _render(write_tag, tag, attributes, inner_html or None)


def render_void_tag(tag: str, attributes: Mapping[str, str] | None = None) -> str:
    return _render(write_void_tag, tag, attributes)


def render_tag_formatted(
    tag: str, attributes: Mapping[str, str] | None = None, inner_html: str = ""
) -> str:
    return _render(write_tag_formatted, tag, attributes, inner_html or None)


def render_tag_no_space(
    tag: str, attributes: Mapping[str, str] | None = None, inner_html: str = ""
) -> str:
    """Render an inline tag that should sit right next to its neighbors."""

    return _render(write_tag_no_space, tag, attributes, inner_html or None)


def render_tag_no_space_formatted(
    tag: str, attributes: Mapping[str, str] | None = None, inner_html: str = ""
) -> str:
    return _render(write_tag_no_space_formatted, tag, attributes, inner_html or None)


def render_request(request: TagRenderRequest) -> str:
    return _render(write_request, request)


@dataclass
class VoidTag:
    """A tag that never has content or a closing tag, such as ``<br>``."""

    tag: str
    attributes: Attributes = field(default_factory=Attributes)

    def render(self) -> str:
        return render_void_tag(self.tag, self.attributes)


def write_label(
    sink: Sink,
    label_attributes: Mapping[str, str] | None,
    label: str,
    control_html: Content | None,
    mode: LabelMode,
) -> int:
    """Write a label together with the markup of the control it describes.

    ``label`` is plain text and gets escaped; ``control_html`` is markup.
    """

    label = html.escape(label)
    if mode is LabelMode.BEFORE:
        n = write_tag_no_space(sink, "label", label_attributes, label)
        n = write_string(sink, " ", n)
        if control_html is not None:
            n = write_content(sink, control_html, n)
        return n
    if mode is LabelMode.AFTER:
        n = 0
        if control_html is not None:
            n = write_content(sink, control_html, n)
        n = write_string(sink, " ", n)
        try:
            return n + write_tag_no_space(sink, "label", label_attributes, label)
        except SinkError as exc:
            exc.written += n
            raise
    if mode is LabelMode.WRAP_BEFORE:
        return write_tag(sink, "label", label_attributes, chain_content(label + " ", control_html))
    if mode is LabelMode.WRAP_AFTER:
        return write_tag(sink, "label", label_attributes, chain_content(control_html, " " + label))
    raise ValueError(f"unknown label mode: {mode!r}")


def render_label(
    label_attributes: Mapping[str, str] | None,
    label: str,
    control_html: str,
    mode: LabelMode,
) -> str:
    return _render(write_label, label_attributes, label, control_html or None, mode)


def write_image(
    sink: Sink, src: str, alt: str, attributes: Mapping[str, str] | None = None
) -> int:
    """Write an ``img`` tag. ``attributes`` is copied, not modified."""

    image_attributes = Attributes(attributes_or_empty(attributes)).set("src", src).set("alt", alt)
    return write_void_tag(sink, "img", image_attributes)


def render_image(src: str, alt: str, attributes: Mapping[str, str] | None = None) -> str:
    return _render(write_image, src, alt, attributes)


def _indent_lines(text: str, *, continues_line: bool = False) -> str:
    lines = text.split("\n")
    start = 1 if continues_line else 0
    for index in range(start, len(lines)):
        if lines[index]:
            lines[index] = INDENT + lines[index]
    return "\n".join(lines)


def indent(text: str) -> str:
    """Indent every line of ``text`` by two spaces.

    Content of ``<textarea>`` tags is left alone, since indenting it would
    change the value of the control.
    """

    out: list[str] = []
    rest = text
    continues_line = False
    while True:
        start = rest.find(TEXTAREA_OPEN)
        if start == -1:
            out.append(_indent_lines(rest, continues_line=continues_line))
            return "".join(out)
        out.append(_indent_lines(rest[:start], continues_line=continues_line))
        rest = rest[start:]
        end = rest.find(TEXTAREA_CLOSE)
        if end == -1:
            warn("[indent] <textarea> without a closing tag; leaving the rest unindented")
            out.append(rest)
            return "".join(out)
        end += len(TEXTAREA_CLOSE)
        out.append(rest[:end])
        rest = rest[end:]
        continues_line = True


def comment(text: str) -> str:
    """Return ``text`` as an HTML comment."""

    return f"<!-- {text} -->"


__all__ = [
    "LabelMode",
    "VOID_TAGS",
    "VoidTag",
    "comment",
    "indent",
    "is_void_tag",
    "render_image",
    "render_label",
    "render_request",
    "render_tag",
    "render_tag_formatted",
    "render_tag_no_space",
    "render_tag_no_space_formatted",
    "render_void_tag",
    "write_image",
    "write_label",
    "write_request",
    "write_tag",
    "write_tag_formatted",
    "write_tag_no_space",
    "write_tag_no_space_formatted",
    "write_void_tag",
]
