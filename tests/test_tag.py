import errno
import io
from typing import Callable, List

import pytest
from bs4 import BeautifulSoup

from html5tag.attributes import Attributes
from html5tag.errors import SinkError
from html5tag.tag import (
    VOID_TAGS,
    LabelMode,
    VoidTag,
    comment,
    indent,
    render_image,
    render_label,
    render_tag,
    render_tag_formatted,
    render_tag_no_space,
    render_tag_no_space_formatted,
    render_void_tag,
    write_image,
    write_label,
    write_tag,
    write_void_tag,
)


class CappedSink:
    """Accepts ``capacity`` characters, then fails with a short write."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self.chunks: List[str] = []

    def getvalue(self) -> str:
        return "".join(self.chunks)

    def write(self, text: str) -> int:
        room = self.capacity - len(self.getvalue())
        accepted = text[: max(room, 0)]
        self.chunks.append(accepted)
        return len(accepted)


class BlockingSink(CappedSink):
    """Same as CappedSink, but fails the way a non-blocking buffered stream does."""

    def write(self, text: str) -> int:
        room = self.capacity - len(self.getvalue())
        if len(text) <= room:
            self.chunks.append(text)
            return len(text)
        self.chunks.append(text[:room])
        raise BlockingIOError(errno.EAGAIN, "sink is full", room)


def test_write_tag_returns_characters_written() -> None:
    buffer = io.StringIO()
    n = write_tag(buffer, "a", {"b": "c"}, "d")
    assert buffer.getvalue() == '<a b="c">\nd\n</a>'
    assert n == len(buffer.getvalue())


@pytest.mark.parametrize(
    ("kwargs", "expected"),
    [
        ({"tag": "a", "is_void": True}, "<a>"),
        ({"tag": "a", "attributes": {"b": "c"}, "is_void": True}, '<a b="c">'),
        ({"tag": "a", "attributes": {"b": "c"}, "content": "d", "no_space": True}, '<a b="c">d</a>'),
        ({"tag": "a", "attributes": {"b": "c"}, "content": "d"}, '<a b="c">\nd\n</a>'),
        ({"tag": "a", "attributes": {"b": "c"}, "content": "d", "formatted": True}, '<a b="c">\n  d\n</a>'),
        (
            {"tag": "a", "attributes": {"b": "c"}, "content": "d", "no_space": True, "formatted": True},
            '<a b="c">d</a>',
        ),
        ({"tag": "a", "attributes": {"b": "c"}, "content": "d", "is_void": True}, '<a b="c">'),
        ({"tag": "p"}, "<p></p>"),
        ({"tag": "p", "content": ""}, "<p>\n\n</p>"),
    ],
)
def test_write_tag_layouts(kwargs: dict, expected: str) -> None:
    buffer = io.StringIO()
    n = write_tag(buffer, **kwargs)
    assert buffer.getvalue() == expected
    assert n == len(expected)


def test_content_sources() -> None:
    expected = "<div>\nabc\n</div>"
    for content in ("abc", io.StringIO("abc"), ["a", "", "bc"], (chunk for chunk in "abc")):
        buffer = io.StringIO()
        assert write_tag(buffer, "div", None, content) == len(expected)
        assert buffer.getvalue() == expected


def test_content_is_read_lazily() -> None:
    pulled: List[str] = []

    def chunks():
        for chunk in ("a", "b", "c"):
            pulled.append(chunk)
            yield chunk

    with pytest.raises(SinkError) as info:
        write_tag(CappedSink(7), "div", None, chunks())
    assert info.value.written == 7
    assert pulled == ["a", "b"]


def test_write_tag_sorts_attributes_when_formatted() -> None:
    attrs = Attributes({"z": "1", "class": "c", "id": "i"})
    assert render_tag("p", attrs) == '<p z="1" class="c" id="i"></p>'
    assert render_tag_formatted("p", attrs) == '<p id="i" class="c" z="1"></p>'


def _full_tag(sink) -> int:
    return write_tag(sink, "a", {"b": "c"}, "d")


def _formatted_tag(sink) -> int:
    return write_tag(sink, "a", {"b": "c", "e": ""}, "d\n<p>x</p>", formatted=True)


def _void_tag(sink) -> int:
    return write_void_tag(sink, "input", {"name": "n", "value": "v"})


def _label(mode: LabelMode) -> Callable[[object], int]:
    def write(sink) -> int:
        return write_label(sink, {"for": "x"}, "Title", '<input id="x">', mode)

    return write


def _image(sink) -> int:
    return write_image(sink, "a.png", "An image", {"class": "pic"})


@pytest.mark.parametrize(
    "write",
    [
        _full_tag,
        _formatted_tag,
        _void_tag,
        _label(LabelMode.BEFORE),
        _label(LabelMode.AFTER),
        _label(LabelMode.WRAP_BEFORE),
        _label(LabelMode.WRAP_AFTER),
        _image,
    ],
)
@pytest.mark.parametrize("sink_class", [CappedSink, BlockingSink])
def test_partial_failure_reports_exact_count(write, sink_class) -> None:
    buffer = io.StringIO()
    full_length = write(buffer)
    full = buffer.getvalue()
    assert full_length == len(full)

    for capacity in range(full_length):
        sink = sink_class(capacity)
        with pytest.raises(SinkError) as info:
            write(sink)
        assert info.value.written == capacity
        assert sink.getvalue() == full[:capacity]

    sink = sink_class(full_length)
    assert write(sink) == full_length
    assert sink.getvalue() == full


def test_sink_error_is_an_os_error() -> None:
    with pytest.raises(OSError):
        write_tag(CappedSink(0), "a")


def test_sink_error_from_closed_stream() -> None:
    buffer = io.StringIO()
    buffer.close()
    with pytest.raises(SinkError) as info:
        write_tag(buffer, "a")
    assert info.value.written == 0
    assert isinstance(info.value.__cause__, ValueError)


def test_void_tag() -> None:
    assert VoidTag("br", Attributes({"id": "hi"})).render() == '<br id="hi">'
    assert VoidTag("hr").render() == "<hr>"
    assert render_void_tag("img", {"src": "thisFile"}) == '<img src="thisFile">'
    assert "img" in VOID_TAGS
    assert "div" not in VOID_TAGS


@pytest.mark.parametrize(
    ("tag", "attributes", "inner_html", "expected"),
    [
        ("p", None, "", "<p></p>"),
        ("p", {"height": "10"}, "", '<p height="10"></p>'),
        ("p", None, "I am here", "<p>I am here</p>"),
        ("p", None, "<p>I am here</p>", "<p><p>I am here</p></p>"),
        ("div", {"id": "me"}, "Here I am", '<div id="me">Here I am</div>'),
    ],
)
def test_render_tag_no_space(tag, attributes, inner_html, expected) -> None:
    assert render_tag_no_space(tag, attributes, inner_html) == expected


def test_render_tag_formatted() -> None:
    assert render_tag_formatted("a", {"b": "c"}, "d") == '<a b="c">\n  d\n</a>'
    assert render_tag_formatted("a", {"b": "c"}) == '<a b="c"></a>'
    assert render_tag_no_space_formatted("a", {"b": "c"}, "d") == '<a b="c">d</a>'
    assert render_tag_no_space_formatted("a", {"b": "c"}) == '<a b="c"></a>'


def test_render_tag_formatted_nests() -> None:
    inner = render_tag_formatted("ul", None, render_tag_no_space("li", None, "one"))
    html = render_tag_formatted("div", {"class": "menu"}, inner)
    assert html == '<div class="menu">\n  <ul>\n    <li>one</li>\n  </ul>\n</div>'
    soup = BeautifulSoup(html, "html.parser")
    assert soup.select_one("div.menu > ul > li").get_text() == "one"


def test_formatted_content_keeps_textarea_value() -> None:
    html = render_tag_formatted("form", None, '<p>\n<textarea name="t">line 1\n  line 2</textarea>\n</p>')
    assert html == '<form>\n  <p>\n<textarea name="t">line 1\n  line 2</textarea>\n  </p>\n</form>'
    soup = BeautifulSoup(html, "html.parser")
    assert soup.find("textarea").string == "line 1\n  line 2"


def test_render_tag_escapes_attributes_only() -> None:
    html = render_tag("a", {"href": "/x?a=1&b=2", "title": '"quoted"'}, "<b>bold</b>")
    soup = BeautifulSoup(html, "html.parser")
    link = soup.find("a")
    assert link["href"] == "/x?a=1&b=2"
    assert link["title"] == '"quoted"'
    assert link.find("b").get_text() == "bold"


@pytest.mark.parametrize(
    ("mode", "expected"),
    [
        (LabelMode.BEFORE, "<label>Title</label> <input>"),
        (LabelMode.AFTER, "<input> <label>Title</label>"),
        (LabelMode.WRAP_BEFORE, "<label>\nTitle <input>\n</label>"),
        (LabelMode.WRAP_AFTER, "<label>\n<input> Title\n</label>"),
    ],
)
def test_render_label(mode: LabelMode, expected: str) -> None:
    assert render_label(None, "Title", "<input>", mode) == expected


def test_render_label_escapes_text_and_keeps_attributes() -> None:
    html = render_label({"for": "x"}, "Fish & Chips", '<input id="x">', LabelMode.BEFORE)
    assert html == '<label for="x">Fish &amp; Chips</label> <input id="x">'


def test_write_label_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError):
        write_label(io.StringIO(), None, "Title", "<input>", "sideways")


def test_render_image_copies_attributes() -> None:
    attrs = Attributes({"class": "pic"})
    html = render_image("http://a/b.img", "A picture", attrs)
    assert html == '<img class="pic" src="http://a/b.img" alt="A picture">'
    assert dict(attrs) == {"class": "pic"}
    assert render_image("a.png", "alt")[:4] == "<img"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("a", "  a"),
        ("\na\n", "\n  a\n"),
        ("a\nb\nc", "  a\n  b\n  c"),
        ("a\n  b\nc", "  a\n    b\n  c"),
        ('<textarea height="10">a\n  b\n    c</textarea>', '<textarea height="10">a\n  b\n    c</textarea>'),
        (
            "<div>\n<textarea>\nx\n</textarea>\n</div>",
            "  <div>\n<textarea>\nx\n</textarea>\n  </div>",
        ),
        ("<p><textarea>x</textarea></p>\n<p>y</p>", "  <p><textarea>x</textarea></p>\n  <p>y</p>"),
        (
            "<textarea>a\nb</textarea>\n<textarea>c\nd</textarea>",
            "<textarea>a\nb</textarea>\n<textarea>c\nd</textarea>",
        ),
    ],
)
def test_indent(text: str, expected: str) -> None:
    assert indent(text) == expected


def test_indent_unterminated_textarea(capsys) -> None:
    assert indent("a\n<textarea>b\nc") == "  a\n<textarea>b\nc"
    assert "[indent]" in capsys.readouterr().err


def test_comment() -> None:
    assert comment("This is a test") == "<!-- This is a test -->"
