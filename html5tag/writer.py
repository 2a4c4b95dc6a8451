"""Counted writes to caller supplied sinks.

A sink is any text writer with a ``write(str)`` method: ``io.StringIO``, an
open text file, ``sys.stdout``. Every helper here returns the running total
of characters written. When the sink fails, :class:`~html5tag.errors.SinkError`
is raised carrying the exact total that reached the sink before the failure.

A sink signals failure by raising ``OSError`` or ``ValueError`` (a
``characters_written`` attribute, as set on ``BlockingIOError``, reports how
much of the failed write got through) or by returning a count shorter than
the text it was given.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from functools import partial
from typing import Protocol, Union

from .errors import SinkError

READ_CHUNK_SIZE = 8192


class Sink(Protocol):
    def write(self, text: str, /) -> int | None: ...


class Readable(Protocol):
    def read(self, size: int = -1, /) -> str: ...


Content = Union[str, Readable, Iterable[str]]


def write_string(sink: Sink, text: str, n: int = 0) -> int:
    """Write ``text`` to ``sink`` and return ``n`` plus the characters written."""

    try:
        written = sink.write(text)
    except (OSError, ValueError) as exc:
        partial_count = getattr(exc, "characters_written", 0) or 0
        raise SinkError(f"write to sink failed: {exc}", n + partial_count) from exc
    if written is None:
        return n + len(text)
    if written < len(text):
        raise SinkError("short write to sink", n + written)
    return n + written


def iter_content(content: Content) -> Iterator[str]:
    """Yield the chunks of an inner content source without reading ahead."""

    if isinstance(content, str):
        yield content
        return
    read = getattr(content, "read", None)
    if callable(read):
        yield from iter(partial(read, READ_CHUNK_SIZE), "")
        return
    for chunk in content:
        yield chunk


def write_content(sink: Sink, content: Content, n: int = 0) -> int:
    for chunk in iter_content(content):
        if chunk:
            n = write_string(sink, chunk, n)
    return n


def chain_content(*sources: Content | None) -> Iterator[str]:
    """Join several content sources into one, skipping absent ones."""

    for source in sources:
        if source is not None:
            yield from iter_content(source)


__all__ = [
    "Content",
    "Readable",
    "Sink",
    "chain_content",
    "iter_content",
    "write_content",
    "write_string",
]
