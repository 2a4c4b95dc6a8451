"""Exceptions raised by html5tag."""

from __future__ import annotations


class TagError(Exception):
    """Base class for html5tag errors."""


class ValidationError(TagError, ValueError):
    """An attribute name, style declaration or data key was not acceptable.

    The object being modified is left in a consistent state when this is raised.
    """


class SinkError(TagError, OSError):
    """The output sink rejected or truncated a write.

    ``written`` is the exact number of characters that reached the sink before
    the failure, counted from the start of the call that raised.
    """

    def __init__(self, message: str, written: int = 0) -> None:
        super().__init__(message)
        self.written = written

    def __str__(self) -> str:
        return f"{self.args[0]} ({self.written} written)"


__all__ = ["SinkError", "TagError", "ValidationError"]
