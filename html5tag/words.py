"""Helpers for space separated word lists such as the class attribute.

The stored value is always a plain string. These functions split it on runs
of whitespace, operate on the tokens and join the result with single spaces.
"""

from __future__ import annotations


def merge_words(original: str, additions: str) -> str:
    """Append the words in ``additions`` that are not already in ``original``.

    Existing words keep their position, so the order of a class list is only
    ever extended, never reshuffled.
    """

    words = original.split()
    for word in additions.split():
        if word not in words:
            words.append(word)
    return " ".join(words)


def remove_words(original: str, removals: str) -> str:
    """Return ``original`` without any of the words listed in ``removals``."""

    unwanted = set(removals.split())
    return " ".join(word for word in original.split() if word not in unwanted)


def remove_words_with_prefix(original: str, prefix: str) -> str:
    """Drop every word that starts with ``prefix``.

    CSS frameworks build families of classes from a common stem (``col-lg-6``,
    ``large-6``); this clears whichever member of the family is present.
    """

    return " ".join(word for word in original.split() if not word.startswith(prefix))


def has_word(haystack: str, needle: str) -> bool:
    return needle in haystack.split()


def has_word_with_prefix(haystack: str, prefix: str) -> bool:
    return any(word.startswith(prefix) for word in haystack.split())


__all__ = [
    "has_word",
    "has_word_with_prefix",
    "merge_words",
    "remove_words",
    "remove_words_with_prefix",
]
