from __future__ import annotations

import html
import random

# characters that are safe in an attribute value without escaping
HTML_VALUE_CHARS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ123456789-_()!"


def text_to_html(text: str) -> str:
    """Escape plain text and keep its paragraph and line breaks.

    A blank line becomes ``<p>`` and a single newline ``<br />``.
    """

    escaped = html.escape(text)
    return escaped.replace("\n\n", "<p>").replace("\n", "<br />")


def random_string(length: int, rng: random.Random | None = None) -> str:
    """Return ``length`` random characters usable as an attribute value.

    Pass a seeded ``random.Random`` for reproducible output. This is not
    suitable for secrets.
    """

    rng = rng or random.Random()
    return "".join(rng.choice(HTML_VALUE_CHARS) for _ in range(length))


__all__ = ["HTML_VALUE_CHARS", "random_string", "text_to_html"]
