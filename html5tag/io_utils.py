"""Utility helpers for diagnostics output."""

from __future__ import annotations

import sys


def warn(msg: str) -> None:
    print(msg, file=sys.stderr)
