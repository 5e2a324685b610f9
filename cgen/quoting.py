"""Quoting of words for POSIX shells."""

from __future__ import annotations

import re
from typing import Iterable

_UNSAFE = re.compile(r"[^\w@%+=:,./-]", re.ASCII)


def quote(text: str) -> str:
    """Return text quoted so a POSIX shell reads it as a single word."""
    if not text:
        return "''"
    if _UNSAFE.search(text):
        return "'" + text.replace("'", "'\"'\"'") + "'"
    return text


def quote_command(args: Iterable[str]) -> str:
    """Quote each word and join them with spaces."""
    return " ".join(quote(arg) for arg in args)