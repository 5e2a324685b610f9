"""A text writer that indents lines by nesting level."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, TextIO


class IndentedWriter:
    """Writes text, prefixing each new line with the current indentation.

    Indentation is added only when a write starts at the beginning of a line;
    newlines inside a single write are not indented.
    """

    def __init__(self, stream: TextIO, indent: str = "  ") -> None:
        self.stream = stream
        self.indent_text = indent
        self.level = 0
        self._at_line_start = True

    def write_line(self, text: str) -> None:
        if self._at_line_start:
            self.stream.write(self.indent_text * self.level)
        self._at_line_start = text.endswith("\n")
        self.stream.write(text)

    @contextmanager
    def indent(self) -> Iterator["IndentedWriter"]:
        """Increase the indentation level for the duration of the block."""
        self.level += 1
        try:
            yield self
        finally:
            self.level -= 1