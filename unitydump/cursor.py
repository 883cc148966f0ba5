"""Forward-only cursor over the text of one dump document."""

import re

from .errors import DecodeError, EndOfInput, StructuralMismatch

_TABS = re.compile(r"\t*")
_WHITESPACE = " \t\n\r\x0c"


class Cursor:
    """Immutable text plus a read offset that only moves forward.

    Every consuming method either advances the offset by at least one
    character or raises, so a decode over bounded input always terminates.
    """

    __slots__ = ("data", "offset")

    def __init__(self, data: str):
        self.data = data
        self.offset = 0

    def remaining(self) -> int:
        return len(self.data) - self.offset

    def is_empty(self) -> bool:
        return self.offset == len(self.data)

    # --- Lookahead ---

    def peek_line(self) -> str:
        """Text from the offset up to the next line terminator."""
        end = self.data.find("\n", self.offset)
        if end < 0:
            end = len(self.data)
        line = self.data[self.offset:end]
        cr = line.find("\r")
        return line if cr < 0 else line[:cr]

    def count_until(self, delim: str) -> int:
        """Distance to the next *delim*, or to the end of input if absent."""
        pos = self.data.find(delim, self.offset)
        if pos < 0:
            return self.remaining()
        return pos - self.offset

    def tab_count(self) -> int:
        """Number of tab characters at the offset."""
        return _TABS.match(self.data, self.offset).end() - self.offset

    # --- Consuming ---

    def skip(self, count: int) -> None:
        if self.offset + count > len(self.data):
            raise self.error(EndOfInput, "unexpected end of input")
        self.offset += count

    def read(self, length: int) -> str:
        if self.offset + length > len(self.data):
            raise self.error(EndOfInput, "unexpected end of input")
        text = self.data[self.offset:self.offset + length]
        self.offset += length
        return text

    def skip_until(self, delim: str) -> None:
        """Consume everything up to and including the next *delim*."""
        self.skip(self.count_until(delim) + 1)

    def skip_tabs(self, count: int) -> None:
        if self.tab_count() < count:
            if self.offset + count > len(self.data):
                raise self.error(EndOfInput, "unexpected end of input")
            raise self.error(StructuralMismatch, f"expected {count} tab(s)")
        self.offset += count

    def expect(self, ch: str) -> None:
        """Consume exactly *ch*."""
        if self.is_empty():
            raise self.error(EndOfInput, "unexpected end of input")
        if self.data[self.offset] != ch:
            raise self.error(StructuralMismatch, f"{ch!r} expected")
        self.offset += 1

    def skip_space(self) -> None:
        """Consume exactly one whitespace character."""
        if self.is_empty():
            raise self.error(EndOfInput, "unexpected end of input")
        if self.data[self.offset] not in _WHITESPACE:
            raise self.error(StructuralMismatch, "space expected")
        self.offset += 1

    # --- Diagnostics ---

    def error(self, cls: type, message: str) -> DecodeError:
        """Build *cls* annotated with the line the cursor is on."""
        start = self.data.rfind("\n", 0, self.offset) + 1
        end = self.data.find("\n", self.offset)
        if end < 0:
            end = len(self.data)
        line = self.data[start:end].rstrip("\r")
        lineno = self.data.count("\n", 0, start) + 1
        return cls(message, offset=self.offset, lineno=lineno, line=line)
