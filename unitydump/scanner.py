"""Line-level token extraction and scalar lexing on top of Cursor."""

import math
import re
import struct
from typing import Any, Callable, Optional

from .context import ContextStack, DecodeContext
from .cursor import Cursor
from .errors import EndOfInput, LexicalParseFailure, StructuralMismatch

_IDENTIFIER = re.compile(r"[A-Za-z0-9_\[\]]*")
_CONTENT = re.compile(r"[^ \r\n]*")
_BANNER = re.compile(r"\n\r*\n\r*\n")
_INT = re.compile(r"[+-]?[0-9]+")
_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def _int_parser(bits: int, signed: bool) -> Callable[[str], int]:
    lo, hi = (-(1 << (bits - 1)), (1 << (bits - 1)) - 1) if signed else (0, (1 << bits) - 1)

    def parse(token: str) -> int:
        if not _INT.fullmatch(token):
            raise ValueError("not an integer")
        value = int(token)
        if not lo <= value <= hi:
            raise ValueError("out of range")
        return value

    return parse


def _parse_f64(token: str) -> float:
    if not _FLOAT.fullmatch(token):
        raise ValueError("not a float")
    return float(token)


def _parse_f32(token: str) -> float:
    value = _parse_f64(token)
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _parse_bool(token: str) -> bool:
    if token in ("true", "1"):
        return True
    if token in ("false", "0"):
        return False
    raise ValueError("not a boolean")


SCALAR_PARSERS: dict[str, Callable[[str], Any]] = {
    "bool": _parse_bool,
    "i8": _int_parser(8, True),
    "i16": _int_parser(16, True),
    "i32": _int_parser(32, True),
    "i64": _int_parser(64, True),
    "u8": _int_parser(8, False),
    "u16": _int_parser(16, False),
    "u32": _int_parser(32, False),
    "u64": _int_parser(64, False),
    "f32": _parse_f32,
    "f64": _parse_f64,
}


class LineScanner(Cursor):
    """Cursor that knows the dump's line grammar.

    Whether a scalar read also consumes the rest of its line depends on the
    active decode context: values packed onto a tabular row share one line.
    """

    __slots__ = ("contexts", "_row_header")

    def __init__(self, data: str, contexts: ContextStack, row_header: str):
        super().__init__(data)
        self.contexts = contexts
        self._row_header = re.compile(row_header)

    def skip_line(self) -> None:
        if self.contexts.current is DecodeContext.MULTIPLE_ELEMENT:
            return
        self.skip_until("\n")

    def skip_banner(self) -> None:
        m = _BANNER.search(self.data, self.offset)
        if m is None:
            raise self.error(StructuralMismatch, "file banner not found")
        self.offset = m.end()

    def read_identifier(self) -> str:
        end = _IDENTIFIER.match(self.data, self.offset).end()
        if end == self.offset:
            raise self.error(StructuralMismatch, "identifier not found")
        return self.read(end - self.offset)

    def read_content(self) -> str:
        end = _CONTENT.match(self.data, self.offset).end()
        if end == len(self.data):
            raise self.error(EndOfInput, "unterminated token")
        return self.read(end - self.offset)

    def read_scalar(self, kind: str) -> Any:
        parse = SCALAR_PARSERS[kind]
        token = self.read_content()
        try:
            value = parse(token)
        except ValueError:
            raise self.error(LexicalParseFailure, f"parse {token!r} as {kind} failed") from None
        self.skip_line()
        return value

    def read_string(self) -> str:
        if self.contexts.current is DecodeContext.MULTIPLE_ELEMENT:
            token = self.read_content()
        else:
            line = self.peek_line()
            end = line.rfind('"')
            if not line.startswith('"') or end <= 0:
                raise self.error(LexicalParseFailure, "quoted string expected")
            token = self.read(end + 1)
        if len(token) < 2 or token[0] != '"' or token[-1] != '"':
            raise self.error(LexicalParseFailure, f"parse {token!r} as string failed")
        self.skip_line()
        return token[1:-1]

    def peek_type(self) -> str:
        """Text of the last parenthesized group on the current line."""
        line = self.peek_line()
        bgn = line.rfind("(")
        end = line.find(")", bgn + 1)
        if bgn < 0 or end < 0:
            raise self.error(StructuralMismatch, "type tag not found")
        return line[bgn + 1:end]

    def row_header_type(self) -> Optional[str]:
        """Element tag named by the row header on this line, if there is one."""
        m = self._row_header.search(self.peek_line())
        return m.group(1) if m else None

    def skip_row_header(self) -> None:
        """Consume ``data (<type>) #<n>:``, first finishing the previous row."""
        if not self.peek_line().strip():
            self.skip_until("\n")
        m = self._row_header.search(self.peek_line())
        if m is None:
            raise self.error(StructuralMismatch, "row header expected")
        self.offset += m.end()
