"""Type-tag dispatch and the decode operations shapes are built from.

A Decoder is one decode session: the scanner, the context stack, the
indent depth and the root flag. It is not shared between documents.
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from .access import SeqAccess, StructAccess
from .context import ContextStack, DecodeContext
from .errors import DecodeError, DepthExceeded, LexicalParseFailure, StructuralMismatch
from .scanner import SCALAR_PARSERS, LineScanner
from .types import DecodeOptions, Hash128, Vector3f

logger = logging.getLogger(__name__)

HASH128_LENGTH = 16


class Decoder:
    __slots__ = ("scanner", "contexts", "options", "depth", "root", "element_type")

    def __init__(self, text: str, options: Optional[DecodeOptions] = None):
        self.options = options or DecodeOptions()
        self.scanner = LineScanner(text, ContextStack(), self.options.tabular_pattern)
        self.contexts = self.scanner.contexts
        self.depth = 0
        self.root = True
        # Tag restated by the row headers of the tabular sequence in progress.
        self.element_type = ""

    # --- Primitive kinds ---

    def decode_bool(self) -> bool:
        return self.scanner.read_scalar("bool")

    def decode_i8(self) -> int:
        return self.scanner.read_scalar("i8")

    def decode_i16(self) -> int:
        return self.scanner.read_scalar("i16")

    def decode_i32(self) -> int:
        return self.scanner.read_scalar("i32")

    def decode_i64(self) -> int:
        return self.scanner.read_scalar("i64")

    def decode_u8(self) -> int:
        return self.scanner.read_scalar("u8")

    def decode_u16(self) -> int:
        return self.scanner.read_scalar("u16")

    def decode_u32(self) -> int:
        return self.scanner.read_scalar("u32")

    def decode_u64(self) -> int:
        return self.scanner.read_scalar("u64")

    def decode_f32(self) -> float:
        return self.scanner.read_scalar("f32")

    def decode_f64(self) -> float:
        return self.scanner.read_scalar("f64")

    def decode_string(self) -> str:
        return self.scanner.read_string()

    def decode_str(self) -> str:
        """Raw value text: the rest of the line, or one token on a packed row."""
        sc = self.scanner
        if self.contexts.current is DecodeContext.MULTIPLE_ELEMENT:
            return sc.read_content()
        line = sc.peek_line()
        sc.skip_line()
        return line

    def decode_identifier(self) -> str:
        return self.scanner.read_identifier()

    # --- Built-in composites ---

    def decode_vector3f(self) -> Vector3f:
        """``(x y z) (Vector3f)``: three floats embedded in the value text."""
        sc = self.scanner
        line = sc.peek_line()
        if self.contexts.current is DecodeContext.MULTIPLE_ELEMENT:
            # one "(x y z)" group of a packed row
            end = line.find(")")
            if end < 0:
                raise sc.error(StructuralMismatch, f"parenthesized vector expected in {line!r}")
            return _parse_vector3f(sc, sc.read(end + 1))
        if line.count("(") == 1 and sc.peek_type() == "Vector3f":
            # Only the tag is on this line; the components follow on the next.
            sc.skip_line()
            sc.skip_tabs(sc.tab_count())
            line = sc.peek_line()
        value = _parse_vector3f(sc, line)
        sc.skip_line()
        return value

    def decode_hash128(self) -> Hash128:
        octets = self.decode_seq(lambda seq: bytes(seq.elements(Decoder.decode_u8)), fixed_length=HASH128_LENGTH)
        return Hash128(octets)

    # --- Sequences and records ---

    def decode_seq(self, visit: Callable[[SeqAccess], Any], fixed_length: Optional[int] = None) -> Any:
        """Drive *visit* over the elements of the sequence at the cursor.

        The cursor sits on the remainder of the ``(vector)`` line. Unless
        *fixed_length* is given, the next line must be ``size <N> (int)``.
        """
        sc = self.scanner
        logger.debug("decode_seq: input=%r", sc.peek_line())
        sc.skip_line()
        if fixed_length is not None:
            count, faked = fixed_length, True
        else:
            sc.skip_tabs(sc.tab_count())
            if sc.read_identifier() != "size":
                raise sc.error(StructuralMismatch, "no size found")
            sc.skip_space()
            count, faked = sc.read_scalar("u64"), False
        with self._nested():
            access = SeqAccess(self, count, faked)
            try:
                value = visit(access)
                access.drain()
            finally:
                access.close()
        return value

    def decode_struct(self, name: str, visit: Callable[[StructAccess], Any]) -> Any:
        """Drive *visit* over the fields of the record at the cursor.

        The first record of a document is introduced by its bare type name,
        every later one by a parenthesized tag. A non-empty *name* must
        match it.
        """
        sc = self.scanner
        logger.debug("decode_struct: input=%r", sc.peek_line())
        if self.root:
            self.root = False
            sc.skip_space()
            found = sc.read_identifier()
        else:
            found = sc.peek_type()
        if name and name != found:
            raise sc.error(StructuralMismatch, f"type {name} does not match {found}")
        sc.skip_line()
        with self._nested():
            access = StructAccess(self)
            value = visit(access)
            access.drain()
        return value

    def decode_any(self) -> Any:
        """Decode whatever the document holds next, guided by the context."""
        ctx = self.contexts.current
        sc = self.scanner
        if ctx is DecodeContext.STRUCT_KEY:
            logger.debug("decode_any: key input=%r", sc.peek_line())
            return self.decode_identifier()
        if ctx is DecodeContext.INVALID:
            raise sc.error(DecodeError, "decode_any called outside of a field or element")
        if ctx is DecodeContext.MULTIPLE_ELEMENT:
            tag = self.element_type
        else:
            tag = sc.peek_type()
        logger.debug("decode_any: type=%s input=%r", tag, sc.peek_line())
        strategy = _DISPATCH.get(tag)
        if strategy is None:
            return self.decode_struct("", collect_fields)
        return strategy(self)

    @contextmanager
    def _nested(self) -> Iterator[None]:
        if self.depth >= self.options.max_depth:
            raise self.scanner.error(DepthExceeded, f"max nesting depth {self.options.max_depth} exceeded")
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1


def collect_fields(access: StructAccess) -> dict:
    fields = {}
    for name in access:
        fields[name] = access.next_value()
    return fields


def collect_elements(access: SeqAccess) -> list:
    return list(access)


def _parse_vector3f(sc: LineScanner, text: str) -> Vector3f:
    bgn = text.find("(")
    end = text.find(")", bgn + 1)
    if bgn < 0 or end < 0:
        raise sc.error(StructuralMismatch, f"parenthesized vector expected in {text!r}")
    parts = text[bgn + 1:end].split()
    if len(parts) != 3:
        raise sc.error(LexicalParseFailure, f"three components expected in {text[bgn:end + 1]!r}")
    parse = SCALAR_PARSERS["f32"]
    try:
        x, y, z = (parse(p) for p in parts)
    except ValueError:
        raise sc.error(LexicalParseFailure, f"parse {text[bgn:end + 1]!r} as Vector3f failed") from None
    return Vector3f(x, y, z)


_DISPATCH: dict[str, Callable[[Decoder], Any]] = {
    "vector": lambda de: de.decode_seq(collect_elements),
    "bool": Decoder.decode_bool,
    "SInt8": Decoder.decode_i8,
    "char": Decoder.decode_i8,
    "SInt16": Decoder.decode_i16,
    "short": Decoder.decode_i16,
    "int": Decoder.decode_i32,
    "SInt32": Decoder.decode_i32,
    "SInt64": Decoder.decode_i64,
    "UInt8": Decoder.decode_u8,
    "unsigned char": Decoder.decode_u8,
    "UInt16": Decoder.decode_u16,
    "unsigned short": Decoder.decode_u16,
    "unsigned int": Decoder.decode_u32,
    "UInt32": Decoder.decode_u32,
    "UInt64": Decoder.decode_u64,
    "float": Decoder.decode_f32,
    "double": Decoder.decode_f64,
    "string": Decoder.decode_string,
    "Vector3f": Decoder.decode_vector3f,
    "Hash128": Decoder.decode_hash128,
}
