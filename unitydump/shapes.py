"""Target shapes: how a caller tells the decoder what to build.

A shape is declared once per target type and drives the decoder's
capability set. Records list their fields explicitly::

    Setting = Record("NavMeshBuildSettings", {
        "agentRadius": F32,
        "tileSize": I32,
    }, factory=NavMeshBuildSettings)

Document fields a record does not list are decoded generically and
dropped.
"""

import logging
from typing import Any, Callable, Optional

from .access import SeqAccess, StructAccess
from .decoder import Decoder
from .errors import StructuralMismatch

logger = logging.getLogger(__name__)


class Shape:
    __slots__ = ()

    def decode(self, de: Decoder) -> Any:
        raise NotImplementedError


class Scalar(Shape):
    __slots__ = ("kind", "_decode")

    def __init__(self, kind: str):
        if kind not in _SCALAR_DECODERS:
            raise ValueError(f"unknown scalar kind: {kind}")
        self.kind = kind
        self._decode = _SCALAR_DECODERS[kind]

    def __repr__(self) -> str:
        return f"Scalar({self.kind!r})"

    def decode(self, de: Decoder) -> Any:
        return self._decode(de)


class Seq(Shape):
    """A ``(vector)`` field; *factory* receives the list of elements."""

    __slots__ = ("element", "factory")

    def __init__(self, element: Shape, factory: Callable[[list], Any] = list):
        self.element = element
        self.factory = factory

    def __repr__(self) -> str:
        return f"Seq({self.element!r})"

    def decode(self, de: Decoder) -> Any:
        return de.decode_seq(self._visit)

    def _visit(self, seq: SeqAccess) -> Any:
        return self.factory(list(seq.elements(self.element.decode)))


class Record(Shape):
    """A named record with the fields in *fields*.

    *name* is checked against the type the document declares; pass "" to
    accept any. Fields missing from the document take their value from
    *defaults* or fail.
    """

    __slots__ = ("name", "fields", "factory", "defaults")

    def __init__(
        self,
        name: str,
        fields: dict[str, Shape],
        factory: Callable[..., Any] = dict,
        defaults: Optional[dict[str, Any]] = None,
    ):
        self.name = name
        self.fields = fields
        self.factory = factory
        self.defaults = defaults or {}

    def __repr__(self) -> str:
        return f"Record({self.name!r})"

    def decode(self, de: Decoder) -> Any:
        return de.decode_struct(self.name, self._visit)

    def _visit(self, access: StructAccess) -> Any:
        values: dict[str, Any] = {}
        for key in access:
            shape = self.fields.get(key)
            if shape is None:
                logger.debug("%s: ignoring field %s", self.name or "record", key)
                access.next_value()
                continue
            if key in values:
                raise access.error(StructuralMismatch, f"duplicate field {key}")
            values[key] = access.next_value(shape.decode)
        for key in self.fields:
            if key not in values:
                if key not in self.defaults:
                    raise access.error(StructuralMismatch, f"missing field {key} in {self.name or 'record'}")
                values[key] = self.defaults[key]
        return self.factory(**values)


class _Builtin(Shape):
    __slots__ = ("label", "_decode")

    def __init__(self, label: str, decode: Callable[[Decoder], Any]):
        self.label = label
        self._decode = decode

    def __repr__(self) -> str:
        return self.label

    def decode(self, de: Decoder) -> Any:
        return self._decode(de)


_SCALAR_DECODERS: dict[str, Callable[[Decoder], Any]] = {
    "bool": Decoder.decode_bool,
    "i8": Decoder.decode_i8,
    "i16": Decoder.decode_i16,
    "i32": Decoder.decode_i32,
    "i64": Decoder.decode_i64,
    "u8": Decoder.decode_u8,
    "u16": Decoder.decode_u16,
    "u32": Decoder.decode_u32,
    "u64": Decoder.decode_u64,
    "f32": Decoder.decode_f32,
    "f64": Decoder.decode_f64,
    "string": Decoder.decode_string,
    "str": Decoder.decode_str,
}

BOOL = Scalar("bool")
I8 = Scalar("i8")
I16 = Scalar("i16")
I32 = Scalar("i32")
I64 = Scalar("i64")
U8 = Scalar("u8")
U16 = Scalar("u16")
U32 = Scalar("u32")
U64 = Scalar("u64")
F32 = Scalar("f32")
F64 = Scalar("f64")
STRING = Scalar("string")
STR = Scalar("str")

VECTOR3F = _Builtin("VECTOR3F", Decoder.decode_vector3f)
HASH128 = _Builtin("HASH128", Decoder.decode_hash128)
ANY = _Builtin("ANY", Decoder.decode_any)
