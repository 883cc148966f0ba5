from .document import decode, decode_file
from .errors import (
    DecodeError,
    DepthExceeded,
    EndOfInput,
    LexicalParseFailure,
    StructuralMismatch,
    TrailingData,
)
from .shapes import (
    ANY,
    BOOL,
    F32,
    F64,
    HASH128,
    I8,
    I16,
    I32,
    I64,
    STR,
    STRING,
    U8,
    U16,
    U32,
    U64,
    VECTOR3F,
    Record,
    Scalar,
    Seq,
    Shape,
)
from .types import DecodeOptions, Hash128, Vector3f

__all__ = [
    "decode", "decode_file", "DecodeOptions", "Vector3f", "Hash128",
    "Shape", "Scalar", "Seq", "Record",
    "BOOL", "I8", "I16", "I32", "I64", "U8", "U16", "U32", "U64", "F32", "F64",
    "STRING", "STR", "VECTOR3F", "HASH128", "ANY",
    "DecodeError", "EndOfInput", "StructuralMismatch", "LexicalParseFailure",
    "TrailingData", "DepthExceeded",
]
