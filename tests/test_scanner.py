import math

import pytest
from unitydump.context import ContextStack, DecodeContext
from unitydump.errors import EndOfInput, LexicalParseFailure, StructuralMismatch
from unitydump.scanner import LineScanner
from unitydump.types import DEFAULT_TABULAR_PATTERN


def scanner(text):
    return LineScanner(text, ContextStack(), DEFAULT_TABULAR_PATTERN)


def scalar(text, kind):
    sc = scanner(text)
    return sc.read_scalar(kind)


# --- Tokens ---

def test_read_identifier_with_brackets():
    sc = scanner("bytes[3] 12 (UInt8)\n")
    assert sc.read_identifier() == "bytes[3]"
    assert sc.peek_line() == " 12 (UInt8)"


def test_read_identifier_empty():
    with pytest.raises(StructuralMismatch, match="identifier not found"):
        scanner(" name\n").read_identifier()


def test_read_content():
    sc = scanner("0.5 (float)\n")
    assert sc.read_content() == "0.5"


def test_read_content_unterminated():
    with pytest.raises(EndOfInput):
        scanner("0.5").read_content()


def test_peek_type_takes_last_group():
    assert scanner("(1 2 3) (Vector3f)\n").peek_type() == "Vector3f"
    assert scanner("data (UInt8) #0: 1 2\n").peek_type() == "UInt8"
    assert scanner(" (unsigned int)\n").peek_type() == "unsigned int"


def test_peek_type_missing():
    with pytest.raises(StructuralMismatch, match="type tag not found"):
        scanner("0.5\n").peek_type()


def test_skip_banner():
    sc = scanner("External References\r\n\r\n\r\nID: 1")
    sc.skip_banner()
    assert sc.peek_line() == "ID: 1"


def test_skip_banner_missing():
    with pytest.raises(StructuralMismatch, match="banner"):
        scanner("a\nb\n\nc").skip_banner()


def test_row_header_detection():
    assert scanner("\t\tdata (UInt8) #0: 1 2\n").row_header_type() == "UInt8"
    assert scanner("\t\tdata  (NavMeshTileData)\n").row_header_type() is None
    assert scanner("\t\tdata 1 (int)\n").row_header_type() is None


def test_row_header_type_comes_from_header():
    assert scanner("\t\tdata (Vector3f) #0: (1 2 3) (4 5 6)\n").row_header_type() == "Vector3f"
    assert scanner("\t\tdata (unsigned char) #0: 1\n").row_header_type() == "unsigned char"
    assert scanner("\t\tdata 1 (int)\n").row_header_type() is None


# --- Scalars ---

def test_integers():
    assert scalar("42 (int)\n", "i32") == 42
    assert scalar("+5 (int)\n", "i32") == 5
    assert scalar("-9223372036854775808 (SInt64)\n", "i64") == -(2 ** 63)
    assert scalar("255 (UInt8)\n", "u8") == 255


@pytest.mark.parametrize("token,kind", [
    ("256", "u8"),
    ("-1", "u32"),
    ("1_000", "i32"),
    ("1.0", "i32"),
    ("", "i32"),
    ("2147483648", "i32"),
])
def test_integer_rejects(token, kind):
    with pytest.raises(LexicalParseFailure, match="parse"):
        scalar(f"{token} (x)\n", kind)


def test_float_is_single_precision():
    value = scalar("0.1 (float)\n", "f32")
    assert value != 0.1
    assert value == pytest.approx(0.1)
    assert scalar("0.5 (float)\n", "f32") == 0.5


def test_float_overflow_is_infinite():
    assert scalar("1e39 (float)\n", "f32") == math.inf
    assert scalar("-1e39 (float)\n", "f32") == -math.inf


def test_double_keeps_precision():
    assert scalar("0.1 (double)\n", "f64") == 0.1


def test_float_special_values():
    assert math.isnan(scalar("NaN (float)\n", "f32"))
    assert scalar("-inf (float)\n", "f32") == -math.inf


def test_float_rejects_garbage():
    with pytest.raises(LexicalParseFailure):
        scalar("1.2.3 (float)\n", "f32")


def test_bool():
    assert scalar("true (bool)\n", "bool") is True
    assert scalar("0 (bool)\n", "bool") is False
    with pytest.raises(LexicalParseFailure):
        scalar("yes (bool)\n", "bool")


def test_scalar_consumes_line():
    sc = scanner("7 (int)\nnext\n")
    sc.read_scalar("i32")
    assert sc.peek_line() == "next"


def test_scalar_on_packed_row_keeps_line():
    sc = scanner("1 2 3\n")
    with sc.contexts.entered(DecodeContext.MULTIPLE_ELEMENT):
        assert sc.read_scalar("i32") == 1
    assert sc.peek_line() == " 2 3"


# --- Strings ---

def test_string_strips_quotes():
    sc = scanner('"NavMesh" (string)\n')
    assert sc.read_string() == "NavMesh"
    assert sc.is_empty()


def test_string_with_spaces():
    assert scanner('"Nav Mesh 2" (string)\n').read_string() == "Nav Mesh 2"


def test_empty_string():
    assert scanner('"" (string)\n').read_string() == ""


def test_string_keeps_utf8():
    assert scanner('"Navigación" (string)\n').read_string() == "Navigación"


def test_unquoted_string():
    with pytest.raises(LexicalParseFailure, match="quoted string"):
        scanner("NavMesh (string)\n").read_string()
