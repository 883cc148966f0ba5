import pytest
from unitydump.context import ContextStack, DecodeContext


def test_starts_invalid():
    stack = ContextStack()
    assert stack.current is DecodeContext.INVALID
    assert len(stack) == 1


def test_entered_pushes_and_pops():
    stack = ContextStack()
    with stack.entered(DecodeContext.STRUCT_KEY):
        assert stack.current is DecodeContext.STRUCT_KEY
        with stack.entered(DecodeContext.STRUCT_VALUE):
            assert stack.current is DecodeContext.STRUCT_VALUE
        assert stack.current is DecodeContext.STRUCT_KEY
    assert stack.current is DecodeContext.INVALID


def test_entered_pops_on_error():
    stack = ContextStack()
    with pytest.raises(ValueError):
        with stack.entered(DecodeContext.SINGLE_ELEMENT):
            raise ValueError("element failed")
    assert len(stack) == 1


def test_pop_underflow():
    stack = ContextStack()
    with pytest.raises(RuntimeError, match="underflow"):
        stack.pop()
