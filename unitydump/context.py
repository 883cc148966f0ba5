"""Decode context stack consulted by the type dispatcher."""

from contextlib import contextmanager
from enum import Enum
from typing import Iterator


class DecodeContext(Enum):
    INVALID = "invalid"
    STRUCT_KEY = "struct-key"
    STRUCT_VALUE = "struct-value"
    SINGLE_ELEMENT = "single-element"
    MULTIPLE_ELEMENT = "multiple-element"


class ContextStack:
    """Ordered stack of DecodeContext tags, bottomed by INVALID.

    Use :meth:`entered` around the decode of one field or element so the
    tag is popped again even when that decode raises.
    """

    __slots__ = ("_stack",)

    def __init__(self) -> None:
        self._stack: list[DecodeContext] = [DecodeContext.INVALID]

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def current(self) -> DecodeContext:
        return self._stack[-1]

    def push(self, ctx: DecodeContext) -> None:
        self._stack.append(ctx)

    def pop(self) -> DecodeContext:
        if len(self._stack) == 1:
            raise RuntimeError("context stack underflow")
        return self._stack.pop()

    @contextmanager
    def entered(self, ctx: DecodeContext) -> Iterator[None]:
        self.push(ctx)
        try:
            yield
        finally:
            self.pop()
