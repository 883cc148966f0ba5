"""Exception taxonomy for unitydump decoding."""

from typing import Optional


class DecodeError(RuntimeError):
    """Base class for every failure raised while decoding a dump.

    Carries the read offset, 1-based line number and the text of the line
    the cursor was on when the failure was detected.
    """

    def __init__(
        self,
        message: str,
        *,
        offset: Optional[int] = None,
        lineno: Optional[int] = None,
        line: Optional[str] = None,
    ):
        self.message = message
        self.offset = offset
        self.lineno = lineno
        self.line = line
        super().__init__(self._render())

    def _render(self) -> str:
        if self.lineno is None:
            return self.message
        return f"{self.message} (line {self.lineno}: {self.line!r})"


class EndOfInput(DecodeError):
    pass


class StructuralMismatch(DecodeError):
    pass


class LexicalParseFailure(DecodeError):
    pass


class TrailingData(DecodeError):
    pass


class DepthExceeded(DecodeError):
    pass
