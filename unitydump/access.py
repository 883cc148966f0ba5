"""Field and element iteration for records and sequences."""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterator, Optional

from .context import DecodeContext
from .errors import DecodeError, StructuralMismatch

if TYPE_CHECKING:
    from .decoder import Decoder

logger = logging.getLogger(__name__)

ElementDecoder = Callable[["Decoder"], Any]


class StructAccess:
    """(name, value) pairs of one record, ended by a shallower line.

    Call :meth:`next_key` then :meth:`next_value` for each field; iterating
    the access yields the keys.
    """

    __slots__ = ("_de", "depth")

    def __init__(self, de: "Decoder"):
        self._de = de
        self.depth = de.depth

    def __iter__(self) -> Iterator[str]:
        while True:
            key = self.next_key()
            if key is None:
                return
            yield key

    def next_key(self) -> Optional[str]:
        sc = self._de.scanner
        tabs = sc.tab_count()
        if tabs < self.depth:
            logger.debug("end struct at depth %d", self.depth)
            return None
        sc.skip_tabs(tabs)
        with self._de.contexts.entered(DecodeContext.STRUCT_KEY):
            return self._de.decode_any()

    def next_value(self, decode: Optional[ElementDecoder] = None) -> Any:
        de = self._de
        de.scanner.expect(" ")
        logger.debug("next_value: input=%r", de.scanner.peek_line())
        with de.contexts.entered(DecodeContext.STRUCT_VALUE):
            return decode(de) if decode else de.decode_any()

    def drain(self) -> None:
        """Decode and drop any fields the visitor left unread."""
        for name in self:
            logger.debug("ignoring field %s", name)
            self.next_value()

    def error(self, cls: type, message: str) -> DecodeError:
        return self._de.scanner.error(cls, message)


class SeqState(Enum):
    NOT_STARTED = "not-started"
    SINGLE_ELEMENT = "single-element"
    MULTIPLE_ELEMENT = "multiple-element"
    DONE = "done"


class SeqAccess:
    """Elements of one sequence in one of three wire shapes.

    * per-element: ``data <value>`` lines, one element each;
    * dense tabular: values packed onto rows headed ``data (<type>) #<n>:``;
    * faked: a fixed count of ``<name> <value>`` lines with no size line.

    The shape is settled when the first element is requested.
    """

    __slots__ = ("_de", "depth", "count", "current", "faked", "state", "_pushed")

    def __init__(self, de: "Decoder", count: int, faked: bool = False):
        self._de = de
        self.depth = de.depth
        self.count = count
        self.current = 0
        self.faked = faked
        self.state = SeqState.NOT_STARTED
        self._pushed = False

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[Any]:
        return self.elements()

    def elements(self, decode: Optional[ElementDecoder] = None) -> Iterator[Any]:
        while self._advance():
            yield self._decode_next(decode)

    def next_element(self, decode: Optional[ElementDecoder] = None) -> Any:
        """Decode the next element, or return None once all are read.

        Use :meth:`elements` when an element may itself decode to None.
        """
        if not self._advance():
            return None
        return self._decode_next(decode)

    def drain(self) -> None:
        for _ in self:
            pass

    def close(self) -> None:
        """Pop the element context if it is still pushed."""
        if self._pushed:
            self._pushed = False
            self._de.contexts.pop()

    def _advance(self) -> bool:
        """Settle the wire shape, and report whether an element is left."""
        if self.state is SeqState.NOT_STARTED:
            self._start()
        if self.state is SeqState.DONE:
            return False
        if self.current == self.count:
            logger.debug("end seq at %d", self.current)
            self._finish()
            return False
        return True

    def _decode_next(self, decode: Optional[ElementDecoder]) -> Any:
        de = self._de
        sc = de.scanner
        if self.state is SeqState.MULTIPLE_ELEMENT:
            if self.current % de.options.columns_per_row == 0:
                sc.skip_row_header()
            sc.skip_space()
        else:
            sc.skip_tabs(self.depth)
            if sc.read_identifier() != "data" and not self.faked:
                raise sc.error(StructuralMismatch, "no data keyword found in seq")
            sc.skip_space()
        self.current += 1
        logger.debug("next_element: input=%r", sc.peek_line())
        return decode(de) if decode else de.decode_any()

    def _start(self) -> None:
        de = self._de
        sc = de.scanner
        if self.count == 0:
            self.state = SeqState.DONE
            return
        tag = None if self.faked else sc.row_header_type()
        if tag is not None and self._tabular_allowed(tag):
            de.element_type = tag
            self.state = SeqState.MULTIPLE_ELEMENT
            de.contexts.push(DecodeContext.MULTIPLE_ELEMENT)
        else:
            self.state = SeqState.SINGLE_ELEMENT
            de.contexts.push(DecodeContext.SINGLE_ELEMENT)
        self._pushed = True

    def _finish(self) -> None:
        tabular = self.state is SeqState.MULTIPLE_ELEMENT
        self.state = SeqState.DONE
        self.close()
        if tabular:
            # rest of the last packed row
            self._de.scanner.skip_until("\n")

    def _tabular_allowed(self, tag: str) -> bool:
        tags = self._de.options.tabular_tags
        return tags is None or tag in tags
