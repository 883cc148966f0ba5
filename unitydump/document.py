"""Top-level decode API for text dumps."""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from .decoder import Decoder, collect_fields
from .errors import LexicalParseFailure, TrailingData
from .shapes import Shape
from .types import DecodeOptions

logger = logging.getLogger(__name__)


def decode(text: Union[str, bytes], shape: Optional[Shape] = None, options: Any = None) -> Any:
    """Decode one dump document.

    Args:
        text: The whole document, as str or UTF-8 bytes.
        shape: Root record shape (a ``Record``). When omitted the root is
            decoded generically into a dict.
        options: A DecodeOptions, or a dict with the same keys.

    Returns:
        Whatever the root shape builds.

    Raises:
        DecodeError: on the first malformed field. Nothing partial is
            returned.
    """
    opts = DecodeOptions.coerce(options)
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise LexicalParseFailure(f"input is not valid UTF-8: {exc.reason} at byte {exc.start}") from None

    de = Decoder(text, opts)
    sc = de.scanner
    sc.skip_banner()
    # "ID: <n> (ClassID: <n>) " precedes the root type name
    sc.skip_until(")")
    if shape is None:
        value = de.decode_struct("", collect_fields)
    else:
        value = shape.decode(de)

    for _ in range(opts.trailing_lines):
        sc.skip_line()
    if not sc.is_empty():
        raise sc.error(TrailingData, "trailing data after root record")
    logger.debug("decoded %d characters", len(text))
    return value


def decode_file(path: Union[str, Path], shape: Optional[Shape] = None, options: Any = None) -> Any:
    """Read *path* and decode it with :func:`decode`."""
    return decode(Path(path).read_bytes(), shape, options)
