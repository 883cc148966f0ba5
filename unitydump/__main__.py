"""CLI: python -m unitydump [-v] <dump.txt>"""

import dataclasses
import json
import logging
import sys
from pathlib import Path

from .document import decode
from .errors import DecodeError
from .types import Hash128, Vector3f


def _jsonable(value):
    if isinstance(value, Hash128):
        return value.hex()
    if isinstance(value, Vector3f):
        return dataclasses.asdict(value)
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    verbose = "-v" in args
    if verbose:
        args.remove("-v")
    if len(args) != 1:
        print("Usage: python -m unitydump [-v] <dump.txt>", file=sys.stderr)
        sys.exit(1)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )

    dump_path = Path(args[0])
    try:
        data = decode(dump_path.read_bytes())
    except DecodeError as exc:
        print(f"{dump_path}: {exc}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(data, indent=2, default=_jsonable))


if __name__ == "__main__":
    main()
