import re
from dataclasses import dataclass, field
from typing import Optional

# Decoded values: bool, int, float, str, list, dict, Vector3f, Hash128.
# Records without a caller shape come back as plain dicts.

DEFAULT_TABULAR_PATTERN = r"data \(([0-9a-zA-Z ]+)\) #[0-9]+:"


@dataclass(frozen=True)
class Vector3f:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Hash128:
    bytes: bytes = b"\x00" * 16

    def hex(self) -> str:
        return self.bytes.hex()


@dataclass
class DecodeOptions:
    columns_per_row: int = 25
    trailing_lines: int = 2
    max_depth: int = 64
    tabular_pattern: str = DEFAULT_TABULAR_PATTERN
    # None lets any element tag use the packed row layout.
    tabular_tags: Optional[frozenset] = field(default=None)

    def __post_init__(self):
        if self.columns_per_row < 1:
            raise ValueError(f"columns_per_row must be positive, got {self.columns_per_row}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if self.trailing_lines < 0:
            raise ValueError(f"trailing_lines must not be negative, got {self.trailing_lines}")
        # group 1 names the element tag of a packed row
        if re.compile(self.tabular_pattern).groups < 1:
            raise ValueError("tabular_pattern needs a group capturing the element tag")
        if self.tabular_tags is not None and not isinstance(self.tabular_tags, frozenset):
            self.tabular_tags = frozenset(self.tabular_tags)

    @classmethod
    def coerce(cls, options) -> "DecodeOptions":
        """Accept None, a DecodeOptions, or a dict with the same keys."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, dict):
            known = {k: v for k, v in options.items() if k in cls.__dataclass_fields__}
            unknown = sorted(set(options) - set(known))
            if unknown:
                raise TypeError(f"unknown decode options: {', '.join(unknown)}")
            return cls(**known)
        raise TypeError(f"options must be DecodeOptions or dict, not {type(options).__name__}")
