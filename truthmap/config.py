"""Default settings for the truth-table and Karnaugh-map workflows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class TruthTableConfig:
    """Defaults for a truth table.

    ``outputs`` are the expressions shown when nothing has been typed yet.
    ``min_inputs``/``max_inputs`` bound the input count (2**10 rows at most)
    and ``max_nesting`` bounds parenthesis depth while parsing.
    """

    input_count: int = 2
    outputs: Tuple[str, ...] = ("p | q", "!p & q", "p ^ q")
    min_inputs: int = 1
    max_inputs: int = 10
    max_nesting: int = 64


@dataclass(frozen=True)
class KarnaughConfig:
    """Defaults for a Karnaugh map: variable count and display names."""

    variable_count: int = 3
    variable_names: Tuple[str, ...] = ("A", "B", "C", "D")

    def names_for(self, count: int) -> Tuple[str, ...]:
        return self.variable_names[:count]


DEFAULT_TRUTH_TABLE = TruthTableConfig()
DEFAULT_KARNAUGH = KarnaughConfig()


__all__ = [
    "TruthTableConfig",
    "KarnaughConfig",
    "DEFAULT_TRUTH_TABLE",
    "DEFAULT_KARNAUGH",
]
