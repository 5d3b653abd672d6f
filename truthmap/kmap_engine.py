"""Karnaugh map grid construction and cell editing."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Callable, Iterator, List, Mapping, Optional, Sequence, Tuple

from .config import DEFAULT_KARNAUGH, KarnaughConfig
from .errors import TruthMapError, UnsupportedVariableCountError

# (row bits, column bits) per variable count; rows take the leading variables.
AXIS_BITS: Mapping[int, Tuple[int, int]] = {2: (1, 1), 3: (1, 2), 4: (2, 2)}


class CellValue(Enum):
    ZERO = 0
    ONE = 1
    DONT_CARE = "X"

    @property
    def label(self) -> str:
        return str(self.value)

    @classmethod
    def from_label(cls, label: str) -> "CellValue":
        text = str(label).strip().upper()
        return cls.DONT_CARE if text == "X" else cls(int(text))


_NEXT_VALUE = {
    CellValue.ZERO: CellValue.ONE,
    CellValue.ONE: CellValue.DONT_CARE,
    CellValue.DONT_CARE: CellValue.ZERO,
}


def next_value(value: CellValue) -> CellValue:
    """Toggle order used by interactive editing: 0 -> 1 -> X -> 0."""
    return _NEXT_VALUE[CellValue(value)]


def gray_code(bits: int) -> List[Tuple[int, ...]]:
    """Return the reflected Gray code sequence for ``bits`` bits."""
    if bits == 1:
        return [(0,), (1,)]
    previous = gray_code(bits - 1)
    return [(0,) + code for code in previous] + [(1,) + code for code in reversed(previous)]


def map_dimensions(variable_count: int) -> Tuple[int, int]:
    """Return (rows, cols) for K-map based on variable count."""
    if variable_count not in AXIS_BITS:
        raise UnsupportedVariableCountError(variable_count)
    row_bits, col_bits = AXIS_BITS[variable_count]
    return 2**row_bits, 2**col_bits


@dataclass(frozen=True)
class KarnaughCell:
    row: int
    col: int
    value: CellValue
    minterm: int
    assignment: Mapping[str, bool] = field(compare=False, repr=False)

    @property
    def position(self) -> Tuple[int, int]:
        return self.row, self.col


@dataclass(frozen=True)
class KarnaughGrid:
    """Immutable K-map; every edit returns a new grid."""

    variable_count: int
    variables: Tuple[str, ...]
    cells: Tuple[Tuple[KarnaughCell, ...], ...]

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    @property
    def size(self) -> int:
        return self.rows * self.cols

    @property
    def row_codes(self) -> List[str]:
        """Gray-code labels for the rows, e.g. ``["00", "01", "11", "10"]``."""
        return ["".join(map(str, code)) for code in gray_code(AXIS_BITS[self.variable_count][0])]

    @property
    def col_codes(self) -> List[str]:
        return ["".join(map(str, code)) for code in gray_code(AXIS_BITS[self.variable_count][1])]

    @property
    def row_variables(self) -> Tuple[str, ...]:
        return self.variables[: AXIS_BITS[self.variable_count][0]]

    @property
    def col_variables(self) -> Tuple[str, ...]:
        return self.variables[AXIS_BITS[self.variable_count][0] :]

    def cell(self, row: int, col: int) -> KarnaughCell:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Cell ({row}, {col}) is outside the {self.rows}x{self.cols} map.")
        return self.cells[row][col]

    def iter_cells(self) -> Iterator[KarnaughCell]:
        """Yield cells in row-major order."""
        for row_cells in self.cells:
            yield from row_cells


def build_karnaugh_grid(
    variable_count: int,
    variable_names: Optional[Sequence[str]] = None,
    config: KarnaughConfig = DEFAULT_KARNAUGH,
) -> KarnaughGrid:
    """Create an all-zero K-map for 2-4 variables.

    Rows and columns follow the reflected Gray code so neighbouring cells,
    including across the edges, differ in exactly one variable. The minterm
    of a cell reads the variables in declared order, most significant first.
    """
    nrows, ncols = map_dimensions(variable_count)
    names = tuple(variable_names) if variable_names is not None else config.names_for(variable_count)
    if len(names) != variable_count:
        raise UnsupportedVariableCountError(
            variable_count,
            f"Expected {variable_count} variable names, got {len(names)}.",
        )
    if len(set(names)) != len(names):
        raise TruthMapError("Variable names must be distinct.")

    row_bits, col_bits = AXIS_BITS[variable_count]
    row_codes = gray_code(row_bits)
    col_codes = gray_code(col_bits)

    cells = []
    for r in range(nrows):
        row_cells = []
        for c in range(ncols):
            bits = row_codes[r] + col_codes[c]
            minterm = 0
            for bit in bits:
                minterm = (minterm << 1) | bit
            assignment = MappingProxyType({name: bool(bit) for name, bit in zip(names, bits)})
            row_cells.append(KarnaughCell(r, c, CellValue.ZERO, minterm, assignment))
        cells.append(tuple(row_cells))
    return KarnaughGrid(variable_count, names, tuple(cells))


def _map_values(grid: KarnaughGrid, fn: Callable[[KarnaughCell], CellValue]) -> KarnaughGrid:
    cells = tuple(
        tuple(replace(cell, value=fn(cell)) for cell in row_cells) for row_cells in grid.cells
    )
    return replace(grid, cells=cells)


def set_cell(grid: KarnaughGrid, row: int, col: int, value) -> KarnaughGrid:
    """Return a new grid with one cell set to ``value`` (0, 1 or "X")."""
    target = grid.cell(row, col)
    new_value = CellValue(value)
    return _map_values(grid, lambda cell: new_value if cell is target else cell.value)


def toggle_cell(grid: KarnaughGrid, row: int, col: int) -> KarnaughGrid:
    return set_cell(grid, row, col, next_value(grid.cell(row, col).value))


def clear_grid(grid: KarnaughGrid) -> KarnaughGrid:
    return _map_values(grid, lambda cell: CellValue.ZERO)


def complement(grid: KarnaughGrid) -> KarnaughGrid:
    """Swap 0 and 1 cells; don't-cares stay as they are."""
    swapped = {
        CellValue.ZERO: CellValue.ONE,
        CellValue.ONE: CellValue.ZERO,
        CellValue.DONT_CARE: CellValue.DONT_CARE,
    }
    return _map_values(grid, lambda cell: swapped[cell.value])


def import_from_truth_table(grid: KarnaughGrid, truth_values: Sequence[bool]) -> KarnaughGrid:
    """Set each cell to 1 where ``truth_values[minterm]`` is true, else 0."""

    def value_for(cell: KarnaughCell) -> CellValue:
        if cell.minterm < len(truth_values) and truth_values[cell.minterm]:
            return CellValue.ONE
        return CellValue.ZERO

    return _map_values(grid, value_for)


def export_to_truth_table(grid: KarnaughGrid) -> List[bool]:
    """Return output values indexed by minterm; only 1-cells are true."""
    values = [False] * (2**grid.variable_count)
    for cell in grid.iter_cells():
        if cell.value is CellValue.ONE:
            values[cell.minterm] = True
    return values


def minterms(grid: KarnaughGrid) -> List[int]:
    return sorted(cell.minterm for cell in grid.iter_cells() if cell.value is CellValue.ONE)


def maxterms(grid: KarnaughGrid) -> List[int]:
    return sorted(cell.minterm for cell in grid.iter_cells() if cell.value is CellValue.ZERO)


def dont_cares(grid: KarnaughGrid) -> List[int]:
    return sorted(cell.minterm for cell in grid.iter_cells() if cell.value is CellValue.DONT_CARE)


def cell_for_minterm(grid: KarnaughGrid, minterm: int) -> KarnaughCell:
    """Translate a minterm index to its cell."""
    n = grid.variable_count
    if not 0 <= minterm < 2**n:
        raise IndexError(f"Minterm {minterm} out of range for {n} variables.")
    bits = tuple((minterm >> (n - 1 - i)) & 1 for i in range(n))
    row_bits, col_bits = AXIS_BITS[n]
    row = gray_code(row_bits).index(bits[:row_bits])
    col = gray_code(col_bits).index(bits[row_bits:])
    return grid.cell(row, col)


__all__ = [
    "AXIS_BITS",
    "CellValue",
    "next_value",
    "gray_code",
    "map_dimensions",
    "KarnaughCell",
    "KarnaughGrid",
    "build_karnaugh_grid",
    "set_cell",
    "toggle_cell",
    "clear_grid",
    "complement",
    "import_from_truth_table",
    "export_to_truth_table",
    "minterms",
    "maxterms",
    "dont_cares",
    "cell_for_minterm",
]
