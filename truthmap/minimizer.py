"""Group enumeration and SOP/POS minimization over a Karnaugh grid.

Groups are found by brute force: every power-of-two subset of the target
and don't-care cells is checked for connectivity and for forming a sub-cube.
That stays tractable because a map has at most 16 cells.
"""

from __future__ import annotations

import itertools
import logging
from collections import deque
from dataclasses import dataclass, replace
from typing import FrozenSet, Iterable, List, Sequence, Set, Tuple

from .kmap_engine import CellValue, KarnaughGrid, complement, maxterms, minterms

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Literal = Tuple[str, bool]


@dataclass(frozen=True)
class KarnaughGroup:
    """Candidate prime implicant: a set of cell positions and its literals."""

    cells: FrozenSet[Position]
    literals: Tuple[Literal, ...]
    is_essential: bool = False

    @property
    def term(self) -> str:
        """Product term, e.g. ``A & !C``; the whole map gives ``1``."""
        return " & ".join(name if value else f"!{name}" for name, value in self.literals) or "1"

    @property
    def clause(self) -> str:
        """Sum clause with every literal complemented, e.g. ``(!A | C)``."""
        if not self.literals:
            return "0"
        return "(" + " | ".join(f"!{name}" if value else name for name, value in self.literals) + ")"


@dataclass(frozen=True)
class MinimizedExpression:
    sop: str
    pos: str
    terms: Tuple[str, ...]
    minterms: Tuple[int, ...]
    maxterms: Tuple[int, ...]
    sop_groups: Tuple[KarnaughGroup, ...] = ()
    pos_groups: Tuple[KarnaughGroup, ...] = ()


def _is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def _one_step(a: int, b: int, size: int) -> bool:
    return abs(a - b) in (1, size - 1)


def are_adjacent(a: Position, b: Position, rows: int, cols: int) -> bool:
    """True when two cells are neighbours on the map, wrapping at the edges."""
    if a == b:
        return False
    if a[0] == b[0]:
        return _one_step(a[1], b[1], cols)
    if a[1] == b[1]:
        return _one_step(a[0], b[0], rows)
    return False


def is_connected(positions: Iterable[Position], rows: int, cols: int) -> bool:
    # Implied by the sub-cube check in is_valid_group, but groups are defined
    # by adjacency, so both checks stay. Sorting only fixes the start cell.
    members = sorted(positions)
    if not members:
        return False
    visited = {members[0]}
    queue = deque([members[0]])
    while queue:
        current = queue.popleft()
        for other in members:
            if other not in visited and are_adjacent(current, other, rows, cols):
                visited.add(other)
                queue.append(other)
    return len(visited) == len(members)


def group_literals(positions: Iterable[Position], grid: KarnaughGrid) -> Tuple[Literal, ...]:
    """Variables shared by every cell of the group, in declared order."""
    cells = [grid.cell(r, c) for r, c in positions]
    literals = []
    for name in grid.variables:
        seen = {cell.assignment[name] for cell in cells}
        if len(seen) == 1:
            literals.append((name, seen.pop()))
    return tuple(literals)


def group_term(positions: Iterable[Position], grid: KarnaughGrid) -> str:
    members = frozenset(positions)
    return KarnaughGroup(members, group_literals(members, grid)).term


def is_valid_group(positions: FrozenSet[Position], grid: KarnaughGrid) -> bool:
    """Power-of-two sized, connected, and exactly the cells its term describes."""
    if not _is_power_of_two(len(positions)):
        return False
    free_variables = grid.variable_count - len(group_literals(positions, grid))
    if len(positions) != 2**free_variables:
        return False
    return is_connected(positions, grid.rows, grid.cols)


def _target_positions(grid: KarnaughGrid, target: CellValue) -> List[Position]:
    return [cell.position for cell in grid.iter_cells() if cell.value is target]


def find_groups(grid: KarnaughGrid, target: CellValue = CellValue.ONE) -> List[KarnaughGroup]:
    """Enumerate every valid group holding at least one ``target`` cell.

    Don't-care cells may join any group. Larger groups come first; within a
    size, combinations follow row-major cell order.
    """
    targets = set(_target_positions(grid, target))
    if not targets:
        return []
    candidates = [
        cell.position
        for cell in grid.iter_cells()
        if cell.value is target or cell.value is CellValue.DONT_CARE
    ]

    size = 1
    while size < len(candidates):
        size *= 2
    size = min(size, grid.size)

    groups: List[KarnaughGroup] = []
    while size >= 1:
        for combination in itertools.combinations(candidates, size):
            members = frozenset(combination)
            if members.isdisjoint(targets):
                continue
            if is_valid_group(members, grid):
                groups.append(KarnaughGroup(members, group_literals(members, grid)))
        size //= 2
    logger.debug("Found %d valid groups over %d candidate cells", len(groups), len(candidates))
    return groups


def prime_implicants(groups: Sequence[KarnaughGroup]) -> List[KarnaughGroup]:
    """Keep the groups not strictly contained in another group."""
    return [g for g in groups if not any(g.cells < other.cells for other in groups)]


def essential_groups(
    groups: Sequence[KarnaughGroup], target_cells: Sequence[Position]
) -> List[KarnaughGroup]:
    """Groups that are the only cover for some still-uncovered target cell."""
    essentials: List[KarnaughGroup] = []
    covered: Set[Position] = set()
    for position in target_cells:
        if position in covered:
            continue
        containing = [g for g in groups if position in g.cells]
        if len(containing) == 1:
            essential = replace(containing[0], is_essential=True)
            essentials.append(essential)
            covered |= essential.cells
    return essentials


def select_cover(
    groups: Sequence[KarnaughGroup], target_cells: Sequence[Position]
) -> List[KarnaughGroup]:
    """Essential groups first, then greedily the group covering most leftovers.

    The greedy step is a heuristic; it does not guarantee the fewest terms.
    """
    selected = essential_groups(groups, target_cells)
    chosen = {g.cells for g in selected}
    remaining = [g for g in groups if g.cells not in chosen]
    uncovered = set(target_cells)
    for group in selected:
        uncovered -= group.cells

    while uncovered:
        best = None
        best_gain = 0
        for group in remaining:
            gain = len(group.cells & uncovered)
            if gain > best_gain:
                best, best_gain = group, gain
        if best is None:
            logger.warning("No group covers cells %s; cover is partial", sorted(uncovered))
            break
        selected.append(best)
        remaining.remove(best)
        uncovered -= best.cells
    return selected


def _cover(grid: KarnaughGrid) -> List[KarnaughGroup]:
    primes = prime_implicants(find_groups(grid, CellValue.ONE))
    return select_cover(primes, _target_positions(grid, CellValue.ONE))


def cover_groups(grid: KarnaughGrid) -> Tuple[KarnaughGroup, ...]:
    """Groups chosen for the SOP form, for drawing on the map."""
    return tuple(_cover(grid))


def minimize(grid: KarnaughGrid) -> MinimizedExpression:
    """Return minimal SOP and POS forms of the function painted on ``grid``."""
    sop_groups = _cover(grid)
    # POS is the SOP of the complement with every literal inverted.
    pos_groups = _cover(complement(grid))

    terms = tuple(group.term for group in sop_groups)
    sop = " | ".join(terms) if terms else "0"
    pos = " & ".join(group.clause for group in pos_groups) if pos_groups else "1"
    return MinimizedExpression(
        sop=sop,
        pos=pos,
        terms=terms,
        minterms=tuple(minterms(grid)),
        maxterms=tuple(maxterms(grid)),
        sop_groups=tuple(sop_groups),
        pos_groups=tuple(pos_groups),
    )


__all__ = [
    "KarnaughGroup",
    "MinimizedExpression",
    "are_adjacent",
    "is_connected",
    "group_literals",
    "group_term",
    "is_valid_group",
    "find_groups",
    "prime_implicants",
    "essential_groups",
    "select_cover",
    "cover_groups",
    "minimize",
]
