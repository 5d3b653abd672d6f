"""Truth-table generation for auto-named inputs and expression outputs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import DEFAULT_TRUTH_TABLE, TruthTableConfig
from .errors import MalformedExpressionError, TruthMapError
from .logic import evaluate_postfix, parse_expression

logger = logging.getLogger(__name__)

LETTERS = "pqrstuvwxyz"
PRIME = "'"


def name_for_index(index: int) -> str:
    """Return the input name at ``index``: p..z, then p'..z', p''.. and so on."""
    if index < 0:
        raise ValueError("Input index must be non-negative.")
    laps, position = divmod(index, len(LETTERS))
    return LETTERS[position] + PRIME * laps


def index_for_name(name: str) -> int:
    """Inverse of :func:`name_for_index`."""
    base = name.rstrip(PRIME)
    laps = len(name) - len(base)
    if len(base) != 1 or base not in LETTERS:
        raise MalformedExpressionError(f"Unknown variable '{name}'.")
    return LETTERS.index(base) + laps * len(LETTERS)


def input_names(count: int) -> List[str]:
    return [name_for_index(i) for i in range(count)]


def truth_value(row: int, block_length: int) -> bool:
    return (row // block_length) % 2 == 1


def input_values(position: int, count: int) -> List[bool]:
    """Values of input ``position`` over all rows; input 0 is the most significant bit."""
    block_length = 2 ** (count - position - 1)
    return [truth_value(row, block_length) for row in range(2**count)]


@dataclass(frozen=True)
class TruthTableColumn:
    """One column of a truth table; ``error`` is set when an output failed."""

    kind: str
    name: str
    values: Tuple[bool, ...]
    error: Optional[str] = None


def evaluate_column(
    expression: str,
    input_count: int,
    max_depth: int = DEFAULT_TRUTH_TABLE.max_nesting,
) -> List[bool]:
    """Evaluate ``expression`` on every row of an ``input_count`` table."""
    postfix = parse_expression(expression, max_depth)
    positions: Dict[str, int] = {}

    def position_of(name: str) -> int:
        if name not in positions:
            position = index_for_name(name)
            if position >= input_count:
                raise MalformedExpressionError(
                    f"Variable '{name}' is not one of the {input_count} inputs."
                )
            positions[name] = position
        return positions[name]

    values = []
    for row in range(2**input_count):

        def resolve(name: str, row: int = row) -> bool:
            return truth_value(row, 2 ** (input_count - position_of(name) - 1))

        values.append(evaluate_postfix(postfix, resolve))
    return values


def evaluate_truth_table(
    input_count: int,
    expressions: Iterable[str],
    config: TruthTableConfig = DEFAULT_TRUTH_TABLE,
) -> List[TruthTableColumn]:
    """Return input columns followed by one output column per expression.

    A broken expression never aborts the table: its column is all-false and
    carries the error message.
    """
    if not config.min_inputs <= input_count <= config.max_inputs:
        raise ValueError(
            f"Input count must be between {config.min_inputs} and {config.max_inputs}."
        )

    columns = [
        TruthTableColumn("input", name_for_index(i), tuple(input_values(i, input_count)))
        for i in range(input_count)
    ]
    for expression in expressions:
        try:
            values = tuple(evaluate_column(expression, input_count, config.max_nesting))
            error = None
        except TruthMapError as exc:
            logger.warning("Output %r replaced by an all-false column: %s", expression, exc)
            values = (False,) * (2**input_count)
            error = str(exc)
        columns.append(TruthTableColumn("output", expression, values, error))
    return columns


# ------------------------------- Table state -------------------------------


@dataclass(frozen=True)
class TruthTableState:
    """Input count and output expressions currently being edited."""

    input_count: int
    outputs: Tuple[str, ...]

    @property
    def row_count(self) -> int:
        return 2**self.input_count


def initial_state(config: TruthTableConfig = DEFAULT_TRUTH_TABLE) -> TruthTableState:
    return TruthTableState(config.input_count, tuple(config.outputs))


def add_input(
    state: TruthTableState, config: TruthTableConfig = DEFAULT_TRUTH_TABLE
) -> Tuple[TruthTableState, bool]:
    """Return the state with one more input, and whether anything changed."""
    if state.input_count >= config.max_inputs:
        return state, False
    return replace(state, input_count=state.input_count + 1), True


def remove_input(
    state: TruthTableState, config: TruthTableConfig = DEFAULT_TRUTH_TABLE
) -> Tuple[TruthTableState, bool]:
    if state.input_count <= config.min_inputs:
        return state, False
    return replace(state, input_count=state.input_count - 1), True


def set_input_count(
    state: TruthTableState, count: int, config: TruthTableConfig = DEFAULT_TRUTH_TABLE
) -> TruthTableState:
    count = max(config.min_inputs, min(count, config.max_inputs))
    return replace(state, input_count=count)


def add_output(state: TruthTableState, expression: str = "") -> TruthTableState:
    return replace(state, outputs=state.outputs + (expression,))


def update_output(state: TruthTableState, index: int, expression: str) -> TruthTableState:
    if not 0 <= index < len(state.outputs):
        return state
    outputs = list(state.outputs)
    outputs[index] = expression
    return replace(state, outputs=tuple(outputs))


def remove_output(state: TruthTableState, index: int) -> TruthTableState:
    """Drop output ``index``; at least one (possibly empty) output always remains."""
    outputs = [expr for i, expr in enumerate(state.outputs) if i != index]
    return replace(state, outputs=tuple(outputs) or ("",))


def set_outputs(state: TruthTableState, outputs: Sequence[str]) -> TruthTableState:
    return replace(state, outputs=tuple(outputs) or ("",))


def table_columns(
    state: TruthTableState, config: TruthTableConfig = DEFAULT_TRUTH_TABLE
) -> List[TruthTableColumn]:
    return evaluate_truth_table(state.input_count, state.outputs, config)


__all__ = [
    "LETTERS",
    "name_for_index",
    "index_for_name",
    "input_names",
    "truth_value",
    "input_values",
    "TruthTableColumn",
    "evaluate_column",
    "evaluate_truth_table",
    "TruthTableState",
    "initial_state",
    "add_input",
    "remove_input",
    "set_input_count",
    "add_output",
    "update_output",
    "remove_output",
    "set_outputs",
    "table_columns",
]
