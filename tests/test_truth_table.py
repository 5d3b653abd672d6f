import logging

import pytest

from truthmap.config import TruthTableConfig
from truthmap.errors import MalformedExpressionError, UnbalancedParenthesesError
from truthmap.truth_table import (
    TruthTableState,
    add_input,
    add_output,
    evaluate_column,
    evaluate_truth_table,
    index_for_name,
    initial_state,
    input_names,
    input_values,
    name_for_index,
    remove_input,
    remove_output,
    set_input_count,
    set_outputs,
    table_columns,
    update_output,
)

T, F = True, False


@pytest.mark.parametrize("n", range(1, 11))
def test_input_columns_count_in_binary(n):
    columns = evaluate_truth_table(n, [])
    assert len(columns) == n
    assert all(column.kind == "input" for column in columns)
    for row in range(2**n):
        bits = [columns[k].values[row] for k in range(n)]
        assert int("".join("1" if b else "0" for b in bits), 2) == row


def test_two_input_pattern():
    columns = evaluate_truth_table(2, [])
    assert [c.name for c in columns] == ["p", "q"]
    assert columns[0].values == (F, F, T, T)
    assert columns[1].values == (F, T, F, T)


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("p & q", [F, F, F, T]),
        ("p | q", [F, T, T, T]),
        ("p ^ q", [F, T, T, F]),
        ("!p", [T, T, F, F]),
        ("!p & q", [F, T, F, F]),
        ("!(p & q)", [T, T, T, F]),
        ("!!q", [F, T, F, T]),
        ("1", [T, T, T, T]),
        ("p & 0", [F, F, F, F]),
    ],
)
def test_operators(expression, expected):
    assert evaluate_column(expression, 2) == expected


def test_precedence_matches_explicit_grouping():
    assert evaluate_column("p | q & r", 3) == evaluate_column("p | (q & r)", 3)
    assert evaluate_column("p | q & r", 3) != evaluate_column("(p | q) & r", 3)
    assert evaluate_column("p ^ q | r", 3) == evaluate_column("p ^ (q | r)", 3)


def test_outputs_follow_inputs_in_order():
    columns = evaluate_truth_table(2, ["p & q", "p | q"])
    assert [(c.kind, c.name) for c in columns] == [
        ("input", "p"),
        ("input", "q"),
        ("output", "p & q"),
        ("output", "p | q"),
    ]


def test_bad_output_becomes_all_false(caplog):
    with caplog.at_level(logging.WARNING, logger="truthmap.truth_table"):
        columns = evaluate_truth_table(2, ["p q", "(p", "p | q", "r"])
    broken = columns[2:4] + columns[5:]
    assert all(c.values == (F, F, F, F) and c.error for c in broken)
    assert columns[4].values == (F, T, T, T)
    assert columns[4].error is None
    assert "all-false" in caplog.text


def test_evaluate_column_raises_for_direct_callers():
    with pytest.raises(MalformedExpressionError):
        evaluate_column("p &", 2)
    with pytest.raises(UnbalancedParenthesesError):
        evaluate_column("(p & q", 2)
    with pytest.raises(MalformedExpressionError):
        evaluate_column("s", 3)


@pytest.mark.parametrize("count", [0, 11])
def test_input_count_bounds(count):
    with pytest.raises(ValueError):
        evaluate_truth_table(count, ["p"])


def test_name_cycle():
    names = input_names(23)
    assert names[:11] == list("pqrstuvwxyz")
    assert names[11] == "p'"
    assert names[21] == "z'"
    assert names[22] == "p''"
    assert index_for_name("p'") == 11
    assert all(index_for_name(name_for_index(i)) == i for i in range(40))


@pytest.mark.parametrize("name", ["a", "pq", "'", ""])
def test_unknown_names(name):
    with pytest.raises(MalformedExpressionError):
        index_for_name(name)


def test_primed_inputs_evaluate():
    values = evaluate_column("p' & !z", 12)
    p_prime = input_values(11, 12)
    z = input_values(10, 12)
    assert values == [a and not b for a, b in zip(p_prime, z)]


def test_state_input_bounds():
    config = TruthTableConfig(input_count=1, min_inputs=1, max_inputs=2)
    state = initial_state(config)
    state, changed = remove_input(state, config)
    assert not changed and state.input_count == 1
    state, changed = add_input(state, config)
    assert changed and state.input_count == 2 and state.row_count == 4
    state, changed = add_input(state, config)
    assert not changed and state.input_count == 2
    assert set_input_count(state, 50, config).input_count == 2
    assert set_input_count(state, -3, config).input_count == 1


def test_state_outputs_are_never_empty():
    state = TruthTableState(2, ("p",))
    state = add_output(state, "q")
    assert state.outputs == ("p", "q")
    assert update_output(state, 5, "r") is state
    state = update_output(state, 0, "p & q")
    assert state.outputs == ("p & q", "q")
    state = remove_output(remove_output(state, 0), 0)
    assert state.outputs == ("",)
    assert set_outputs(state, []).outputs == ("",)


def test_default_state_columns():
    state = initial_state()
    columns = table_columns(state)
    assert [c.name for c in columns] == ["p", "q", "p | q", "!p & q", "p ^ q"]
    assert columns[3].values == (F, T, F, F)


def test_long_negation_chain_evaluates():
    columns = evaluate_truth_table(2, ["!" * 3000 + "p", "!" * 3001 + "p", "p & q"])
    assert columns[2].values == (F, F, T, T)
    assert columns[3].values == (T, T, F, F)
    assert columns[4].values == (F, F, F, T)
    assert all(c.error is None for c in columns)


def test_over_deep_nesting_becomes_all_false_column():
    config = TruthTableConfig(max_nesting=8)
    deep = "(" * 20 + "p" + ")" * 20
    columns = evaluate_truth_table(2, [deep, "p | q"], config)
    assert columns[2].values == (F, F, F, F)
    assert "nested deeper than 8" in columns[2].error
    assert columns[3].values == (F, T, T, T)
    assert columns[3].error is None
