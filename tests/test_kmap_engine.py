import pytest

from truthmap.errors import UnsupportedVariableCountError
from truthmap.kmap_engine import (
    CellValue,
    build_karnaugh_grid,
    cell_for_minterm,
    clear_grid,
    complement,
    dont_cares,
    export_to_truth_table,
    gray_code,
    import_from_truth_table,
    map_dimensions,
    maxterms,
    minterms,
    next_value,
    set_cell,
    toggle_cell,
)


def test_gray_code():
    assert gray_code(1) == [(0,), (1,)]
    assert gray_code(2) == [(0, 0), (0, 1), (1, 1), (1, 0)]
    codes = gray_code(3)
    for a, b in zip(codes, codes[1:] + codes[:1]):
        assert sum(x != y for x, y in zip(a, b)) == 1


@pytest.mark.parametrize("count, shape", [(2, (2, 2)), (3, (2, 4)), (4, (4, 4))])
def test_dimensions(count, shape):
    assert map_dimensions(count) == shape
    grid = build_karnaugh_grid(count)
    assert (grid.rows, grid.cols) == shape
    assert sorted(cell.minterm for cell in grid.iter_cells()) == list(range(2**count))


@pytest.mark.parametrize("count", [0, 1, 5, -2])
def test_unsupported_counts(count):
    with pytest.raises(UnsupportedVariableCountError):
        build_karnaugh_grid(count, ["A"] * max(count, 0))


def test_name_count_mismatch():
    with pytest.raises(UnsupportedVariableCountError):
        build_karnaugh_grid(3, ["A", "B"])
    with pytest.raises(ValueError):
        build_karnaugh_grid(2, ["A", "A"])


def test_default_names_come_from_config():
    assert build_karnaugh_grid(3).variables == ("A", "B", "C")


def test_two_variable_layout():
    grid = build_karnaugh_grid(2, ["a", "b"])
    assert [[cell.minterm for cell in row] for row in grid.cells] == [[0, 1], [2, 3]]
    assert dict(grid.cell(1, 0).assignment) == {"a": True, "b": False}


def test_three_variable_layout():
    grid = build_karnaugh_grid(3, ["a", "b", "c"])
    assert [[cell.minterm for cell in row] for row in grid.cells] == [
        [0, 1, 3, 2],
        [4, 5, 7, 6],
    ]
    assert grid.row_variables == ("a",)
    assert grid.col_variables == ("b", "c")
    assert grid.col_codes == ["00", "01", "11", "10"]


def test_four_variable_layout():
    grid = build_karnaugh_grid(4, ["a", "b", "c", "d"])
    assert [[cell.minterm for cell in row] for row in grid.cells] == [
        [0, 1, 3, 2],
        [4, 5, 7, 6],
        [12, 13, 15, 14],
        [8, 9, 11, 10],
    ]
    assert dict(grid.cell(2, 3).assignment) == {"a": True, "b": True, "c": True, "d": False}


@pytest.mark.parametrize("count", [2, 3, 4])
def test_neighbours_differ_in_one_variable(count):
    grid = build_karnaugh_grid(count)
    for cell in grid.iter_cells():
        for other in (
            grid.cell(cell.row, (cell.col + 1) % grid.cols),
            grid.cell((cell.row + 1) % grid.rows, cell.col),
        ):
            assert bin(cell.minterm ^ other.minterm).count("1") == 1


def test_set_cell_returns_new_grid():
    grid = build_karnaugh_grid(3)
    edited = set_cell(grid, 1, 2, 1)
    assert grid.cell(1, 2).value is CellValue.ZERO
    assert edited.cell(1, 2).value is CellValue.ONE
    assert sum(cell.value is CellValue.ONE for cell in edited.iter_cells()) == 1
    assert set_cell(edited, 0, 0, "X").cell(0, 0).value is CellValue.DONT_CARE


def test_set_cell_bounds():
    grid = build_karnaugh_grid(2)
    with pytest.raises(IndexError):
        set_cell(grid, 2, 0, 1)


def test_toggle_cycle():
    assert next_value(CellValue.ZERO) is CellValue.ONE
    assert next_value(CellValue.ONE) is CellValue.DONT_CARE
    assert next_value(CellValue.DONT_CARE) is CellValue.ZERO
    grid = build_karnaugh_grid(2)
    for expected in (CellValue.ONE, CellValue.DONT_CARE, CellValue.ZERO):
        grid = toggle_cell(grid, 0, 1)
        assert grid.cell(0, 1).value is expected


def test_from_label():
    assert CellValue.from_label("x") is CellValue.DONT_CARE
    assert CellValue.from_label("1") is CellValue.ONE
    assert CellValue.ONE.label == "1"


def test_truth_table_import_and_export():
    values = [False, True, True, False, True, False, False, True]
    grid = import_from_truth_table(build_karnaugh_grid(3), values)
    assert export_to_truth_table(grid) == values
    assert minterms(grid) == [1, 2, 4, 7]
    assert maxterms(grid) == [0, 3, 5, 6]
    assert cell_for_minterm(grid, 7).position == (1, 2)


def test_import_short_list_pads_with_false():
    grid = import_from_truth_table(build_karnaugh_grid(2), [True])
    assert minterms(grid) == [0]


def test_dont_cares_excluded_from_terms_and_export():
    grid = set_cell(set_cell(build_karnaugh_grid(2), 0, 0, "X"), 1, 1, 1)
    assert minterms(grid) == [3]
    assert maxterms(grid) == [1, 2]
    assert dont_cares(grid) == [0]
    assert export_to_truth_table(grid) == [False, False, False, True]


def test_complement_and_clear():
    grid = set_cell(set_cell(build_karnaugh_grid(2), 0, 0, "X"), 1, 1, 1)
    flipped = complement(grid)
    assert minterms(flipped) == [1, 2]
    assert dont_cares(flipped) == [0]
    assert minterms(clear_grid(grid)) == []
    assert maxterms(clear_grid(grid)) == [0, 1, 2, 3]


@pytest.mark.parametrize("count", [2, 3, 4])
def test_cell_for_minterm_matches_every_cell(count):
    grid = build_karnaugh_grid(count)
    for cell in grid.iter_cells():
        assert cell_for_minterm(grid, cell.minterm) is cell
    with pytest.raises(IndexError):
        cell_for_minterm(grid, 2**count)
    with pytest.raises(IndexError):
        cell_for_minterm(grid, -1)
