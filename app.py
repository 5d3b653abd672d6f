import logging

import streamlit as st
import matplotlib.pyplot as plt
import numpy as np

from truthmap import (
    CellValue,
    DEFAULT_KARNAUGH,
    DEFAULT_TRUTH_TABLE,
    build_karnaugh_grid,
    clear_grid,
    export_to_truth_table,
    import_from_truth_table,
    input_names,
    minimize,
    set_cell,
)
from truthmap.truth_table import (
    add_input,
    add_output,
    initial_state,
    remove_input,
    remove_output,
    table_columns,
    update_output,
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

# ------------------------------- Page setup -------------------------------

COLOR_PALETTE = [
    "#e53935", "#1e88e5", "#43a047", "#f39c12",
    "#8e24aa", "#009688", "#6d4c41", "#2e86c1",
]
CELL_LABELS = [value.label for value in CellValue]

st.set_page_config(page_title="Truth Table & K-Map", layout="wide")
st.title("Truth Table & K-Map")
st.markdown("---")

mode = st.radio("Mode:", ["Truth table", "Karnaugh map"], horizontal=True)

if "table" not in st.session_state:
    st.session_state.table = initial_state(DEFAULT_TRUTH_TABLE)


# ------------------------------- Truth table -------------------------------
def render_truth_table():
    state = st.session_state.table

    left, mid, right = st.columns(3)
    if left.button("Add input"):
        state, _ = add_input(state, DEFAULT_TRUTH_TABLE)
    if mid.button("Remove input"):
        state, _ = remove_input(state, DEFAULT_TRUTH_TABLE)
    if right.button("Add output"):
        state = add_output(state)

    st.caption("Inputs: " + ", ".join(input_names(state.input_count)))
    for i, expression in enumerate(state.outputs):
        text_col, remove_col = st.columns([6, 1])
        edited = text_col.text_input(f"Output {i + 1}", value=expression, key=f"out_{i}_{len(state.outputs)}")
        state = update_output(state, i, edited)
        if remove_col.button("Remove", key=f"rm_{i}"):
            state = remove_output(state, i)
            st.session_state.table = state
            st.rerun()

    st.session_state.table = state
    columns = table_columns(state, DEFAULT_TRUTH_TABLE)
    data = {}
    for i, column in enumerate(columns):
        header = column.name if column.kind == "input" else f"[{i - state.input_count + 1}] {column.name}"
        data[header] = ["T" if v else "F" for v in column.values]
        if column.error:
            st.warning(f"{column.name!r}: {column.error}")
    st.dataframe(data, use_container_width=True)


# ------------------------------- Karnaugh map -------------------------------
def draw_kmap(grid, groups):
    size_map = {2: (3.2, 3.2), 3: (5.2, 3.4), 4: (5.2, 5.2)}
    fig, ax = plt.subplots(figsize=size_map.get(grid.variable_count, (4.2, 4.2)))

    nrows, ncols = grid.rows, grid.cols
    ax.set_xlim(-0.6, ncols)
    ax.set_ylim(-0.6, nrows)
    ax.set_xticks(np.arange(0, ncols + 1))
    ax.set_yticks(np.arange(0, nrows + 1))
    ax.set_xticklabels([])
    ax.set_yticklabels([])
    ax.grid(True, color="#888", linewidth=1)
    ax.invert_yaxis()
    ax.set_facecolor("#fafafa")

    col_name = "".join(grid.col_variables)
    row_name = "".join(grid.row_variables)
    for j, code in enumerate(grid.col_codes):
        ax.text(j + 0.5, -0.25, f"{col_name}={code}", ha="center", va="center", fontsize=10, color="#333")
    for i, code in enumerate(grid.row_codes):
        ax.text(-0.25, i + 0.5, f"{row_name}={code}", ha="right", va="center", fontsize=10, color="#333")

    colors = {CellValue.ONE: "#1f3c88", CellValue.DONT_CARE: "#ff8c32", CellValue.ZERO: "#9aa7b7"}
    for cell in grid.iter_cells():
        ax.text(cell.col + 0.5, cell.row + 0.5, cell.value.label, color=colors[cell.value],
                fontsize=13, ha="center", va="center", weight="bold")
        ax.text(cell.col + 0.05, cell.row + 0.9, str(cell.minterm), color="#777", fontsize=8, alpha=0.7)

    # Groups may wrap around the edges, so each member cell is outlined.
    for i, group in enumerate(groups):
        color = COLOR_PALETTE[i % len(COLOR_PALETTE)]
        inset = 0.06 + 0.05 * (i % 4)
        for r, c in group.cells:
            ax.add_patch(plt.Rectangle((c + inset, r + inset), 1 - 2 * inset, 1 - 2 * inset,
                                       fill=False, color=color, lw=2.0))
    return fig


def render_karnaugh():
    count = st.selectbox("Number of variables:", [2, 3, 4], index=DEFAULT_KARNAUGH.variable_count - 2)
    if st.session_state.get("grid") is None or st.session_state.grid.variable_count != count:
        st.session_state.grid = build_karnaugh_grid(count, DEFAULT_KARNAUGH.names_for(count))
    grid = st.session_state.grid

    left, right = st.columns(2)
    if left.button("Clear map"):
        grid = clear_grid(grid)
    table = st.session_state.table
    if right.button("Import first truth-table output", disabled=table.input_count != count):
        first = table_columns(table, DEFAULT_TRUTH_TABLE)[table.input_count]
        grid = import_from_truth_table(grid, first.values)

    for r in range(grid.rows):
        for c, cell_col in enumerate(st.columns(grid.cols)):
            cell = grid.cell(r, c)
            picked = cell_col.selectbox(
                f"m{cell.minterm}",
                CELL_LABELS,
                index=CELL_LABELS.index(cell.value.label),
                key=f"cell_{count}_{r}_{c}_{cell.value.label}",
            )
            grid = set_cell(grid, r, c, CellValue.from_label(picked))
    st.session_state.grid = grid

    result = minimize(grid)
    st.success(f"**SOP:**  \nF = {result.sop}")
    st.info(f"**POS:**  \nF = {result.pos}")
    st.text_area(
        "Details:",
        f"• minterms = {list(result.minterms)}\n"
        f"• maxterms = {list(result.maxterms)}\n"
        f"• terms = {list(result.terms)}\n"
        f"• truth values = {[int(v) for v in export_to_truth_table(grid)]}",
        height=140,
    )
    st.pyplot(draw_kmap(grid, result.sop_groups))


try:
    if mode == "Truth table":
        render_truth_table()
    else:
        render_karnaugh()
except ValueError as e:
    st.error(f"Calculation error:\n{e}")
