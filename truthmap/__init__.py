"""Convenience exports for truth-table and K-map logic helpers."""

from .config import DEFAULT_KARNAUGH, DEFAULT_TRUTH_TABLE, KarnaughConfig, TruthTableConfig
from .errors import (
    MalformedExpressionError,
    MissingOperandError,
    NestingTooDeepError,
    ParseError,
    TruthMapError,
    UnbalancedParenthesesError,
    UnsupportedVariableCountError,
)
from .logic import (
    HierarchyNode,
    PostfixToken,
    Token,
    evaluate_expression,
    evaluate_postfix,
    expressions_equivalent,
    parse_expression,
    parse_hierarchy,
    postfix_to_sympy,
    to_postfix,
    tokenize,
)
from .truth_table import (
    TruthTableColumn,
    TruthTableState,
    evaluate_column,
    evaluate_truth_table,
    index_for_name,
    input_names,
    name_for_index,
)
from .kmap_engine import (
    CellValue,
    KarnaughCell,
    KarnaughGrid,
    build_karnaugh_grid,
    cell_for_minterm,
    clear_grid,
    export_to_truth_table,
    import_from_truth_table,
    map_dimensions,
    maxterms,
    minterms,
    next_value,
    set_cell,
    toggle_cell,
)
from .minimizer import (
    KarnaughGroup,
    MinimizedExpression,
    cover_groups,
    find_groups,
    minimize,
)

__all__ = [
    "CellValue",
    "DEFAULT_KARNAUGH",
    "DEFAULT_TRUTH_TABLE",
    "HierarchyNode",
    "KarnaughCell",
    "KarnaughConfig",
    "KarnaughGrid",
    "KarnaughGroup",
    "MalformedExpressionError",
    "MinimizedExpression",
    "MissingOperandError",
    "NestingTooDeepError",
    "ParseError",
    "PostfixToken",
    "Token",
    "TruthMapError",
    "TruthTableColumn",
    "TruthTableConfig",
    "TruthTableState",
    "UnbalancedParenthesesError",
    "UnsupportedVariableCountError",
    "build_karnaugh_grid",
    "cell_for_minterm",
    "clear_grid",
    "cover_groups",
    "evaluate_column",
    "evaluate_expression",
    "evaluate_postfix",
    "evaluate_truth_table",
    "export_to_truth_table",
    "expressions_equivalent",
    "find_groups",
    "import_from_truth_table",
    "index_for_name",
    "input_names",
    "map_dimensions",
    "maxterms",
    "minimize",
    "minterms",
    "name_for_index",
    "next_value",
    "parse_expression",
    "parse_hierarchy",
    "postfix_to_sympy",
    "set_cell",
    "to_postfix",
    "toggle_cell",
    "tokenize",
]
