"""Boolean expression parsing and evaluation.

Expressions use ``&`` (AND), ``|`` (OR), ``^`` (XOR), ``!`` (NOT) and
parentheses over free-form variable names; ``0`` and ``1`` are constants.
Text goes through three stages: tokens, a parenthesis hierarchy, and a
postfix sequence that a small stack machine evaluates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from sympy import And, Or, Symbol, Xor, false, true
from sympy.logic.inference import satisfiable

from .config import DEFAULT_TRUTH_TABLE
from .errors import (
    MalformedExpressionError,
    MissingOperandError,
    NestingTooDeepError,
    UnbalancedParenthesesError,
)

OPERATORS = ("&", "|", "^")

# Lower number binds tighter: NOT > AND > OR > XOR.
OPERATOR_PRIORITY: Dict[str, int] = {"&": 1, "|": 2, "^": 3}

TRUE_LITERAL = "1"
FALSE_LITERAL = "0"


@dataclass(frozen=True)
class Token:
    """Lexical token; ``kind`` is letter, operator, sign or parenthesis."""

    kind: str
    value: str


@dataclass(frozen=True)
class HierarchyNode:
    """Token or parenthesised ``group`` of nodes."""

    kind: str
    value: str = ""
    children: Tuple["HierarchyNode", ...] = ()


@dataclass(frozen=True)
class PostfixToken:
    kind: str
    value: str


def tokenize(text: str) -> List[Token]:
    """Split raw expression text into tokens, ignoring whitespace."""
    tokens: List[Token] = []
    letter = ""
    for ch in text:
        if ch.isspace():
            continue
        if ch in OPERATORS:
            kind = "operator"
        elif ch in "()":
            kind = "parenthesis"
        elif ch == "!":
            kind = "sign"
        else:
            letter += ch
            continue
        if letter:
            tokens.append(Token("letter", letter))
            letter = ""
        tokens.append(Token(kind, ch))
    if letter:
        tokens.append(Token("letter", letter))
    return tokens


def _closing_index(tokens: Sequence[Token], start: int) -> int:
    depth = 0
    for index in range(start, len(tokens)):
        token = tokens[index]
        if token.kind != "parenthesis":
            continue
        depth += 1 if token.value == "(" else -1
        if depth == 0:
            return index
    raise UnbalancedParenthesesError("Unmatched '(' in expression.")


def parse_hierarchy(
    tokens: Sequence[Token],
    max_depth: int = DEFAULT_TRUTH_TABLE.max_nesting,
    _depth: int = 0,
) -> List[HierarchyNode]:
    """Group tokens into nested nodes following the parentheses."""
    if _depth > max_depth:
        raise NestingTooDeepError(max_depth)

    nodes: List[HierarchyNode] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.kind == "parenthesis":
            if token.value == ")":
                raise UnbalancedParenthesesError("Unmatched ')' in expression.")
            close = _closing_index(tokens, i)
            children = parse_hierarchy(tokens[i + 1 : close], max_depth, _depth + 1)
            nodes.append(HierarchyNode("group", children=tuple(children)))
            i = close + 1
            continue
        nodes.append(HierarchyNode(token.kind, token.value))
        i += 1
    return nodes


def _operand(nodes: Sequence[HierarchyNode], index: int) -> Tuple[List[PostfixToken], int]:
    """Compile the single operand starting at ``index``; return it and the next index.

    Leading ``!`` signs are counted rather than recursed into, so chains of any
    length compile without growing the call stack.
    """
    signs = 0
    while index < len(nodes) and nodes[index].kind == "sign":
        signs += 1
        index += 1
    if index >= len(nodes) or nodes[index].kind == "operator":
        raise MissingOperandError()
    node = nodes[index]
    if node.kind == "group":
        compiled = to_postfix(node.children)
    else:
        compiled = [PostfixToken("letter", node.value)]
    # !x is compiled as x XOR 1
    negation = [PostfixToken("letter", TRUE_LITERAL), PostfixToken("operator", "^")]
    return compiled + negation * signs, index + 1


def to_postfix(nodes: Sequence[HierarchyNode]) -> List[PostfixToken]:
    """Convert a node hierarchy to postfix order using operator precedence."""
    output: List[PostfixToken] = []
    pending: List[str] = []
    i = 0
    while i < len(nodes):
        node = nodes[i]
        if node.kind == "operator":
            while pending and OPERATOR_PRIORITY[pending[-1]] <= OPERATOR_PRIORITY[node.value]:
                output.append(PostfixToken("operator", pending.pop()))
            pending.append(node.value)
            i += 1
            continue
        compiled, i = _operand(nodes, i)
        output.extend(compiled)

    while pending:
        output.append(PostfixToken("operator", pending.pop()))
    return output


def parse_expression(
    text: str, max_depth: int = DEFAULT_TRUTH_TABLE.max_nesting
) -> Tuple[PostfixToken, ...]:
    """Parse expression text into its postfix token sequence."""
    return tuple(to_postfix(parse_hierarchy(tokenize(text), max_depth)))


def _apply(operator: str, left: bool, right: bool) -> bool:
    if operator == "&":
        return left and right
    if operator == "|":
        return left or right
    return left != right


def evaluate_postfix(postfix: Sequence[PostfixToken], resolve: Callable[[str], bool]) -> bool:
    """Evaluate postfix tokens; ``resolve`` maps variable names to values."""
    stack: List[bool] = []
    for token in postfix:
        if token.kind == "letter":
            if token.value == TRUE_LITERAL:
                stack.append(True)
            elif token.value == FALSE_LITERAL:
                stack.append(False)
            else:
                stack.append(bool(resolve(token.value)))
            continue
        if len(stack) < 2:
            raise MalformedExpressionError(f"Operator '{token.value}' is missing an operand.")
        right = stack.pop()
        left = stack.pop()
        stack.append(_apply(token.value, left, right))

    if len(stack) != 1:
        raise MalformedExpressionError(
            f"Expression leaves {len(stack)} values instead of one; check operators."
        )
    return stack[0]


def evaluate_expression(text: str, assignment: Mapping[str, bool]) -> bool:
    """Evaluate expression text against an explicit name -> value mapping."""

    def resolve(name: str) -> bool:
        if name not in assignment:
            raise MalformedExpressionError(f"Unknown variable '{name}'.")
        return assignment[name]

    return evaluate_postfix(parse_expression(text), resolve)


def postfix_to_sympy(postfix: Sequence[PostfixToken], symbols_by_name: Optional[Dict[str, Symbol]] = None):
    """Build the equivalent SymPy boolean expression from postfix tokens."""
    if symbols_by_name is None:
        symbols_by_name = {}
    builders = {"&": And, "|": Or, "^": Xor}
    stack = []
    for token in postfix:
        if token.kind == "letter":
            if token.value == TRUE_LITERAL:
                stack.append(true)
            elif token.value == FALSE_LITERAL:
                stack.append(false)
            else:
                if token.value not in symbols_by_name:
                    symbols_by_name[token.value] = Symbol(token.value)
                stack.append(symbols_by_name[token.value])
            continue
        if len(stack) < 2:
            raise MalformedExpressionError(f"Operator '{token.value}' is missing an operand.")
        right = stack.pop()
        left = stack.pop()
        stack.append(builders[token.value](left, right))

    if len(stack) != 1:
        raise MalformedExpressionError(
            f"Expression leaves {len(stack)} values instead of one; check operators."
        )
    return stack[0]


def expressions_equivalent(left: str, right: str) -> bool:
    """Return True when both expressions agree on every assignment."""
    symbols_by_name: Dict[str, Symbol] = {}
    lhs = postfix_to_sympy(parse_expression(left), symbols_by_name)
    rhs = postfix_to_sympy(parse_expression(right), symbols_by_name)
    return satisfiable(Xor(lhs, rhs)) is False


__all__ = [
    "OPERATORS",
    "OPERATOR_PRIORITY",
    "Token",
    "HierarchyNode",
    "PostfixToken",
    "tokenize",
    "parse_hierarchy",
    "to_postfix",
    "parse_expression",
    "evaluate_postfix",
    "evaluate_expression",
    "postfix_to_sympy",
    "expressions_equivalent",
]
