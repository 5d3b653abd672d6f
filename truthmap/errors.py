"""Error taxonomy for expression parsing, evaluation and K-map construction."""

from __future__ import annotations


class TruthMapError(ValueError):
    """Base class for every failure raised by the core."""


class ParseError(TruthMapError):
    """The expression text is structurally malformed."""


class UnbalancedParenthesesError(ParseError):
    def __init__(self, message: str = "Unbalanced parentheses in expression."):
        super().__init__(message)


class MissingOperandError(ParseError):
    def __init__(self, message: str = "Negation '!' has no operand."):
        super().__init__(message)


class NestingTooDeepError(ParseError):
    def __init__(self, limit: int):
        super().__init__(f"Parentheses nested deeper than {limit} levels.")
        self.limit = limit


class MalformedExpressionError(TruthMapError):
    """Evaluation left the value stack in an invalid state."""


class UnsupportedVariableCountError(TruthMapError):
    def __init__(self, count: int, message: str = ""):
        super().__init__(message or f"K-map available for 2-4 variables, got {count}.")
        self.count = count


__all__ = [
    "TruthMapError",
    "ParseError",
    "UnbalancedParenthesesError",
    "MissingOperandError",
    "NestingTooDeepError",
    "MalformedExpressionError",
    "UnsupportedVariableCountError",
]
