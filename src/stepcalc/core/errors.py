"""
Evaluation failures.

Every failure raised by the core is a CalculatorError carrying a
machine-distinguishable ErrorKind and a human-readable message. All kinds are
terminal: evaluation is deterministic, so nothing is retried.
"""

from enum import Enum
from typing import Dict, Optional


class ErrorKind(Enum):
    """Failure classification exposed to callers."""
    MALFORMED_NUMBER = "malformed-number"
    UNKNOWN_OPERATOR = "unknown-operator"
    ILLEGAL_OPERATOR = "illegal-operator"
    NON_COMPLIANT_EXPRESSION = "non-compliant-expression"
    ILLEGAL_ARITHMETIC = "illegal-arithmetic"
    EMPTY_RESULT = "empty-result"


class CalculatorError(Exception):
    """Base class for every evaluation failure."""

    kind: ErrorKind = ErrorKind.NON_COMPLIANT_EXPRESSION

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def to_dict(self) -> Dict[str, object]:
        """Failure envelope handed to the transport layer."""
        return {
            "success": False,
            "kind": self.kind.value,
            "message": self.message,
        }


class MalformedNumberError(CalculatorError):
    """A numeric run does not parse as a floating-point literal."""
    kind = ErrorKind.MALFORMED_NUMBER

    def __init__(self, text: str):
        super().__init__(f"Illegal number: {text}")
        self.text = text


class _SymbolError(CalculatorError):
    """Failure tied to one operator token and its span."""

    def __init__(self, message: str, symbol: str, start: int, end: int):
        super().__init__(message)
        self.symbol = symbol
        self.start = start
        self.end = end


class UnknownOperatorError(_SymbolError):
    """A symbol token does not resolve in the operator registry."""
    kind = ErrorKind.UNKNOWN_OPERATOR

    def __init__(self, symbol: str, start: int, end: int):
        super().__init__(
            f"Unknown operator '{symbol}' in [{start}-{end}]", symbol, start, end
        )


class IllegalOperatorError(_SymbolError):
    """A non-sign operator appears inside a run of chained operators."""
    kind = ErrorKind.ILLEGAL_OPERATOR

    def __init__(self, symbol: str, start: int, end: int):
        super().__init__(
            f"Illegal duplicated operator '{symbol}' in [{start}-{end}].",
            symbol, start, end,
        )


class NonCompliantExpressionError(CalculatorError):
    """The expression is incomplete or does not reduce to a single value."""
    kind = ErrorKind.NON_COMPLIANT_EXPRESSION


class IllegalArithmeticError(CalculatorError):
    """The value is not-a-number, e.g. after a division by zero."""
    kind = ErrorKind.ILLEGAL_ARITHMETIC


class EmptyResultError(CalculatorError):
    """Nothing remained after reduction."""
    kind = ErrorKind.EMPTY_RESULT

    def __init__(self, message: str = "Unknown error. [Result-Empty]"):
        super().__init__(message)
