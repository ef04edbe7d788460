"""
stepcalc: flat arithmetic evaluation with a full reduction trace.

Layer Architecture:
    Tokenizer:   "2+3*4" -> [2][+][3][*][4]
                     ↓
    Reducer:     one pass per precedence class (HIGH, MEDIUM, LOW)
                     ↓
    Result:      value + Steps + StageSnapshots
                     ↓
    Transport:   JSON payload (api), table (cli)

Usage:
    from stepcalc import evaluate

    result = evaluate("3+-5")
    result.value  # -2.0
"""

from stepcalc.core import (
    ErrorKind,
    CalculatorError,
    MalformedNumberError,
    UnknownOperatorError,
    IllegalOperatorError,
    NonCompliantExpressionError,
    IllegalArithmeticError,
    EmptyResultError,
    Arity,
    Priority,
    Operator,
    OperatorRegistry,
    OPERATOR_REGISTRY,
    TokenKind,
    Token,
    Step,
    StageSnapshot,
    Result,
    tokenize,
    Reducer,
    CalculatorEvaluator,
    evaluate,
)

__version__ = "0.1.0"

__all__ = [
    "ErrorKind",
    "CalculatorError",
    "MalformedNumberError",
    "UnknownOperatorError",
    "IllegalOperatorError",
    "NonCompliantExpressionError",
    "IllegalArithmeticError",
    "EmptyResultError",
    "Arity",
    "Priority",
    "Operator",
    "OperatorRegistry",
    "OPERATOR_REGISTRY",
    "TokenKind",
    "Token",
    "Step",
    "StageSnapshot",
    "Result",
    "tokenize",
    "Reducer",
    "CalculatorEvaluator",
    "evaluate",
]
