"""
stepcalc core: tokenizer, operator table, and precedence reducer.

Usage:
    from stepcalc.core import evaluate, CalculatorError

    result = evaluate("2+3*4")
    result.value   # 14.0
    result.steps   # (Step(3.0, 4.0, 12.0, '*'), Step(2.0, 12.0, 14.0, '+'))
"""

from stepcalc.core.errors import (
    ErrorKind,
    CalculatorError,
    MalformedNumberError,
    UnknownOperatorError,
    IllegalOperatorError,
    NonCompliantExpressionError,
    IllegalArithmeticError,
    EmptyResultError,
)
from stepcalc.core.operators import (
    Arity,
    Priority,
    Operator,
    OperatorRegistry,
    OPERATOR_REGISTRY,
)
from stepcalc.core.tokens import TokenKind, Token, Step, StageSnapshot, Result
from stepcalc.core.tokenizer import tokenize
from stepcalc.core.reducer import EvaluationStack, Reducer
from stepcalc.core.evaluator import CalculatorEvaluator, evaluate

__all__ = [
    # Errors
    "ErrorKind",
    "CalculatorError",
    "MalformedNumberError",
    "UnknownOperatorError",
    "IllegalOperatorError",
    "NonCompliantExpressionError",
    "IllegalArithmeticError",
    "EmptyResultError",
    # Operators
    "Arity",
    "Priority",
    "Operator",
    "OperatorRegistry",
    "OPERATOR_REGISTRY",
    # Values
    "TokenKind",
    "Token",
    "Step",
    "StageSnapshot",
    "Result",
    # Pipeline
    "tokenize",
    "EvaluationStack",
    "Reducer",
    "CalculatorEvaluator",
    "evaluate",
]
