"""
Evaluator: the single entry point of the core.

    expression -> tokenize -> Reducer (one pass per precedence class) -> Result

The assembled Result is checked for NaN here and only here; operators
themselves never reject arithmetic.
"""

import logging
import math
from typing import Optional

from stepcalc.constants import MESSAGE_ILLEGAL_ARITHMETIC, STAGE_INIT
from stepcalc.core.errors import IllegalArithmeticError
from stepcalc.core.operators import OPERATOR_REGISTRY, OperatorRegistry
from stepcalc.core.reducer import Reducer
from stepcalc.core.tokenizer import tokenize
from stepcalc.core.tokens import Result, StageSnapshot

logger = logging.getLogger(__name__)


class CalculatorEvaluator:
    """Evaluates one expression and keeps its trace."""

    def __init__(self, expression: str, registry: Optional[OperatorRegistry] = None):
        self.expression = expression
        self.registry = registry if registry is not None else OPERATOR_REGISTRY

    def evaluate(self) -> Result:
        """
        Evaluate the expression.

        Returns:
            Result with the value, every Step, and a snapshot per stage.

        Raises:
            CalculatorError: Any failure kind; see stepcalc.core.errors.
        """
        result = self.evaluate_with_reduce()
        if math.isnan(result.value):
            raise IllegalArithmeticError(MESSAGE_ILLEGAL_ARITHMETIC)
        return result

    def evaluate_with_reduce(self) -> Result:
        """Tokenize and reduce without the final NaN check."""
        tokens = tokenize(self.expression, self.registry)
        stages = [StageSnapshot.capture(STAGE_INIT, tokens)]

        final, steps, pass_stages = Reducer(self.registry).reduce(tokens)
        stages.extend(pass_stages)

        logger.debug(
            f"Evaluated {self.expression!r} = {final.value} in {len(steps)} steps"
        )
        return Result(steps=tuple(steps), value=final.value, stages=tuple(stages))


def evaluate(expression: str, registry: Optional[OperatorRegistry] = None) -> Result:
    """
    Parse and evaluate an expression in one step.

    Args:
        expression: The expression text, e.g. "2+3*4".
        registry: Optional operator registry. Defaults to the shared table.

    Returns:
        The Result of the evaluation.
    """
    return CalculatorEvaluator(expression, registry).evaluate()


__all__ = ["CalculatorEvaluator", "evaluate"]
