"""
Reducer: precedence-level rewriting of a Token sequence.

The sequence is rewritten once per precedence class, tightest first. During a
pass every operator of that class is applied: its right operand is gathered
(folding any chained sign symbols into it), its left operand is taken from the
scratch stack, and the application is replaced by one synthetic NUMBER token
spanning everything it consumed. Operators of other classes pass through
untouched for a later pass.

Each pass is linear in the current token count and the number of passes is
fixed, so reduction always terminates after len(Priority) passes.
"""

import logging
from typing import List, Optional, Sequence, Set, Tuple

from stepcalc.core.errors import (
    EmptyResultError,
    IllegalOperatorError,
    NonCompliantExpressionError,
    UnknownOperatorError,
)
from stepcalc.core.operators import OPERATOR_REGISTRY, Operator, OperatorRegistry, Priority
from stepcalc.core.tokens import StageSnapshot, Step, Token

logger = logging.getLogger(__name__)


# =============================================================================
# SCRATCH STACK
# =============================================================================

class EvaluationStack:
    """
    Stack of tokens rebuilt during one pass.

    Tracks the token indices it already holds so a span can never be placed
    twice. Popping an operand yields None instead of failing when the top is
    not a number.
    """

    def __init__(self):
        self._tokens: List[Token] = []
        self._covered: Set[int] = set()

    def push(self, token: Token) -> bool:
        """Push a token; no-op (returns False) if its span is already held."""
        indices = token.indices()
        if any(i in self._covered for i in indices):
            return False
        self._tokens.append(token)
        self._covered.update(indices)
        return True

    def peek(self) -> Optional[Token]:
        return self._tokens[-1] if self._tokens else None

    def pop_operand(self) -> Optional[Token]:
        """Pop the top token if it is a number, else return None."""
        top = self.peek()
        if top is None or not top.is_number:
            return None
        self._tokens.pop()
        self._covered.difference_update(top.indices())
        return top

    def tokens(self) -> List[Token]:
        return list(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)


# =============================================================================
# REDUCER
# =============================================================================

class Reducer:
    """Applies every operator in precedence order, recording each application."""

    def __init__(self, registry: Optional[OperatorRegistry] = None):
        self.registry = registry if registry is not None else OPERATOR_REGISTRY

    def reduce(
        self, tokens: Sequence[Token]
    ) -> Tuple[Token, List[Step], List[StageSnapshot]]:
        """
        Reduce a token sequence to a single number.

        Args:
            tokens: Initial sequence from the tokenizer.

        Returns:
            (final NUMBER token, steps in application order, one snapshot per pass)

        Raises:
            UnknownOperatorError: A symbol does not resolve.
            IllegalOperatorError: A non-sign symbol is chained before a literal.
            NonCompliantExpressionError: An operand is missing or more than one
                token remains after the last pass.
            EmptyResultError: Nothing remains after the last pass.
        """
        current = list(tokens)
        steps: List[Step] = []
        stages: List[StageSnapshot] = []

        for priority in Priority.ordered():
            current = self.reduce_pass(current, priority, steps)
            stages.append(StageSnapshot.capture(priority.name, current))
            logger.debug(f"Pass {priority.name}: {len(current)} tokens, {len(steps)} steps")

        if not current:
            raise EmptyResultError()
        if len(current) > 1 or not current[0].is_number:
            remaining = "".join(t.text for t in current)
            raise NonCompliantExpressionError(
                f"Expression does not reduce to a single value: {len(current)} "
                f"tokens remain ({remaining}). A prefix operator may be missing "
                f"its operand."
            )
        return current[0], steps, stages

    def reduce_pass(
        self, tokens: List[Token], priority: Priority, steps: List[Step]
    ) -> List[Token]:
        """Apply every operator of one precedence class; appends to `steps`."""
        stack = EvaluationStack()
        pos = 0
        while pos < len(tokens):
            token = tokens[pos]
            if token.is_number:
                stack.push(token)
                pos += 1
                continue

            operator = self._resolve(token)
            if operator.priority is not priority:
                stack.push(token)
                pos += 1
                continue

            pos = self._apply(operator, tokens, pos, stack, steps)
        return stack.tokens()

    def _apply(
        self,
        operator: Operator,
        tokens: List[Token],
        pos: int,
        stack: EvaluationStack,
        steps: List[Step],
    ) -> int:
        """Apply the operator at `pos`; returns the position after its operand."""
        token = tokens[pos]
        next_pos = self._next_number_position(tokens, pos + 1)

        if next_pos is None:
            operand = stack.pop_operand() if operator.is_prefix else None
            if operand is None:
                raise NonCompliantExpressionError(
                    f"Expression incomplete: operator '{token.text}' in "
                    f"[{token.start}-{token.end}] has no operand"
                )
            # Trailing root notation: "9?" reads as "?9"
            self._record(operator, None, operand, operand.start, token.end, stack, steps)
            return pos + 1

        right = self._fold_operand(tokens[pos + 1:next_pos + 1])

        left: Optional[Token] = None
        if not operator.is_prefix:
            left = stack.pop_operand()
            if left is None and not operator.self_compounding:
                previous = stack.peek()
                if previous is not None:
                    # adjacent to another operator, e.g. "2-*3"
                    raise IllegalOperatorError(token.text, token.start, token.end)
                raise NonCompliantExpressionError(
                    f"Expression incomplete: operator '{token.text}' in "
                    f"[{token.start}-{token.end}] has no left operand"
                )

        start = left.start if left is not None else token.start
        self._record(operator, left, right, start, right.end, stack, steps)
        return next_pos + 1

    def _record(
        self,
        operator: Operator,
        left: Optional[Token],
        right: Token,
        start: int,
        end: int,
        stack: EvaluationStack,
        steps: List[Step],
    ) -> None:
        left_value = left.value if left is not None else None
        result = operator.apply(left_value, right.value)
        step = Step(left_value, right.value, result, operator.symbol)
        logger.debug(str(step))
        steps.append(step)
        stack.push(Token.number(repr(result), result, start, end))

    def _fold_operand(self, run: List[Token]) -> Token:
        """
        Collapse chained sign symbols into the literal that ends `run`.

        Interior symbols are applied right to left as signs, so "-+-5" folds
        to 5 and "+-5" to -5.
        """
        number = run[-1]
        if len(run) == 1:
            return number

        value = number.value
        for token in reversed(run[:-1]):
            operator = self._resolve(token)
            if not self.registry.is_self_compounding(token.text):
                raise IllegalOperatorError(token.text, token.start, token.end)
            value = operator.apply(None, value)

        text = "".join(t.text for t in run)
        return Token.number(text, value, run[0].start, number.end)

    def _resolve(self, token: Token) -> Operator:
        operator = self.registry.resolve(token.text)
        if operator is None:
            raise UnknownOperatorError(token.text, token.start, token.end)
        return operator

    @staticmethod
    def _next_number_position(tokens: List[Token], start: int) -> Optional[int]:
        for pos in range(start, len(tokens)):
            if tokens[pos].is_number:
                return pos
        return None


__all__ = ["EvaluationStack", "Reducer"]
