"""
Operator Table: The Fixed Set of Arithmetic Operators.

Every symbol the evaluator understands resolves to an Operator here. The
table is closed: it is populated once when a registry is built and frozen
afterwards, so resolution is a read-only lookup safe to share across
evaluations.

Operator Set:
    ?   - Square root (prefix)          HIGH
    *   - Multiplication (infix)        MEDIUM
    /   - Division (infix)              MEDIUM
    %   - Remainder (infix)             MEDIUM
    +   - Addition / plus sign (infix)  LOW
    -   - Subtraction / minus sign      LOW

Operators never reject their inputs. Division or remainder by zero and the
square root of a negative operand produce NaN, which the evaluator turns into
an illegal-arithmetic failure.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional

import numpy as np

from stepcalc.constants import (
    SELF_COMPOUNDING_SYMBOLS,
    SYMBOL_DIVIDE,
    SYMBOL_MINUS,
    SYMBOL_MULTIPLY,
    SYMBOL_PLUS,
    SYMBOL_REMAINDER,
    SYMBOL_SQUARE_ROOT,
)


# =============================================================================
# ENUMS
# =============================================================================

class Arity(Enum):
    """Operand shape of an operator."""
    PREFIX = "prefix"   # right operand only
    INFIX = "infix"     # left and right operands


class Priority(Enum):
    """
    Precedence classes, tightest-binding first.

    The value is the pass index; the reducer visits classes in that order.
    """
    HIGH = 0      # unary / root
    MEDIUM = 1    # multiplicative
    LOW = 2       # additive

    @classmethod
    def ordered(cls) -> List["Priority"]:
        """Reduction order: tightest to loosest."""
        return sorted(cls, key=lambda p: p.value)

    def __lt__(self, other: "Priority") -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.value < other.value


# =============================================================================
# OPERATOR
# =============================================================================

OperatorFunc = Callable[[Optional[float], float], float]


@dataclass(frozen=True)
class Operator:
    """
    A pure, stateless arithmetic operator.

    `func` receives None as the left operand when there is none: always for
    prefix operators, and for sign symbols folded in front of a literal.
    """
    symbol: str
    arity: Arity
    priority: Priority
    func: OperatorFunc
    self_compounding: bool = False

    @property
    def is_prefix(self) -> bool:
        return self.arity is Arity.PREFIX

    def apply(self, left: Optional[float], right: float) -> float:
        with np.errstate(all="ignore"):
            return float(self.func(left, right))


def _plus(left: Optional[float], right: float) -> float:
    if left is None:
        return np.float64(right)
    return np.add(np.float64(left), np.float64(right))


def _minus(left: Optional[float], right: float) -> float:
    if left is None:
        return np.negative(np.float64(right))
    return np.subtract(np.float64(left), np.float64(right))


def _multiply(left: Optional[float], right: float) -> float:
    return np.multiply(np.float64(left), np.float64(right))


def _divide(left: Optional[float], right: float) -> float:
    if right == 0:
        return np.nan
    return np.divide(np.float64(left), np.float64(right))


def _remainder(left: Optional[float], right: float) -> float:
    # fmod keeps the sign of the dividend; fmod(x, 0) is NaN
    return np.fmod(np.float64(left), np.float64(right))


def _square_root(left: Optional[float], right: float) -> float:
    return np.sqrt(np.float64(right))


BUILTIN_OPERATORS = (
    Operator(SYMBOL_PLUS, Arity.INFIX, Priority.LOW, _plus, self_compounding=True),
    Operator(SYMBOL_MINUS, Arity.INFIX, Priority.LOW, _minus, self_compounding=True),
    Operator(SYMBOL_MULTIPLY, Arity.INFIX, Priority.MEDIUM, _multiply),
    Operator(SYMBOL_DIVIDE, Arity.INFIX, Priority.MEDIUM, _divide),
    Operator(SYMBOL_REMAINDER, Arity.INFIX, Priority.MEDIUM, _remainder),
    Operator(SYMBOL_SQUARE_ROOT, Arity.PREFIX, Priority.HIGH, _square_root),
)


# =============================================================================
# OPERATOR REGISTRY
# =============================================================================

class OperatorRegistry:
    """
    Symbol -> Operator lookup.

    Enforces:
    - Single definition per symbol
    - No registration after freeze
    - Repeated resolution returns the same instance
    """

    def __init__(self, operators=BUILTIN_OPERATORS, freeze: bool = True):
        self._operators: Dict[str, Operator] = {}
        self._frozen: bool = False
        for operator in operators:
            self.register(operator)
        if freeze:
            self.freeze()

    def register(self, operator: Operator) -> None:
        """
        Register an operator.

        Raises:
            ValueError: If the symbol already exists.
            RuntimeError: If registry is frozen.
        """
        if self._frozen:
            raise RuntimeError(
                f"Registry is frozen. Cannot register '{operator.symbol}'"
            )
        if operator.symbol in self._operators:
            raise ValueError(f"Operator '{operator.symbol}' already registered")
        if operator.self_compounding and operator.symbol not in SELF_COMPOUNDING_SYMBOLS:
            raise ValueError(
                f"Operator '{operator.symbol}' cannot be used as a sign"
            )
        self._operators[operator.symbol] = operator

    def freeze(self) -> None:
        """Freeze registry - no more registrations allowed."""
        self._frozen = True

    def is_frozen(self) -> bool:
        return self._frozen

    def resolve(self, symbol: Optional[str]) -> Optional[Operator]:
        """Get operator by symbol, returning None if not found."""
        if not symbol:
            return None
        return self._operators.get(symbol)

    def get(self, symbol: str) -> Operator:
        """
        Get operator by symbol.

        Raises:
            KeyError: If symbol not found.
        """
        if symbol not in self._operators:
            raise KeyError(f"Operator '{symbol}' not registered")
        return self._operators[symbol]

    def is_valid_symbol(self, text: str) -> bool:
        return text in self._operators

    def is_self_compounding(self, text: str) -> bool:
        """Whether the symbol may chain in front of a literal as its sign."""
        operator = self._operators.get(text)
        return operator is not None and operator.self_compounding

    def symbols(self) -> List[str]:
        return list(self._operators.keys())

    def operators(self) -> List[Operator]:
        return list(self._operators.values())

    def by_priority(self, priority: Priority) -> List[Operator]:
        return [op for op in self._operators.values() if op.priority is priority]

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._operators

    def __iter__(self) -> Iterator[Operator]:
        return iter(self._operators.values())

    def __len__(self) -> int:
        return len(self._operators)


# Shared default registry; frozen at import.
OPERATOR_REGISTRY = OperatorRegistry()


__all__ = [
    "Arity",
    "Priority",
    "Operator",
    "OperatorFunc",
    "BUILTIN_OPERATORS",
    "OperatorRegistry",
    "OPERATOR_REGISTRY",
]
