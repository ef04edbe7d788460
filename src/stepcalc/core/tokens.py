"""
Value types produced during one evaluation.

Token spans live in the sequential token-index space: the n-th recognized
token has index n, regardless of how many characters it covers. Merging
tokens never needs character offsets, only the min start and max end of the
constituents.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple


class TokenKind(Enum):
    NUMBER = "number"
    OPERATOR = "operator"


@dataclass(frozen=True)
class Token:
    """A numeric literal or operator symbol with its index span."""

    kind: TokenKind
    text: str
    start: int
    end: int
    value: Optional[float] = None  # None for operator tokens

    @classmethod
    def number(cls, text: str, value: float, start: int, end: Optional[int] = None) -> "Token":
        return cls(TokenKind.NUMBER, text, start, start if end is None else end, value)

    @classmethod
    def operator(cls, text: str, index: int) -> "Token":
        return cls(TokenKind.OPERATOR, text, index, index)

    @property
    def is_number(self) -> bool:
        return self.kind is TokenKind.NUMBER

    @property
    def is_operator(self) -> bool:
        return self.kind is TokenKind.OPERATOR

    def indices(self) -> range:
        return range(self.start, self.end + 1)

    def overlaps(self, other: "Token") -> bool:
        return self.start <= other.end and other.start <= self.end


@dataclass(frozen=True)
class Step:
    """One operator application. `left` is None when there was no left operand."""

    left: Optional[float]
    right: float
    result: float
    symbol: str

    def __str__(self) -> str:
        """Trace line, e.g. "step;type=*;pr=3.000;ne=4.000;r=12.000"."""
        left = "-" if self.left is None else f"{self.left:.3f}"
        return (
            f"step;type={self.symbol};pr={left};"
            f"ne={self.right:.3f};r={self.result:.3f}"
        )


@dataclass(frozen=True)
class StageSnapshot:
    """Token sequence after tokenization or after one precedence pass."""

    label: str
    tokens: Tuple[Token, ...]

    @classmethod
    def capture(cls, label: str, tokens: Sequence[Token]) -> "StageSnapshot":
        return cls(label, tuple(tokens))


@dataclass(frozen=True)
class Result:
    """Final value plus the full trace of one successful evaluation."""

    steps: Tuple[Step, ...]
    value: float
    stages: Tuple[StageSnapshot, ...]

    def stage(self, label: str) -> StageSnapshot:
        """
        Get a snapshot by label.

        Raises:
            KeyError: If no stage has that label.
        """
        for snapshot in self.stages:
            if snapshot.label == label:
                return snapshot
        raise KeyError(f"No stage labelled '{label}'")


__all__ = ["TokenKind", "Token", "Step", "StageSnapshot", "Result"]
