"""
Tokenizer: expression text -> ordered Token sequence.

Characters are classified as numeric (decimal digit or decimal point) or
symbol. Each maximal numeric run becomes one NUMBER token; each symbol run is
decomposed into one or more OPERATOR tokens. Tokens are indexed in order of
appearance.
"""

import re
from itertools import groupby
from typing import List, Optional

from stepcalc.constants import DECIMAL_POINT
from stepcalc.core.errors import MalformedNumberError
from stepcalc.core.operators import OPERATOR_REGISTRY, OperatorRegistry
from stepcalc.core.tokens import Token

WHITESPACE_PATTERN = re.compile(r"\s+")
LITERAL_PATTERN = re.compile(r"[0-9.]+")


def strip_whitespace(expression: str) -> str:
    """Remove every whitespace character, including inner ones."""
    return WHITESPACE_PATTERN.sub("", expression)


def is_numeric_char(ch: str) -> bool:
    return ch.isdecimal() or ch == DECIMAL_POINT


def parse_number(text: str) -> float:
    """
    Parse a numeric run.

    Raises:
        MalformedNumberError: If the run is not a valid literal (e.g. "1..2").
    """
    if not LITERAL_PATTERN.fullmatch(text):
        # other Unicode digits are classified as numeric but never parse
        raise MalformedNumberError(text)
    try:
        return float(text)
    except ValueError:
        raise MalformedNumberError(text) from None


def split_symbols(run: str, registry: OperatorRegistry) -> List[str]:
    """
    Decompose a run of symbol characters into operator symbols.

    The whole run is tried first. Otherwise characters are accumulated until
    the prefix is a known symbol, which is emitted before accumulation
    restarts. A remainder that never matches is returned as one (unknown)
    symbol for the reducer to reject.

    Example:
        >>> split_symbols("+-", OPERATOR_REGISTRY)
        ['+', '-']
        >>> split_symbols("*~", OPERATOR_REGISTRY)
        ['*', '~']
    """
    if registry.is_valid_symbol(run):
        return [run]

    symbols: List[str] = []
    pending = ""
    for ch in run:
        pending += ch
        if registry.is_valid_symbol(pending):
            symbols.append(pending)
            pending = ""
    if pending:
        symbols.append(pending)
    return symbols


def tokenize(expression: str, registry: Optional[OperatorRegistry] = None) -> List[Token]:
    """
    Convert an expression into its Token sequence.

    Args:
        expression: Raw expression text. Whitespace is ignored.
        registry: Operator registry used to split symbol runs.
            Defaults to the shared OPERATOR_REGISTRY.

    Returns:
        Tokens ordered by index; empty for blank input.

    Raises:
        MalformedNumberError: If a numeric run does not parse.
    """
    registry = registry if registry is not None else OPERATOR_REGISTRY
    text = strip_whitespace(expression)

    tokens: List[Token] = []
    index = 0
    for numeric, chars in groupby(text, key=is_numeric_char):
        run = "".join(chars)
        if numeric:
            tokens.append(Token.number(run, parse_number(run), index))
            index += 1
            continue
        for symbol in split_symbols(run, registry):
            tokens.append(Token.operator(symbol, index))
            index += 1
    return tokens


__all__ = [
    "strip_whitespace",
    "is_numeric_char",
    "parse_number",
    "split_symbols",
    "tokenize",
]
