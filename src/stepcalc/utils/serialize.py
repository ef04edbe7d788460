"""
Serialization utilities for evaluation results.

This module converts Results into JSON-safe dictionaries for the HTTP layer
and into pandas DataFrames for tabular "show your work" display. JSON has no
NaN or infinity, so non-finite floats are normalized to None.
"""

from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from stepcalc.core.tokens import Result, StageSnapshot, Step, Token

STEP_COLUMNS = ["step", "left", "symbol", "right", "result"]
STAGE_COLUMNS = ["stage", "kind", "text", "value", "start", "end"]


def normalize_number(x: Any) -> Optional[float]:
    """
    Normalize a numeric value to a JSON-safe float.

    Example:
        >>> normalize_number(np.float64(2.5))
        2.5
        >>> normalize_number(float("nan")) is None
        True
        >>> normalize_number(None) is None
        True
    """
    if x is None:
        return None
    if isinstance(x, (int, float, np.integer, np.floating)):
        value = float(x)
        return value if np.isfinite(value) else None
    return None


def token_to_dict(token: Token) -> Dict[str, Any]:
    return {
        "kind": token.kind.value,
        "text": token.text,
        "value": normalize_number(token.value),
        "start": token.start,
        "end": token.end,
    }


def step_to_dict(step: Step) -> Dict[str, Any]:
    return {
        "left": normalize_number(step.left),
        "right": normalize_number(step.right),
        "result": normalize_number(step.result),
        "symbol": step.symbol,
    }


def stage_to_dict(stage: StageSnapshot) -> Dict[str, Any]:
    return {
        "label": stage.label,
        "tokens": [token_to_dict(t) for t in stage.tokens],
    }


def result_to_dict(result: Result) -> Dict[str, Any]:
    """Success payload: value, steps in order, and every stage snapshot."""
    return {
        "success": True,
        "value": normalize_number(result.value),
        "steps": [step_to_dict(s) for s in result.steps],
        "stages": [stage_to_dict(s) for s in result.stages],
    }


def failure_to_dict(message: str, kind: Optional[str] = None) -> Dict[str, Any]:
    """Failure envelope: {success: false, message[, kind]}."""
    payload: Dict[str, Any] = {"success": False, "message": message}
    if kind is not None:
        payload["kind"] = kind
    return payload


def steps_frame(result: Result) -> pd.DataFrame:
    """One row per operator application, numbered from 1."""
    rows: List[Dict[str, Any]] = [
        {
            "step": i,
            "left": step.left,
            "symbol": step.symbol,
            "right": step.right,
            "result": step.result,
        }
        for i, step in enumerate(result.steps, start=1)
    ]
    return pd.DataFrame(rows, columns=STEP_COLUMNS)


def stages_frame(result: Result) -> pd.DataFrame:
    """Long format: one row per token per stage."""
    rows = [
        {
            "stage": stage.label,
            "kind": token.kind.value,
            "text": token.text,
            "value": token.value,
            "start": token.start,
            "end": token.end,
        }
        for stage in result.stages
        for token in stage.tokens
    ]
    return pd.DataFrame(rows, columns=STAGE_COLUMNS)
