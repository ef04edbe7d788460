"""
Utility modules for stepcalc.

Submodules:
    serialize: JSON-safe result payloads and pandas trace tables
"""

from stepcalc.utils.serialize import (
    normalize_number,
    token_to_dict,
    step_to_dict,
    stage_to_dict,
    result_to_dict,
    failure_to_dict,
    steps_frame,
    stages_frame,
)

__all__ = [
    # JSON payloads
    "normalize_number",
    "token_to_dict",
    "step_to_dict",
    "stage_to_dict",
    "result_to_dict",
    "failure_to_dict",
    # DataFrames
    "steps_frame",
    "stages_frame",
]
