"""HTTP transport for the evaluator."""

from stepcalc.api.app import create_app

__all__ = ["create_app"]
