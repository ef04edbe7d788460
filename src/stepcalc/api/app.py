"""
HTTP endpoint for expression evaluation.

    GET|POST /api/eval?expression=2%2B3*4
        -> {"success": true, "value": 14.0, "steps": [...], "stages": [...]}
        -> {"success": false, "kind": "...", "message": "..."}
    GET /api/health

Failures are reported in the JSON envelope with HTTP 200, so clients only
need to look at `success`.
"""

import logging
from typing import Optional, Tuple

from flask import Flask, Response, jsonify, request

from stepcalc.config import ServiceConfig
from stepcalc.constants import MESSAGE_EMPTY_EXPRESSION, SERVICE_NAME
from stepcalc.core.errors import CalculatorError
from stepcalc.core.evaluator import CalculatorEvaluator
from stepcalc.core.operators import OPERATOR_REGISTRY, OperatorRegistry
from stepcalc.utils.serialize import failure_to_dict, result_to_dict

logger = logging.getLogger(__name__)


def _read_expression(param: str) -> Optional[str]:
    """Expression from query string or form, falling back to a JSON body."""
    expression = request.values.get(param)
    if expression is None:
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            value = body.get(param)
            expression = value if isinstance(value, str) else None
    return expression


def create_app(
    config: Optional[ServiceConfig] = None,
    registry: Optional[OperatorRegistry] = None,
) -> Flask:
    """
    Build the Flask application.

    Args:
        config: Service configuration. Defaults to ServiceConfig().
        registry: Operator registry shared by all requests. Defaults to the
            frozen OPERATOR_REGISTRY.

    Returns:
        Configured Flask app.
    """
    config = config or ServiceConfig()
    registry = registry if registry is not None else OPERATOR_REGISTRY

    app = Flask(SERVICE_NAME)
    app.config["STEPCALC"] = config

    @app.route("/api/eval", methods=["GET", "POST"])
    def evaluate_expression() -> Tuple[Response, int]:
        expression = _read_expression(config.expression_param)
        if not expression or not expression.strip():
            return jsonify(failure_to_dict(MESSAGE_EMPTY_EXPRESSION)), 200

        try:
            result = CalculatorEvaluator(expression, registry).evaluate()
        except CalculatorError as e:
            logger.info(f"Rejected {expression!r}: [{e.kind.value}] {e.message}")
            return jsonify(e.to_dict()), 200

        logger.debug(f"Evaluated {expression!r} = {result.value}")
        return jsonify(result_to_dict(result)), 200

    @app.route("/api/health", methods=["GET"])
    def health() -> Tuple[Response, int]:
        return jsonify({"status": "UP", "service": SERVICE_NAME}), 200

    return app
