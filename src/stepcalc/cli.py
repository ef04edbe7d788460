#!/usr/bin/env python3
"""
Evaluate an expression from the command line, or serve the HTTP endpoint.

Usage:
    python -m stepcalc.cli "2+3*4" [--stages] [--json]
    python -m stepcalc.cli --serve [--host HOST] [--port PORT] [--env-file FILE]
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from stepcalc.config import ServiceConfig
from stepcalc.core.errors import CalculatorError
from stepcalc.core.evaluator import evaluate
from stepcalc.core.tokens import Result
from stepcalc.utils.serialize import result_to_dict, stages_frame, steps_frame

logger = logging.getLogger(__name__)


def print_result(expression: str, result: Result, show_stages: bool = False) -> None:
    """Print the step table, optionally the stage tokens, and the value."""
    print("=" * 70)
    print(expression)
    print("=" * 70)

    steps = steps_frame(result)
    if steps.empty:
        print("(no operators applied)")
    else:
        print(steps.to_string(index=False))

    if show_stages:
        print()
        print(stages_frame(result).to_string(index=False))

    print(f"\n= {result.value}")


def serve(config: ServiceConfig) -> None:
    from stepcalc.api import create_app

    app = create_app(config)
    logger.info(f"Serving on http://{config.host}:{config.port}")
    app.run(host=config.host, port=config.port, debug=config.debug)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Evaluate a flat arithmetic expression and show every step"
    )
    parser.add_argument(
        "expression",
        nargs="?",
        help="Expression to evaluate, e.g. '2+3*4' or '?9'",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON",
    )
    parser.add_argument(
        "--stages",
        action="store_true",
        help="Also print the token sequence after each pass",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the HTTP endpoint instead of evaluating",
    )
    parser.add_argument("--host", default=None, help="Override STEPCALC_HOST")
    parser.add_argument("--port", type=int, default=None, help="Override STEPCALC_PORT")
    parser.add_argument("--env-file", default=None, help="Path to a .env file")
    parser.add_argument("--log-level", default=None, help="Override STEPCALC_LOG_LEVEL")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
    }
    try:
        config = ServiceConfig.from_env(args.env_file)
        # replace() reruns __post_init__, so overrides are validated too
        config = replace(config, **{k: v for k, v in overrides.items() if v is not None})
    except ValueError as e:
        parser.error(f"invalid configuration: {e}")

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.serve:
        serve(config)
        return 0

    if not args.expression:
        parser.error("an expression is required unless --serve is given")

    try:
        result = evaluate(args.expression)
    except CalculatorError as e:
        print(f"Error [{e.kind.value}]: {e.message}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result_to_dict(result), indent=2))
    else:
        print_result(args.expression, result, show_stages=args.stages)
    return 0


if __name__ == "__main__":
    sys.exit(main())
