"""Command line entry point.

    python -m src.orchestrator                         # interactive session
    python -m src.orchestrator -e "x^2" -n 10 -b "[0,1]" -m simpson
    python -m src.orchestrator --request request.json --json
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from jsonschema import ValidationError as SchemaValidationError
from pydantic import ValidationError

from src.core.contracts import validate_integration_request, validate_integration_result
from src.core.domain.bounds import parse_bounds
from src.core.domain.method import IntegrationMethod
from src.core.domain.request import IntegrationRequest
from src.core.expression.errors import CompilationError
from src.orchestrator.config import OrchestratorConfig
from src.orchestrator.pipeline import IntegrationPipeline
from src.orchestrator.session import (
    EXIT_FAILURE,
    EXIT_OK,
    EXIT_USAGE,
    SIMPSON_INCREMENT_NOTICE,
    ConsoleSession,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="numint",
        description="Approximate the definite integral of a single-variable expression.",
    )
    parser.add_argument("-e", "--expression", help="Expression in the free variable, e.g. 'x^2 + 1'")
    parser.add_argument("-n", "--partitions", type=int, help="Number of partitions (positive integer)")
    parser.add_argument("-b", "--bounds", help="Domain bounds as [x0,x1]")
    parser.add_argument(
        "-m",
        "--method",
        help="left, right, midpoint, trapezoidal, simpson (or menu number 1-5)",
    )
    parser.add_argument("--request", type=Path, help="JSON file with an integration_request payload")
    parser.add_argument("--variable", help="Name of the free variable (default: x)")
    parser.add_argument("--json", action="store_true", help="Print the result as an integration_result JSON payload")
    parser.add_argument("--log-level", help="Logging level (default: WARNING)")
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_request(path: Path) -> IntegrationRequest:
    """
    Загрузка и валидация JSON запроса (JSON Schema, затем Pydantic).

    Raises:
        OSError, json.JSONDecodeError, jsonschema.ValidationError,
        pydantic.ValidationError
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    validate_integration_request(data)
    return IntegrationRequest.model_validate(data)


def _request_from_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> IntegrationRequest:
    missing = [
        flag
        for flag, value in (("--partitions", args.partitions), ("--bounds", args.bounds), ("--method", args.method))
        if value is None
    ]
    if missing:
        parser.error(f"--expression requires {', '.join(missing)}")

    return IntegrationRequest(
        expression=args.expression,
        partitions=args.partitions,
        bounds=parse_bounds(args.bounds),
        method=IntegrationMethod.parse(args.method),
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = OrchestratorConfig.from_env()
        overrides = {}
        if args.variable is not None:
            overrides["variable"] = args.variable
        if args.log_level is not None:
            overrides["log_level"] = args.log_level.upper()
        if overrides:
            config = replace(config, **overrides)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE

    _configure_logging(config.log_level)
    pipeline = IntegrationPipeline(config)

    if args.request is None and args.expression is None:
        return ConsoleSession(pipeline=pipeline).run()

    try:
        if args.request is not None:
            request = _load_request(args.request)
        else:
            request = _request_from_args(parser, args)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Cannot read request: {e}", file=sys.stderr)
        return EXIT_USAGE
    except SchemaValidationError as e:
        print(f"Invalid request: {e.message}", file=sys.stderr)
        return EXIT_USAGE
    except (ValidationError, ValueError) as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        function = pipeline.compile(request.expression)
    except CompilationError as e:
        print(f"Error compiling the equation: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if config.simpson_auto_increment and request.effective_partitions() != request.partitions:
        print(SIMPSON_INCREMENT_NOTICE, file=sys.stderr)

    try:
        result = pipeline.run(request, function=function)
    except Exception as e:
        logger.debug("Integration failed", exc_info=True)
        print(f"Error during integration: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.json:
        payload = result.to_payload()
        validate_integration_result(payload)
        print(json.dumps(payload))
    else:
        print(result.summary_line())
    return EXIT_OK
