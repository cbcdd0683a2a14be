"""
Calculate an estimate from a JSON file and print the breakdown.

Useful for checking pricing changes against saved estimates without going
through the estimate editor.

Input file shape:
  {
    "projectAddress": "12 Elm St",          (optional, used by --validate)
    "pricing": {"laborRate": 55, ...},      (optional, merged over defaults)
    "rooms": [{"id": 1, "name": "Kitchen", "prepHours": 2, "services": [...]}]
  }

Usage (from functions/, or `paint-estimate` once installed):
  python -m scripts.calculate_estimate --input estimate.json
  python -m scripts.calculate_estimate --input estimate.json --validate --strict --out result.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from config.settings import settings
from services.estimate_calculator import calculate_estimate
from services.pricing_service import resolve_pricing
from utils.estimate_report import print_estimate_report
from validators.estimate_validator import validate_estimate_for_calculation

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_INVALID_ESTIMATE = 1
EXIT_BAD_INPUT = 2


def _configure_logging(level: str) -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _load_input(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("input must be a JSON object")
    if not isinstance(data.get("rooms"), list):
        raise ValueError("input must contain a 'rooms' list")
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Price a painting estimate from a JSON file")
    parser.add_argument("--input", required=True, help="Estimate JSON file (rooms, optional pricing)")
    parser.add_argument("--out", required=False, help="Write the JSON result here instead of stdout")
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Run completeness checks (address, rooms, services) before pricing",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="With --validate, report unsupported service types as issues",
    )
    parser.add_argument("--quiet", action="store_true", help="Skip the console breakdown report")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings.validate()
    _configure_logging(settings.log_level)

    try:
        data = _load_input(args.input)
    except (OSError, ValueError) as e:
        logger.error("estimate_input_unreadable", path=args.input, error=str(e))
        print(f"Cannot read {args.input}: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    try:
        if args.validate:
            validation = validate_estimate_for_calculation(
                {"projectAddress": data.get("projectAddress"), "rooms": data["rooms"]},
                strict_service_types=True if args.strict else None
            )
            if not validation.is_valid:
                for issue in validation.issues:
                    print(f"[{issue.code}] {issue.message}", file=sys.stderr)
                return EXIT_INVALID_ESTIMATE

        pricing = resolve_pricing(data.get("pricing"))
        result = calculate_estimate(data["rooms"], pricing)
    except PydanticValidationError as e:
        logger.error("estimate_input_invalid", path=args.input, error_count=e.error_count())
        print(f"Invalid estimate in {args.input}: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if not args.quiet:
        print_estimate_report(result, title=data.get("projectAddress") or "ESTIMATE", stream=sys.stderr)

    payload = json.dumps(result.to_dict(), indent=2)
    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(payload)
        logger.info("estimate_written", path=args.out, total=result.total)
    else:
        print(payload)

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
