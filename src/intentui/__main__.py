"""Command-line entry point: ``python -m intentui "Build a dashboard"``."""

import argparse
import sys
from pathlib import Path

from intentui.agents import PlanValidator
from intentui.core import (
    IntentUIError,
    JSONParseError,
    ValidationError,
    configure_logging,
    decode_json_value,
    get_settings,
    safe_json_dumps,
)
from intentui.handlers import UIPipeline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="intentui", description="Turn an instruction into UI code")
    parser.add_argument("intent", help="Free-text instruction")
    parser.add_argument("--plan", type=Path, help="JSON file holding the previous plan")
    parser.add_argument("--code", type=Path, help="Previously generated code to patch in place")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    try:
        previous_plan = PlanValidator.parse(decode_json_value(args.plan.read_text())) if args.plan else None
        previous_code = args.code.read_text() if args.code else None
        result = UIPipeline(settings).run(args.intent, previous_plan, previous_code)
    except (IntentUIError, JSONParseError, ValidationError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(safe_json_dumps(result.model_dump(mode="json"), indent=2))
    else:
        print(result.code)
        print(result.explanation, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
