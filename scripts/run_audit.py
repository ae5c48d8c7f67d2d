#!/usr/bin/env python
"""Run an audit against a gathered artifacts file.

The artifacts file is a JSON object with the artifacts the audit requires,
e.g. `traces` (keyed by pass name) and `TraceElements`.

Usage:
    python scripts/run_audit.py artifacts.json
    python scripts/run_audit.py artifacts.json --audit layout-shift-elements --json
"""

import argparse
import asyncio
import json
import sys

# Add project root to path
sys.path.insert(0, ".")


def print_result(result) -> None:
    """Print an audit result as a human-readable report."""
    print(f"\n{'=' * 60}")
    print(f"{result.title} ({result.id})")
    print(f"{'=' * 60}")

    if result.display_value:
        print(result.display_value)
    if result.score_display_mode == "notApplicable":
        print("Not applicable: no contributing elements found.")

    for metric, value in (result.metric_savings or {}).items():
        print(f"{metric}: {value:.3f}")

    if result.details.items:
        print()
        print(result.details.render_text())
    print()


async def main() -> int:
    from api.exceptions import ShiftscopeError
    from api.logging import setup_logging
    from auditor.artifacts import load_artifacts_file
    from auditor.runner import AUDITS, run_audit

    parser = argparse.ArgumentParser(description="Run an audit over gathered artifacts")
    parser.add_argument("artifacts", help="Path to the artifacts JSON file")
    parser.add_argument(
        "--audit",
        default="layout-shift-elements",
        choices=sorted(AUDITS),
        help="Audit id to run",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log audit progress")
    args = parser.parse_args()

    setup_logging(quiet=not args.verbose)

    try:
        artifacts = load_artifacts_file(args.artifacts)
        result = await run_audit(args.audit, artifacts)
    except ShiftscopeError as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
