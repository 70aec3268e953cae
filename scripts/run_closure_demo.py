#!/usr/bin/env python3
"""
Print the closure walkthrough: secret, counter, login tracker, discount
calculator, coupon tracker and the memoizing API cache.

The API cache section uses a simulated upstream that waits ``--delay``
seconds per uncached URL, so repeated URLs visibly come back at once.
"""

import argparse
import asyncio
import json
import sys
import os
from typing import List, Optional

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from service_fetch_cache.app.demo import SCENARIOS, run_scenarios  # noqa: E402
from shared.logging import configure_logging  # noqa: E402


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the closure walkthrough scenarios.")
    parser.add_argument(
        "--section",
        action="append",
        choices=sorted(SCENARIOS),
        help="Scenario to run (repeatable). Defaults to all, in walkthrough order.",
    )
    parser.add_argument("--delay", type=float, default=1.0, help="Simulated upstream delay in seconds")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--log-level", default="warning", help="Log level for cache events")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    if args.delay < 0:
        print("[closure-demo] --delay must be non-negative", file=sys.stderr)
        return 2

    configure_logging("closure_demo", args.log_level)
    sections = args.section or list(SCENARIOS)

    try:
        results = asyncio.run(run_scenarios(sections, delay=args.delay))
    except KeyboardInterrupt:
        return 130

    if args.json:
        print(json.dumps(results, indent=2, ensure_ascii=False))
        return 0

    for name, lines in results.items():
        print(f"== {name}")
        for line in lines:
            print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
