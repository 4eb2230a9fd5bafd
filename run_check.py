#!/usr/bin/env python3
"""
CLI script for checking LATAM reservations through the remote browser.

Usage: python run_check.py --code LA123ABC --last-name Silva [--code ... --last-name ...]
       [--timeout-ms 30000] [--ws wss://...]
"""

import argparse
import asyncio
import json
import sys

from dotenv import load_dotenv

load_dotenv()

from probe import NEEDS_REVIEW, ReservationProbe, build_check_request
from shared.config import get_config, resolve_browser_ws_endpoint
from shared.logging import configure_logging


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check LATAM reservation status")
    parser.add_argument(
        "--code", action="append", required=True, help="Purchase code (LA...); repeatable"
    )
    parser.add_argument(
        "--last-name",
        action="append",
        required=True,
        help="Passenger last name, one per --code",
    )
    parser.add_argument("--timeout-ms", type=int, default=None, help="Per-check timeout (ms)")
    parser.add_argument("--ws", default=None, help="Browser websocket URL (default: BROWSERLESS_WS)")
    args = parser.parse_args(argv)
    if len(args.code) != len(args.last_name):
        parser.error("each --code needs a matching --last-name")
    return args


async def main(argv=None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    args = _parse_args(argv)
    config = get_config()
    configure_logging(config.log_level, config.log_file, config.log_stdout)

    try:
        ws_endpoint = resolve_browser_ws_endpoint(
            args.ws or config.browserless_ws, config.browserless_token
        )
        requests = [
            build_check_request(code, last_name, args.timeout_ms or config.check_timeout_ms)
            for code, last_name in zip(args.code, args.last_name)
        ]
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    probe = ReservationProbe(ws_endpoint)
    results = await asyncio.gather(*(probe.check(request) for request in requests))

    print(
        json.dumps(
            [
                {"purchaseCode": request.purchase_code, **result.to_dict()}
                for request, result in zip(requests, results)
            ],
            indent=2,
            ensure_ascii=False,
        )
    )

    if any(result.status == NEEDS_REVIEW for result in results):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
