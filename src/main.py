"""
VC Flow Tracker - Command-line entry point.

Fetches recent funding news for each tracked VC firm, turns qualifying
headlines into deals, clusters them by location and writes one JSON payload.

Usage:
    python -m src.main --lookback 14 --per-vc 4 --demo-on-fail
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

from .archivist.storage import write_payload
from .config.firms import FirmRegistryError, load_firms
from .config.settings import Settings
from .harvester.orchestrator import run_pipeline

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build the VC funding flows dataset")
    parser.add_argument("--lookback", help="Lookback window in days (default 30)")
    parser.add_argument("--per-vc", help="Max deals kept per firm (default 6)")
    parser.add_argument("--vc-limit", help="Max firms processed (default 100)")
    parser.add_argument("--concurrency", help="Parallel feed fetches (default 6)")
    parser.add_argument(
        "--demo-on-fail",
        nargs="?",
        const="true",
        help="Use synthetic demo data when no live deals qualify",
    )
    parser.add_argument("--out", help="Output JSON path (default data/deals.json)")
    parser.add_argument("--firms", help="Firm registry JSON path (default data/vc_firms.json)")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Raw CLI strings go straight to Settings, which applies the fallback rules."""
    overrides: Dict[str, Any] = {
        "lookback_days": args.lookback,
        "per_firm_limit": args.per_vc,
        "firm_limit": args.vc_limit,
        "max_concurrent_feeds": args.concurrency,
        "demo_on_fail": args.demo_on_fail,
        "output_path": args.out,
        "firms_path": args.firms,
    }
    return Settings(**{key: value for key, value in overrides.items() if value is not None})


async def run(run_settings: Settings) -> int:
    firms = load_firms(run_settings.firms_path)

    payload = await run_pipeline(
        firms,
        lookback_days=run_settings.lookback_days,
        per_firm_limit=run_settings.per_firm_limit,
        firm_limit=run_settings.firm_limit,
        concurrency=run_settings.max_concurrent_feeds,
        demo_on_fail=run_settings.demo_on_fail,
        timeout=run_settings.feed_fetch_timeout,
    )
    out_path = write_payload(run_settings.output_path, payload)

    if payload.meta.note:
        logger.warning(payload.meta.note)

    print(
        f"Wrote {len(payload.deals)} deals ({len(payload.bubbles)} bubbles) "
        f"for {payload.configuration.firm_count} VCs to {out_path}"
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    run_settings = settings_from_args(args)

    logging.basicConfig(
        level=getattr(logging, run_settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        return asyncio.run(run(run_settings))
    except FirmRegistryError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
