"""
Pipeline Orchestrator - One batch run from firm list to payload.

Handles:
- Truncating the registry to the configured firm limit
- Running the fetch pool and tallying per-firm outcomes
- Dedup, optional demo fallback and bubble aggregation
- Building the run meta (counts, note, capped error sample)

No state survives between runs.
"""

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

import httpx

from ..analyst.schemas import Deal
from ..archivist.aggregator import aggregate_bubbles, dedupe_deals
from ..archivist.models import FirmError, RunConfiguration, RunMeta, VcFlowsPayload
from ..config.firms import Firm, FirmRegistryError
from ..config.settings import settings
from .demo_fallback import build_demo_deals
from .fetch_pool import FirmFetchResult, fetch_all_firms

logger = logging.getLogger(__name__)

MAX_ERROR_SAMPLE = 12

NOTE_DEMO = (
    "Live scrape unavailable, using synthetic demo data. "
    "Disable demo mode for production signals."
)
NOTE_ALL_FAILED = "All source fetches failed. Check internet access or firewall rules, then rerun."
NOTE_NO_SIGNALS = (
    "No qualifying funding signals were found for the configured lookback window. "
    "Increase lookback days or rerun later."
)


def build_note(demo_mode: bool, requests_failed: int, firm_count: int, deal_count: int) -> str:
    """Operator-facing explanation; empty on a healthy run."""
    if demo_mode:
        return NOTE_DEMO
    if requests_failed == firm_count:
        return NOTE_ALL_FAILED
    if deal_count == 0:
        return NOTE_NO_SIGNALS
    return ""


def sample_errors(results: Sequence[FirmFetchResult], limit: int = MAX_ERROR_SAMPLE) -> List[FirmError]:
    """First `limit` failed firms, in firm order."""
    failed = [r for r in results if not r.ok]
    return [FirmError(firm_id=r.firm_id, error=r.error or "") for r in failed[:limit]]


async def run_pipeline(
    firms: Sequence[Firm],
    lookback_days: Optional[int] = None,
    per_firm_limit: Optional[int] = None,
    firm_limit: Optional[int] = None,
    concurrency: Optional[int] = None,
    demo_on_fail: Optional[bool] = None,
    timeout: Optional[float] = None,
    client: Optional[httpx.AsyncClient] = None,
    now: Optional[datetime] = None,
) -> VcFlowsPayload:
    """
    Run the whole pipeline for a firm list.

    Options default to the global settings.

    Args:
        firms: Firm registry, in order
        lookback_days: Items older than this are dropped
        per_firm_limit: Max deals kept per firm
        firm_limit: Only the first N firms are processed
        concurrency: Max firms fetched at once
        demo_on_fail: Substitute demo deals when the live path finds nothing
        timeout: Per-firm fetch timeout in seconds
        client: Optional shared HTTP client (tests inject a mock transport)
        now: Run timestamp (default: current UTC time)

    Returns:
        VcFlowsPayload ready to serialize

    Raises:
        FirmRegistryError: If the firm list is empty
    """
    lookback_days = lookback_days if lookback_days is not None else settings.lookback_days
    per_firm_limit = per_firm_limit if per_firm_limit is not None else settings.per_firm_limit
    firm_limit = firm_limit if firm_limit is not None else settings.firm_limit
    concurrency = max(1, concurrency if concurrency is not None else settings.max_concurrent_feeds)
    demo_on_fail = demo_on_fail if demo_on_fail is not None else settings.demo_on_fail

    if not firms:
        raise FirmRegistryError("VC registry is empty or invalid.")

    active_firms = list(firms[:firm_limit])
    generated_at = now or datetime.now(timezone.utc)
    cutoff = generated_at - timedelta(days=lookback_days)
    start_time = time.perf_counter()

    logger.info(
        f"Starting run for {len(active_firms)} firms "
        f"(lookback={lookback_days}d, per_firm={per_firm_limit}, concurrency={concurrency})"
    )

    results = await fetch_all_firms(
        active_firms,
        cutoff,
        per_firm_limit=per_firm_limit,
        concurrency=concurrency,
        timeout=timeout,
        client=client,
    )

    succeeded = sum(1 for r in results if r.ok)
    failed = len(results) - succeeded

    raw_deals = [deal for r in results for deal in r.deals]
    scraped_deals = dedupe_deals(raw_deals)

    deals: List[Deal] = scraped_deals
    demo_mode = False
    if demo_on_fail and not deals:
        logger.warning("Live path produced no deals, falling back to demo data")
        deals = build_demo_deals(active_firms, lookback_days, now=generated_at)
        demo_mode = True

    bubbles = aggregate_bubbles(deals)
    runtime_ms = int((time.perf_counter() - start_time) * 1000)

    meta = RunMeta(
        requests_succeeded=succeeded,
        requests_failed=failed,
        raw_deals=len(raw_deals),
        scraped_deals=len(scraped_deals),
        total_deals=len(deals),
        demo_mode=demo_mode,
        deals_with_coordinates=sum(1 for d in deals if d.has_coordinates),
        runtime_ms=runtime_ms,
        note=build_note(demo_mode, failed, len(active_firms), len(deals)),
        error_sample=sample_errors(results),
    )

    logger.info(
        f"METRICS run firms={len(active_firms)} "
        f"succeeded={succeeded} "
        f"failed={failed} "
        f"raw_deals={meta.raw_deals} "
        f"deals={meta.total_deals} "
        f"bubbles={len(bubbles)} "
        f"demo={demo_mode} "
        f"runtime_ms={runtime_ms}"
    )

    return VcFlowsPayload(
        generated_at=generated_at,
        lookback_days=lookback_days,
        configuration=RunConfiguration(
            firm_count=len(active_firms),
            per_firm_limit=per_firm_limit,
            concurrency=concurrency,
        ),
        meta=meta,
        deals=deals,
        bubbles=bubbles,
    )
