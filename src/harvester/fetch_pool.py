"""
Fetch Pool - Bounded-concurrency feed fetching, one task per firm.

Handles:
- At most `concurrency` firm tasks in flight; freed workers pull the next firm
- A task-level timeout per firm (only that firm's fetch is abandoned)
- Parsing and normalizing items in feed order up to the per-firm cap
- Error isolation (one bad firm doesn't affect the others)

Results come back in firm order regardless of completion order.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

import httpx

from ..analyst.normalizer import normalize_deal
from ..analyst.schemas import Deal
from ..common.http_client import create_feed_client
from ..common.url_utils import build_feed_search_url
from ..config.firms import Firm
from ..config.settings import settings
from .feed_parser import parse_feed_items

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class FeedFetchError(Exception):
    """Raised when a feed endpoint answers with a non-success status."""
    pass


class FetchStatus(str, Enum):
    OK = "ok"
    ERROR = "error"


@dataclass
class FirmFetchResult:
    """Outcome of one firm's task."""
    firm_id: str
    status: FetchStatus
    deals: List[Deal] = field(default_factory=list)
    error: Optional[str] = None
    items_found: int = 0
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status == FetchStatus.OK

    def log_metrics(self):
        """Log per-firm metrics."""
        logger.info(
            f"METRICS firm={self.firm_id} "
            f"status={self.status.value} "
            f"items_found={self.items_found} "
            f"deals={len(self.deals)} "
            f"duration_sec={self.duration_seconds:.2f}"
        )


async def run_pool(
    items: Sequence[T],
    limit: int,
    worker: Callable[[T, int], Awaitable[R]],
) -> List[R]:
    """
    Run worker(item, index) over items with at most `limit` running at once.

    Workers share one iterator over the items; the iterator is only advanced
    between awaits, so each item is handed out exactly once. Results land in
    the slot matching the item's original position.
    """
    if not items:
        return []

    results: List[Optional[R]] = [None] * len(items)
    cursor = iter(enumerate(items))

    async def run_one():
        for index, item in cursor:
            results[index] = await worker(item, index)

    runners = [run_one() for _ in range(min(max(1, limit), len(items)))]
    await asyncio.gather(*runners)
    return results


async def fetch_feed(client: httpx.AsyncClient, url: str) -> str:
    """GET a feed; any non-2xx status is a failure for the firm."""
    response = await client.get(url)
    if not response.is_success:
        raise FeedFetchError(f"HTTP {response.status_code}")
    return response.text


async def fetch_firm_deals(
    client: httpx.AsyncClient,
    firm: Firm,
    cutoff: datetime,
    per_firm_limit: int,
    timeout: float,
) -> FirmFetchResult:
    """
    Fetch, parse and normalize one firm's feed.

    Never raises: every failure becomes an error result for this firm.
    """
    start_time = time.perf_counter()
    url = build_feed_search_url(firm.name)

    try:
        raw = await asyncio.wait_for(fetch_feed(client, url), timeout=timeout)
        items = parse_feed_items(raw)

        deals: List[Deal] = []
        for item in items:
            deal = normalize_deal(firm, item, cutoff)
            if deal is None:
                continue
            deals.append(deal)
            if len(deals) >= per_firm_limit:
                break

        result = FirmFetchResult(
            firm_id=firm.id,
            status=FetchStatus.OK,
            deals=deals,
            items_found=len(items),
        )

    except asyncio.TimeoutError:
        logger.warning(f"Timeout fetching feed for {firm.name} after {timeout}s")
        result = FirmFetchResult(firm.id, FetchStatus.ERROR, error=f"Timeout after {timeout}s")

    except FeedFetchError as e:
        logger.warning(f"{e} fetching feed for {firm.name}")
        result = FirmFetchResult(firm.id, FetchStatus.ERROR, error=str(e))

    except httpx.HTTPError as e:
        logger.warning(f"HTTP error fetching feed for {firm.name}: {e}")
        result = FirmFetchResult(firm.id, FetchStatus.ERROR, error=str(e) or type(e).__name__)

    except Exception as e:
        # Parse/normalize bugs stay contained to this firm
        logger.error(f"Error processing feed for {firm.name}: {e}", exc_info=True)
        result = FirmFetchResult(firm.id, FetchStatus.ERROR, error=str(e) or type(e).__name__)

    result.duration_seconds = time.perf_counter() - start_time
    result.log_metrics()
    return result


async def fetch_all_firms(
    firms: Sequence[Firm],
    cutoff: datetime,
    per_firm_limit: Optional[int] = None,
    concurrency: Optional[int] = None,
    timeout: Optional[float] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> List[FirmFetchResult]:
    """
    Fetch every firm's feed through the bounded pool.

    Args:
        firms: Firms to process, in registry order
        cutoff: Oldest acceptable publish time
        per_firm_limit: Max deals kept per firm (default: settings.per_firm_limit)
        concurrency: Max firms in flight (default: settings.max_concurrent_feeds)
        timeout: Per-firm fetch timeout in seconds (default: settings.feed_fetch_timeout)
        client: Optional shared client; one is created (and closed) if omitted

    Returns:
        One FirmFetchResult per firm, in the same order as `firms`
    """
    per_firm_limit = per_firm_limit if per_firm_limit is not None else settings.per_firm_limit
    concurrency = max(1, concurrency if concurrency is not None else settings.max_concurrent_feeds)
    timeout = timeout or settings.feed_fetch_timeout

    logger.info(f"Fetching feeds for {len(firms)} firms (concurrency={concurrency})")

    async def run_with(active_client: httpx.AsyncClient) -> List[FirmFetchResult]:
        async def worker(firm: Firm, _index: int) -> FirmFetchResult:
            return await fetch_firm_deals(active_client, firm, cutoff, per_firm_limit, timeout)

        return await run_pool(firms, concurrency, worker)

    if client is not None:
        return await run_with(client)

    async with create_feed_client(timeout=timeout) as owned_client:
        return await run_with(owned_client)
