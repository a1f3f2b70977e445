"""
Shared HTTP Client Configuration.

Provides the async HTTP client used for feed fetching and the User-Agent
string that identifies the tracker to feed providers.

Usage:
    from src.common.http_client import create_feed_client

    async with create_feed_client() as client:
        response = await client.get(url)
"""

import httpx
from typing import Optional

from ..config.settings import settings


# =============================================================================
# User-Agent Constants
# =============================================================================

# Bot identifier - feed endpoints accept identified bots
USER_AGENT_BOT = "VCFlowTracker/1.0 (+https://example.local)"


# =============================================================================
# HTTP Client Factory
# =============================================================================

def create_feed_client(
    user_agent: str = USER_AGENT_BOT,
    timeout: Optional[float] = None,
    max_connections: Optional[int] = None,
    max_keepalive: Optional[int] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create the async HTTP client shared by all feed fetches in a run.

    Args:
        user_agent: User-Agent string
        timeout: Request timeout in seconds (default: settings.feed_fetch_timeout)
        max_connections: Maximum concurrent connections
        max_keepalive: Maximum keepalive connections
        transport: Optional transport override (tests pass httpx.MockTransport)

    Returns:
        Configured httpx.AsyncClient
    """
    return httpx.AsyncClient(
        timeout=timeout or settings.feed_fetch_timeout,
        headers={"User-Agent": user_agent},
        limits=httpx.Limits(
            max_connections=max_connections or settings.max_connections,
            max_keepalive_connections=max_keepalive or settings.max_keepalive,
        ),
        follow_redirects=True,
        transport=transport,
    )
