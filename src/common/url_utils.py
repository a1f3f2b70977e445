"""
Shared URL helpers for feed queries and source attribution.
"""

from typing import Optional
from urllib.parse import urlencode, urlparse

GOOGLE_NEWS_RSS_SEARCH = "https://news.google.com/rss/search"

# Appended to the quoted firm name so the feed leans toward funding news
FUNDING_QUERY_SUFFIX = "startup (funding OR investment OR raises OR series OR seed) press release"

UNKNOWN_SOURCE = "Unknown source"


def build_feed_search_url(firm_name: str) -> str:
    """Build the Google News RSS search URL for one firm."""
    params = {
        "q": f'"{firm_name}" {FUNDING_QUERY_SUFFIX}',
        "hl": "en-US",
        "gl": "US",
        "ceid": "US:en",
    }
    return f"{GOOGLE_NEWS_RSS_SEARCH}?{urlencode(params)}"


def extract_host(url: Optional[str]) -> str:
    """
    Return the host of a URL without a leading "www.".

    Falls back to "Unknown source" when the URL has no parseable host.
    """
    if not url:
        return UNKNOWN_SOURCE
    try:
        host = urlparse(url).hostname
    except ValueError:
        return UNKNOWN_SOURCE
    if not host:
        return UNKNOWN_SOURCE
    if host.startswith("www."):
        host = host[4:]
    return host
