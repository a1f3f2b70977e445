"""
Common utilities and shared modules.
"""

from .http_client import create_feed_client, USER_AGENT_BOT
from .text import clean_text
from .url_utils import build_feed_search_url, extract_host

__all__ = [
    # HTTP client utilities
    "create_feed_client",
    "USER_AGENT_BOT",
    # Text and URL helpers
    "clean_text",
    "build_feed_search_url",
    "extract_host",
]
