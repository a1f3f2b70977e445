"""
Feed Item Parser - Turns raw RSS/XML text into FeedItem records.

Each field is pulled independently and run through clean_text(), so a
missing element yields "" rather than dropping the whole item. Text that
feedparser can't read at all yields an empty list.
"""

import logging
from dataclasses import dataclass
from typing import List

import feedparser

from ..common.text import clean_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedItem:
    """Single entry from a firm's news feed."""
    title: str
    link: str
    publish_time: str  # Raw pubDate text, parsed later by the deal normalizer
    description: str
    source_name: str


def _entry_source(entry) -> str:
    source = entry.get("source")
    if not source:
        return ""
    # feedparser exposes <source> as a dict-like with the publisher name in "title"
    if hasattr(source, "get"):
        return source.get("title", "") or ""
    return str(source)


def _entry_to_item(entry) -> FeedItem:
    return FeedItem(
        title=clean_text(entry.get("title", "")),
        link=clean_text(entry.get("link", "")),
        publish_time=clean_text(entry.get("published", "") or entry.get("updated", "")),
        description=clean_text(entry.get("summary", "") or entry.get("description", "")),
        source_name=clean_text(_entry_source(entry)),
    )


def parse_feed_items(raw: str) -> List[FeedItem]:
    """
    Parse feed text into FeedItems, preserving feed order.

    Args:
        raw: Response body of an RSS/Atom feed

    Returns:
        List of FeedItem (empty for blank or unreadable input)
    """
    if not raw or not raw.strip():
        return []

    feed = feedparser.parse(raw)

    # Check for malformed feed - keep whatever entries were recovered
    if feed.bozo:
        if not feed.entries:
            logger.warning(f"Malformed feed with no entries: {feed.get('bozo_exception')}")
            return []
        logger.debug(f"Feed parsed with recoverable errors: {feed.get('bozo_exception')}")

    return [_entry_to_item(entry) for entry in feed.entries]
