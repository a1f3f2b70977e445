from .feed_parser import FeedItem, parse_feed_items

__all__ = [
    "FeedItem",
    "parse_feed_items",
]
