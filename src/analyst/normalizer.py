"""
Deal Normalizer - Combines classifier outputs into one Deal per feed item.

An item is dropped (None) when it lacks a title, link or publish date, when
the date is unparseable or older than the cutoff, or when it carries no
funding signal. Drops are not errors.
"""

import hashlib
import logging
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as date_parser

from ..common.url_utils import extract_host
from ..config.firms import Firm
from ..harvester.feed_parser import FeedItem
from .classifier import (
    infer_amount_usd_millions,
    infer_company,
    infer_location,
    infer_sector,
    infer_stage,
    is_funding_signal,
)
from .schemas import UNKNOWN_COMPANY, Deal, Sector, Stage

logger = logging.getLogger(__name__)

# Confidence scoring
BASE_CONFIDENCE = 0.35
STAGE_BONUS = 0.15
SECTOR_BONUS = 0.10
AMOUNT_BONUS = 0.20
COMPANY_BONUS = 0.10
MAX_CONFIDENCE = 0.98
BASE_LOCATION_CONFIDENCE = 0.5


def parse_publish_time(value: str) -> Optional[datetime]:
    """Parse an RSS pubDate (or any dateutil-readable string) as UTC."""
    if not value:
        return None
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError, TypeError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def make_deal_id(firm_id: str, link: str, published_at: datetime) -> str:
    """Stable id over firm_id|link|published_at."""
    key_data = f"{firm_id}|{link}|{published_at.isoformat()}"
    return f"deal_{hashlib.sha256(key_data.encode()).hexdigest()[:16]}"


def score_confidence(
    stage: Stage,
    sector: Sector,
    amount_usd_millions: Optional[float],
    company: str,
    location_boost: float,
) -> float:
    """0.35 base plus a bonus per corroborating signal, clamped to [0, 0.98]."""
    score = BASE_CONFIDENCE
    if stage != Stage.UNSPECIFIED:
        score += STAGE_BONUS
    if sector != Sector.OTHER:
        score += SECTOR_BONUS
    if amount_usd_millions is not None:
        score += AMOUNT_BONUS
    if company != UNKNOWN_COMPANY:
        score += COMPANY_BONUS
    score += location_boost
    return min(MAX_CONFIDENCE, max(0.0, score))


def normalize_deal(firm: Firm, item: FeedItem, cutoff: datetime) -> Optional[Deal]:
    """
    Build a Deal from one feed item, or None if the item doesn't qualify.

    Args:
        firm: Firm whose feed produced the item
        item: Cleaned feed entry
        cutoff: Oldest acceptable publish time (timezone-aware)

    Returns:
        Deal or None
    """
    if not item.title or not item.link or not item.publish_time:
        return None

    published_at = parse_publish_time(item.publish_time)
    if published_at is None:
        logger.debug(f"Unparseable publish time {item.publish_time!r} for {item.link}")
        return None
    if published_at < cutoff:
        return None

    if not is_funding_signal(f"{item.title} {item.description}"):
        return None

    text = f"{item.title} {item.description}"
    stage = infer_stage(text)
    sector = infer_sector(text)
    amount = infer_amount_usd_millions(text)
    company = infer_company(item.title, item.description, firm.name)
    location = infer_location(f"{item.title}. {item.description}", firm)

    confidence = score_confidence(stage, sector, amount, company, location.confidence_boost)

    return Deal(
        id=make_deal_id(firm.id, item.link, published_at),
        firm_id=firm.id,
        firm_name=firm.name,
        company=company,
        title=item.title,
        source_url=item.link,
        source_name=item.source_name or extract_host(item.link),
        published_at=published_at,
        stage=stage,
        sector=sector,
        amount_usd_millions=round(amount, 2) if amount is not None else None,
        confidence=round(confidence, 2),
        city=location.city,
        state=location.state,
        latitude=location.lat,
        longitude=location.lon,
        resolution_method=location.method,
        location_confidence=round(BASE_LOCATION_CONFIDENCE + location.confidence_boost, 2),
    )
