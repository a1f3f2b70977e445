"""
Dedup & Aggregator - Merges firm results and clusters deals by location.

- dedupe_deals(): first occurrence per (firm_id, source_url, published_at),
  then newest first
- aggregate_bubbles(): groups deals that have coordinates by (city, state)
  and ranks groups by weighted score
"""

import logging
import math
from collections import Counter
from typing import Dict, Iterable, List, Tuple

from ..analyst.schemas import Deal, Stage
from .models import Bubble, RankedCount

logger = logging.getLogger(__name__)

STAGE_WEIGHTS: Dict[Stage, float] = {
    Stage.PRE_SEED: 1.0,
    Stage.SEED: 1.2,
    Stage.SERIES_A: 1.6,
    Stage.SERIES_B: 2.0,
    Stage.SERIES_C: 2.4,
    Stage.SERIES_D_PLUS: 2.8,
    Stage.GROWTH: 3.0,
    Stage.DEBT: 1.8,
    Stage.UNSPECIFIED: 1.0,
}

# Stands in for log10(amount + 1) when the amount is undisclosed
UNKNOWN_AMOUNT_SCORE = 0.6
DEFAULT_CONFIDENCE_SCORE = 0.5
TOP_N = 3


def dedup_key(deal: Deal) -> Tuple[str, str, str]:
    return (deal.firm_id, deal.source_url, deal.published_at.isoformat())


def dedupe_deals(deals: Iterable[Deal]) -> List[Deal]:
    """Keep the first deal per key in input order, then sort newest first."""
    seen = set()
    unique: List[Deal] = []
    for deal in deals:
        key = dedup_key(deal)
        if key in seen:
            continue
        seen.add(key)
        unique.append(deal)
    # sorted() is stable, so equal timestamps keep their input order
    return sorted(unique, key=lambda d: d.published_at, reverse=True)


def stage_weight(stage: Stage) -> float:
    return STAGE_WEIGHTS.get(stage, 1.0)


def score_deal(deal: Deal) -> float:
    """stage weight + log10(amount + 1) (0.6 if unknown) + confidence."""
    if deal.amount_usd_millions is not None:
        amount_score = math.log10(deal.amount_usd_millions + 1)
    else:
        amount_score = UNKNOWN_AMOUNT_SCORE
    confidence_score = deal.confidence or DEFAULT_CONFIDENCE_SCORE
    return stage_weight(deal.stage) + amount_score + confidence_score


def top_items(counts: Counter, n: int = TOP_N) -> List[RankedCount]:
    """Top n by count; ties keep first-seen order."""
    return [RankedCount(name=name, count=count) for name, count in counts.most_common(n)]


class _BubbleAccumulator:
    """Running totals for one (city, state) group."""

    def __init__(self, deal: Deal):
        self.city = deal.city
        self.state = deal.state
        self.latitude = deal.latitude
        self.longitude = deal.longitude
        self.deal_count = 0
        self.weighted_score = 0.0
        self.amount_total = 0.0
        self.latest_at = deal.published_at
        self.sector_counts: Counter = Counter()
        self.vc_counts: Counter = Counter()

    def add(self, deal: Deal):
        self.deal_count += 1
        self.weighted_score += score_deal(deal)
        if deal.amount_usd_millions is not None:
            self.amount_total += deal.amount_usd_millions
        if deal.published_at > self.latest_at:
            self.latest_at = deal.published_at
        self.sector_counts[deal.sector.value] += 1
        self.vc_counts[deal.firm_name] += 1

    def to_bubble(self) -> Bubble:
        return Bubble(
            key=f"{self.city},{self.state}",
            city=self.city,
            state=self.state,
            latitude=self.latitude,
            longitude=self.longitude,
            deal_count=self.deal_count,
            weighted_score=self.weighted_score,
            amount_usd_millions_total=self.amount_total,
            latest_at=self.latest_at,
            top_sectors=top_items(self.sector_counts),
            top_vcs=top_items(self.vc_counts),
        )


def aggregate_bubbles(deals: Iterable[Deal]) -> List[Bubble]:
    """
    Group deals with coordinates into location bubbles.

    Deals without coordinates are skipped here but stay in the deal list.

    Returns:
        Bubbles sorted by weighted_score, highest first
    """
    groups: Dict[Tuple[str, str], _BubbleAccumulator] = {}
    skipped = 0

    for deal in deals:
        if not deal.has_coordinates:
            skipped += 1
            continue
        key = (deal.city, deal.state)
        if key not in groups:
            groups[key] = _BubbleAccumulator(deal)
        groups[key].add(deal)

    bubbles = [acc.to_bubble() for acc in groups.values()]
    bubbles.sort(key=lambda b: b.weighted_score, reverse=True)

    logger.info(f"Aggregated {len(bubbles)} bubbles ({skipped} deals without coordinates)")
    return bubbles
