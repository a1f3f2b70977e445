"""Dedup, aggregation and payload output."""

from .models import (
    Bubble,
    RankedCount,
    RunConfiguration,
    RunMeta,
    FirmError,
    VcFlowsPayload,
)
from .aggregator import dedupe_deals, aggregate_bubbles, score_deal, STAGE_WEIGHTS
from .storage import write_payload, read_payload

__all__ = [
    "Bubble",
    "RankedCount",
    "RunConfiguration",
    "RunMeta",
    "FirmError",
    "VcFlowsPayload",
    "dedupe_deals",
    "aggregate_bubbles",
    "score_deal",
    "STAGE_WEIGHTS",
    "write_payload",
    "read_payload",
]
