"""
Output models - Bubbles and the run payload handed to downstream consumers.

Bubbles are derived from the deduplicated deal list every run and are never
stored on their own.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..analyst.schemas import Deal


class RankedCount(BaseModel):
    """A name with how many member deals carry it."""
    name: str
    count: int


class Bubble(BaseModel):
    """Location-keyed aggregate of deals."""
    key: str  # "City,ST"
    city: str
    state: str
    latitude: float
    longitude: float
    deal_count: int = 0
    weighted_score: float = 0.0
    amount_usd_millions_total: float = 0.0
    latest_at: datetime
    top_sectors: List[RankedCount] = Field(default_factory=list, max_length=3)
    top_vcs: List[RankedCount] = Field(default_factory=list, max_length=3)


class RunConfiguration(BaseModel):
    firm_count: int
    per_firm_limit: int
    concurrency: int


class FirmError(BaseModel):
    firm_id: str
    error: str


class RunMeta(BaseModel):
    """Run health counters and the operator-facing note."""
    requests_succeeded: int = 0
    requests_failed: int = 0
    raw_deals: int = 0
    scraped_deals: int = 0
    total_deals: int = 0
    demo_mode: bool = False
    deals_with_coordinates: int = 0
    runtime_ms: int = 0
    note: str = ""
    error_sample: List[FirmError] = Field(default_factory=list, max_length=12)


class VcFlowsPayload(BaseModel):
    """Everything one run produces."""
    generated_at: datetime
    lookback_days: int
    configuration: RunConfiguration
    meta: RunMeta
    deals: List[Deal] = Field(default_factory=list)
    bubbles: List[Bubble] = Field(default_factory=list)

    def find_bubble(self, city: str, state: str) -> Optional[Bubble]:
        for bubble in self.bubbles:
            if bubble.city == city and bubble.state == state:
                return bubble
        return None
