"""
Pydantic schemas for extracted funding deals.

A Deal is built once per qualifying feed item and never mutated afterwards.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_COMPANY = "Unknown"


class Stage(str, Enum):
    """Funding round categories."""
    PRE_SEED = "Pre-Seed"
    SEED = "Seed"
    SERIES_A = "Series A"
    SERIES_B = "Series B"
    SERIES_C = "Series C"
    SERIES_D_PLUS = "Series D+"
    GROWTH = "Growth"
    DEBT = "Debt"
    UNSPECIFIED = "Unspecified"


class Sector(str, Enum):
    """Fixed industry taxonomy."""
    AI_ML = "AI & ML"
    CLIMATE_ENERGY = "Climate & Energy"
    BIOTECH_HEALTH = "Biotech & Health"
    FINTECH = "Fintech"
    CYBERSECURITY = "Cybersecurity"
    DEVELOPER_TOOLS = "Developer Tools"
    ENTERPRISE_SAAS = "Enterprise SaaS"
    HARDWARE = "Semis, Robotics & Hardware"
    CONSUMER_COMMERCE = "Consumer & Commerce"
    WEB3_CRYPTO = "Web3 & Crypto"
    OTHER = "Other"


class ResolutionMethod(str, Enum):
    """Which location strategy placed the deal."""
    CITY_STATE_MATCH = "city_state_match"
    BASED_PHRASE = "based_phrase"
    CITY_KEYWORD = "city_keyword"
    VC_HQ_FALLBACK = "vc_hq_fallback"
    DEMO = "demo"


class Deal(BaseModel):
    """One funding event attributed to one firm."""

    model_config = ConfigDict(frozen=True)

    # Identity
    id: str
    firm_id: str
    firm_name: str

    # Content
    company: str = UNKNOWN_COMPANY
    title: str
    source_url: str
    source_name: str
    published_at: datetime

    # Classification
    stage: Stage = Stage.UNSPECIFIED
    sector: Sector = Sector.OTHER
    amount_usd_millions: Optional[float] = Field(default=None, ge=0)
    confidence: float = Field(ge=0.0, le=0.98)

    # Location
    city: str
    state: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    resolution_method: ResolutionMethod
    location_confidence: float = Field(ge=0.0, le=1.0)

    @field_validator("published_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are taken as UTC so sorting never mixes tz-aware and naive."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def location_key(self) -> str:
        return f"{self.city},{self.state}"
