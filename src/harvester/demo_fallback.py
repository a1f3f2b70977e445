"""
Demo Fallback - Deterministic synthetic deals for when every live fetch fails.

Only used when demo_on_fail is enabled and the live path produced zero deals.
Every deal is tagged with ResolutionMethod.DEMO so consumers can flag it.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from ..analyst.gazetteer import CITY_COORDINATES
from ..analyst.schemas import Deal, ResolutionMethod, Sector, Stage
from ..config.firms import Firm

logger = logging.getLogger(__name__)

DEMO_SOURCE_NAME = "Demo dataset"
DEMO_CONFIDENCE = 0.62
DEMO_LOCATION_CONFIDENCE = 0.6
MIN_DEMO_DEALS = 40
MAX_DEMO_DEALS = 200

DEMO_HUBS = CITY_COORDINATES[:20]

# Sectors in rule-table order; Other is never generated
DEMO_SECTORS: List[Sector] = [sector for sector in Sector if sector != Sector.OTHER]

DEMO_STAGES: List[Stage] = [
    Stage.SEED,
    Stage.SERIES_A,
    Stage.SERIES_B,
    Stage.SERIES_C,
    Stage.GROWTH,
]

# Amount range per stage, USD millions (inclusive)
AMOUNT_RANGES: Dict[Stage, Tuple[int, int]] = {
    Stage.SEED: (2, 15),
    Stage.SERIES_A: (10, 45),
    Stage.SERIES_B: (30, 120),
    Stage.SERIES_C: (80, 300),
    Stage.GROWTH: (200, 900),
}

NAME_PREFIXES = [
    "Vector", "Nimbus", "Atlas", "Axiom", "Flux", "Forge", "Pulse", "Helix", "Cinder", "Quanta",
    "Summit", "Catalyst", "Nova", "Titan", "Signal", "Northstar", "Cipher", "Vertex", "Linear", "Foundry",
]

NAME_SUFFIXES = [
    "Labs", "Systems", "Compute", "Dynamics", "Stack", "Health", "Robotics", "Networks", "Cloud", "Data",
    "Security", "Bio", "Works", "Fabric", "Intelligence", "Energy", "Automation", "Platforms", "OS", "Markets",
]


def demo_deal_count(firm_count: int) -> int:
    """Two per firm, clamped to [40, 200]."""
    return max(MIN_DEMO_DEALS, min(MAX_DEMO_DEALS, firm_count * 2))


def _demo_company(i: int) -> str:
    prefix = NAME_PREFIXES[(i * 3) % len(NAME_PREFIXES)]
    suffix = NAME_SUFFIXES[(i * 5 + i // 4) % len(NAME_SUFFIXES)]
    return f"{prefix} {suffix}"


def _demo_amount(stage: Stage, i: int) -> int:
    low, high = AMOUNT_RANGES[stage]
    return low + ((i * 17) % (high - low + 1))


def build_demo_deals(
    firms: Sequence[Firm],
    lookback_days: int,
    now: Optional[datetime] = None,
) -> List[Deal]:
    """
    Synthesize a deterministic deal set spread across the first 20 hubs.

    Args:
        firms: Firms to attribute deals to, round-robin
        lookback_days: Publish times are spread over max(lookback_days, 7) days
        now: Run timestamp (default: current UTC time)

    Returns:
        Deals sorted newest first
    """
    if not firms:
        return []

    now = now or datetime.now(timezone.utc)
    spread_days = max(lookback_days, 7)
    count = demo_deal_count(len(firms))

    deals: List[Deal] = []
    for i in range(count):
        firm = firms[i % len(firms)]
        hub = DEMO_HUBS[(i * 7) % len(DEMO_HUBS)]
        stage = DEMO_STAGES[(i * 3) % len(DEMO_STAGES)]
        sector = DEMO_SECTORS[(i * 5) % len(DEMO_SECTORS)]
        amount = _demo_amount(stage, i)
        company = _demo_company(i)
        sector_phrase = sector.value.lower().replace("&", "and")
        published_at = now - timedelta(days=i % spread_days, milliseconds=(i * 3791) % 86000000)

        deals.append(Deal(
            id=f"demo_{i}_{firm.id}",
            firm_id=firm.id,
            firm_name=firm.name,
            company=company,
            title=f"{company} raises ${amount}M {stage.value} round to scale {sector_phrase} platform",
            source_url="#",
            source_name=DEMO_SOURCE_NAME,
            published_at=published_at,
            stage=stage,
            sector=sector,
            amount_usd_millions=float(amount),
            confidence=DEMO_CONFIDENCE,
            city=hub.city,
            state=hub.state,
            latitude=hub.lat,
            longitude=hub.lon,
            resolution_method=ResolutionMethod.DEMO,
            location_confidence=DEMO_LOCATION_CONFIDENCE,
        ))

    logger.info(f"Built {len(deals)} demo deals for {len(firms)} firms")
    return sorted(deals, key=lambda d: d.published_at, reverse=True)
