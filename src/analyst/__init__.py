from .schemas import (
    Deal,
    Stage,
    Sector,
    ResolutionMethod,
    UNKNOWN_COMPANY,
)
from .classifier import (
    is_funding_signal,
    infer_stage,
    infer_sector,
    infer_amount_usd_millions,
    infer_company,
    infer_location,
    LocationResult,
)
from .normalizer import normalize_deal, parse_publish_time, make_deal_id

__all__ = [
    "Deal",
    "Stage",
    "Sector",
    "ResolutionMethod",
    "UNKNOWN_COMPANY",
    "is_funding_signal",
    "infer_stage",
    "infer_sector",
    "infer_amount_usd_millions",
    "infer_company",
    "infer_location",
    "LocationResult",
    "normalize_deal",
    "parse_publish_time",
    "make_deal_id",
]
