"""
Signal Classifier - Heuristic extractors for funding headlines.

Every extractor is a pure function over cleaned feed text. The ordered
extractors (stage, sector, company, location) are driven by rule tables that
are evaluated top to bottom, first match wins:

- is_funding_signal(): any funding keyword present
- infer_stage(): STAGE_RULES, Pre-Seed checked before Seed
- infer_sector(): SECTOR_RULES over the ten-sector taxonomy
- infer_amount_usd_millions(): "$<n><unit>", "<n><unit> USD", then a bare figure
- infer_company(): COMPANY_PATTERNS, rejecting names that contain the firm
- infer_location(): city/state -> "-based" -> city keyword -> firm HQ
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..config.firms import Firm
from .gazetteer import (
    CITIES_BY_NAME,
    US_STATES,
    CityPoint,
    lookup_by_city_name,
    lookup_city,
)
from .schemas import UNKNOWN_COMPANY, ResolutionMethod, Sector, Stage

logger = logging.getLogger(__name__)


# =============================================================================
# Funding signal
# =============================================================================
FUNDING_KEYWORDS = [
    "raise", "raised", "funding", "investment", "invests", "invested", "investor",
    "backs", "backed",
    "series a", "series b", "series c", "series d", "series e",
    "seed", "pre-seed",
    "venture round", "round",
    "announces financing", "announced financing", "growth round",
]


def is_funding_signal(text: str) -> bool:
    """Case-insensitive substring check against FUNDING_KEYWORDS."""
    lower = text.lower()
    return any(keyword in lower for keyword in FUNDING_KEYWORDS)


# =============================================================================
# Stage
# =============================================================================
# Pre-Seed must precede Seed: "pre-seed round" also contains "seed round"
STAGE_RULES: List[Tuple[Stage, Tuple[str, ...]]] = [
    (Stage.PRE_SEED, ("pre-seed", "pre seed")),
    (Stage.SEED, ("seed round", "seed financing", "seed funding", "angel round")),
    (Stage.SERIES_A, ("series a",)),
    (Stage.SERIES_B, ("series b",)),
    (Stage.SERIES_C, ("series c",)),
    (Stage.SERIES_D_PLUS, ("series d", "series e", "series f", "series g")),
    (Stage.GROWTH, ("growth round", "late-stage", "late stage", "private equity", "pre-ipo", "pre ipo")),
    (Stage.DEBT, ("venture debt", "debt financing")),
]


def infer_stage(text: str) -> Stage:
    lower = text.lower()
    for stage, patterns in STAGE_RULES:
        if any(pattern in lower for pattern in patterns):
            return stage
    return Stage.UNSPECIFIED


# =============================================================================
# Sector
# =============================================================================
SECTOR_RULES: List[Tuple[Sector, Tuple[str, ...]]] = [
    (Sector.AI_ML, ("ai", "artificial intelligence", "machine learning", "llm", "generative")),
    (Sector.CLIMATE_ENERGY, ("climate", "battery", "solar", "carbon", "grid", "fusion", "energy storage")),
    (Sector.BIOTECH_HEALTH, ("biotech", "genomics", "therapeutics", "medtech", "healthtech", "clinical")),
    (Sector.FINTECH, ("fintech", "payments", "banking", "lending", "credit", "insurtech")),
    (Sector.CYBERSECURITY, ("cybersecurity", "zero trust", "identity security", "threat", "endpoint security")),
    (Sector.DEVELOPER_TOOLS, ("developer", "devtools", "api platform", "open source", "software engineering")),
    (Sector.ENTERPRISE_SAAS, ("saas", "enterprise software", "workflow", "b2b software", "automation platform")),
    (Sector.HARDWARE, ("semiconductor", "chip", "robotics", "autonomous", "hardware", "aerospace")),
    (Sector.CONSUMER_COMMERCE, ("consumer", "marketplace", "ecommerce", "social platform", "creator economy")),
    (Sector.WEB3_CRYPTO, ("crypto", "blockchain", "web3", "digital asset", "defi")),
]

# Keywords this short only match as whole words (optional plural), so "ai"
# doesn't fire inside "raises"; longer ones match anywhere ("chipmaker").
SHORT_KEYWORD_MAX = 3


def _keyword_regex(keyword: str) -> str:
    if len(keyword) <= SHORT_KEYWORD_MAX:
        return r'\b' + re.escape(keyword) + r's?\b'
    return re.escape(keyword)


_SECTOR_PATTERNS: List[Tuple[Sector, re.Pattern]] = [
    (sector, re.compile('|'.join(_keyword_regex(kw) for kw in keywords), re.IGNORECASE))
    for sector, keywords in SECTOR_RULES
]


def infer_sector(text: str) -> Sector:
    for sector, pattern in _SECTOR_PATTERNS:
        if pattern.search(text):
            return sector
    return Sector.OTHER


# =============================================================================
# Amount
# =============================================================================
_NUMBER = r'([0-9][0-9,.]*)'
_UNIT = r'(billion|million|bn|mn|m|b|k)'

AMOUNT_PATTERNS = [
    re.compile(r'\$\s?' + _NUMBER + r'\s?' + _UNIT + r'?\b', re.IGNORECASE),
    re.compile(_NUMBER + r'\s?' + _UNIT + r'\s+usd\b', re.IGNORECASE),
    # A figure on its own, e.g. an already isolated amount field
    re.compile(r'^\s*' + _NUMBER + r'\s*$'),
]

BILLION_UNITS = {"billion", "bn", "b"}
MILLION_UNITS = {"million", "mn", "m"}
THOUSAND_UNITS = {"k"}

# Unit-less figures above this are more likely years, headcounts or raw dollars
MAX_UNITLESS_MILLIONS = 500


def infer_amount_usd_millions(text: str) -> Optional[float]:
    """
    Parse the first funding amount in the text, in USD millions.

    Known limitation: a unit-less figure <= 500 is read as millions even when
    it is a percentage, a headcount or an amount already in billions.
    """
    for pattern in AMOUNT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue

        try:
            number = float(match.group(1).replace(",", ""))
        except ValueError:
            continue

        groups = match.groups()
        unit = (groups[1] or "").lower() if len(groups) > 1 else ""
        if unit in BILLION_UNITS:
            return number * 1000
        if unit in MILLION_UNITS:
            return number
        if unit in THOUSAND_UNITS:
            return number / 1000

        if number <= MAX_UNITLESS_MILLIONS:
            return number

    return None


# =============================================================================
# Company
# =============================================================================
# Google News titles end with " - Publisher"
PUBLISHER_SUFFIX = re.compile(r'\s+-\s+[^-]{2,70}$')

COMPANY_PATTERNS = [
    re.compile(
        r'^(.*?)\s+(?:raises|raised|secures|secured|announces|announced|closes|closed|'
        r'lands|landed|nabs|bags|gets|wins)\b',
        re.IGNORECASE,
    ),
    re.compile(r"\b(?:backs|invests in|led|leads|co-leads|joins)\s+([A-Z][A-Za-z0-9&'\-. ]{1,60})"),
    re.compile(r"^([A-Z][A-Za-z0-9&'\-. ]{1,60})\s+(?:completes|launches|debuts)\b"),
]

LEGAL_SUFFIXES = re.compile(r'\b(?:inc\.?|ltd\.?|llc|corp\.?|company|co\.?|plc)(?=\W|$)', re.IGNORECASE)
EDGE_QUOTES = re.compile(r"""^[\s"'`]+|[\s"'`.,]+$""")

MIN_COMPANY_LENGTH = 2
MAX_COMPANY_LENGTH = 65


def normalize_company_name(value: Optional[str], firm_name: str) -> str:
    """Clean a captured name; "" means reject and try the next pattern."""
    if not value:
        return ""

    cleaned = LEGAL_SUFFIXES.sub("", value)
    cleaned = re.sub(r'\s+', ' ', cleaned)
    cleaned = EDGE_QUOTES.sub("", cleaned).strip()

    if len(cleaned) < MIN_COMPANY_LENGTH or len(cleaned) > MAX_COMPANY_LENGTH:
        return ""

    if firm_name and firm_name.lower() in cleaned.lower():
        return ""

    return cleaned


def infer_company(title: str, description: str, firm_name: str) -> str:
    cleaned_title = PUBLISHER_SUFFIX.sub("", title).strip()
    merged = f"{cleaned_title}. {description}"

    for pattern in COMPANY_PATTERNS:
        match = pattern.search(merged)
        if not match:
            continue
        candidate = normalize_company_name(match.group(1), firm_name)
        if candidate:
            return candidate

    return UNKNOWN_COMPANY


# =============================================================================
# Location
# =============================================================================
# Case-insensitive: "based in austin, tx" is still a city/state match. Extra
# leading words ("based in austin") are trimmed by _trailing_phrases().
_PLACE = r"\b([A-Z][A-Za-z]+(?:\s[A-Z][A-Za-z]+){0,2})"

CITY_STATE_PATTERN = re.compile(_PLACE + r',\s*(' + '|'.join(US_STATES) + r')\b', re.IGNORECASE)
BASED_PATTERN = re.compile(_PLACE + r'-based\b', re.IGNORECASE)

CITY_KEYWORD_PATTERNS: List[Tuple[CityPoint, re.Pattern]] = [
    (point, re.compile(r'\b' + re.escape(point.city.lower()) + r'\b'))
    for point in CITIES_BY_NAME
]


@dataclass(frozen=True)
class LocationResult:
    """Where a deal is placed and how much the placement is trusted."""
    city: str
    state: str
    lat: Optional[float]
    lon: Optional[float]
    method: ResolutionMethod
    confidence_boost: float

    @classmethod
    def from_point(cls, point: CityPoint, method: ResolutionMethod, boost: float) -> "LocationResult":
        return cls(point.city, point.state, point.lat, point.lon, method, boost)


def _trailing_phrases(phrase: str) -> List[str]:
    """"Backs San Francisco" -> ["Backs San Francisco", "San Francisco", "Francisco"]."""
    words = phrase.split()
    return [" ".join(words[i:]) for i in range(len(words))]


def _match_city_state(text: str) -> Optional[LocationResult]:
    for match in CITY_STATE_PATTERN.finditer(text):
        state = match.group(2)
        for phrase in _trailing_phrases(match.group(1)):
            point = lookup_city(phrase, state)
            if point:
                return LocationResult.from_point(point, ResolutionMethod.CITY_STATE_MATCH, 0.30)
    return None


def _match_based_phrase(text: str) -> Optional[LocationResult]:
    for match in BASED_PATTERN.finditer(text):
        for phrase in _trailing_phrases(match.group(1)):
            point = lookup_by_city_name(phrase)
            if point:
                return LocationResult.from_point(point, ResolutionMethod.BASED_PHRASE, 0.22)
    return None


def _match_city_keyword(text: str) -> Optional[LocationResult]:
    lower = text.lower()
    for point, pattern in CITY_KEYWORD_PATTERNS:
        if pattern.search(lower):
            return LocationResult.from_point(point, ResolutionMethod.CITY_KEYWORD, 0.18)
    return None


LOCATION_STRATEGIES: List[Callable[[str], Optional[LocationResult]]] = [
    _match_city_state,
    _match_based_phrase,
    _match_city_keyword,
]


def firm_hq_location(firm: Firm) -> LocationResult:
    """Firm headquarters, with coordinates only when the gazetteer knows the city."""
    point = lookup_city(firm.hq_city, firm.hq_state)
    if point:
        return LocationResult.from_point(point, ResolutionMethod.VC_HQ_FALLBACK, 0.06)
    return LocationResult(
        city=firm.hq_city,
        state=firm.hq_state,
        lat=None,
        lon=None,
        method=ResolutionMethod.VC_HQ_FALLBACK,
        confidence_boost=0.06,
    )


def infer_location(text: str, firm: Firm) -> LocationResult:
    """Run the strategies in order; the firm HQ fallback means this never returns None."""
    for strategy in LOCATION_STRATEGIES:
        result = strategy(text)
        if result:
            return result
    return firm_hq_location(firm)
