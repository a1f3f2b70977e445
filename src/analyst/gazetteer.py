"""
Location Gazetteer - Known US startup hubs with coordinates.

Static, process-wide data. Lookups are by (city, state) or by city name alone;
CITIES_BY_NAME is ordered longest name first so multi-word cities win over
shorter names they contain.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class CityPoint:
    """A gazetteer entry."""
    city: str
    state: str
    lat: float
    lon: float


US_STATES = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA", "HI", "ID", "IL", "IN", "IA",
    "KS", "KY", "LA", "ME", "MD", "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC", "SD", "TN", "TX", "UT", "VT",
    "VA", "WA", "WV", "WI", "WY", "DC",
)

CITY_COORDINATES: Tuple[CityPoint, ...] = (
    CityPoint("San Francisco", "CA", 37.7749, -122.4194),
    CityPoint("Palo Alto", "CA", 37.4419, -122.1430),
    CityPoint("Menlo Park", "CA", 37.4530, -122.1817),
    CityPoint("Redwood City", "CA", 37.4852, -122.2364),
    CityPoint("Cambridge", "MA", 42.3736, -71.1097),
    CityPoint("Boston", "MA", 42.3601, -71.0589),
    CityPoint("New York", "NY", 40.7128, -74.0060),
    CityPoint("Seattle", "WA", 47.6062, -122.3321),
    CityPoint("Santa Monica", "CA", 34.0195, -118.4912),
    CityPoint("Foster City", "CA", 37.5585, -122.2711),
    CityPoint("Westport", "CT", 41.1415, -73.3579),
    CityPoint("San Mateo", "CA", 37.5630, -122.3255),
    CityPoint("Austin", "TX", 30.2672, -97.7431),
    CityPoint("Los Angeles", "CA", 34.0522, -118.2437),
    CityPoint("Waltham", "MA", 42.3765, -71.2356),
    CityPoint("Boulder", "CO", 40.0150, -105.2705),
    CityPoint("Washington", "DC", 38.9072, -77.0369),
    CityPoint("Alexandria", "VA", 38.8048, -77.0469),
    CityPoint("Santa Clara", "CA", 37.3541, -121.9552),
    CityPoint("San Diego", "CA", 32.7157, -117.1611),
    CityPoint("San Jose", "CA", 37.3382, -121.8863),
    CityPoint("Mountain View", "CA", 37.3861, -122.0839),
    CityPoint("Redmond", "WA", 47.6739, -122.1215),
    CityPoint("Oakland", "CA", 37.8044, -122.2712),
    CityPoint("Pleasanton", "CA", 37.6624, -121.8747),
    CityPoint("Salt Lake City", "UT", 40.7608, -111.8910),
    CityPoint("Chicago", "IL", 41.8781, -87.6298),
    CityPoint("Miami", "FL", 25.7617, -80.1918),
    CityPoint("Atlanta", "GA", 33.7490, -84.3880),
    CityPoint("Denver", "CO", 39.7392, -104.9903),
    CityPoint("Phoenix", "AZ", 33.4484, -112.0740),
    CityPoint("Dallas", "TX", 32.7767, -96.7970),
    CityPoint("Houston", "TX", 29.7604, -95.3698),
    CityPoint("Raleigh", "NC", 35.7796, -78.6382),
    CityPoint("Durham", "NC", 35.9940, -78.8986),
    CityPoint("Nashville", "TN", 36.1627, -86.7816),
    CityPoint("Pittsburgh", "PA", 40.4406, -79.9959),
    CityPoint("Philadelphia", "PA", 39.9526, -75.1652),
    CityPoint("Portland", "OR", 45.5152, -122.6784),
    CityPoint("Minneapolis", "MN", 44.9778, -93.2650),
    CityPoint("Detroit", "MI", 42.3314, -83.0458),
    CityPoint("Columbus", "OH", 39.9612, -82.9988),
    CityPoint("Cleveland", "OH", 41.4993, -81.6944),
    CityPoint("Baltimore", "MD", 39.2904, -76.6122),
    CityPoint("Richmond", "VA", 37.5407, -77.4360),
    CityPoint("Madison", "WI", 43.0731, -89.4012),
    CityPoint("Ann Arbor", "MI", 42.2808, -83.7430),
    CityPoint("Tampa", "FL", 27.9506, -82.4572),
    CityPoint("Orlando", "FL", 28.5383, -81.3792),
    CityPoint("Charlotte", "NC", 35.2271, -80.8431),
    CityPoint("Arlington", "VA", 38.8816, -77.0910),
    CityPoint("Irvine", "CA", 33.6846, -117.8265),
)

CITY_MAP: Dict[Tuple[str, str], CityPoint] = {
    (point.city.lower(), point.state): point for point in CITY_COORDINATES
}

# Stable sort keeps gazetteer order among equal-length names
CITIES_BY_NAME: List[CityPoint] = sorted(CITY_COORDINATES, key=lambda p: len(p.city), reverse=True)


def lookup_city(city: str, state: str) -> Optional[CityPoint]:
    """Exact (city, state) lookup. City is case-insensitive, state is a 2-letter code."""
    if not city or not state:
        return None
    return CITY_MAP.get((city.strip().lower(), state.strip().upper()))


def lookup_by_city_name(city: str) -> Optional[CityPoint]:
    """State-agnostic lookup by name; the first (longest-first) match wins."""
    if not city:
        return None
    key = city.strip().lower()
    for point in CITIES_BY_NAME:
        if point.city.lower() == key:
            return point
    return None
