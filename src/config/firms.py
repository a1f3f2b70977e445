"""
Firm Registry - The VC firms whose news feeds are tracked.

The registry is a JSON array of objects with id, name, hq_city and hq_state.
It is read once per run and treated as read-only afterwards.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)


class FirmRegistryError(Exception):
    """Raised when the firm registry is missing, empty or malformed."""
    pass


@dataclass(frozen=True)
class Firm:
    """A venture-capital firm and its headquarters hint."""
    id: str
    name: str
    hq_city: str = ""
    hq_state: str = ""


def firm_from_dict(entry: dict) -> Firm:
    """Build a Firm from one registry entry."""
    if not isinstance(entry, dict):
        raise FirmRegistryError(f"Registry entry is not an object: {entry!r}")

    firm_id = str(entry.get("id") or "").strip()
    name = str(entry.get("name") or "").strip()
    if not firm_id or not name:
        raise FirmRegistryError(f"Registry entry missing id or name: {entry!r}")

    return Firm(
        id=firm_id,
        name=name,
        hq_city=str(entry.get("hq_city") or "").strip(),
        hq_state=str(entry.get("hq_state") or "").strip().upper(),
    )


def parse_firms(payload) -> List[Firm]:
    """Validate decoded registry JSON. Empty or non-list payloads are fatal."""
    if not isinstance(payload, list) or not payload:
        raise FirmRegistryError("VC registry is empty or invalid.")
    return [firm_from_dict(entry) for entry in payload]


def load_firms(path: Union[str, Path]) -> List[Firm]:
    """
    Load the firm registry from a JSON file.

    Args:
        path: Location of the registry file

    Returns:
        Firms in registry order

    Raises:
        FirmRegistryError: If the file can't be read or holds no valid firms
    """
    registry_path = Path(path)
    try:
        raw = registry_path.read_text(encoding="utf-8")
    except OSError as e:
        raise FirmRegistryError(f"Cannot read VC registry {registry_path}: {e}") from e

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise FirmRegistryError(f"VC registry {registry_path} is not valid JSON: {e}") from e

    firms = parse_firms(payload)
    logger.info(f"Loaded {len(firms)} firms from {registry_path}")
    return firms
