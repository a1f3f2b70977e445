"""
Payload storage - Writes a run's payload as pretty-printed JSON.
"""

import logging
from pathlib import Path
from typing import Union

from .models import VcFlowsPayload

logger = logging.getLogger(__name__)


def write_payload(path: Union[str, Path], payload: VcFlowsPayload) -> Path:
    """Write the payload, creating parent directories as needed."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(payload.model_dump_json(indent=2), encoding="utf-8")
    logger.info(f"Saved {len(payload.deals)} deals to {out_path}")
    return out_path


def read_payload(path: Union[str, Path]) -> VcFlowsPayload:
    """Load a previously written payload."""
    return VcFlowsPayload.model_validate_json(Path(path).read_text(encoding="utf-8"))
