"""Decode the JSON payload carried by event records from the simulator backend."""
import json
import logging
from typing import Any, Optional

LOG = logging.getLogger(__name__)


def decode_event_data(data: Optional[str]) -> dict[str, Any]:
    """
    Parse an event's JSON text into a dict.

    Empty data gives {}. Text that is not valid JSON, or JSON that is not an
    object, is returned as {"raw": data} instead of raising.
    """
    if not data:
        return {}
    try:
        parsed = json.loads(data)
    except (TypeError, ValueError):
        LOG.warning("Event payload is not valid JSON; keeping raw text")
        return {"raw": data}
    if not isinstance(parsed, dict):
        LOG.warning("Event payload is JSON %s, not an object; keeping raw text", type(parsed).__name__)
        return {"raw": data}
    return parsed
