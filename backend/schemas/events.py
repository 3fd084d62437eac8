"""Pydantic schema for event records reported by the simulator backend."""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, computed_field

from utils.event_payloads import decode_event_data


class EventRecord(BaseModel):
    """One event: charger/scenario activity with a JSON-encoded data field."""

    id: str
    type: str
    entity_id: Optional[str] = None
    level: str = "info"
    data: Optional[str] = None
    created_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def payload(self) -> dict[str, Any]:
        """Decoded data merged with the record's entity id and level."""
        return {**decode_event_data(self.data), "entity_id": self.entity_id, "level": self.level}
