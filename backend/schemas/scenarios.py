"""Pydantic schemas for the scenario library API."""
from pydantic import BaseModel


class ScenarioSummary(BaseModel):
    """Scenario in list responses (artifact omitted)."""

    id: str
    name: str
    filename: str
    description: str
    version: str
    duration: int
    tags: list[str]
    charger_count: int
    csms_endpoint: str
    created_at: str


class ScenarioDetail(ScenarioSummary):
    """Scenario with the rendered YAML artifact."""

    artifact: str
