"""Pydantic schemas for the scenario builder API."""
from typing import Any, Literal, Union

from pydantic import BaseModel, Field

from scenario_core.catalog import ChaosKind, TimelineAction
from scenario_core.draft import TARGET_PATTERN, TIME_OF_DAY_PATTERN, LoadBalancingStrategy

# Numeric form fields accept typed text; the core coerces junk to 0.
NumericInput = Union[int, float, str]

Weekday = Literal["mon", "tue", "wed", "thu", "fri", "sat", "sun"]


class BasicUpdate(BaseModel):
    """Partial update of the basic info section. tags replaces the whole list."""

    name: str | None = None
    description: str | None = None
    version: str | None = None
    duration: NumericInput | None = None
    tags: list[str] | None = None


class TagCreate(BaseModel):
    tag: str


class LoadUpdate(BaseModel):
    """Partial update of the load testing section."""

    charger_count: NumericInput | None = None
    connectors: NumericInput | None = None
    charger_model: str | None = None
    charger_vendor: str | None = None
    ocpp_version: str | None = None
    csms_endpoint: str | None = None
    use_load_profile: bool | None = None
    ramp_up_rate: NumericInput | None = None
    ramp_up_duration: NumericInput | None = None
    steady_state_duration: NumericInput | None = None
    ramp_down_rate: NumericInput | None = None
    ramp_down_duration: NumericInput | None = None


class PowerUpdate(BaseModel):
    """Partial update of the power management section."""

    enabled: bool | None = None
    site_max_amperage: NumericInput | None = None
    charger_max_amperage: NumericInput | None = None
    smart_scheduling_enabled: bool | None = None
    peak_hours_start: str | None = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    peak_hours_end: str | None = Field(default=None, pattern=TIME_OF_DAY_PATTERN)
    load_balancing_strategy: LoadBalancingStrategy | None = None
    queue_management_enabled: bool | None = None


class TimeWindowIn(BaseModel):
    start: str = Field(pattern=TIME_OF_DAY_PATTERN)
    end: str = Field(pattern=TIME_OF_DAY_PATTERN)
    days: list[Weekday] = Field(default_factory=list)
    max_amperage: NumericInput | None = None


class PriorityCreate(BaseModel):
    name: str | None = None


class PriorityUpdate(BaseModel):
    """Partial update of a charging priority. time_windows replaces the whole list."""

    name: str | None = None
    priority: NumericInput | None = None
    max_amperage: NumericInput | None = None
    enabled: bool | None = None
    time_windows: list[TimeWindowIn] | None = None


class EventCreate(BaseModel):
    """New timeline event; omitted fields take the custom-event defaults."""

    at: NumericInput = 0
    action: TimelineAction = TimelineAction.start_flow
    description: str = ""
    targets: str = Field(default="all", pattern=TARGET_PATTERN)
    params: dict[str, Any] | None = None


class EventUpdate(BaseModel):
    """Partial update of a timeline event. A new action resets params to its defaults."""

    at: NumericInput | None = None
    action: TimelineAction | None = None
    description: str | None = None
    targets: str | None = Field(default=None, pattern=TARGET_PATTERN)
    params: dict[str, Any] | None = None


class ChaosToggle(BaseModel):
    enabled: bool


class StrategyCreate(BaseModel):
    kind: ChaosKind


class StrategyUpdate(BaseModel):
    """Partial update of a chaos strategy; params overlays the kind's parameters."""

    enabled: bool | None = None
    start_time: NumericInput | None = None
    duration: NumericInput | None = None
    target: str | None = Field(default=None, pattern=TARGET_PATTERN)
    params: dict[str, Any] | None = None


class StepState(BaseModel):
    """One builder step with its sidebar status."""

    index: int
    id: str
    title: str
    description: str
    status: Literal["current", "completed", "upcoming"]


class PowerExpectationResponse(BaseModel):
    charger_count: int
    charger_max_amperage: int
    site_max_amperage: int
    load_balancing_strategy: str
    total_demand: int
    is_over_capacity: bool
    expected_per_charger: int
    should_send_set_charging_profile: bool
    should_reject_new_sessions: bool
    load_balancing_required: bool
    expected_reduction_pct: float


class LoadSummaryResponse(BaseModel):
    total_connectors: int
    load_profile_duration: int
    peak_concurrent_chargers: int
    load_category: str
    load_profile_matches_duration: bool


class BuilderState(BaseModel):
    """Full view of a builder session: cursor, draft and everything derived from it."""

    session_id: str
    step: int
    current_step: str
    is_final_step: bool
    progress_pct: float
    steps: list[StepState]
    draft: dict[str, Any]
    power_expectation: PowerExpectationResponse
    load_summary: LoadSummaryResponse
    violations: list[str]
    warnings: list[str]
    can_export: bool


class PreviewResponse(BaseModel):
    """Live preview: always rendered, even for a draft that cannot be exported yet."""

    filename: str
    artifact: str
    violations: list[str]
    warnings: list[str]
    can_export: bool


class ExportResponse(BaseModel):
    id: str
    filename: str
    artifact: str


class ExportBlocked(BaseModel):
    """Detail body of a 422 export response."""

    message: str
    violations: list[str]
