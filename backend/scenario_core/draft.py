"""Scenario draft: immutable value types for every builder section plus the step cursor."""
from __future__ import annotations

import re
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional

from scenario_core.catalog import ActionParams, ChaosKind, ChaosParams, TimelineAction
from utils.config import DEFAULT_CSMS_ENDPOINT


class LoadBalancingStrategy(str, Enum):
    """Allocation strategy the CSMS is expected to apply when over capacity."""
    proportional = "proportional"
    priority = "priority"
    round_robin = "round_robin"
    first_come_first_served = "first_come_first_served"


WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")

# all | random_N_percent | first_half | second_half | first_quarter | last_quarter
TARGET_PATTERN = r"^(all|random_(100|[1-9]\d?)_percent|first_half|second_half|first_quarter|last_quarter)$"
_TARGET_RE = re.compile(TARGET_PATTERN)

TIME_OF_DAY_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def is_valid_target(selector: str) -> bool:
    """True if selector names a charger subset the execution engine understands."""
    return bool(_TARGET_RE.match(selector or ""))


def new_id() -> str:
    """Fresh unique id for list items owned by the draft."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class BasicInfo:
    name: str = ""
    description: str = ""
    version: str = "1.0"
    tags: tuple[str, ...] = ("load-test", "csms")
    duration: int = 600  # seconds


@dataclass(frozen=True)
class LoadSettings:
    charger_count: int = 100
    connectors: int = 2
    charger_model: str = "FastCharger"
    charger_vendor: str = "TestCorp"
    ocpp_version: str = "1.6"
    csms_endpoint: str = DEFAULT_CSMS_ENDPOINT
    use_load_profile: bool = True
    ramp_up_rate: int = 10  # chargers per second
    ramp_up_duration: int = 60
    steady_state_duration: int = 480
    ramp_down_rate: int = 20
    ramp_down_duration: int = 30


@dataclass(frozen=True)
class TimeWindow:
    start: str
    end: str
    days: tuple[str, ...] = ()
    max_amperage: Optional[int] = None


@dataclass(frozen=True)
class ChargingPriority:
    id: str
    name: str
    priority: int
    max_amperage: int
    time_windows: tuple[TimeWindow, ...] = ()
    enabled: bool = True


@dataclass(frozen=True)
class PowerSettings:
    enabled: bool = False
    site_max_amperage: int = 400
    charger_max_amperage: int = 32  # requested per charger
    smart_scheduling_enabled: bool = False
    peak_hours_start: str = "17:00"
    peak_hours_end: str = "21:00"
    load_balancing_strategy: LoadBalancingStrategy = LoadBalancingStrategy.proportional
    queue_management_enabled: bool = False
    priorities: tuple[ChargingPriority, ...] = ()


@dataclass(frozen=True)
class TimelineEvent:
    id: str
    at: int
    action: TimelineAction
    description: str
    targets: str
    params: ActionParams


@dataclass(frozen=True)
class ChaosStrategy:
    id: str
    kind: ChaosKind
    enabled: bool
    start_time: int
    duration: int
    target: str
    params: ChaosParams


@dataclass(frozen=True)
class ChaosSettings:
    enabled: bool = False
    strategies: tuple[ChaosStrategy, ...] = ()


@dataclass(frozen=True)
class ScenarioDraft:
    """
    The scenario under construction. Never mutated: every edit returns a new
    value via dataclasses.replace. Timeline events are kept in insertion order.
    """
    basic: BasicInfo = field(default_factory=BasicInfo)
    load: LoadSettings = field(default_factory=LoadSettings)
    power: PowerSettings = field(default_factory=PowerSettings)
    timeline: tuple[TimelineEvent, ...] = ()
    chaos: ChaosSettings = field(default_factory=ChaosSettings)
    step: int = 0


def default_draft() -> ScenarioDraft:
    """Draft with the built-in defaults a freshly opened builder shows."""
    return ScenarioDraft(load=LoadSettings(csms_endpoint=DEFAULT_CSMS_ENDPOINT))


def _event_to_dict(event: TimelineEvent) -> dict[str, Any]:
    return {
        "id": event.id,
        "at": event.at,
        "action": event.action.value,
        "description": event.description,
        "targets": event.targets,
        "params": event.params.as_dict(),
    }


def _strategy_to_dict(strategy: ChaosStrategy) -> dict[str, Any]:
    return {
        "id": strategy.id,
        "kind": strategy.kind.value,
        "enabled": strategy.enabled,
        "start_time": strategy.start_time,
        "duration": strategy.duration,
        "target": strategy.target,
        "params": strategy.params.as_dict(),
    }


def draft_to_dict(draft: ScenarioDraft) -> dict[str, Any]:
    """JSON-ready view of the draft; parameter variants flatten to their own keys."""
    power = asdict(draft.power)
    power["load_balancing_strategy"] = draft.power.load_balancing_strategy.value
    return {
        "basic": asdict(draft.basic),
        "load": asdict(draft.load),
        "power": power,
        "timeline": [_event_to_dict(e) for e in draft.timeline],
        "chaos": {
            "enabled": draft.chaos.enabled,
            "strategies": [_strategy_to_dict(s) for s in draft.chaos.strategies],
        },
        "step": draft.step,
    }
