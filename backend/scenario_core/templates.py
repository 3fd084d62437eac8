"""Quick templates: named field overwrites applied to an open draft."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Optional

from scenario_core.catalog import ChaosKind
from scenario_core.chaos import new_strategy, set_chaos_enabled
from scenario_core.draft import ScenarioDraft, new_id as _new_id
from scenario_core.sections import update_basic, update_load, update_power
from scenario_core.steps import jump_to

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuickTemplate:
    """
    Overwrites only the fields it names; everything else in the draft is kept.
    chaos_strategies, when set, replaces the strategy list with fresh defaults
    of those kinds. step moves the cursor after applying.
    """
    id: str
    name: str
    description: str
    group: str  # "builder" | "basic" | "power"
    basic: Mapping[str, Any] = field(default_factory=dict)
    load: Mapping[str, Any] = field(default_factory=dict)
    power: Mapping[str, Any] = field(default_factory=dict)
    chaos_enabled: Optional[bool] = None
    chaos_strategies: Optional[tuple[ChaosKind, ...]] = None
    step: Optional[int] = None


_TEMPLATES = (
    # Builder sidebar
    QuickTemplate(
        id="high_load",
        name="High Load Test",
        description="Tests CSMS performance under heavy concurrent load",
        group="builder",
        basic={"name": "High Load CSMS Test", "description": "Tests CSMS performance under heavy concurrent load", "duration": 900},
        load={"charger_count": 500, "use_load_profile": True},
        chaos_enabled=True,
        step=1,
    ),
    QuickTemplate(
        id="connection_spike",
        name="Connection Spike",
        description="Tests CSMS handling of rapid connection spikes",
        group="builder",
        basic={"name": "Connection Spike Test", "description": "Tests CSMS handling of rapid connection spikes"},
        load={"charger_count": 1000, "ramp_up_rate": 50, "ramp_up_duration": 20},
        chaos_enabled=True,
        step=1,
    ),
    QuickTemplate(
        id="csms_over_capacity",
        name="CSMS Over-Capacity",
        description="Test CSMS SetChargingProfile responses when demand exceeds capacity",
        group="builder",
        basic={
            "name": "CSMS Over-Capacity Test",
            "description": "Test CSMS SetChargingProfile responses when demand exceeds capacity",
        },
        load={"charger_count": 20},
        power={"enabled": True, "site_max_amperage": 400, "charger_max_amperage": 32, "load_balancing_strategy": "proportional"},
        step=2,
    ),
    QuickTemplate(
        id="csms_validation",
        name="CSMS Validation",
        description="Validate CSMS OCPP 1.6J compliance and response timing",
        group="builder",
        basic={"name": "CSMS Response Validation", "description": "Validate CSMS OCPP 1.6J compliance and response timing"},
        load={"charger_count": 15},
        power={"enabled": True, "site_max_amperage": 300, "charger_max_amperage": 32, "load_balancing_strategy": "priority"},
        step=2,
    ),
    QuickTemplate(
        id="chaos_resilience",
        name="Chaos Testing",
        description="Tests CSMS resilience under network failures",
        group="builder",
        basic={"name": "Chaos Resilience Test", "description": "Tests CSMS resilience under network failures"},
        chaos_enabled=True,
        chaos_strategies=(ChaosKind.network_loss,),
        step=4,
    ),
    # Basic info presets
    QuickTemplate(
        id="peak_load",
        name="Peak Load Test",
        description="Tests CSMS performance under peak concurrent load",
        group="basic",
        basic={
            "name": "CSMS Peak Load Test",
            "description": "Tests CSMS performance under peak concurrent load",
            "duration": 900,
            "tags": ["load-test", "peak-load", "csms", "performance"],
        },
    ),
    QuickTemplate(
        id="connection_spike_resilience",
        name="Connection Spike",
        description="Tests CSMS handling of rapid connection spikes",
        group="basic",
        basic={
            "name": "Connection Spike Resilience",
            "description": "Tests CSMS handling of rapid connection spikes",
            "duration": 300,
            "tags": ["connection-spike", "resilience", "csms"],
        },
    ),
    QuickTemplate(
        id="transaction_recovery",
        name="Transaction Recovery",
        description="Tests transaction state recovery after failures",
        group="basic",
        basic={
            "name": "Transaction Recovery Test",
            "description": "Tests transaction state recovery after failures",
            "duration": 600,
            "tags": ["transaction", "recovery", "resilience"],
        },
    ),
    # Power management test scenarios
    QuickTemplate(
        id="over_capacity",
        name="Over-Capacity Load Balancing",
        description="Test CSMS when total demand exceeds site capacity",
        group="power",
        basic={"name": "Over-Capacity Load Balancing", "description": "Test CSMS when total demand exceeds site capacity"},
        load={"charger_count": 20},
        power={"enabled": True, "site_max_amperage": 400, "charger_max_amperage": 32},
    ),
    QuickTemplate(
        id="priority_allocation",
        name="Priority-Based Power Allocation",
        description="Test CSMS priority handling with SetChargingProfile",
        group="power",
        basic={"name": "Priority-Based Power Allocation", "description": "Test CSMS priority handling with SetChargingProfile"},
        load={"charger_count": 15},
        power={"enabled": True, "site_max_amperage": 300, "charger_max_amperage": 32},
    ),
    QuickTemplate(
        id="dynamic_rebalancing",
        name="Dynamic Power Rebalancing",
        description="Test CSMS reallocation when chargers disconnect",
        group="power",
        basic={"name": "Dynamic Power Rebalancing", "description": "Test CSMS reallocation when chargers disconnect"},
        load={"charger_count": 10},
        power={"enabled": True, "site_max_amperage": 200, "charger_max_amperage": 32},
    ),
)

QUICK_TEMPLATES: dict[str, QuickTemplate] = {t.id: t for t in _TEMPLATES}


def apply_quick_template(
    draft: ScenarioDraft,
    template_id: str,
    *,
    new_id: Callable[[], str] = _new_id,
) -> ScenarioDraft:
    """Apply a quick template by id. Unknown ids are a no-op."""
    template = QUICK_TEMPLATES.get(template_id)
    if template is None:
        LOG.debug("Unknown quick template ignored: %r", template_id)
        return draft

    if template.basic:
        draft = update_basic(draft, template.basic)
    if template.load:
        draft = update_load(draft, template.load)
    if template.power:
        draft = update_power(draft, template.power)
    if template.chaos_enabled is not None:
        draft = set_chaos_enabled(draft, template.chaos_enabled)
    if template.chaos_strategies is not None:
        strategies = tuple(new_strategy(kind, new_id=new_id) for kind in template.chaos_strategies)
        draft = replace(draft, chaos=replace(draft.chaos, strategies=strategies))
    if template.step is not None:
        draft = jump_to(draft, template.step)
    return draft
