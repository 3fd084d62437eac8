"""Derived metrics: expected CSMS behaviour under power limits and load-profile summary.

Pure functions recomputed on every read; nothing here is cached, so what the
builder displays and what gets exported always come from the same draft value.
"""
from dataclasses import dataclass
from typing import Any

from scenario_core.draft import LoadBalancingStrategy, ScenarioDraft
from utils.coercion import to_non_negative_int


@dataclass(frozen=True)
class PowerExpectation:
    charger_count: int
    charger_max_amperage: int
    site_max_amperage: int
    load_balancing_strategy: str
    total_demand: int
    is_over_capacity: bool
    expected_per_charger: int
    should_send_set_charging_profile: bool
    should_reject_new_sessions: bool

    @property
    def load_balancing_required(self) -> bool:
        return self.is_over_capacity

    @property
    def expected_reduction_pct(self) -> float:
        """Share of total demand the CSMS has to shed, one decimal; 0 within capacity."""
        if not self.is_over_capacity or self.total_demand == 0:
            return 0.0
        return round((self.total_demand - self.site_max_amperage) / self.total_demand * 100, 1)


def power_expectation(
    charger_count: Any,
    charger_max_amperage: Any,
    site_max_amperage: Any,
    load_balancing_strategy: Any = LoadBalancingStrategy.proportional,
) -> PowerExpectation:
    """
    Predict how the CSMS should allocate amperage.

    expected_per_charger = min(requested, floor(site / count)); with zero
    chargers nothing is allocated and the site is never over capacity.
    """
    count = to_non_negative_int(charger_count)
    requested = to_non_negative_int(charger_max_amperage)
    site = to_non_negative_int(site_max_amperage)
    strategy = getattr(load_balancing_strategy, "value", load_balancing_strategy)

    total_demand = count * requested
    if count == 0:
        is_over_capacity = False
        expected_per_charger = 0
    else:
        is_over_capacity = total_demand > site
        expected_per_charger = min(requested, site // count)

    return PowerExpectation(
        charger_count=count,
        charger_max_amperage=requested,
        site_max_amperage=site,
        load_balancing_strategy=str(strategy),
        total_demand=total_demand,
        is_over_capacity=is_over_capacity,
        expected_per_charger=expected_per_charger,
        should_send_set_charging_profile=is_over_capacity,
        should_reject_new_sessions=count * expected_per_charger >= site,
    )


def expectation_for(draft: ScenarioDraft) -> PowerExpectation:
    return power_expectation(
        draft.load.charger_count,
        draft.power.charger_max_amperage,
        draft.power.site_max_amperage,
        draft.power.load_balancing_strategy,
    )


@dataclass(frozen=True)
class LoadSummary:
    total_connectors: int
    load_profile_duration: int
    peak_concurrent_chargers: int
    load_category: str
    load_profile_matches_duration: bool


def load_category(charger_count: int) -> str:
    if charger_count > 1000:
        return "Extreme Load"
    if charger_count > 500:
        return "Heavy Load"
    if charger_count > 100:
        return "Medium Load"
    return "Light Load"


def load_summary(draft: ScenarioDraft) -> LoadSummary:
    load = draft.load
    profile_duration = load.ramp_up_duration + load.steady_state_duration + load.ramp_down_duration
    return LoadSummary(
        total_connectors=load.charger_count * load.connectors,
        load_profile_duration=profile_duration,
        peak_concurrent_chargers=min(load.charger_count, load.ramp_up_rate * load.ramp_up_duration),
        load_category=load_category(load.charger_count),
        load_profile_matches_duration=profile_duration == draft.basic.duration,
    )
