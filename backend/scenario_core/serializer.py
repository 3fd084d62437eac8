"""Render a scenario draft as the YAML artifact consumed by the execution engine.

render() is total and deterministic: it runs on incomplete drafts for live
preview, and the same draft value always yields byte-identical text.
"""
import re
from typing import Any

import yaml
from ocpp.v16.enums import Action

from scenario_core.catalog import TimelineAction
from scenario_core.chaos import enabled_strategies
from scenario_core.draft import ScenarioDraft, TimelineEvent
from scenario_core.metrics import PowerExpectation, expectation_for
from scenario_core.timeline import sorted_events

HEADER = "# Generated OCPP Chaos Simulator Scenario\n"

BOOT_PREFIX = "LOAD"
BOOT_FLOW_AT = 5
RESPONSE_TIMEOUT_S = 30
MAX_RESPONSE_TIME_MS = 5000
MAX_MEMORY_USAGE = "4GB"
RESULT_FORMATS = ("json", "csv", "performance_report")
RESULT_INCLUDE = ("connection_timeline", "message_throughput", "error_breakdown", "load_balancer_stats")


class _Quoted(str):
    """String scalar emitted double-quoted."""


class _FlowList(list):
    """Sequence emitted inline as [a, b]."""


class _ArtifactDumper(yaml.SafeDumper):
    def ignore_aliases(self, data):
        # No anchors or aliases in the artifact.
        return True

    def increase_indent(self, flow=False, indentless=False):
        # Indent block sequences under their key.
        return super().increase_indent(flow, False)


_ArtifactDumper.add_representer(
    _Quoted, lambda dumper, data: dumper.represent_scalar("tag:yaml.org,2002:str", str(data), style='"')
)
_ArtifactDumper.add_representer(
    _FlowList, lambda dumper, data: dumper.represent_sequence("tag:yaml.org,2002:seq", data, flow_style=True)
)


def _scalars(value: Any) -> Any:
    """Map plain values onto the artifact's scalar styles (strings quoted, enums by value)."""
    if isinstance(value, bool) or isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        return _Quoted(getattr(value, "value", value))
    if isinstance(value, dict):
        return {str(k): _scalars(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_scalars(v) for v in value]
    if value is None:
        return None
    return _Quoted(str(value))


def _bootstrap_timeline(draft: ScenarioDraft) -> list[dict[str, Any]]:
    boot = Action.BootNotification.value
    return [
        {
            "at": 0,
            "action": _Quoted(TimelineAction.create_chargers.value),
            "targets": _Quoted("all"),
            "params": {"count": draft.load.charger_count, "prefix": _Quoted(BOOT_PREFIX)},
        },
        {
            "at": BOOT_FLOW_AT,
            "action": _Quoted(TimelineAction.start_flow.value),
            "targets": _Quoted("all"),
            "flow": [
                {
                    "send": _Quoted(boot),
                    "params": {
                        "charge_point_model": _Quoted(draft.load.charger_model),
                        "charge_point_vendor": _Quoted(draft.load.charger_vendor),
                    },
                    "wait_for": _Quoted(f"{boot}Response"),
                }
            ],
        },
    ]


def _event_entry(event: TimelineEvent) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "at": event.at,
        "action": _Quoted(event.action.value),
        "targets": _Quoted(event.targets),
    }
    params = event.params.as_dict()
    if params:
        entry["params"] = _scalars(params)
    return entry


def _chaos_entries(draft: ScenarioDraft) -> list[dict[str, Any]]:
    if not draft.chaos.enabled:
        return []
    entries = []
    for strategy in enabled_strategies(draft):
        # The strategy's window duration takes precedence over a same-named kind param.
        params: dict[str, Any] = {"duration": strategy.duration}
        for key, value in strategy.params.as_dict().items():
            params.setdefault(key, value)
        entries.append(
            {
                "at": strategy.start_time,
                "action": _Quoted(TimelineAction.inject_chaos.value),
                "strategy": _Quoted(strategy.kind.value),
                "targets": _Quoted(strategy.target),
                "params": _scalars(params),
            }
        )
    return entries


def _validation_rules() -> list[dict[str, Any]]:
    return [
        {
            "message_type": _Quoted(Action.SetChargingProfile.value),
            "validate": _Quoted("chargingSchedule.chargingSchedulePeriod[0].limit <= expected_amperage_per_charger"),
            "required_when": _Quoted("total_demand > site_max_amperage"),
        },
        {
            "message_type": _Quoted(f"{Action.StartTransaction.value}Response"),
            "validate": _Quoted("idTagInfo.status === 'Blocked' when no_power_available"),
            "required_when": _Quoted("all_chargers_at_capacity"),
        },
        {
            "message_type": _Quoted(f"{Action.ChangeAvailability.value}Response"),
            "validate": _Quoted("status === 'Accepted' for load_shedding"),
            "required_when": _Quoted("emergency_load_reduction"),
        },
    ]


def _csms_validation(draft: ScenarioDraft, expectation: PowerExpectation) -> dict[str, Any]:
    return {
        "test_type": _Quoted("load_balancing_compliance"),
        "site_max_amperage": expectation.site_max_amperage,
        "expected_csms_strategy": _Quoted(expectation.load_balancing_strategy),
        "power_requests": {
            "per_charger_request": expectation.charger_max_amperage,
            "total_demand": expectation.total_demand,
            "expected_over_capacity": expectation.is_over_capacity,
        },
        "expected_csms_behavior": {
            "should_send_set_charging_profile": expectation.should_send_set_charging_profile,
            "should_reject_start_transaction": expectation.should_reject_new_sessions,
            "expected_amperage_per_charger": expectation.expected_per_charger,
            "load_balancing_required": expectation.load_balancing_required,
        },
        "validation_rules": _validation_rules(),
    }


def _load_profile(draft: ScenarioDraft) -> dict[str, Any]:
    load = draft.load
    return {
        "ramp_up": {"chargers_per_second": load.ramp_up_rate, "total_duration": load.ramp_up_duration},
        "steady_state": {"duration": load.steady_state_duration},
        "ramp_down": {"chargers_per_second": load.ramp_down_rate, "total_duration": load.ramp_down_duration},
    }


def _expectations(draft: ScenarioDraft, expectation: PowerExpectation) -> dict[str, Any]:
    power_on = draft.power.enabled
    csms_should: list[dict[str, Any]] = [{"respond_within_timeout": RESPONSE_TIMEOUT_S}]
    if power_on:
        csms_should += [
            {"send_set_charging_profile_when_over_capacity": True},
            {"respect_site_amperage_limits": True},
            {"implement_load_balancing_algorithm": True},
        ]
    if draft.chaos.enabled:
        csms_should.append({"handle_chaos_gracefully": True})
    csms_should.append({"maintain_ocpp_1_6j_compliance": True})

    out: dict[str, Any] = {"csms_should": csms_should}
    if power_on:
        out["load_balancing_compliance"] = {
            "max_total_amperage": expectation.site_max_amperage,
            "expected_per_charger_limit": expectation.expected_per_charger,
            "set_charging_profile_required": expectation.should_send_set_charging_profile,
            "load_balancing_strategy": _Quoted(expectation.load_balancing_strategy),
        }
    out["performance"] = {
        "max_response_time": MAX_RESPONSE_TIME_MS,
        "max_memory_usage": _Quoted(MAX_MEMORY_USAGE),
        "min_success_rate": 95.0 if draft.chaos.enabled else 99.5,
        "max_concurrent_connections": draft.load.charger_count,
    }
    return out


def _results(draft: ScenarioDraft) -> dict[str, Any]:
    include = [_Quoted(i) for i in RESULT_INCLUDE]
    if draft.chaos.enabled:
        include.append(_Quoted("chaos_injection_results"))
    return {
        "format": _FlowList(_Quoted(f) for f in RESULT_FORMATS),
        "include": include,
    }


def build_document(draft: ScenarioDraft) -> dict[str, Any]:
    """Artifact as an ordered mapping, before YAML emission."""
    basic, load = draft.basic, draft.load
    expectation = expectation_for(draft)

    doc: dict[str, Any] = {
        "name": _Quoted(basic.name),
        "description": _Quoted(basic.description),
        "version": _Quoted(basic.version),
        "duration": basic.duration,
        "tags": _FlowList(_Quoted(t) for t in basic.tags),
        "chargers": {
            "count": load.charger_count,
            "template": {
                "model": _Quoted(load.charger_model),
                "vendor": _Quoted(load.charger_vendor),
                "connectors": load.connectors,
                "ocpp_version": _Quoted(load.ocpp_version),
            },
        },
        "csms": {
            "endpoint": _Quoted(load.csms_endpoint),
            "protocol": _Quoted(f"ocpp{load.ocpp_version}"),
        },
    }
    if draft.power.enabled:
        doc["csms_validation"] = _csms_validation(draft, expectation)
    if load.use_load_profile:
        doc["load_profile"] = _load_profile(draft)

    if draft.timeline:
        timeline = [_event_entry(e) for e in sorted_events(draft.timeline)]
    else:
        timeline = _bootstrap_timeline(draft)
    doc["timeline"] = timeline + _chaos_entries(draft)

    doc["expectations"] = _expectations(draft, expectation)
    doc["results"] = _results(draft)
    return doc


def render(draft: ScenarioDraft) -> str:
    """Serialize the draft to scenario YAML."""
    body = yaml.dump(
        build_document(draft),
        Dumper=_ArtifactDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=4096,
    )
    return HEADER + body


def export_filename(name: str) -> str:
    """Download name: lower-cased scenario name, non-alphanumeric runs as '-', .yaml suffix."""
    slug = re.sub(r"[^a-z0-9]+", "-", (name or "").lower()).strip("-")
    return f"{slug or 'scenario'}.yaml"
