"""Export gate and advisory warnings for a scenario draft."""
from scenario_core.chaos import enabled_strategies
from scenario_core.draft import ScenarioDraft
from scenario_core.metrics import load_summary
from scenario_core.timeline import sorted_events


def validate_for_export(draft: ScenarioDraft) -> list[str]:
    """
    Minimum required fields for export, in a fixed order. An empty list means
    export is permitted. Violations are data, never exceptions.
    """
    issues: list[str] = []
    if not draft.basic.name.strip():
        issues.append("Scenario name is required")
    if draft.load.charger_count <= 0:
        issues.append("Charger count must be greater than 0")
    if draft.basic.duration <= 0:
        issues.append("Duration must be greater than 0")
    if not draft.load.csms_endpoint.strip():
        issues.append("CSMS endpoint is required")
    return issues


def can_export(draft: ScenarioDraft) -> bool:
    return not validate_for_export(draft)


def advisory_warnings(draft: ScenarioDraft) -> list[str]:
    """
    Consistency hints shown next to the sections; they never block export.
    Chaos windows are not compared with the scenario duration, but a kind
    param named duration that the window overrides in the artifact is flagged.
    """
    warnings: list[str] = []
    if draft.load.use_load_profile:
        summary = load_summary(draft)
        if not summary.load_profile_matches_duration:
            warnings.append(
                f"Load profile duration ({summary.load_profile_duration}s) doesn't match "
                f"total scenario duration ({draft.basic.duration}s)"
            )
    for event in sorted_events(draft.timeline):
        if event.at > draft.basic.duration:
            warnings.append(
                f"Timeline event '{event.action.value}' at {event.at}s is after the "
                f"scenario ends ({draft.basic.duration}s)"
            )
    if draft.chaos.enabled:
        for strategy in enabled_strategies(draft):
            param = strategy.params.as_dict().get("duration")
            if param is not None and param != strategy.duration:
                warnings.append(
                    f"Chaos strategy '{strategy.kind.value}' parameter duration ({param}s) is "
                    f"overridden by its window duration ({strategy.duration}s)"
                )
    return warnings
