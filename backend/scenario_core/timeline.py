"""Timeline events: add, edit, remove, templates, and time-ordered views."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Iterable, Mapping, Optional

from scenario_core.catalog import TimelineAction, get_action_info
from scenario_core.draft import ScenarioDraft, TimelineEvent, is_valid_target, new_id as _new_id
from utils.coercion import to_non_negative_int

LOG = logging.getLogger(__name__)

IdFactory = Callable[[], str]


@dataclass(frozen=True)
class TemplateEvent:
    """A timeline event without an id; one is generated when the template is applied."""
    at: int
    action: TimelineAction
    description: str
    targets: str = "all"
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TimelineTemplate:
    id: str
    name: str
    description: str
    events: tuple[TemplateEvent, ...]


TIMELINE_TEMPLATES: dict[str, TimelineTemplate] = {
    t.id: t
    for t in (
        TimelineTemplate(
            id="boot-sequence",
            name="Boot Sequence",
            description="Standard charger boot notification flow",
            events=(
                TemplateEvent(0, TimelineAction.create_chargers, "Create virtual chargers", params={"prefix": "LOAD"}),
                TemplateEvent(5, TimelineAction.start_flow, "Boot notification sequence", params={"flow": "boot_notification"}),
            ),
        ),
        TimelineTemplate(
            id="charging-cycle",
            name="Charging Cycle",
            description="Complete charging transaction flow",
            events=(
                TemplateEvent(30, TimelineAction.start_flow, "Start charging transactions", params={"flow": "charging_session"}),
            ),
        ),
        TimelineTemplate(
            id="heartbeat-flood",
            name="Heartbeat Flood",
            description="High-frequency heartbeat testing",
            events=(
                TemplateEvent(
                    60,
                    TimelineAction.start_flow,
                    "Rapid heartbeat messages",
                    params={"flow": "rapid_heartbeat", "interval": 1},
                ),
            ),
        ),
    )
}


def sorted_events(events: Iterable[TimelineEvent]) -> list[TimelineEvent]:
    """Events by time offset ascending; equal offsets keep insertion order."""
    return sorted(events, key=lambda e: e.at)


def new_event(
    *,
    at: Any = 0,
    action: Any = TimelineAction.start_flow,
    description: str = "",
    targets: str = "all",
    params: Optional[Mapping[str, Any]] = None,
    new_id: IdFactory = _new_id,
) -> Optional[TimelineEvent]:
    """Build an event with default-filled params. Unknown actions yield None."""
    info = get_action_info(action)
    if info is None:
        return None
    return TimelineEvent(
        id=new_id(),
        at=to_non_negative_int(at),
        action=info.action,
        description=description or "",
        targets=targets if is_valid_target(targets) else "all",
        params=info.build_params(params),
    )


def add_event(draft: ScenarioDraft, *, new_id: IdFactory = _new_id, **overrides: Any) -> ScenarioDraft:
    """Append a custom event (defaults: T+0, start_flow, all chargers)."""
    event = new_event(new_id=new_id, **overrides)
    if event is None:
        return draft
    return replace(draft, timeline=draft.timeline + (event,))


def _edit_event(event: TimelineEvent, changes: Mapping[str, Any]) -> TimelineEvent:
    updates: dict[str, Any] = {}
    if "at" in changes:
        updates["at"] = to_non_negative_int(changes["at"])
    if changes.get("description") is not None:
        updates["description"] = str(changes["description"])
    if changes.get("targets") is not None and is_valid_target(changes["targets"]):
        updates["targets"] = changes["targets"]

    params_in = changes.get("params")
    action_in = changes.get("action")
    if action_in is not None:
        info = get_action_info(action_in)
        if info is not None and info.action != event.action:
            # A different action starts from its own defaults.
            updates["action"] = info.action
            updates["params"] = info.build_params(params_in)
            params_in = None
    if params_in is not None:
        info = get_action_info(event.action)
        updates["params"] = info.build_params(params_in, base=event.params)
    return replace(event, **updates) if updates else event


def update_event(draft: ScenarioDraft, event_id: str, changes: Mapping[str, Any]) -> ScenarioDraft:
    """Partial edit of one event. Changing the action resets params to the new action's schema."""
    events = tuple(_edit_event(e, changes) if e.id == event_id else e for e in draft.timeline)
    return replace(draft, timeline=events)


def remove_event(draft: ScenarioDraft, event_id: str) -> ScenarioDraft:
    return replace(draft, timeline=tuple(e for e in draft.timeline if e.id != event_id))


def has_event(draft: ScenarioDraft, event_id: str) -> bool:
    return any(e.id == event_id for e in draft.timeline)


def apply_timeline_template(
    draft: ScenarioDraft,
    template_id: str,
    *,
    new_id: IdFactory = _new_id,
) -> ScenarioDraft:
    """
    Append a template's events, each with a fresh id. Existing events are kept,
    so the result has len(old) + len(template) events. Unknown templates are a no-op.
    """
    template = TIMELINE_TEMPLATES.get(template_id)
    if template is None:
        LOG.debug("Unknown timeline template ignored: %r", template_id)
        return draft
    added = []
    for item in template.events:
        event = new_event(
            at=item.at,
            action=item.action,
            description=item.description,
            targets=item.targets,
            params=item.params,
            new_id=new_id,
        )
        added.append(event)
    return replace(draft, timeline=draft.timeline + tuple(added))
