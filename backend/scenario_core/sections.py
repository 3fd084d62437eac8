"""Section edits: each takes the current draft and returns a new one. Unknown keys are ignored."""
from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any, Callable, Iterable, Mapping, Optional

from scenario_core.draft import (
    ChargingPriority,
    LoadBalancingStrategy,
    ScenarioDraft,
    TimeWindow,
    WEEKDAYS,
    new_id as _new_id,
)
from utils.coercion import coerce_like, to_non_negative_int

LOG = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def _apply(section: Any, changes: Mapping[str, Any], skip: Iterable[str] = ()) -> Any:
    """Coerce each known, non-skipped key onto the section; returns a new section value."""
    skip = set(skip)
    updates: dict[str, Any] = {}
    for f in fields(section):
        if f.name in skip or f.name not in changes:
            continue
        updates[f.name] = coerce_like(getattr(section, f.name), changes[f.name])
    return replace(section, **updates) if updates else section


def normalize_tags(tags: Iterable[str]) -> tuple[str, ...]:
    """Trim, drop empties and keep the first occurrence of each tag."""
    seen: list[str] = []
    for tag in tags:
        tag = str(tag).strip()
        if tag and tag not in seen:
            seen.append(tag)
    return tuple(seen)


# ---------------------------------------------------------------------------
# Basic info
# ---------------------------------------------------------------------------

def update_basic(draft: ScenarioDraft, changes: Mapping[str, Any]) -> ScenarioDraft:
    """Edit name, description, version, duration and (as a whole list) tags."""
    basic = _apply(draft.basic, changes, skip=("tags",))
    if changes.get("tags") is not None:
        basic = replace(basic, tags=normalize_tags(changes["tags"]))
    return replace(draft, basic=basic)


def add_tag(draft: ScenarioDraft, tag: str) -> ScenarioDraft:
    """Append a tag; empty or duplicate tags leave the draft unchanged."""
    tag = (tag or "").strip()
    if not tag or tag in draft.basic.tags:
        return draft
    return replace(draft, basic=replace(draft.basic, tags=draft.basic.tags + (tag,)))


def remove_tag(draft: ScenarioDraft, tag: str) -> ScenarioDraft:
    tags = tuple(t for t in draft.basic.tags if t != tag)
    return replace(draft, basic=replace(draft.basic, tags=tags))


# ---------------------------------------------------------------------------
# Load testing
# ---------------------------------------------------------------------------

def update_load(draft: ScenarioDraft, changes: Mapping[str, Any]) -> ScenarioDraft:
    """Edit charger template, endpoint and load profile. Connectors are clamped to 1 or 2."""
    load = _apply(draft.load, changes)
    if load.connectors not in (1, 2):
        load = replace(load, connectors=min(2, max(1, load.connectors)))
    return replace(draft, load=load)


# ---------------------------------------------------------------------------
# Power management
# ---------------------------------------------------------------------------

def update_power(draft: ScenarioDraft, changes: Mapping[str, Any]) -> ScenarioDraft:
    """Edit site limits, scheduling and strategy. An unknown strategy name is ignored."""
    power = _apply(draft.power, changes, skip=("load_balancing_strategy", "priorities"))
    strategy = changes.get("load_balancing_strategy")
    if strategy is not None:
        try:
            power = replace(power, load_balancing_strategy=LoadBalancingStrategy(strategy))
        except ValueError:
            LOG.debug("Unknown load balancing strategy ignored: %r", strategy)
    return replace(draft, power=power)


def _time_window(raw: Any) -> TimeWindow:
    if isinstance(raw, TimeWindow):
        return raw
    days = tuple(d for d in (raw.get("days") or ()) if d in WEEKDAYS)
    max_amperage = raw.get("max_amperage")
    return TimeWindow(
        start=str(raw.get("start", "00:00")),
        end=str(raw.get("end", "23:59")),
        days=days,
        max_amperage=None if max_amperage is None else to_non_negative_int(max_amperage),
    )


def add_priority(
    draft: ScenarioDraft,
    name: Optional[str] = None,
    *,
    new_id: IdFactory = _new_id,
) -> ScenarioDraft:
    """Append a charging priority ranked after the existing ones."""
    rank = len(draft.power.priorities) + 1
    priority = ChargingPriority(
        id=new_id(),
        name=(name or "").strip() or f"Priority {rank}",
        priority=rank,
        max_amperage=draft.power.charger_max_amperage,
    )
    power = replace(draft.power, priorities=draft.power.priorities + (priority,))
    return replace(draft, power=power)


def update_priority(draft: ScenarioDraft, priority_id: str, changes: Mapping[str, Any]) -> ScenarioDraft:
    """Partial edit of one priority; time_windows replaces the whole window list."""
    updated = []
    for p in draft.power.priorities:
        if p.id == priority_id:
            p = _apply(p, changes, skip=("id", "time_windows"))
            if changes.get("time_windows") is not None:
                p = replace(p, time_windows=tuple(_time_window(w) for w in changes["time_windows"]))
        updated.append(p)
    return replace(draft, power=replace(draft.power, priorities=tuple(updated)))


def remove_priority(draft: ScenarioDraft, priority_id: str) -> ScenarioDraft:
    priorities = tuple(p for p in draft.power.priorities if p.id != priority_id)
    return replace(draft, power=replace(draft.power, priorities=priorities))


def has_priority(draft: ScenarioDraft, priority_id: str) -> bool:
    return any(p.id == priority_id for p in draft.power.priorities)
