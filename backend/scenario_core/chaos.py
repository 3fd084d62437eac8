"""Chaos section edits: toggle, add from the catalog, edit and remove strategies."""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Mapping, Optional

from scenario_core.catalog import get_strategy_info
from scenario_core.draft import ChaosStrategy, ScenarioDraft, is_valid_target, new_id as _new_id
from utils.coercion import to_bool, to_non_negative_int

IdFactory = Callable[[], str]

DEFAULT_START_TIME = 120
DEFAULT_DURATION = 60
DEFAULT_TARGET = "random_20_percent"


def new_strategy(kind: Any, *, new_id: IdFactory = _new_id) -> Optional[ChaosStrategy]:
    """Strategy of the given kind with catalog default params, or None for an unknown kind."""
    info = get_strategy_info(kind)
    if info is None:
        return None
    return ChaosStrategy(
        id=new_id(),
        kind=info.kind,
        enabled=True,
        start_time=DEFAULT_START_TIME,
        duration=DEFAULT_DURATION,
        target=DEFAULT_TARGET,
        params=info.build_params(),
    )


def set_chaos_enabled(draft: ScenarioDraft, enabled: Any) -> ScenarioDraft:
    return replace(draft, chaos=replace(draft.chaos, enabled=to_bool(enabled)))


def add_chaos_strategy(draft: ScenarioDraft, kind: Any, *, new_id: IdFactory = _new_id) -> ScenarioDraft:
    """Append a default strategy of kind; unknown kinds leave the draft unchanged."""
    strategy = new_strategy(kind, new_id=new_id)
    if strategy is None:
        return draft
    return replace(draft, chaos=replace(draft.chaos, strategies=draft.chaos.strategies + (strategy,)))


def _edit_strategy(strategy: ChaosStrategy, changes: Mapping[str, Any]) -> ChaosStrategy:
    updates: dict[str, Any] = {}
    if changes.get("enabled") is not None:
        updates["enabled"] = to_bool(changes["enabled"])
    for key in ("start_time", "duration"):
        if key in changes:
            updates[key] = to_non_negative_int(changes[key])
    if changes.get("target") is not None and is_valid_target(changes["target"]):
        updates["target"] = changes["target"]
    if changes.get("params") is not None:
        info = get_strategy_info(strategy.kind)
        updates["params"] = info.build_params(changes["params"], base=strategy.params)
    return replace(strategy, **updates) if updates else strategy


def update_chaos_strategy(draft: ScenarioDraft, strategy_id: str, changes: Mapping[str, Any]) -> ScenarioDraft:
    strategies = tuple(
        _edit_strategy(s, changes) if s.id == strategy_id else s for s in draft.chaos.strategies
    )
    return replace(draft, chaos=replace(draft.chaos, strategies=strategies))


def remove_chaos_strategy(draft: ScenarioDraft, strategy_id: str) -> ScenarioDraft:
    strategies = tuple(s for s in draft.chaos.strategies if s.id != strategy_id)
    return replace(draft, chaos=replace(draft.chaos, strategies=strategies))


def has_strategy(draft: ScenarioDraft, strategy_id: str) -> bool:
    return any(s.id == strategy_id for s in draft.chaos.strategies)


def enabled_strategies(draft: ScenarioDraft) -> list[ChaosStrategy]:
    return [s for s in draft.chaos.strategies if s.enabled]
