"""Unit tests: chaos strategy edits."""
import pytest

from scenario_core.catalog import ChaosKind, ResponseDelayParams
from scenario_core.chaos import (
    add_chaos_strategy,
    enabled_strategies,
    has_strategy,
    remove_chaos_strategy,
    set_chaos_enabled,
    update_chaos_strategy,
)
from scenario_core.draft import default_draft

pytestmark = pytest.mark.unit


def test_add_strategy_uses_catalog_defaults(ids):
    """A new strategy gets the kind's default params and the default window."""
    draft = add_chaos_strategy(default_draft(), "response_delay", new_id=ids)
    (strategy,) = draft.chaos.strategies
    assert strategy.kind is ChaosKind.response_delay
    assert strategy.enabled is True
    assert (strategy.start_time, strategy.duration, strategy.target) == (120, 60, "random_20_percent")
    assert strategy.params == ResponseDelayParams(min_delay=1000, max_delay=5000)


def test_unknown_kind_is_noop(ids):
    """An unknown kind returns the draft unchanged."""
    draft = default_draft()
    assert add_chaos_strategy(draft, "gremlins", new_id=ids) is draft


def test_toggle_keeps_strategies(ids):
    """Turning chaos off keeps the configured strategies."""
    draft = add_chaos_strategy(default_draft(), ChaosKind.network_loss, new_id=ids)
    draft = set_chaos_enabled(draft, True)
    assert draft.chaos.enabled is True
    draft = set_chaos_enabled(draft, False)
    assert len(draft.chaos.strategies) == 1


def test_update_and_disable_strategy(ids):
    """Params overlay onto the current values; disabled strategies leave the enabled list."""
    draft = add_chaos_strategy(default_draft(), "connection_flooding", new_id=ids)
    draft = add_chaos_strategy(draft, "network_loss", new_id=ids)
    draft = update_chaos_strategy(
        draft,
        "id-1",
        {"start_time": "300", "target": "first_half", "params": {"rate": 99}, "enabled": False},
    )
    flooding = draft.chaos.strategies[0]
    assert flooding.start_time == 300
    assert flooding.target == "first_half"
    assert flooding.params.rate == 99
    assert flooding.params.burst_duration == 30
    assert [s.id for s in enabled_strategies(draft)] == ["id-2"]


def test_remove_strategy(ids):
    """Removing a strategy leaves an empty list."""
    draft = add_chaos_strategy(default_draft(), "network_loss", new_id=ids)
    draft = remove_chaos_strategy(draft, "id-1")
    assert not has_strategy(draft, "id-1")
    assert draft.chaos.strategies == ()
