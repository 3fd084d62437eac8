"""Unit tests: draft defaults and section edits."""
import pytest

from scenario_core.draft import LoadBalancingStrategy, TimeWindow, default_draft, draft_to_dict, is_valid_target
from scenario_core.sections import (
    add_priority,
    add_tag,
    has_priority,
    remove_priority,
    remove_tag,
    update_basic,
    update_load,
    update_power,
    update_priority,
)
from utils.config import DEFAULT_CSMS_ENDPOINT

pytestmark = pytest.mark.unit


def test_default_draft_values():
    """A fresh draft has the documented defaults."""
    draft = default_draft()
    assert draft.basic.name == ""
    assert draft.basic.duration == 600
    assert draft.basic.tags == ("load-test", "csms")
    assert draft.load.charger_count == 100
    assert draft.load.csms_endpoint == DEFAULT_CSMS_ENDPOINT
    assert draft.power.enabled is False
    assert draft.timeline == ()
    assert draft.chaos.enabled is False
    assert draft.step == 0


def test_update_basic_is_whole_value_replacement():
    """The original draft is untouched; unknown keys are ignored."""
    draft = default_draft()
    edited = update_basic(draft, {"name": "Peak", "duration": "900", "colour": "red"})
    assert edited.basic.name == "Peak"
    assert edited.basic.duration == 900
    assert draft.basic.name == ""
    assert edited.load is draft.load


def test_update_basic_junk_numeric_becomes_zero():
    """An unparseable duration becomes 0."""
    assert update_basic(default_draft(), {"duration": "soon"}).basic.duration == 0


def test_tags_replace_add_remove():
    """Tags are trimmed and deduplicated; blank or repeated adds are no-ops."""
    draft = update_basic(default_draft(), {"tags": [" a ", "b", "a", ""]})
    assert draft.basic.tags == ("a", "b")
    draft = add_tag(draft, "  c ")
    assert draft.basic.tags == ("a", "b", "c")
    assert add_tag(draft, "b") is draft
    assert add_tag(draft, "   ") is draft
    assert remove_tag(draft, "a").basic.tags == ("b", "c")


def test_update_load_clamps_connectors():
    """Connectors stay within 1..2."""
    draft = update_load(default_draft(), {"connectors": "5", "charger_count": "250", "use_load_profile": "false"})
    assert draft.load.connectors == 2
    assert draft.load.charger_count == 250
    assert draft.load.use_load_profile is False
    assert update_load(draft, {"connectors": 0}).load.connectors == 1


def test_update_power_strategy():
    """An unknown load-balancing strategy leaves the current one."""
    draft = update_power(default_draft(), {"enabled": True, "load_balancing_strategy": "round_robin"})
    assert draft.power.enabled is True
    assert draft.power.load_balancing_strategy is LoadBalancingStrategy.round_robin
    unchanged = update_power(draft, {"load_balancing_strategy": "telepathy"})
    assert unchanged.power.load_balancing_strategy is LoadBalancingStrategy.round_robin


def test_priorities_add_update_remove(ids):
    """New priorities take the next rank and the per-charger amperage; unknown days are dropped."""
    draft = update_power(default_draft(), {"charger_max_amperage": 16})
    draft = add_priority(draft, new_id=ids)
    draft = add_priority(draft, "Fleet", new_id=ids)
    first, second = draft.power.priorities
    assert (first.id, first.name, first.priority, first.max_amperage) == ("id-1", "Priority 1", 1, 16)
    assert (second.name, second.priority) == ("Fleet", 2)

    draft = update_priority(
        draft,
        "id-2",
        {"max_amperage": "24", "time_windows": [{"start": "08:00", "end": "12:00", "days": ["mon", "xyz"]}]},
    )
    updated = draft.power.priorities[1]
    assert updated.max_amperage == 24
    assert updated.time_windows == (TimeWindow(start="08:00", end="12:00", days=("mon",)),)

    draft = remove_priority(draft, "id-1")
    assert not has_priority(draft, "id-1")
    assert has_priority(draft, "id-2")


def test_draft_to_dict_flattens_enums():
    """The JSON view writes enums as their values."""
    data = draft_to_dict(update_power(default_draft(), {"load_balancing_strategy": "priority"}))
    assert data["power"]["load_balancing_strategy"] == "priority"
    assert data["basic"]["tags"] == ("load-test", "csms")
    assert data["timeline"] == []


@pytest.mark.parametrize(
    "selector,valid",
    [("all", True), ("random_20_percent", True), ("random_100_percent", True), ("random_0_percent", False),
     ("first_half", True), ("last_quarter", True), ("everyone", False), ("", False)],
)
def test_target_selectors(selector, valid):
    """Only all, random_N_percent with N in 1..100, and first/last fractions are valid."""
    assert is_valid_target(selector) is valid
