"""Unit tests: quick templates."""
import pytest

from scenario_core.catalog import ChaosKind
from scenario_core.chaos import add_chaos_strategy
from scenario_core.draft import LoadBalancingStrategy, default_draft
from scenario_core.sections import update_basic, update_load
from scenario_core.templates import QUICK_TEMPLATES, apply_quick_template

pytestmark = pytest.mark.unit


def test_high_load_overwrites_named_fields_and_moves_cursor(ids):
    """Only the template's fields change; others keep the operator's values."""
    draft = update_load(default_draft(), {"charger_model": "Custom"})
    draft = apply_quick_template(draft, "high_load", new_id=ids)
    assert draft.basic.name == "High Load CSMS Test"
    assert draft.basic.duration == 900
    assert draft.load.charger_count == 500
    assert draft.load.charger_model == "Custom"
    assert draft.chaos.enabled is True
    assert draft.step == 1


def test_csms_validation_template_sets_power(ids):
    """The CSMS validation template turns on priority load balancing and opens power."""
    draft = apply_quick_template(default_draft(), "csms_validation", new_id=ids)
    assert draft.power.enabled is True
    assert draft.power.site_max_amperage == 300
    assert draft.power.load_balancing_strategy is LoadBalancingStrategy.priority
    assert draft.load.charger_count == 15
    assert draft.step == 2


def test_chaos_resilience_replaces_strategy_list(ids):
    """The template's strategies replace the existing list with fresh ids."""
    draft = add_chaos_strategy(default_draft(), "response_delay", new_id=ids)
    draft = add_chaos_strategy(draft, "connection_flooding", new_id=ids)
    draft = apply_quick_template(draft, "chaos_resilience", new_id=ids)
    assert [s.kind for s in draft.chaos.strategies] == [ChaosKind.network_loss]
    assert draft.chaos.strategies[0].id == "id-3"
    assert draft.step == 4


def test_basic_preset_keeps_step_and_replaces_tags(ids):
    """A basic preset leaves the cursor alone and replaces the tag list."""
    draft = update_basic(default_draft(), {"tags": ["mine"]})
    draft = apply_quick_template(draft, "peak_load", new_id=ids)
    assert draft.step == 0
    assert draft.basic.tags == ("load-test", "peak-load", "csms", "performance")


def test_power_scenario_over_capacity(ids):
    """The over-capacity preset demands more than the site allows."""
    draft = apply_quick_template(default_draft(), "over_capacity", new_id=ids)
    assert (draft.load.charger_count, draft.power.site_max_amperage, draft.power.charger_max_amperage) == (20, 400, 32)
    assert draft.power.enabled is True


def test_unknown_template_is_noop(ids):
    """An unknown template id returns the draft unchanged."""
    draft = default_draft()
    assert apply_quick_template(draft, "mystery", new_id=ids) is draft


def test_template_groups():
    """Quick templates come in builder, basic and power groups."""
    groups = {t.group for t in QUICK_TEMPLATES.values()}
    assert groups == {"builder", "basic", "power"}
    assert len(QUICK_TEMPLATES) == 11
