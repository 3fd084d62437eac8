"""Unit tests: builder step navigation."""
import pytest

from scenario_core.draft import default_draft
from scenario_core.steps import (
    LAST_STEP,
    STEPS,
    current_step,
    is_final_step,
    jump_to,
    next_step,
    previous_step,
    progress_pct,
    step_status,
)

pytestmark = pytest.mark.unit


def test_steps_in_fixed_order():
    """The six steps keep their fixed order."""
    assert [s.id for s in STEPS] == ["basic", "load", "power", "timeline", "chaos", "preview"]
    assert LAST_STEP == 5


def test_next_and_previous_clamp_at_ends():
    """The cursor never moves before the first or past the last step."""
    draft = default_draft()
    assert previous_step(draft).step == 0
    at_end = jump_to(draft, LAST_STEP)
    assert next_step(at_end).step == LAST_STEP
    assert is_final_step(at_end)


def test_jump_to_has_no_validation_gate():
    """An empty draft can skip straight to preview."""
    draft = jump_to(default_draft(), 5)
    assert current_step(draft).id == "preview"
    assert jump_to(draft, 99).step == LAST_STEP
    assert jump_to(draft, -3).step == 0


def test_navigation_returns_new_value():
    """Moving the cursor returns a new draft and leaves the old one alone."""
    draft = default_draft()
    moved = next_step(draft)
    assert draft.step == 0
    assert moved.step == 1


def test_step_status_by_position():
    """Steps before the cursor are completed, after it upcoming."""
    draft = jump_to(default_draft(), 2)
    assert [step_status(draft, i) for i in range(len(STEPS))] == [
        "completed",
        "completed",
        "current",
        "upcoming",
        "upcoming",
        "upcoming",
    ]
    assert progress_pct(draft) == 50.0
