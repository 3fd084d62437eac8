"""Builder step machine: fixed ordered steps and a cursor with free navigation."""
from dataclasses import dataclass, replace

from scenario_core.draft import ScenarioDraft


@dataclass(frozen=True)
class Step:
    id: str
    title: str
    description: str


STEPS: tuple[Step, ...] = (
    Step("basic", "Basic Info", "Scenario details"),
    Step("load", "Load Testing", "Charger configuration"),
    Step("power", "Power Management", "Load balancing & scheduling"),
    Step("timeline", "Timeline", "Message flows"),
    Step("chaos", "Chaos Testing", "Failure scenarios"),
    Step("preview", "Preview & Export", "Review scenario"),
)

FIRST_STEP = 0
LAST_STEP = len(STEPS) - 1


def _clamp(index: int) -> int:
    return max(FIRST_STEP, min(LAST_STEP, index))


def current_step(draft: ScenarioDraft) -> Step:
    return STEPS[_clamp(draft.step)]


def next_step(draft: ScenarioDraft) -> ScenarioDraft:
    """Advance one step; stays on the preview step once there."""
    return replace(draft, step=_clamp(draft.step + 1))


def previous_step(draft: ScenarioDraft) -> ScenarioDraft:
    return replace(draft, step=_clamp(draft.step - 1))


def jump_to(draft: ScenarioDraft, index: int) -> ScenarioDraft:
    """
    Select any step directly. No validation gate: an incomplete draft can be
    navigated freely, including skipping ahead to preview.
    """
    return replace(draft, step=_clamp(index))


def is_final_step(draft: ScenarioDraft) -> bool:
    return _clamp(draft.step) == LAST_STEP


def progress_pct(draft: ScenarioDraft) -> float:
    return round((_clamp(draft.step) + 1) / len(STEPS) * 100, 1)


def step_status(draft: ScenarioDraft, index: int) -> str:
    """Sidebar status by position only: steps behind the cursor show as completed."""
    cursor = _clamp(draft.step)
    if index == cursor:
        return "current"
    if index < cursor:
        return "completed"
    return "upcoming"
