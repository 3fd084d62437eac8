"""Scenario builder API routes: one in-memory draft per builder session."""
import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session

from db import get_db
from repositories.scenario_repository import create_scenario as repo_create_scenario
from scenario_core import sessions
from scenario_core.chaos import (
    add_chaos_strategy,
    has_strategy,
    remove_chaos_strategy,
    set_chaos_enabled,
    update_chaos_strategy,
)
from scenario_core.draft import ScenarioDraft, draft_to_dict
from scenario_core.metrics import expectation_for, load_summary
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
from scenario_core.serializer import export_filename, render
from scenario_core.steps import (
    FIRST_STEP,
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
from scenario_core.templates import QUICK_TEMPLATES, apply_quick_template
from scenario_core.timeline import (
    TIMELINE_TEMPLATES,
    add_event,
    apply_timeline_template,
    has_event,
    remove_event,
    update_event,
)
from scenario_core.validation import advisory_warnings, validate_for_export
from schemas.builder import (
    BasicUpdate,
    BuilderState,
    ChaosToggle,
    EventCreate,
    EventUpdate,
    ExportBlocked,
    ExportResponse,
    LoadSummaryResponse,
    LoadUpdate,
    PowerExpectationResponse,
    PowerUpdate,
    PreviewResponse,
    PriorityCreate,
    PriorityUpdate,
    StepState,
    StrategyCreate,
    StrategyUpdate,
    TagCreate,
)

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/builder/sessions", tags=["builder"])


def _draft_or_404(session_id: str) -> ScenarioDraft:
    draft = sessions.get_draft(session_id)
    if draft is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Builder session not found")
    return draft


def _to_state(session_id: str, draft: ScenarioDraft) -> BuilderState:
    """Everything derived is recomputed here from the committed draft."""
    expectation = expectation_for(draft)
    violations = validate_for_export(draft)
    return BuilderState(
        session_id=session_id,
        step=draft.step,
        current_step=current_step(draft).id,
        is_final_step=is_final_step(draft),
        progress_pct=progress_pct(draft),
        steps=[
            StepState(index=i, id=s.id, title=s.title, description=s.description, status=step_status(draft, i))
            for i, s in enumerate(STEPS)
        ],
        draft=draft_to_dict(draft),
        power_expectation=PowerExpectationResponse(
            **asdict(expectation),
            load_balancing_required=expectation.load_balancing_required,
            expected_reduction_pct=expectation.expected_reduction_pct,
        ),
        load_summary=LoadSummaryResponse(**asdict(load_summary(draft))),
        violations=violations,
        warnings=advisory_warnings(draft),
        can_export=not violations,
    )


def _commit(session_id: str, draft: ScenarioDraft) -> BuilderState:
    """Replace the session's draft with the new value and return the resulting state."""
    sessions.replace_draft(session_id, draft)
    return _to_state(session_id, draft)


# ---------------------------------------------------------------------------
# Sessions and navigation
# ---------------------------------------------------------------------------

@router.post("", response_model=BuilderState, status_code=status.HTTP_201_CREATED)
def open_session() -> BuilderState:
    """Open a builder session with a default draft."""
    session_id, draft = sessions.open_session()
    return _to_state(session_id, draft)


@router.get("/{session_id}", response_model=BuilderState)
def get_session(session_id: str) -> BuilderState:
    return _to_state(session_id, _draft_or_404(session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def close_session(session_id: str) -> None:
    """Close the session; its draft is discarded."""
    if not sessions.close_session(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Builder session not found")


@router.post("/{session_id}/next", response_model=BuilderState)
def go_next(session_id: str) -> BuilderState:
    return _commit(session_id, next_step(_draft_or_404(session_id)))


@router.post("/{session_id}/previous", response_model=BuilderState)
def go_previous(session_id: str) -> BuilderState:
    return _commit(session_id, previous_step(_draft_or_404(session_id)))


@router.put("/{session_id}/step/{index}", response_model=BuilderState)
def go_to_step(session_id: str, index: int = Path(ge=FIRST_STEP, le=LAST_STEP)) -> BuilderState:
    """Jump to any step; no validation gate."""
    return _commit(session_id, jump_to(_draft_or_404(session_id), index))


# ---------------------------------------------------------------------------
# Basic info, load, power
# ---------------------------------------------------------------------------

@router.patch("/{session_id}/basic", response_model=BuilderState)
def patch_basic(session_id: str, body: BasicUpdate) -> BuilderState:
    draft = _draft_or_404(session_id)
    return _commit(session_id, update_basic(draft, body.model_dump(exclude_none=True)))


@router.post("/{session_id}/basic/tags", response_model=BuilderState)
def post_tag(session_id: str, body: TagCreate) -> BuilderState:
    """Add a tag; empty or duplicate tags are ignored."""
    return _commit(session_id, add_tag(_draft_or_404(session_id), body.tag))


@router.delete("/{session_id}/basic/tags/{tag}", response_model=BuilderState)
def delete_tag(session_id: str, tag: str) -> BuilderState:
    return _commit(session_id, remove_tag(_draft_or_404(session_id), tag))


@router.patch("/{session_id}/load", response_model=BuilderState)
def patch_load(session_id: str, body: LoadUpdate) -> BuilderState:
    draft = _draft_or_404(session_id)
    return _commit(session_id, update_load(draft, body.model_dump(exclude_none=True)))


@router.patch("/{session_id}/power", response_model=BuilderState)
def patch_power(session_id: str, body: PowerUpdate) -> BuilderState:
    draft = _draft_or_404(session_id)
    return _commit(session_id, update_power(draft, body.model_dump(exclude_none=True)))


@router.post("/{session_id}/power/priorities", response_model=BuilderState, status_code=status.HTTP_201_CREATED)
def post_priority(session_id: str, body: PriorityCreate) -> BuilderState:
    return _commit(session_id, add_priority(_draft_or_404(session_id), body.name))


@router.patch("/{session_id}/power/priorities/{priority_id}", response_model=BuilderState)
def patch_priority(session_id: str, priority_id: str, body: PriorityUpdate) -> BuilderState:
    draft = _draft_or_404(session_id)
    if not has_priority(draft, priority_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Priority not found")
    return _commit(session_id, update_priority(draft, priority_id, body.model_dump(exclude_none=True)))


@router.delete("/{session_id}/power/priorities/{priority_id}", response_model=BuilderState)
def delete_priority(session_id: str, priority_id: str) -> BuilderState:
    draft = _draft_or_404(session_id)
    if not has_priority(draft, priority_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Priority not found")
    return _commit(session_id, remove_priority(draft, priority_id))


# ---------------------------------------------------------------------------
# Timeline
# ---------------------------------------------------------------------------

@router.post("/{session_id}/timeline/events", response_model=BuilderState, status_code=status.HTTP_201_CREATED)
def post_event(session_id: str, body: EventCreate) -> BuilderState:
    """Append a custom event (defaults: T+0, start_flow, all chargers)."""
    draft = _draft_or_404(session_id)
    return _commit(session_id, add_event(draft, **body.model_dump()))


@router.patch("/{session_id}/timeline/events/{event_id}", response_model=BuilderState)
def patch_event(session_id: str, event_id: str, body: EventUpdate) -> BuilderState:
    draft = _draft_or_404(session_id)
    if not has_event(draft, event_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Timeline event not found")
    return _commit(session_id, update_event(draft, event_id, body.model_dump(exclude_none=True)))


@router.delete("/{session_id}/timeline/events/{event_id}", response_model=BuilderState)
def delete_event(session_id: str, event_id: str) -> BuilderState:
    draft = _draft_or_404(session_id)
    if not has_event(draft, event_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Timeline event not found")
    return _commit(session_id, remove_event(draft, event_id))


@router.post("/{session_id}/timeline/templates/{template_id}", response_model=BuilderState)
def post_timeline_template(session_id: str, template_id: str) -> BuilderState:
    """Append a timeline template's events to the existing timeline."""
    draft = _draft_or_404(session_id)
    if template_id not in TIMELINE_TEMPLATES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Timeline template not found")
    return _commit(session_id, apply_timeline_template(draft, template_id))


# ---------------------------------------------------------------------------
# Chaos
# ---------------------------------------------------------------------------

@router.patch("/{session_id}/chaos", response_model=BuilderState)
def patch_chaos(session_id: str, body: ChaosToggle) -> BuilderState:
    return _commit(session_id, set_chaos_enabled(_draft_or_404(session_id), body.enabled))


@router.post("/{session_id}/chaos/strategies", response_model=BuilderState, status_code=status.HTTP_201_CREATED)
def post_strategy(session_id: str, body: StrategyCreate) -> BuilderState:
    return _commit(session_id, add_chaos_strategy(_draft_or_404(session_id), body.kind))


@router.patch("/{session_id}/chaos/strategies/{strategy_id}", response_model=BuilderState)
def patch_strategy(session_id: str, strategy_id: str, body: StrategyUpdate) -> BuilderState:
    draft = _draft_or_404(session_id)
    if not has_strategy(draft, strategy_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chaos strategy not found")
    return _commit(session_id, update_chaos_strategy(draft, strategy_id, body.model_dump(exclude_none=True)))


@router.delete("/{session_id}/chaos/strategies/{strategy_id}", response_model=BuilderState)
def delete_strategy(session_id: str, strategy_id: str) -> BuilderState:
    draft = _draft_or_404(session_id)
    if not has_strategy(draft, strategy_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chaos strategy not found")
    return _commit(session_id, remove_chaos_strategy(draft, strategy_id))


# ---------------------------------------------------------------------------
# Quick templates, preview, export
# ---------------------------------------------------------------------------

@router.post("/{session_id}/quick-templates/{template_id}", response_model=BuilderState)
def post_quick_template(session_id: str, template_id: str) -> BuilderState:
    """Overwrite the template's fields and move the cursor to its step, if it names one."""
    draft = _draft_or_404(session_id)
    if template_id not in QUICK_TEMPLATES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quick template not found")
    return _commit(session_id, apply_quick_template(draft, template_id))


@router.get("/{session_id}/preview", response_model=PreviewResponse)
def preview(session_id: str) -> PreviewResponse:
    """Render the current draft, export-ready or not."""
    draft = _draft_or_404(session_id)
    violations = validate_for_export(draft)
    return PreviewResponse(
        filename=export_filename(draft.basic.name),
        artifact=render(draft),
        violations=violations,
        warnings=advisory_warnings(draft),
        can_export=not violations,
    )


@router.post(
    "/{session_id}/export",
    response_model=ExportResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ExportBlocked}},
)
def export(session_id: str, db: Session = Depends(get_db)) -> ExportResponse:
    """Save the rendered artifact to the scenario library. 422 with violations if not exportable."""
    draft = _draft_or_404(session_id)
    violations = validate_for_export(draft)
    if violations:
        LOG.info("Export of session %s blocked by %d violation(s)", session_id, len(violations))
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=ExportBlocked(message="Scenario cannot be exported", violations=violations).model_dump(),
        )
    row = repo_create_scenario(db, draft, render(draft))
    return ExportResponse(id=row.id, filename=row.filename, artifact=row.artifact)
