"""Catalog API routes: steps, chaos strategies, timeline actions and templates."""
from fastapi import APIRouter

from scenario_core.catalog import CHAOS_STRATEGIES, TIMELINE_ACTIONS
from scenario_core.steps import STEPS
from scenario_core.templates import QUICK_TEMPLATES
from scenario_core.timeline import TIMELINE_TEMPLATES
from schemas.catalog import (
    ChaosStrategyInfoResponse,
    QuickTemplateResponse,
    StepInfo,
    TemplateEventResponse,
    TimelineActionInfoResponse,
    TimelineTemplateResponse,
)

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/steps", response_model=list[StepInfo])
def list_steps() -> list[StepInfo]:
    """Builder steps in order."""
    return [StepInfo(index=i, id=s.id, title=s.title, description=s.description) for i, s in enumerate(STEPS)]


@router.get("/chaos-strategies", response_model=list[ChaosStrategyInfoResponse])
def list_chaos_strategies() -> list[ChaosStrategyInfoResponse]:
    """Chaos kinds with the default parameters of a newly added strategy."""
    return [
        ChaosStrategyInfoResponse(
            kind=info.kind.value,
            display_name=info.display_name,
            description=info.description,
            required_param_keys=list(info.required_param_keys),
            default_params=info.build_params().as_dict(),
        )
        for info in CHAOS_STRATEGIES.values()
    ]


@router.get("/timeline-actions", response_model=list[TimelineActionInfoResponse])
def list_timeline_actions() -> list[TimelineActionInfoResponse]:
    return [
        TimelineActionInfoResponse(
            action=info.action.value,
            display_name=info.display_name,
            accepted_param_keys=None if info.accepted_param_keys is None else list(info.accepted_param_keys),
            default_params=info.build_params().as_dict(),
        )
        for info in TIMELINE_ACTIONS.values()
    ]


@router.get("/timeline-templates", response_model=list[TimelineTemplateResponse])
def list_timeline_templates() -> list[TimelineTemplateResponse]:
    return [
        TimelineTemplateResponse(
            id=t.id,
            name=t.name,
            description=t.description,
            events=[
                TemplateEventResponse(
                    at=e.at,
                    action=e.action.value,
                    description=e.description,
                    targets=e.targets,
                    params=dict(e.params),
                )
                for e in t.events
            ],
        )
        for t in TIMELINE_TEMPLATES.values()
    ]


@router.get("/quick-templates", response_model=list[QuickTemplateResponse])
def list_quick_templates() -> list[QuickTemplateResponse]:
    return [
        QuickTemplateResponse(id=t.id, name=t.name, description=t.description, group=t.group, step=t.step)
        for t in QUICK_TEMPLATES.values()
    ]
