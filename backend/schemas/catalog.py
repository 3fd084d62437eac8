"""Pydantic schemas for the builder catalogs."""
from typing import Any

from pydantic import BaseModel


class StepInfo(BaseModel):
    index: int
    id: str
    title: str
    description: str


class ChaosStrategyInfoResponse(BaseModel):
    """A chaos kind with the parameters a new strategy of that kind starts with."""

    kind: str
    display_name: str
    description: str
    required_param_keys: list[str]
    default_params: dict[str, Any]


class TimelineActionInfoResponse(BaseModel):
    """accepted_param_keys is null for actions that take free-form params."""

    action: str
    display_name: str
    accepted_param_keys: list[str] | None
    default_params: dict[str, Any]


class TemplateEventResponse(BaseModel):
    at: int
    action: str
    description: str
    targets: str
    params: dict[str, Any]


class TimelineTemplateResponse(BaseModel):
    id: str
    name: str
    description: str
    events: list[TemplateEventResponse]


class QuickTemplateResponse(BaseModel):
    id: str
    name: str
    description: str
    group: str
    step: int | None = None
