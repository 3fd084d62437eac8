"""API route handlers."""
from fastapi import APIRouter

from schemas.health import HealthResponse
from scenario_core import sessions

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(open_sessions=sessions.count())
