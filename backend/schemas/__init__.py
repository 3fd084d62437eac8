# Schemas package
from .builder import BuilderState, ExportResponse, PreviewResponse
from .health import HealthResponse
from .scenarios import ScenarioDetail, ScenarioSummary

__all__ = [
    "BuilderState",
    "ExportResponse",
    "HealthResponse",
    "PreviewResponse",
    "ScenarioDetail",
    "ScenarioSummary",
]
