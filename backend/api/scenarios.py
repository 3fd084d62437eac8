"""Scenario library API routes: list, fetch, download and delete exported scenarios."""
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from db import get_db
from models.scenario import Scenario
from repositories.scenario_repository import delete_scenario as repo_delete_scenario
from repositories.scenario_repository import get_scenario as repo_get_scenario
from repositories.scenario_repository import list_scenarios as repo_list_scenarios
from schemas.scenarios import ScenarioDetail, ScenarioSummary

router = APIRouter(prefix="/scenarios", tags=["scenarios"])


def _summary_fields(row: Scenario) -> dict:
    return {
        "id": row.id,
        "name": row.name,
        "filename": row.filename,
        "description": row.description,
        "version": row.version,
        "duration": row.duration,
        "tags": list(row.tags or []),
        "charger_count": row.charger_count,
        "csms_endpoint": row.csms_endpoint,
        "created_at": row.created_at.isoformat().replace("+00:00", "Z"),
    }


def _get_or_404(db: Session, scenario_id: str) -> Scenario:
    row = repo_get_scenario(db, scenario_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scenario not found")
    return row


@router.get("", response_model=list[ScenarioSummary])
def list_scenarios(db: Session = Depends(get_db)) -> list[ScenarioSummary]:
    """List exported scenarios, newest first."""
    return [ScenarioSummary(**_summary_fields(row)) for row in repo_list_scenarios(db)]


@router.get("/{scenario_id}", response_model=ScenarioDetail)
def get_scenario(scenario_id: str, db: Session = Depends(get_db)) -> ScenarioDetail:
    row = _get_or_404(db, scenario_id)
    return ScenarioDetail(**_summary_fields(row), artifact=row.artifact)


@router.get("/{scenario_id}/artifact")
def download_artifact(scenario_id: str, db: Session = Depends(get_db)) -> Response:
    """Scenario YAML as a file download."""
    row = _get_or_404(db, scenario_id)
    return Response(
        content=row.artifact,
        media_type="text/yaml",
        headers={"Content-Disposition": f'attachment; filename="{row.filename}"'},
    )


@router.delete("/{scenario_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_scenario(scenario_id: str, db: Session = Depends(get_db)) -> None:
    """Delete an exported scenario by id."""
    if not repo_delete_scenario(db, scenario_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Scenario not found")
