"""Scenario repository: create, list, get, delete exported scenarios."""
import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from models.scenario import Scenario
from scenario_core.draft import ScenarioDraft
from scenario_core.serializer import export_filename

LOG = logging.getLogger(__name__)


def create_scenario(
    session: Session,
    draft: ScenarioDraft,
    artifact: str,
    scenario_id: str | None = None,
) -> Scenario:
    """Store the rendered artifact with the draft's summary fields, commit, and return it."""
    row = Scenario(
        id=scenario_id or str(uuid.uuid4()),
        name=draft.basic.name,
        filename=export_filename(draft.basic.name),
        description=draft.basic.description,
        version=draft.basic.version,
        duration=draft.basic.duration,
        tags=list(draft.basic.tags),
        charger_count=draft.load.charger_count,
        csms_endpoint=draft.load.csms_endpoint,
        artifact=artifact,
    )
    session.add(row)
    session.commit()
    session.refresh(row)
    LOG.info("Scenario %s saved as %s", row.id, row.filename)
    return row


def list_scenarios(session: Session) -> list[Scenario]:
    """Return all scenarios, newest first."""
    result = session.execute(select(Scenario).order_by(Scenario.created_at.desc(), Scenario.name))
    return list(result.scalars().all())


def get_scenario(session: Session, scenario_id: str) -> Optional[Scenario]:
    """Return a scenario by id or None."""
    return session.get(Scenario, scenario_id)


def delete_scenario(session: Session, scenario_id: str) -> bool:
    """Delete a scenario by id. Returns True if deleted, False if not found."""
    row = get_scenario(session, scenario_id)
    if row is None:
        return False
    session.delete(row)
    session.commit()
    LOG.info("Scenario %s deleted", scenario_id)
    return True
