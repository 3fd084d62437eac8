"""Integration tests: scenario repository with test DB session."""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.orm import Session

from repositories.scenario_repository import create_scenario, delete_scenario, get_scenario, list_scenarios
from scenario_core.draft import default_draft
from scenario_core.sections import update_basic, update_load
from scenario_core.serializer import render

pytestmark = pytest.mark.integration


def _draft(name):
    return update_load(update_basic(default_draft(), {"name": name}), {"charger_count": 42})


def test_create_stores_summary_fields(db_session):
    """Summary columns are copied from the draft at export time."""
    draft = _draft("Repo Test")
    row = create_scenario(db_session, draft, render(draft), "scn-repo")
    assert row.filename == "repo-test.yaml"
    assert row.charger_count == 42
    assert row.tags == ["load-test", "csms"]
    assert row.created_at is not None
    assert get_scenario(db_session, "scn-repo").artifact.startswith("# Generated")


def test_list_newest_first(db_session):
    """The most recently created scenario comes first."""
    old = create_scenario(db_session, _draft("Old"), "a: 1\n", "scn-old")
    new = create_scenario(db_session, _draft("New"), "a: 2\n", "scn-new")
    old.created_at = datetime.now(timezone.utc) - timedelta(days=1)
    db_session.commit()
    ids = [s.id for s in list_scenarios(db_session)]
    assert ids.index(new.id) < ids.index(old.id)


def test_delete(db_session):
    """Delete reports whether a row was removed."""
    create_scenario(db_session, _draft("Gone"), "a: 1\n", "scn-gone")
    assert delete_scenario(db_session, "scn-gone") is True
    assert get_scenario(db_session, "scn-gone") is None
    assert delete_scenario(db_session, "scn-gone") is False


def test_commit_inside_test_transaction_is_rolled_back(engine):
    """A repository commit inside the per-test outer transaction is undone by its rollback."""
    connection = engine.connect()
    trans = connection.begin()
    session = Session(bind=connection, join_transaction_mode="create_savepoint")
    create_scenario(session, _draft("Scoped"), "a: 1\n", "scn-scoped")
    assert get_scenario(session, "scn-scoped") is not None
    session.close()
    trans.rollback()
    connection.close()

    fresh = Session(bind=engine)
    try:
        assert get_scenario(fresh, "scn-scoped") is None
    finally:
        fresh.close()


def test_same_id_reusable_across_tests(db_session):
    """Ids saved in earlier tests are gone, so fixed ids can be reused."""
    create_scenario(db_session, _draft("Repo Test"), "a: 1\n", "scn-repo")
    assert [s.id for s in list_scenarios(db_session)] == ["scn-repo"]
