"""Unit tests: in-memory builder session store."""
from unittest.mock import patch

import pytest

from scenario_core import sessions
from scenario_core.draft import default_draft
from scenario_core.sections import update_basic

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def clear_sessions():
    """Clear store before and after each test so tests don't leak state."""
    sessions.clear()
    yield
    sessions.clear()


def test_open_get_replace_close(ids):
    """A session can be opened, edited and closed exactly once."""
    session_id, draft = sessions.open_session(ids)
    assert session_id == "id-1"
    assert draft == default_draft()
    edited = update_basic(draft, {"name": "Mine"})
    assert sessions.replace_draft(session_id, edited) is True
    assert sessions.get_draft(session_id).basic.name == "Mine"
    assert sessions.close_session(session_id) is True
    assert sessions.get_draft(session_id) is None
    assert sessions.close_session(session_id) is False


def test_replace_unknown_session():
    """Replacing the draft of an unknown session reports failure."""
    assert sessions.replace_draft("missing", default_draft()) is False


def test_each_session_owns_its_draft(ids):
    """Edits in one session do not show up in another."""
    a, _ = sessions.open_session(ids)
    b, _ = sessions.open_session(ids)
    sessions.replace_draft(a, update_basic(sessions.get_draft(a), {"name": "A"}))
    assert sessions.get_draft(b).basic.name == ""


def test_oldest_session_evicted_at_limit(ids):
    """Opening past the limit evicts the oldest session."""
    with patch.object(sessions, "MAX_BUILDER_SESSIONS", 2):
        first, _ = sessions.open_session(ids)
        sessions.open_session(ids)
        sessions.open_session(ids)
    assert sessions.count() == 2
    assert sessions.get_draft(first) is None
