"""In-memory builder sessions: each open builder owns exactly one current draft."""
import logging
import uuid
from collections import OrderedDict
from typing import Callable, Optional

from scenario_core.draft import ScenarioDraft, default_draft
from utils.config import MAX_BUILDER_SESSIONS

LOG = logging.getLogger(__name__)

_sessions: "OrderedDict[str, ScenarioDraft]" = OrderedDict()


def open_session(new_id: Callable[[], str] = lambda: str(uuid.uuid4())) -> tuple[str, ScenarioDraft]:
    """Start a builder session with a default draft. Evicts the oldest session when full."""
    while len(_sessions) >= max(1, MAX_BUILDER_SESSIONS):
        evicted, _ = _sessions.popitem(last=False)
        LOG.info("Builder session %s evicted (limit %d)", evicted, MAX_BUILDER_SESSIONS)
    session_id = new_id()
    draft = default_draft()
    _sessions[session_id] = draft
    LOG.info("Builder session %s opened", session_id)
    return session_id, draft


def get_draft(session_id: str) -> Optional[ScenarioDraft]:
    """Current draft of a session or None."""
    return _sessions.get(session_id)


def replace_draft(session_id: str, draft: ScenarioDraft) -> bool:
    """Commit a new draft value for the session. Returns False if the session is gone."""
    if session_id not in _sessions:
        return False
    _sessions[session_id] = draft
    return True


def close_session(session_id: str) -> bool:
    """Discard the session and its draft. Returns True if it existed."""
    if _sessions.pop(session_id, None) is None:
        return False
    LOG.info("Builder session %s closed", session_id)
    return True


def count() -> int:
    return len(_sessions)


def clear() -> None:
    """Drop all sessions (tests)."""
    _sessions.clear()
