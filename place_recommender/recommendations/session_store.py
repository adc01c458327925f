from __future__ import annotations

import threading
import time
import uuid
from typing import Any

from .session import RecommendationSession

_sessions: dict[str, dict[str, Any]] = {}
_DEFAULT_TTL = 3600  # 1 hour of inactivity
_lock = threading.Lock()


def new_session_id() -> str:
    return uuid.uuid4().hex


def _prune(now: float) -> None:
    expired = [
        sid for sid, entry in _sessions.items()
        if now - entry["last_seen"] >= _DEFAULT_TTL and not entry["session"].is_busy
    ]
    for sid in expired:
        del _sessions[sid]


def get_session(session_id: str) -> RecommendationSession:
    """Return the session for ``session_id``, creating it on first use.

    Sessions idle for longer than the TTL are dropped; a later visit with
    the same id starts over with a fresh session.
    """
    now = time.time()
    with _lock:
        _prune(now)
        entry = _sessions.get(session_id)
        if entry is None:
            entry = _sessions[session_id] = {"session": RecommendationSession()}
        entry["last_seen"] = now
        return entry["session"]


def clear_sessions() -> None:
    with _lock:
        _sessions.clear()
