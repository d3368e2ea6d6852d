from __future__ import annotations

import itertools
import logging
import threading
from datetime import datetime, timezone

from .models import AnalysisResult, AnalysisSession

logger = logging.getLogger("motioncheck_agent.sessions")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SessionTracker:
    """Publishes analysis sessions so a stale completion never replaces a newer one.

    Sessions get monotonic ids when they start. A finished session is published
    only if its id is higher than the one currently published; otherwise it is
    returned to its caller but not stored.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._started: dict[int, tuple[str, str]] = {}
        self._current: AnalysisSession | None = None

    def start(self, url: str) -> int:
        with self._lock:
            session_id = next(self._ids)
            self._started[session_id] = (url, _now())
        logger.info("Session %d started for %s", session_id, url)
        return session_id

    def finish(
        self,
        session_id: int,
        *,
        result: AnalysisResult | None = None,
        error: str | None = None,
    ) -> tuple[AnalysisSession, bool]:
        """Freeze the outcome of ``session_id``; returns (session, published)."""
        with self._lock:
            url, started_at = self._started.pop(session_id, ("", _now()))
            session = AnalysisSession(
                session_id=session_id,
                url=url,
                status="completed" if result is not None else "failed",
                result=result,
                error=error,
                started_at=started_at,
                finished_at=_now(),
            )
            current_id = self._current.session_id if self._current else 0
            published = session_id > current_id
            if published:
                self._current = session

        if not published:
            logger.info("Discarding stale session %d (current is %d)", session_id, current_id)
        return session, published

    def current(self) -> AnalysisSession | None:
        with self._lock:
            return self._current
