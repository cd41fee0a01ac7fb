"""
SessionStore — in-memory registry of per-browser sessions.

Lives for the lifetime of the process; nothing is written to disk.
"""
from __future__ import annotations

import datetime as dt
import threading
import uuid

from senior_filter.config import SESSION_TTL_MINUTES
from senior_filter.data.session import Session


class SessionStore:
    """Thread-safe session lookup with idle expiry."""

    def __init__(self, ttl_minutes: int = SESSION_TTL_MINUTES) -> None:
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()
        self.ttl = dt.timedelta(minutes=ttl_minutes)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def create(self) -> Session:
        session = Session(session_id=uuid.uuid4().hex)
        with self._lock:
            self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str | None) -> Session | None:
        """Return a live session, or None if unknown or expired."""
        if not session_id:
            return None
        self.purge_expired()
        with self._lock:
            session = self._sessions.get(session_id)
        if session is not None:
            session.touch()
        return session

    def get_or_create(self, session_id: str | None) -> Session:
        return self.get(session_id) or self.create()

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    def purge_expired(self, now: dt.datetime | None = None) -> int:
        """Drop sessions idle longer than the TTL. Returns how many went."""
        now = now or dt.datetime.now()
        with self._lock:
            stale = [sid for sid, s in self._sessions.items() if now - s.touched_at > self.ttl]
            for sid in stale:
                del self._sessions[sid]
        if stale:
            print(f"  Expired {len(stale)} idle session(s)")
        return len(stale)

    def session_count(self) -> int:
        with self._lock:
            return len(self._sessions)
