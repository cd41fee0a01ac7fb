"""
FastAPI dependencies — SessionStore singleton, cookie-keyed session lookup.
"""
from __future__ import annotations

from fastapi import Depends, HTTPException, Request, Response

from senior_filter.config import SESSION_COOKIE, SESSION_TTL_MINUTES
from senior_filter.data.session import Session
from senior_filter.data.store import SessionStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: SessionStore | None = None


def set_store(store: SessionStore | None) -> None:
    global _store
    _store = store


def get_session_store() -> SessionStore:
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


# ---------------------------------------------------------------------------
# Session from cookie
# ---------------------------------------------------------------------------

def get_session(
    request: Request,
    response: Response,
    store: SessionStore = Depends(get_session_store),
) -> Session:
    """Look up the caller's session, starting a new one (and cookie) if needed."""
    sid = request.cookies.get(SESSION_COOKIE)
    session = store.get_or_create(sid)
    if session.session_id != sid:
        response.set_cookie(
            SESSION_COOKIE,
            session.session_id,
            max_age=SESSION_TTL_MINUTES * 60,
            httponly=True,
            samesite="lax",
        )
    return session
