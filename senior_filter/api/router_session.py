"""
Session endpoints: current state, reset (Clear All).
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from senior_filter.data.session import Session
from senior_filter.api.dependencies import get_session
from senior_filter.api.response_models import SessionResponse

router = APIRouter(prefix="/api", tags=["session"])


@router.get("/session", response_model=SessionResponse)
def current_session(session: Session = Depends(get_session)):
    return SessionResponse.from_session(session)


@router.post("/reset", response_model=SessionResponse)
def reset_session(session: Session = Depends(get_session)):
    """Discard the file, records, threshold, results and message."""
    session.reset()
    return SessionResponse.from_session(session)
