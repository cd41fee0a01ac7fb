"""
Meta endpoints: health.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from senior_filter.data.store import SessionStore
from senior_filter.api.dependencies import get_session_store
from senior_filter.api.response_models import HealthResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: SessionStore = Depends(get_session_store)):
    return HealthResponse(status="ok", sessions=store.session_count())
