"""
Filter endpoints: apply a minimum age, page through the results.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Query

from senior_filter.data.schemas import SeniorFilterError
from senior_filter.data.session import Session
from senior_filter.api.dependencies import get_session
from senior_filter.api.response_models import ResultsResponse

router = APIRouter(prefix="/api", tags=["filter"])


@router.post("/filter", response_model=ResultsResponse)
def run_filter(
    min_age: Optional[str] = Form(None),
    show_all: bool = Form(False),
    session: Session = Depends(get_session),
):
    """Keep records aged min_age or over. Zero matches is a 200 with a message."""
    try:
        session.apply_filter(min_age)
    except SeniorFilterError as exc:
        raise HTTPException(400, str(exc))
    return ResultsResponse.from_session(session, show_all=show_all)


@router.get("/results", response_model=ResultsResponse)
def get_results(
    show_all: bool = Query(False, description="Return every row instead of the first 8"),
    session: Session = Depends(get_session),
):
    return ResultsResponse.from_session(session, show_all=show_all)
