"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel

from senior_filter.data.session import Session
from senior_filter.reports import filtered_export


class HealthResponse(BaseModel):
    status: str
    sessions: int


class SessionResponse(BaseModel):
    state: str
    message: str
    file_uploaded: bool
    filename: Optional[str] = None
    record_count: int
    threshold: Optional[int] = None
    result_count: int

    @classmethod
    def from_session(cls, session: Session, **extra) -> "SessionResponse":
        return cls(
            state=session.state.value,
            message=session.message,
            file_uploaded=session.file_uploaded,
            filename=session.filename,
            record_count=len(session.records),
            threshold=session.threshold,
            result_count=len(session.filtered),
            **extra,
        )


class UploadResponse(SessionResponse):
    superseded: bool = False   # a newer upload started before this one finished


class ResultsResponse(SessionResponse):
    columns: list[str]
    rows: list[dict[str, Any]]
    total: int
    showing: int
    has_more: bool

    @classmethod
    def from_session(cls, session: Session, show_all: bool = False) -> "ResultsResponse":
        table = filtered_export.generate_json(session.filtered, show_all=show_all)
        return super().from_session(session, **table)
