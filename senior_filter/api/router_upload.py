"""
Upload endpoint: read an Excel/CSV file into the caller's session.

Parsing runs in the threadpool; if the user starts another upload before
this one finishes, this one's result is dropped (see Session.begin_upload).
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from starlette.concurrency import run_in_threadpool

from senior_filter.config import MAX_UPLOAD_BYTES, MSG_NO_FILE, MSG_TOO_LARGE
from senior_filter.data.loader import detect_format, load_records
from senior_filter.data.schemas import SeniorFilterError
from senior_filter.data.session import Session
from senior_filter.api.dependencies import get_session
from senior_filter.api.response_models import UploadResponse

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    file: Optional[UploadFile] = File(None),
    session: Session = Depends(get_session),
):
    """Replace the session's records with the rows of one uploaded file."""
    # Every attempt, even a rejected one, supersedes uploads still in flight
    token = session.begin_upload()
    if file is None or not file.filename:
        session.fail_upload(token, MSG_NO_FILE)
        raise HTTPException(400, MSG_NO_FILE)

    try:
        detect_format(file.filename)
    except SeniorFilterError as exc:
        session.fail_upload(token, str(exc))
        raise HTTPException(400, str(exc))

    content = await file.read()
    if len(content) > MAX_UPLOAD_BYTES:
        session.fail_upload(token, MSG_TOO_LARGE)
        raise HTTPException(413, MSG_TOO_LARGE)

    try:
        records = await run_in_threadpool(load_records, file.filename, content)
    except SeniorFilterError as exc:
        session.fail_upload(token, str(exc))
        raise HTTPException(400, str(exc))

    applied = session.complete_upload(token, file.filename, records)
    if not applied:
        print(f"  Dropped stale upload of {file.filename} (a newer upload started)")
    return UploadResponse.from_session(session, superseded=not applied)
