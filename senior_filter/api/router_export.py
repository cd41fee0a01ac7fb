"""
Export endpoint: download the filtered rows as filtered_data.xlsx.
"""
from __future__ import annotations

import io

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from senior_filter.config import EXPORT_FILENAME, XLSX_MEDIA_TYPE
from senior_filter.data.schemas import NothingToExportError
from senior_filter.data.session import Session
from senior_filter.api.dependencies import get_session
from senior_filter.reports import filtered_export

router = APIRouter(prefix="/api", tags=["export"])


@router.get("/export")
def export_excel(session: Session = Depends(get_session)):
    try:
        data = filtered_export.generate_bytes(session.filtered)
    except NothingToExportError as exc:
        raise HTTPException(409, str(exc))

    return StreamingResponse(
        io.BytesIO(data),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )
