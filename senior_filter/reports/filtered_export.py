"""
Filtered Records — table payload for the browser and the Excel download.
"""
from __future__ import annotations

from pathlib import Path

from senior_filter.config import AGE_COLUMN, DOB_COLUMNS, EXPORT_SHEET_NAME, PREVIEW_ROWS
from senior_filter.data.schemas import NothingToExportError
from senior_filter.excel.writer import ExcelWriter, ColSpec
from senior_filter.reports.common import sanitize_for_json


def export_columns(records: list[dict]) -> list[str]:
    """Column names in first-seen order, starting with the first record's keys."""
    seen: dict[str, None] = {}
    for record in records:
        for key in record:
            seen.setdefault(key, None)
    return list(seen)


def column_specs(columns: list[str]) -> list[ColSpec]:
    specs = []
    for name in columns:
        if name == AGE_COLUMN:
            col_type = "number"
        elif name in DOB_COLUMNS:
            col_type = "date"
        else:
            col_type = "text"
        specs.append((name, col_type, name))
    return specs


def generate_json(records: list[dict], show_all: bool = False) -> dict:
    """Table view: columns, the visible rows, and the show-more flag."""
    rows = records if show_all else records[:PREVIEW_ROWS]
    return sanitize_for_json({
        "columns": export_columns(records),
        "rows": [dict(r) for r in rows],
        "total": len(records),
        "showing": len(rows),
        "has_more": len(records) > PREVIEW_ROWS,
    })


def _build(records: list[dict]) -> ExcelWriter:
    if not records:
        raise NothingToExportError()
    ew = ExcelWriter()
    ws = ew.add_sheet(EXPORT_SHEET_NAME)
    ew.write_table(ws, 1, column_specs(export_columns(records)), records)
    return ew


def generate_bytes(records: list[dict]) -> bytes:
    """Single-sheet workbook: header row, then one row per record."""
    return _build(records).to_bytes()


def generate_excel(records: list[dict], output_path: str | Path) -> Path:
    return _build(records).save(output_path)
