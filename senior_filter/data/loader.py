"""
Spreadsheet / CSV ingestion: format detection, row reading, normalisation.
"""
from __future__ import annotations

import datetime as dt
import io
from pathlib import Path

import pandas as pd

from senior_filter.config import AGE_COLUMN, EXCEL_EXTENSIONS, CSV_EXTENSIONS
from senior_filter.data.normalize import is_blank, normalize_record, coerce_age
from senior_filter.data.schemas import (
    FileFormat, MissingFileError, UnsupportedFormatError, FileReadError,
)


# ---------------------------------------------------------------------------
# Format detection
# ---------------------------------------------------------------------------

def detect_format(filename: str | None) -> FileFormat:
    """Pick the reader from the file extension (case-insensitive)."""
    if not filename:
        raise MissingFileError()
    lower = filename.lower()
    if lower.endswith(EXCEL_EXTENSIONS):
        return FileFormat.EXCEL
    if lower.endswith(CSV_EXTENSIONS):
        return FileFormat.CSV
    raise UnsupportedFormatError()


# ---------------------------------------------------------------------------
# Readers
# ---------------------------------------------------------------------------

def _cell(value):
    """NaN/NaT -> None; everything else passes through."""
    if not isinstance(value, str) and is_blank(value):
        return None
    return value


def read_excel_rows(content: bytes) -> list[dict]:
    """First sheet only; first row is the header, later rows zip onto it."""
    try:
        sheet = pd.read_excel(io.BytesIO(content), sheet_name=0, header=None, dtype=object)
    except Exception as exc:
        raise FileReadError() from exc

    if sheet.empty:
        return []

    rows = sheet.values.tolist()
    headers = [(idx, str(h)) for idx, h in enumerate(rows[0]) if not is_blank(h)]

    records = []
    for row in rows[1:]:
        if all(is_blank(v) for v in row):
            continue
        records.append({
            name: _cell(row[idx]) if idx < len(row) else None
            for idx, name in headers
        })
    return records


def read_csv_rows(content: bytes) -> list[dict]:
    """Header row plus one dict per data row, all values kept as text.

    Rows with more fields than the header keep their first fields and
    lose the surplus.
    """
    try:
        width = len(pd.read_csv(io.BytesIO(content), nrows=0, encoding="utf-8-sig").columns)
        # Positional usecols makes the parser accept long rows; index_col=False
        # stops a long first row being read as an index column.
        frame = pd.read_csv(
            io.BytesIO(content),
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
            usecols=list(range(width)),
            index_col=False,
        )
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as exc:
        raise FileReadError() from exc

    return [{k: _cell(v) for k, v in row.items()} for row in frame.to_dict("records")]


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def load_records(filename: str | None, content: bytes, today: dt.date | None = None) -> list[dict]:
    """Read an uploaded file and return its normalised records in file order."""
    fmt = detect_format(filename)
    if fmt == FileFormat.EXCEL:
        raw = read_excel_rows(content)
    else:
        raw = read_csv_rows(content)

    records = [normalize_record(r, today) for r in raw]

    with_age = sum(1 for r in records if coerce_age(r.get(AGE_COLUMN)) is not None)
    print(f"  Loaded {filename}: {len(records):,} rows, {with_age:,} with age, "
          f"{len(records) - with_age:,} without")
    return records


def load_file(path: str | Path, today: dt.date | None = None) -> list[dict]:
    """Load records from a file on disk."""
    path = Path(path)
    return load_records(path.name, path.read_bytes(), today)
