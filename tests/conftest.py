"""
Pytest fixtures: fixed reference date, in-memory CSV/XLSX builders, API client.
"""
import datetime as dt
import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook


@pytest.fixture
def today():
    """Reference date used by the age arithmetic tests."""
    return dt.date(2024, 6, 14)


@pytest.fixture
def make_csv():
    """Build CSV bytes from a header and rows."""
    def _make(header: list[str], rows: list[list]) -> bytes:
        lines = [",".join(header)] + [",".join("" if v is None else str(v) for v in row) for row in rows]
        return ("\n".join(lines) + "\n").encode("utf-8")
    return _make


@pytest.fixture
def make_xlsx():
    """Build .xlsx bytes; extra_sheets adds more (ignored) sheets after the first."""
    def _make(header: list, rows: list[list], extra_sheets: dict | None = None) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = "People"
        ws.append(header)
        for row in rows:
            ws.append(row)
        for title, sheet_rows in (extra_sheets or {}).items():
            extra = wb.create_sheet(title)
            for row in sheet_rows:
                extra.append(row)
        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
    return _make


@pytest.fixture
def people_csv(make_csv):
    """Mix of stored ages, DOBs and unusable rows. Ages are far from any birthday edge."""
    return make_csv(
        ["Name", "Age", "DOB"],
        [
            ["Alice", 82, ""],
            ["Bob", "", "01/01/1940"],
            ["Cara", "", "01.01.2010"],
            ["Dan", 30, ""],
            ["Eve", "", "not a date"],
            ["Finn", "", "15-03-1950"],
        ],
    )


@pytest.fixture
def client():
    """TestClient with the lifespan run (fresh SessionStore per test)."""
    from senior_filter.main import app
    with TestClient(app) as c:
        yield c
