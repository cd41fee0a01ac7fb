"""
Day/month/year date parsing and completed-years age arithmetic.
"""
from __future__ import annotations

import datetime as dt
import re

import pandas as pd

from senior_filter.config import DATE_SEPARATORS

_SEPARATOR_RE = re.compile("[" + re.escape(DATE_SEPARATORS) + "]")


def parse_date(value) -> dt.date | None:
    """Read a date of birth written as day/month/year.

    Accepts ``.``, ``-`` or ``/`` between the three parts.  Real date cells
    (spreadsheets store these as datetimes) are taken as-is.  Returns None
    for anything that is not exactly three integer parts forming a real
    calendar date: 31/04/1990 or 29/02/2001 give None, not a rolled-over date.
    Years 0-99 are read as 1900-1999, so 15/06/99 is 15 June 1999.
    """
    if isinstance(value, dt.datetime):  # also pd.Timestamp / NaT
        if pd.isna(value):
            return None
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str):
        return None

    parts = _SEPARATOR_RE.split(value.strip())
    if len(parts) != 3:
        return None
    try:
        day, month, year = (int(p.strip()) for p in parts)
        if 0 <= year <= 99:
            year += 1900
        return dt.date(year, month, day)
    except ValueError:
        return None


def calculate_age(dob: dt.date, today: dt.date | None = None) -> int:
    """Whole years completed between dob and today.

    A 29 February birthday counts as reached on 1 March in non-leap years.
    Future birth dates give negative ages; no bounds are applied.
    """
    if today is None:
        today = dt.date.today()
    age = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        age -= 1
    return age
