"""
Record normalisation: read a stored age or derive one from a date of birth.
"""
from __future__ import annotations

import datetime as dt
import math

import numpy as np
import pandas as pd

from senior_filter.config import AGE_COLUMN, DOB_COLUMNS
from senior_filter.data.dates import parse_date, calculate_age


# ---------------------------------------------------------------------------
# Cell helpers
# ---------------------------------------------------------------------------

def is_blank(value) -> bool:
    """True for None, NaN/NaT and whitespace-only text."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def coerce_age(value) -> int | None:
    """Read a stored age as an int, or None when it isn't numeric.

    Numbers are truncated toward zero, so "60.9" and 60.9 both give 60.
    """
    if isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if math.isfinite(number) else None
    return None


def birth_date(record: dict) -> dt.date | None:
    """Parse the first non-blank DOB column (DOB before Date of Birth)."""
    for col in DOB_COLUMNS:
        value = record.get(col)
        if not is_blank(value):
            return parse_date(value)
    return None


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------

def normalize_record(raw: dict, today: dt.date | None = None) -> dict:
    """Return a copy of raw with "Age" filled in from the DOB when missing.

    An existing non-blank Age is never touched.  Rows whose DOB is missing
    or unreadable come back unchanged; this never raises.
    """
    record = dict(raw)
    if not is_blank(record.get(AGE_COLUMN)):
        return record

    dob = birth_date(record)
    if dob is not None:
        record[AGE_COLUMN] = calculate_age(dob, today)
    return record


def record_age(record: dict, today: dt.date | None = None) -> int | None:
    """Usable age for a record, or None when it has none.

    A numeric Age wins; otherwise the age is recomputed from the DOB.
    """
    age = coerce_age(record.get(AGE_COLUMN))
    if age is not None:
        return age
    dob = birth_date(record)
    if dob is None:
        return None
    return calculate_age(dob, today)
