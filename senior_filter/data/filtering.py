"""
Minimum-age filter over normalised records.
"""
from __future__ import annotations

import datetime as dt
import math

from senior_filter.data.normalize import is_blank, record_age
from senior_filter.data.schemas import MissingThresholdError, InvalidThresholdError


def parse_threshold(value) -> int:
    """Parse the minimum-age input into a non-negative int."""
    if is_blank(value):
        raise MissingThresholdError()
    if isinstance(value, bool):
        raise InvalidThresholdError()
    if isinstance(value, int):
        number = value
    else:
        text = str(value).strip()
        try:
            number = int(text)
        except ValueError:
            try:
                as_float = float(text)
            except ValueError:
                raise InvalidThresholdError()
            if not math.isfinite(as_float) or not as_float.is_integer():
                raise InvalidThresholdError()
            number = int(as_float)
    if number < 0:
        raise InvalidThresholdError()
    return number


def filter_by_min_age(records: list[dict], min_age: int, today: dt.date | None = None) -> list[dict]:
    """Records whose age is at least min_age, in their original order.

    Records with no usable age (no numeric Age and no readable DOB) are left out.
    """
    if today is None:
        today = dt.date.today()
    kept = []
    for record in records:
        age = record_age(record, today)
        if age is not None and age >= min_age:
            kept.append(record)
    return kept
