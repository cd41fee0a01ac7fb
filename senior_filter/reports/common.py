"""
JSON-safety helpers shared by report generators.
"""
from __future__ import annotations

import datetime as dt
import math

import numpy as np
import pandas as pd


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas/date values to plain JSON types.

    NaN/Inf and NaT become None; dates are shown day/month/year, the same
    way they are typed into the upload.
    """
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (float, np.floating)):
        v = float(obj)
        return None if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, (dt.date, dt.datetime)):
        if pd.isna(obj):
            return None
        return f"{obj:%d/%m/%Y}"
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
