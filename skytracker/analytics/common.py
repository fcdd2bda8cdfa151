"""
Small numeric and JSON helpers shared by the view builders.
"""
from __future__ import annotations

import math

import numpy as np
import pandas as pd


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """numerator / denominator, or default for a zero/NaN denominator or result."""
    if not denominator or pd.isna(denominator):
        return default
    quotient = numerator / denominator
    return default if pd.isna(quotient) else quotient


def pct_of_total(part: float, total: float) -> float:
    return 100.0 * safe_divide(part, total)


def line_value(value: float, count: int) -> float:
    """Value of a holding: per-item value times count."""
    return float(value) * int(count)


def _finite(x: float) -> float:
    return x if math.isfinite(x) else 0.0


def sanitize_for_json(obj):
    """Plain-Python copy of obj: numpy scalars unwrapped, NaN/inf floats zeroed,
    pandas missing values as None. Dict keys become strings."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple, np.ndarray)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.generic):
        obj = obj.item()
    if isinstance(obj, float):
        return _finite(obj)
    if obj is not None and pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
