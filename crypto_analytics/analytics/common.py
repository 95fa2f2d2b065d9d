"""
Safe math, formatting, and correlation helpers used across all analytics modules.
"""
from __future__ import annotations

import math

import numpy as np
import pandas as pd


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero or NaN."""
    if denominator == 0 or pd.isna(denominator):
        return default
    result = numerator / denominator
    return default if pd.isna(result) else result


def pct_of_total(part: float, total: float) -> float:
    """Percentage of total."""
    return safe_divide(part, total) * 100


def nonzero_range(low: float, high: float) -> float:
    """high - low, with 1 substituted for an empty range."""
    return (high - low) or 1.0


def round_to(value: float, places: int = 2) -> float:
    return float(round(float(value), places))


def percentile(values, p: float) -> float:
    """Linear-interpolated percentile (p in 0..100); 0 for empty input."""
    arr = np.sort(np.asarray(values, dtype=float))
    if arr.size == 0:
        return 0.0
    index = (p / 100) * (arr.size - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    if lower == upper:
        return float(arr[lower])
    weight = index - lower
    return float(arr[lower] * (1 - weight) + arr[upper] * weight)


def pearson(x, y) -> float:
    """Population Pearson correlation, clamped to [-1, 1].

    Returns 0.0 when either side has zero variance.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    n = min(x.size, y.size)
    if n == 0:
        return 0.0
    x, y = x[:n], y[:n]
    dx = x - x.mean()
    dy = y - y.mean()
    covariance = (dx * dy).sum() / n
    std_x = math.sqrt((dx * dx).sum() / n)
    std_y = math.sqrt((dy * dy).sum() / n)
    corr = safe_divide(covariance, std_x * std_y)
    return max(-1.0, min(1.0, corr))


# ---------------------------------------------------------------------------
# Display formatting
# ---------------------------------------------------------------------------

def format_number(num: float) -> str:
    """Abbreviate large numbers: 1.5B, 20.0M, 3.2K, 950."""
    if num >= 1e9:
        return f"{num / 1e9:.1f}B"
    if num >= 1e6:
        return f"{num / 1e6:.1f}M"
    if num >= 1e3:
        return f"{num / 1e3:.1f}K"
    return f"{num:.0f}"


def to_exponential(num: float, digits: int = 1) -> str:
    """Exponential notation without exponent padding: 1.5e+9, 2.0e-3."""
    mantissa, exp = f"{num:.{digits}e}".split("e")
    return f"{mantissa}e{int(exp):+d}"


def _css_number(value: float) -> str:
    value = round(float(value), 4)
    return str(int(value)) if value.is_integer() else repr(value)


def hsl(hue: float, saturation: float, lightness: float) -> str:
    return f"hsl({_css_number(hue)}, {_css_number(saturation)}%, {_css_number(lightness)}%)"


def gradient_color(index: int, total: int) -> str:
    """Bin color stepping hue 0 -> 240 with rising saturation and lightness."""
    ratio = safe_divide(index, total)
    return hsl(ratio * 240, 70 + ratio * 30, 45 + ratio * 10)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        return {str(k) if not isinstance(k, str) else k: sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        v = float(obj)
        return 0.0 if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float):
        return 0.0 if (math.isnan(obj) or math.isinf(obj)) else obj
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
