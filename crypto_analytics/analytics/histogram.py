"""
Log-scale market-cap histogram with summary statistics.
"""
from __future__ import annotations

import numpy as np

from crypto_analytics.analytics.common import (
    format_number,
    gradient_color,
    nonzero_range,
    pct_of_total,
    percentile,
    round_to,
    to_exponential,
)
from crypto_analytics.data.normalize import normalize_value
from crypto_analytics.data.store import Dataset


def market_cap_values(dataset: Dataset, column: str = "market_cap") -> np.ndarray:
    """Strictly positive, finite values of a column via the loose coercion.

    Missing cells coerce to 0 and are dropped by the positivity filter.
    """
    nums = [v.number for v in map(normalize_value, dataset.column(column)) if v.number is not None]
    arr = np.asarray(nums, dtype=float)
    return arr[np.isfinite(arr) & (arr > 0)]


def bucket_indices(values: np.ndarray, bins: int) -> np.ndarray:
    """Log10 bucket index per value, clamped to [0, bins - 1]."""
    log_min = np.log10(values.min())
    log_max = np.log10(values.max())
    log_bin_size = nonzero_range(log_min, log_max) / bins
    idx = np.floor((np.log10(values) - log_min) / log_bin_size).astype(int)
    return np.clip(idx, 0, bins - 1)


def _empty_result() -> dict:
    return {
        "success": True,
        "message": "No valid market cap data",
        "histogram": [],
        "statistics": {"count": 0, "min": 0, "max": 0, "mean": 0, "median": 0},
    }


def log_histogram(values, bins: int) -> dict:
    """Bucket positive values into `bins` equal-width log10 intervals.

    Empty buckets are dropped from the output list but every value still
    counts toward the percentage denominator.
    """
    arr = np.asarray(values, dtype=float)
    arr = np.sort(arr[np.isfinite(arr) & (arr > 0)])
    if arr.size == 0:
        return _empty_result()

    total = int(arr.size)
    vmin, vmax = float(arr[0]), float(arr[-1])
    log_min = float(np.log10(vmin))
    log_bin_size = nonzero_range(log_min, float(np.log10(vmax))) / bins

    counts = np.bincount(bucket_indices(arr, bins), minlength=bins)

    histogram = []
    for i in range(bins):
        log_start = log_min + i * log_bin_size
        log_end = log_min + (i + 1) * log_bin_size
        start = 10 ** log_start
        end = 10 ** log_end
        histogram.append({
            "bin": i + 1,
            "label": f"${to_exponential(start)} - ${to_exponential(end)}",
            "range": f"{format_number(start)} - {format_number(end)}",
            "start": round_to(start),
            "end": round_to(end),
            "logStart": round_to(log_start),
            "logEnd": round_to(log_end),
            "count": int(counts[i]),
            "percentage": round_to(pct_of_total(counts[i], total)),
            "color": gradient_color(i, bins),
        })

    return {
        "success": True,
        "statistics": {
            "count": total,
            "min": round_to(vmin),
            "max": round_to(vmax),
            "mean": round_to(arr.mean()),
            "median": round_to(np.median(arr)),
            "p25": round_to(percentile(arr, 25)),
            "p75": round_to(percentile(arr, 75)),
            "range": round_to(vmax - vmin),
            "maxCount": int(counts.max()),
        },
        "bins_count": bins,
        "scale": "logarithmic",
        "histogram": [b for b in histogram if b["count"] > 0],
    }


def market_cap_histogram(dataset: Dataset, bins: int) -> dict:
    return log_histogram(market_cap_values(dataset), bins)
