"""
2D binned scatter density between two numeric columns, plus Pearson correlation.
"""
from __future__ import annotations

import numpy as np

from crypto_analytics.analytics.common import nonzero_range, pearson, round_to
from crypto_analytics.config import SCATTER_LOG_THRESHOLD
from crypto_analytics.data.store import Dataset


def positive_pairs(dataset: Dataset, x_column: str, y_column: str) -> tuple[np.ndarray, np.ndarray]:
    """Row-aligned (x, y) where both values are finite and > 0."""
    x = dataset.numeric(x_column).to_numpy()
    y = dataset.numeric(y_column).to_numpy()
    mask = np.isfinite(x) & np.isfinite(y) & (x > 0) & (y > 0)
    return x[mask], y[mask]


def axis_bins(values: np.ndarray, bins: int, use_log: bool) -> np.ndarray:
    """Bin index per value on a linear or log10 axis, clamped to [0, bins - 1]."""
    if use_log:
        values = np.log10(values)
    low, high = values.min(), values.max()
    idx = np.floor((values - low) / nonzero_range(low, high) * bins).astype(int)
    return np.clip(idx, 0, bins - 1)


def density(x: np.ndarray, y: np.ndarray, bins: int) -> dict:
    """Sparse bins x bins count grid over paired values.

    Returns only non-empty cells as [x_bin, y_bin, count], ordered by x then y.
    """
    x_log = bool(x.max() - x.min() > SCATTER_LOG_THRESHOLD)
    y_log = bool(y.max() - y.min() > SCATTER_LOG_THRESHOLD)

    grid = np.zeros((bins, bins), dtype=int)
    np.add.at(grid, (axis_bins(x, bins, x_log), axis_bins(y, bins, y_log)), 1)

    cells = [[int(i), int(j), int(grid[i, j])] for i, j in np.argwhere(grid > 0)]
    return {
        "log": {"x": x_log, "y": y_log},
        "data": cells,
        "max_count": int(grid.max()),
        "x_range": [round_to(x.min(), 4), round_to(x.max(), 4)],
        "y_range": [round_to(y.min(), 4), round_to(y.max(), 4)],
    }


def scatter(dataset: Dataset, x_column: str, y_column: str, bins: int) -> dict:
    x, y = positive_pairs(dataset, x_column, y_column)
    if x.size == 0:
        return {
            "success": False,
            "message": f"No valid data for columns: x={x_column}, y={y_column}",
        }

    grid = density(x, y, bins)
    return {
        "success": True,
        "x": x_column,
        "y": y_column,
        "bins": bins,
        "log": grid["log"],
        "data": grid["data"],
        "total": int(x.size),
        "bins_count": len(grid["data"]),
        "max_count": grid["max_count"],
        "x_range": grid["x_range"],
        "y_range": grid["y_range"],
        "stats": {"correlation": round_to(pearson(x, y), 4)},
    }
