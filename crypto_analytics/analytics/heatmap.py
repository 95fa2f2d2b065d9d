"""
Pairwise correlation matrix ("heatmap") over sufficiently complete numeric columns.
"""
from __future__ import annotations

import math
from typing import Optional

import numpy as np

from crypto_analytics.analytics.common import pearson, round_to
from crypto_analytics.config import HEATMAP_EXCLUDE_COLUMNS, HEATMAP_MIN_COMPLETENESS
from crypto_analytics.data.store import Dataset


def candidate_columns(dataset: Dataset, requested: Optional[list[str]] = None) -> list[str]:
    """Requested (or all header) columns, deduplicated, minus exclusions, that look numeric.

    A column looks numeric when its first non-empty value parses as a finite float.
    """
    columns = requested if requested is not None else dataset.columns
    columns = list(dict.fromkeys(columns))
    return [c for c in columns if c not in HEATMAP_EXCLUDE_COLUMNS and dataset.looks_numeric(c)]


def correlation_matrix(series: dict[str, np.ndarray], n: int) -> list[list[float]]:
    """Symmetric matrix of Pearson r over the first n values of each column."""
    names = list(series)
    size = len(names)
    matrix = [[1.0] * size for _ in range(size)]
    for i in range(size):
        for j in range(i + 1, size):
            r = round_to(pearson(series[names[i]][:n], series[names[j]][:n]), 4)
            matrix[i][j] = r
            matrix[j][i] = r
    return matrix


def heatmap(dataset: Dataset, requested: Optional[list[str]] = None) -> dict:
    if requested is None and dataset.is_empty:
        return {"success": False, "message": "No data available"}

    columns = candidate_columns(dataset, requested)
    if len(columns) < 2:
        return {
            "success": False,
            "message": "Need at least 2 valid numeric columns",
            "found_columns": len(columns),
        }

    # Each column keeps its finite values in file order; rows are not re-aligned
    data = {}
    for col in columns:
        values = dataset.numeric(col).to_numpy()
        data[col] = values[np.isfinite(values)]

    total_records = len(dataset)
    min_points = math.floor(total_records * HEATMAP_MIN_COMPLETENESS)
    valid_columns = [c for c in columns if len(data[c]) >= min_points]

    if len(valid_columns) < 2:
        return {
            "success": False,
            "message": (
                f"Not enough columns with sufficient data. Need at least 2 columns "
                f"with {HEATMAP_MIN_COMPLETENESS:.0%}+ data points"
            ),
            "checked_columns": len(columns),
            "valid_columns": len(valid_columns),
            "required_data_points": min_points,
            "total_records": total_records,
        }

    n = min(len(data[c]) for c in valid_columns)
    if n < 2:
        return {
            "success": False,
            "message": f"Not enough valid data points ({n} found, need at least 2)",
            "valid_columns": len(valid_columns),
        }

    matrix = correlation_matrix({c: data[c] for c in valid_columns}, n)
    return {
        "success": True,
        "columns": valid_columns,
        "data_points": n,
        "data_completeness": f"{round_to(n / total_records * 100, 1):g}%",
        "total_records": total_records,
        "correlation_matrix": matrix,
        "description": (
            f"Correlation matrix with {HEATMAP_MIN_COMPLETENESS:.0%}+ data completeness. "
            "Range: -1 (negative) to 1 (positive)."
        ),
    }
