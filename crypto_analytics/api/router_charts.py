"""
Chart endpoints — histogram, scatter density, correlation heatmap, word map.

"No usable data" is reported as success=false with HTTP 200.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from crypto_analytics.analytics.common import sanitize_for_json
from crypto_analytics.analytics.heatmap import heatmap as build_heatmap
from crypto_analytics.analytics.histogram import market_cap_histogram
from crypto_analytics.analytics.scatter import scatter as build_scatter
from crypto_analytics.analytics.wordmap import wordmap as build_wordmap
from crypto_analytics.api.dependencies import (
    get_dataset,
    heatmap_columns,
    histogram_bins,
    scatter_params,
    wordmap_params,
)
from crypto_analytics.data.store import Dataset

router = APIRouter(prefix="/api", tags=["charts"])


def _safe_json(data: dict) -> JSONResponse:
    return JSONResponse(content=sanitize_for_json(data))


@router.get("/histogram")
def histogram(
    dataset: Dataset = Depends(get_dataset),
    bins: int = Depends(histogram_bins),
):
    """Log-scale market-cap histogram with summary statistics."""
    return _safe_json(market_cap_histogram(dataset, bins))


@router.get("/scatter")
def scatter(
    dataset: Dataset = Depends(get_dataset),
    params: dict = Depends(scatter_params),
):
    """2D binned density of two numeric columns and their correlation."""
    return _safe_json(build_scatter(dataset, params["x_column"], params["y_column"], params["bins"]))


@router.get("/heatmap")
def heatmap(
    dataset: Dataset = Depends(get_dataset),
    columns: list[str] | None = Depends(heatmap_columns),
):
    """Correlation matrix over numeric columns with 80%+ completeness."""
    return _safe_json(build_heatmap(dataset, columns))


@router.get("/wordmap")
def wordmap(
    dataset: Dataset = Depends(get_dataset),
    params: dict = Depends(wordmap_params),
):
    """Top coins by market cap with display size and color."""
    return _safe_json(build_wordmap(dataset, params["limit"], params["min_market_cap"]))
