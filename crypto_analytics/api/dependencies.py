"""
FastAPI dependencies — DataStore singleton, lenient query parameter parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import Query

from crypto_analytics.config import (
    COINS_DEFAULT_LIMIT,
    COINS_MAX_LIMIT,
    HISTOGRAM_DEFAULT_BINS,
    HISTOGRAM_MAX_BINS,
    HISTOGRAM_MIN_BINS,
    SCATTER_DEFAULT_BINS,
    SCATTER_DEFAULT_X,
    SCATTER_DEFAULT_Y,
    SCATTER_MAX_BINS,
    SCATTER_MIN_BINS,
    WORDMAP_DEFAULT_LIMIT,
    WORDMAP_MAX_LIMIT,
    WORDMAP_MIN_LIMIT,
)
from crypto_analytics.data.normalize import parse_float, parse_int
from crypto_analytics.data.store import Dataset, DataStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup, created lazily otherwise)
# ---------------------------------------------------------------------------
_store: DataStore | None = None


def set_store(store: DataStore | None) -> None:
    global _store
    _store = store


def configured_store() -> DataStore | None:
    """The store set at startup or by set_store, without creating one."""
    return _store


def get_data_store() -> DataStore:
    global _store
    if _store is None:
        _store = DataStore()
    return _store


def get_dataset() -> Dataset:
    """Snapshot of the loaded dataset, loading it on first use."""
    return get_data_store().ensure_loaded()


# ---------------------------------------------------------------------------
# Parameter parsing — malformed values fall back to defaults, then clamp
# ---------------------------------------------------------------------------

def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def int_param(raw: Optional[str], default: int) -> int:
    """Leading integer of raw; default when absent, unparseable, or 0."""
    return parse_int(raw) or default


def coins_params(
    page: Optional[str] = Query(None, description="1-based page number"),
    limit: Optional[str] = Query(None, description=f"Page size (max {COINS_MAX_LIMIT})"),
    search: Optional[str] = Query(None, description="Substring of name, symbol, or id"),
) -> dict:
    return {
        "page": max(1, int_param(page, 1)),
        "limit": clamp(int_param(limit, COINS_DEFAULT_LIMIT), 1, COINS_MAX_LIMIT),
        "search": search or "",
    }


def histogram_bins(
    bins: Optional[str] = Query(None, description=f"{HISTOGRAM_MIN_BINS}-{HISTOGRAM_MAX_BINS}"),
) -> int:
    return clamp(int_param(bins, HISTOGRAM_DEFAULT_BINS), HISTOGRAM_MIN_BINS, HISTOGRAM_MAX_BINS)


def scatter_params(
    x: Optional[str] = Query(None, description="Numeric column for the X axis"),
    y: Optional[str] = Query(None, description="Numeric column for the Y axis"),
    bins: Optional[str] = Query(None, description=f"{SCATTER_MIN_BINS}-{SCATTER_MAX_BINS} per axis"),
) -> dict:
    return {
        "x_column": x or SCATTER_DEFAULT_X,
        "y_column": y or SCATTER_DEFAULT_Y,
        "bins": clamp(int_param(bins, SCATTER_DEFAULT_BINS), SCATTER_MIN_BINS, SCATTER_MAX_BINS),
    }


def heatmap_columns(
    columns: Optional[str] = Query(None, description="Comma-separated column names"),
) -> list[str] | None:
    if not columns:
        return None
    return [c.strip() for c in columns.split(",")]


def wordmap_params(
    limit: Optional[str] = Query(None, description=f"{WORDMAP_MIN_LIMIT}-{WORDMAP_MAX_LIMIT}"),
    min_market_cap: Optional[str] = Query(None, description="Exclusive lower bound on market cap"),
) -> dict:
    return {
        "limit": clamp(int_param(limit, WORDMAP_DEFAULT_LIMIT), WORDMAP_MIN_LIMIT, WORDMAP_MAX_LIMIT),
        "min_market_cap": max(0.0, parse_float(min_market_cap) or 0.0),
    }
