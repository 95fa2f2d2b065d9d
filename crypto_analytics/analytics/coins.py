"""
Coin table — case-insensitive search and pagination over normalized records.
"""
from __future__ import annotations

import math

from crypto_analytics.data.normalize import normalize_coin_data
from crypto_analytics.data.store import Dataset


def search_mask(dataset: Dataset, search: str):
    """Rows whose name, symbol, or id contains `search` (case-insensitive)."""
    mask = None
    for col in ("name", "symbol", "id"):
        hit = dataset.column(col).astype(str).str.lower().str.contains(search, regex=False)
        mask = hit if mask is None else mask | hit
    return mask


def list_coins(dataset: Dataset, page: int, limit: int, search: str = "") -> dict:
    search = (search or "").strip().lower()
    frame = dataset.frame
    if search and not frame.empty:
        frame = frame[search_mask(dataset, search)]

    total = len(frame)
    start = (page - 1) * limit
    end = start + limit
    rows = frame.iloc[start:end].to_dict("records")
    coins = [normalize_coin_data(row) for row in rows]

    return {
        "success": True,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": math.ceil(total / limit),
            "has_next": end < total,
            "has_prev": page > 1,
        },
        "count": len(coins),
        "data": coins,
    }
