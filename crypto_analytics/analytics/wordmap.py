"""
Word map of the largest coins, sized and colored by market cap.
"""
from __future__ import annotations

import pandas as pd

from crypto_analytics.analytics.common import hsl, nonzero_range, round_to
from crypto_analytics.data.store import Dataset


def ranked_coins(dataset: Dataset, limit: int, min_market_cap: float = 0.0) -> pd.DataFrame:
    """Coins with market_cap > min_market_cap and a name and symbol, largest first."""
    if dataset.is_empty:
        return pd.DataFrame(columns=["name", "symbol", "market_cap", "current_price", "image"])

    coins = pd.DataFrame({
        "name": dataset.column("name").astype(str).str.strip(),
        "symbol": dataset.column("symbol").astype(str).str.strip().str.upper(),
        "market_cap": dataset.numeric("market_cap"),
        "current_price": dataset.numeric("current_price").fillna(0.0),
        "image": dataset.column("image").astype(str).str.strip(),
    })
    coins = coins[
        coins["market_cap"].notna()
        & (coins["market_cap"] > min_market_cap)
        & (coins["name"] != "")
        & (coins["symbol"] != "")
    ]
    # Stable sort keeps file order among equal caps
    coins = coins.sort_values("market_cap", ascending=False, kind="mergesort")
    return coins.head(limit).reset_index(drop=True)


def wordmap(dataset: Dataset, limit: int, min_market_cap: float = 0.0) -> dict:
    coins = ranked_coins(dataset, limit, min_market_cap)
    if coins.empty:
        return {"success": False, "message": "No valid coins found for wordmap"}

    min_cap = float(coins["market_cap"].min())
    max_cap = float(coins["market_cap"].max())
    cap_range = nonzero_range(min_cap, max_cap)

    words = []
    for rank, coin in enumerate(coins.itertuples(index=False), start=1):
        ratio = (coin.market_cap - min_cap) / cap_range
        words.append({
            "id": coin.symbol.lower(),
            "text": coin.symbol,
            "value": float(coin.market_cap),
            "size": round_to(10 + ratio * 90),
            "rank": rank,
            "name": coin.name,
            "price": float(coin.current_price),
            "image": coin.image,
            # green (small) -> red (large)
            "color": hsl(120 - ratio * 120, 50 + ratio * 50, 50 - ratio * 20),
            "hue": round_to(120 - ratio * 120),
            "weight": round_to(ratio * 100),
        })

    total_cap = float(coins["market_cap"].sum())
    return {
        "success": True,
        "count": len(words),
        "limit": limit,
        "data": words,
        "statistics": {
            "total_market_cap": total_cap,
            "min_market_cap": round_to(min_cap),
            "max_market_cap": round_to(max_cap),
            "avg_market_cap": round_to(total_cap / len(words)),
        },
    }
