"""
Coin table endpoint — paginated, searchable normalized records.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from crypto_analytics.analytics.coins import list_coins
from crypto_analytics.api.dependencies import coins_params, get_dataset
from crypto_analytics.api.response_models import CoinsResponse
from crypto_analytics.data.store import Dataset

router = APIRouter(prefix="/api", tags=["coins"])


@router.get("/coins", response_model=CoinsResponse)
def coins(
    dataset: Dataset = Depends(get_dataset),
    params: dict = Depends(coins_params),
):
    """Normalized coin records; search matches name, symbol, or id."""
    return list_coins(dataset, params["page"], params["limit"], params["search"])
