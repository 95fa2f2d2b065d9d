"""
Meta endpoints: health, dataset columns.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from crypto_analytics.api.dependencies import get_dataset
from crypto_analytics.api.response_models import ColumnInfo, ColumnsResponse, HealthResponse
from crypto_analytics.data.store import Dataset

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(dataset: Dataset = Depends(get_dataset)):
    return HealthResponse(
        status="ok" if not dataset.is_empty else "empty",
        rows=len(dataset),
        columns=len(dataset.columns),
        source=str(dataset.source) if dataset.source else None,
    )


@router.get("/columns", response_model=ColumnsResponse)
def list_columns(dataset: Dataset = Depends(get_dataset)):
    schema = dataset.schema
    return ColumnsResponse(
        columns=[ColumnInfo(name=c, type=schema.type_of(c).value) for c in schema.columns],
        numeric_columns=dataset.numeric_columns(),
        unknown_columns=schema.unknown_columns,
        missing_columns=schema.missing_columns,
    )
