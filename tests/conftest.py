"""Shared fixtures: a small coin market snapshot as rows, a Dataset, a CSV, and an API client."""
from __future__ import annotations

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from crypto_analytics.api.dependencies import set_store
from crypto_analytics.data.store import Dataset, DataStore
from crypto_analytics.main import create_app

COLUMNS = [
    "id", "symbol", "name", "image", "current_price", "market_cap", "total_volume",
    "circulating_supply", "ath_date", "roi", "last_updated",
]

SAMPLE_ROWS = [
    ["bitcoin", "BTC", "Bitcoin", "https://img/btc.png", "65000", "1280000000000", "35000000000",
     "19700000", "2024-03-14T07:10:36.635Z", "", "2024-06-01T12:00:00.000Z"],
    ["ethereum", "ETH", "Ethereum", "https://img/eth.png", "3400", "410000000000", "15000000000",
     "120000000", "2021-11-10T14:24:19.604Z", "{'times': 39.5, 'currency': 'btc', 'percentage': 3950.2}",
     "2024-06-01T12:00:00.000Z"],
    ["tether", "usdt", "Tether", "https://img/usdt.png", "1.0", "110000000000", "50000000000",
     "110000000000", "2018-07-24T00:00:00.000Z", "", "2024-06-01T12:00:00.000Z"],
    ["solana", "SOL", "Solana", "https://img/sol.png", "150", "70000000000", "3000000000",
     "460000000", "2021-11-06T21:54:35.825Z", "", "2024-06-01T12:00:00.000Z"],
    ["dogecoin", "DOGE", "Dogecoin", "https://img/doge.png", "0.15", "22000000000", "1000000000",
     "145000000000", "2021-05-08T05:08:23.458Z", "", "2024-06-01T12:00:00.000Z"],
    ["broken-coin", "BRK", "Broken Coin", "", "", "n/a", "", "", "not a date", "{'times': ", ""],
]


@pytest.fixture()
def sample_rows() -> list[dict]:
    return [dict(zip(COLUMNS, row)) for row in SAMPLE_ROWS]


@pytest.fixture()
def dataset(sample_rows) -> Dataset:
    return Dataset.from_records(sample_rows)


@pytest.fixture()
def csv_file(tmp_path, sample_rows):
    path = tmp_path / "data" / "crypto_market_full.csv"
    path.parent.mkdir(parents=True)
    pd.DataFrame(sample_rows, columns=COLUMNS).to_csv(path, index=False)
    return path


def _client_for(store: DataStore):
    set_store(store)
    return TestClient(create_app())


@pytest.fixture()
def client(csv_file):
    yield _client_for(DataStore(candidates=[csv_file]))
    set_store(None)


@pytest.fixture()
def empty_client(tmp_path):
    yield _client_for(DataStore(candidates=[tmp_path / "missing.csv"]))
    set_store(None)
