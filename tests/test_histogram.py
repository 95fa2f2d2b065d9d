import numpy as np
import pytest

from crypto_analytics.analytics.common import format_number, to_exponential
from crypto_analytics.analytics.histogram import (
    bucket_indices,
    log_histogram,
    market_cap_histogram,
    market_cap_values,
)
from crypto_analytics.data.store import Dataset


def test_one_value_per_decade_lands_in_distinct_buckets():
    values = np.array([10, 100, 1000, 10000, 100000], dtype=float)
    assert bucket_indices(values, 5).tolist() == [0, 1, 2, 3, 4]

    result = log_histogram(values, 5)
    assert result["success"] is True
    assert [b["count"] for b in result["histogram"]] == [1, 1, 1, 1, 1]
    first = result["histogram"][0]
    assert first["logStart"] == 1.0
    assert first["logEnd"] == 1.8  # 4 decades / 5 bins
    assert first["start"] == 10.0
    assert first["label"] == "$1.0e+1 - $6.3e+1"
    assert [b["percentage"] for b in result["histogram"]] == [20.0] * 5


def test_counts_sum_to_positive_finite_inputs():
    rng = np.random.default_rng(7)
    values = list(10 ** rng.uniform(2, 12, size=500)) + [0, -5, float("nan"), float("inf")]
    result = log_histogram(values, 20)

    assert result["statistics"]["count"] == 500
    assert sum(b["count"] for b in result["histogram"]) == 500
    assert sum(b["percentage"] for b in result["histogram"]) == pytest.approx(100, abs=0.2)
    assert result["statistics"]["maxCount"] == max(b["count"] for b in result["histogram"])


def test_empty_buckets_are_omitted():
    result = log_histogram([1, 2, 1_000_000], 10)
    assert result["bins_count"] == 10
    assert len(result["histogram"]) < 10
    assert all(b["count"] > 0 for b in result["histogram"])
    assert [b["bin"] for b in result["histogram"]] == sorted(b["bin"] for b in result["histogram"])


def test_identical_values_fall_into_first_bucket():
    result = log_histogram([500.0, 500.0, 500.0], 5)
    assert len(result["histogram"]) == 1
    assert result["histogram"][0]["bin"] == 1
    assert result["histogram"][0]["count"] == 3
    assert result["statistics"]["range"] == 0.0


def test_no_positive_values_returns_empty_shape():
    result = log_histogram([0, -1, float("nan")], 20)
    assert result["success"] is True
    assert result["message"] == "No valid market cap data"
    assert result["histogram"] == []
    assert result["statistics"] == {"count": 0, "min": 0, "max": 0, "mean": 0, "median": 0}


def test_summary_statistics():
    result = log_histogram([1, 2, 3, 4], 5)
    stats = result["statistics"]
    assert stats["min"] == 1.0
    assert stats["max"] == 4.0
    assert stats["mean"] == 2.5
    assert stats["median"] == 2.5
    assert stats["p25"] == 1.75
    assert stats["p75"] == 3.25


def test_market_cap_values_drop_missing_and_text(dataset):
    values = market_cap_values(dataset)
    assert len(values) == 5  # "n/a" is text, not a number
    assert values.max() == 1.28e12


def test_market_cap_histogram_on_dataset(dataset):
    result = market_cap_histogram(dataset, 20)
    assert result["statistics"]["count"] == 5
    assert sum(b["count"] for b in result["histogram"]) == 5


def test_missing_market_cap_column():
    dataset = Dataset.from_records([{"id": "a", "name": "A"}])
    assert market_cap_histogram(dataset, 20)["histogram"] == []


@pytest.mark.parametrize("num, expected", [
    (2_500_000_000, "2.5B"),
    (20_000_000, "20.0M"),
    (3_210, "3.2K"),
    (950, "950"),
])
def test_format_number(num, expected):
    assert format_number(num) == expected


def test_to_exponential_has_no_exponent_padding():
    assert to_exponential(1.28e12) == "1.3e+12"
    assert to_exponential(0.0025) == "2.5e-3"
