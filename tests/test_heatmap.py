import numpy as np

from crypto_analytics.analytics.heatmap import candidate_columns, correlation_matrix, heatmap
from crypto_analytics.data.store import Dataset


def test_matrix_is_symmetric_with_unit_diagonal(dataset):
    result = heatmap(dataset)
    assert result["success"] is True
    assert result["columns"] == ["current_price", "market_cap", "total_volume", "circulating_supply"]

    matrix = np.array(result["correlation_matrix"])
    size = len(result["columns"])
    assert matrix.shape == (size, size)
    assert (matrix == matrix.T).all()
    assert (np.diag(matrix) == 1.0).all()
    assert (matrix >= -1).all() and (matrix <= 1).all()


def test_completeness_fields(dataset):
    result = heatmap(dataset)
    assert result["total_records"] == 6
    assert result["data_points"] == 5
    assert result["data_completeness"] == "83.3%"


def test_excluded_and_text_columns_are_skipped(dataset):
    columns = candidate_columns(dataset)
    for excluded in ("id", "symbol", "name", "image", "ath_date", "roi", "last_updated"):
        assert excluded not in columns


def test_single_numeric_column_fails_with_count():
    dataset = Dataset.from_records([
        {"id": "a", "name": "A", "market_cap": "10"},
        {"id": "b", "name": "B", "market_cap": "20"},
    ])
    result = heatmap(dataset)
    assert result["success"] is False
    assert result["found_columns"] == 1


def test_requested_columns_are_filtered(dataset):
    result = heatmap(dataset, ["market_cap", "name", "nope"])
    assert result["success"] is False
    assert result["found_columns"] == 1

    result = heatmap(dataset, ["market_cap", "total_volume"])
    assert result["success"] is True
    assert result["columns"] == ["market_cap", "total_volume"]


def test_repeated_columns_count_once(dataset):
    result = heatmap(dataset, ["market_cap", "market_cap"])
    assert result["success"] is False
    assert result["found_columns"] == 1

    result = heatmap(dataset, ["market_cap", "total_volume", "market_cap"])
    assert result["columns"] == ["market_cap", "total_volume"]
    assert len(result["correlation_matrix"]) == len(result["columns"])


def test_sparse_columns_are_dropped():
    rows = [{"a": str(i), "b": str(i * 3), "sparse": str(i) if i < 2 else ""} for i in range(10)]
    result = heatmap(Dataset.from_records(rows))
    assert result["success"] is True
    assert result["columns"] == ["a", "b"]
    assert result["correlation_matrix"] == [[1.0, 1.0], [1.0, 1.0]]


def test_not_enough_complete_columns():
    rows = [{"a": str(i), "sparse": "1" if i == 0 else ""} for i in range(10)]
    result = heatmap(Dataset.from_records(rows))
    assert result["success"] is False
    assert result["checked_columns"] == 2
    assert result["valid_columns"] == 1
    assert result["required_data_points"] == 8
    assert result["total_records"] == 10


def test_too_few_data_points():
    result = heatmap(Dataset.from_records([{"a": "1", "b": "2"}]))
    assert result["success"] is False
    assert "need at least 2" in result["message"]


def test_empty_dataset():
    assert heatmap(Dataset()) == {"success": False, "message": "No data available"}
    assert heatmap(Dataset(), ["a", "b"])["found_columns"] == 0


def test_correlation_matrix_constant_column():
    matrix = correlation_matrix({"a": np.array([1.0, 2.0, 3.0]), "c": np.array([4.0, 4.0, 4.0])}, 3)
    assert matrix == [[1.0, 0.0], [0.0, 1.0]]
