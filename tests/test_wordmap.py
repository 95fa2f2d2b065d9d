from crypto_analytics.analytics.wordmap import ranked_coins, wordmap
from crypto_analytics.data.store import Dataset


def _caps_dataset(n: int) -> Dataset:
    return Dataset.from_records([
        {"id": f"c{i}", "symbol": f"c{i}", "name": f"Coin {i}", "market_cap": str(1000 * (i + 1)),
         "current_price": str(i)}
        for i in range(n)
    ])


def test_sorted_ranked_and_truncated():
    result = wordmap(_caps_dataset(30), limit=10)
    words = result["data"]
    assert result["success"] is True
    assert result["count"] == len(words) == 10
    values = [w["value"] for w in words]
    assert values == sorted(values, reverse=True)
    assert [w["rank"] for w in words] == list(range(1, 11))
    assert words[0]["text"] == "C29"
    assert words[0]["id"] == "c29"


def test_size_and_hue_interpolate_over_filtered_range():
    words = wordmap(_caps_dataset(5), limit=5)["data"]
    assert words[0]["size"] == 100.0
    assert words[-1]["size"] == 10.0
    assert words[0]["hue"] == 0.0
    assert words[-1]["hue"] == 120.0
    assert words[0]["color"] == "hsl(0, 100%, 30%)"
    assert words[-1]["color"] == "hsl(120, 50%, 50%)"
    assert all(10 <= w["size"] <= 100 for w in words)
    assert all(0 <= w["weight"] <= 100 for w in words)


def test_min_market_cap_is_exclusive():
    result = wordmap(_caps_dataset(5), limit=50, min_market_cap=3000)
    assert [w["value"] for w in result["data"]] == [5000.0, 4000.0]


def test_rows_without_name_symbol_or_cap_are_excluded(dataset):
    rows = [
        {"name": "", "symbol": "x", "market_cap": "100"},
        {"name": "No Symbol", "symbol": " ", "market_cap": "100"},
        {"name": "Bad Cap", "symbol": "bad", "market_cap": "n/a"},
        {"name": "Good", "symbol": "good", "market_cap": "100"},
    ]
    coins = ranked_coins(Dataset.from_records(rows), limit=10)
    assert coins["name"].tolist() == ["Good"]

    result = wordmap(dataset, limit=50)
    assert "BRK" not in [w["text"] for w in result["data"]]
    assert result["count"] == 5


def test_single_coin_has_minimum_size():
    result = wordmap(_caps_dataset(1), limit=5)
    assert result["data"][0]["size"] == 10.0
    assert result["statistics"]["min_market_cap"] == result["statistics"]["max_market_cap"] == 1000.0


def test_statistics(dataset):
    stats = wordmap(dataset, limit=2)["statistics"]
    assert stats["total_market_cap"] == 1.28e12 + 4.1e11
    assert stats["max_market_cap"] == 1.28e12
    assert stats["avg_market_cap"] == (1.28e12 + 4.1e11) / 2


def test_no_coins_is_a_flagged_failure():
    assert wordmap(Dataset(), limit=50) == {"success": False, "message": "No valid coins found for wordmap"}
    result = wordmap(_caps_dataset(3), limit=50, min_market_cap=1e9)
    assert result["success"] is False
