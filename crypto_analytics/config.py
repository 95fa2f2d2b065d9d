"""
Crypto Analytics — Configuration: paths, query bounds, column lists, logging.
"""
import logging
import os
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths — override with CRYPTO_DATA_DIR / CRYPTO_CSV_PATH for deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("CRYPTO_DATA_DIR", str(Path(__file__).resolve().parent.parent)))
BASE_FOLDER = _data_dir


def csv_candidates() -> list[Path]:
    """Candidate CSV locations in priority order (processed export first)."""
    paths = []
    explicit = os.environ.get("CRYPTO_CSV_PATH")
    if explicit:
        paths.append(Path(explicit))
    paths.append(BASE_FOLDER / "data" / "crypto_market_full.csv")
    paths.append(BASE_FOLDER / "data.csv")
    return paths


# ---------------------------------------------------------------------------
# Query parameter bounds (out-of-range values are clamped, never rejected)
# ---------------------------------------------------------------------------
COINS_DEFAULT_LIMIT = 20
COINS_MAX_LIMIT = 250

HISTOGRAM_DEFAULT_BINS = 20
HISTOGRAM_MIN_BINS = 5
HISTOGRAM_MAX_BINS = 100

SCATTER_DEFAULT_X = "current_price"
SCATTER_DEFAULT_Y = "market_cap"
SCATTER_DEFAULT_BINS = 15
SCATTER_MIN_BINS = 5
SCATTER_MAX_BINS = 30
# Axes whose value range exceeds this are binned on a log10 scale
SCATTER_LOG_THRESHOLD = 1000

WORDMAP_DEFAULT_LIMIT = 50
WORDMAP_MIN_LIMIT = 5
WORDMAP_MAX_LIMIT = 200

# ---------------------------------------------------------------------------
# Heatmap column selection
# ---------------------------------------------------------------------------
# Metadata, dates, nested objects, and the sparsely populated FDV column
HEATMAP_EXCLUDE_COLUMNS = [
    "last_updated", "LastUpdate", "image", "name", "symbol", "id",
    "ath_date", "atl_date", "roi",
    "fully_diluted_valuation",
]

# A column needs finite values in at least this share of all rows
HEATMAP_MIN_COMPLETENESS = 0.8

# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Attach a single stdout handler to the package logger."""
    logger = logging.getLogger("crypto_analytics")
    logger.setLevel(getattr(logging, level, logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
