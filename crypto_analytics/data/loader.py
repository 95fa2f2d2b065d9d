"""
CSV discovery and loading.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from crypto_analytics.config import csv_candidates

logger = logging.getLogger(__name__)


def find_existing_csv(candidates: Iterable[Path] | None = None) -> Optional[Path]:
    """First candidate path that exists, or None."""
    if candidates is None:
        candidates = csv_candidates()
    for path in candidates:
        if Path(path).is_file():
            return Path(path)
    return None


def load_csv(filepath: Path) -> pd.DataFrame:
    """Read every column as raw text.

    Empty cells stay "" instead of NaN so downstream parsers see exactly
    what was in the file.
    """
    df = pd.read_csv(filepath, dtype=str, keep_default_na=False)
    df.columns = [str(c).strip() for c in df.columns]
    return df
