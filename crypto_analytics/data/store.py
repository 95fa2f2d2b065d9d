"""
DataStore — load-once, in-memory market dataset backed by pandas.

Loaded at startup (or on first request), read on every request. The loaded
Dataset is never mutated; a (re)load swaps in a new one wholesale, so a
request that grabbed a snapshot keeps a consistent view.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from crypto_analytics.config import csv_candidates
from crypto_analytics.data.loader import find_existing_csv, load_csv
from crypto_analytics.data.normalize import parse_float
from crypto_analytics.data.schemas import DatasetSchema, FieldType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Dataset:
    """Immutable snapshot of the raw rows (every cell a string)."""
    frame: pd.DataFrame = field(default_factory=pd.DataFrame)
    schema: DatasetSchema = field(default_factory=DatasetSchema)
    source: Optional[Path] = None

    @classmethod
    def from_frame(cls, frame: pd.DataFrame, source: Optional[Path] = None) -> "Dataset":
        return cls(frame=frame, schema=DatasetSchema.from_header(frame.columns), source=source)

    @classmethod
    def from_records(cls, rows: list[dict]) -> "Dataset":
        """Build a dataset from raw row dicts (missing cells become "")."""
        frame = pd.DataFrame.from_records(rows).fillna("") if rows else pd.DataFrame()
        return cls.from_frame(frame)

    def __len__(self) -> int:
        return len(self.frame)

    @property
    def is_empty(self) -> bool:
        return self.frame.empty

    @property
    def columns(self) -> list[str]:
        return list(self.schema.columns)

    def records(self, start: int = 0, stop: int | None = None) -> list[dict]:
        """Raw rows as dicts, in file order."""
        return self.frame.iloc[start:stop].to_dict("records")

    def column(self, column: str) -> pd.Series:
        """Raw text of one column ("" for every row when the column is absent)."""
        if column not in self.frame.columns:
            return pd.Series("", index=self.frame.index, dtype=object)
        return self.frame[column]

    def numeric(self, column: str) -> pd.Series:
        """Column parsed as float; unparseable or non-finite cells are NaN."""
        parsed = self.column(column).map(parse_float)
        return pd.to_numeric(parsed, errors="coerce").astype(float)

    def looks_numeric(self, column: str) -> bool:
        """True when the column's first non-empty value parses as a finite number."""
        raw = self.column(column)
        non_empty = raw[raw.astype(str) != ""]
        return not non_empty.empty and parse_float(non_empty.iloc[0]) is not None

    def numeric_columns(self) -> list[str]:
        """Number-typed or unknown columns that look numeric."""
        return [
            c for c in self.schema.columns
            if self.schema.type_of(c) in (FieldType.NUMBER, FieldType.UNKNOWN) and self.looks_numeric(c)
        ]


class DataStore:
    """Owns the process-wide Dataset and its one-time load."""

    def __init__(self, candidates: Iterable[Path] | None = None) -> None:
        self._candidates = list(candidates) if candidates is not None else None
        self._dataset = Dataset()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> "DataStore":
        """Read the first existing candidate CSV; fall back to an empty dataset."""
        path = find_existing_csv(self._candidates)
        if path is None:
            logger.warning("No CSV file found (searched: %s)", ", ".join(str(p) for p in self._searched()))
            self._dataset = Dataset()
            return self

        logger.info("Loading CSV: %s ...", path)
        try:
            frame = load_csv(path)
        except (OSError, ValueError) as exc:
            logger.error("Error loading CSV %s: %s", path, exc)
            self._dataset = Dataset()
            return self

        dataset = Dataset.from_frame(frame, source=path)
        unknown = dataset.schema.unknown_columns
        if unknown:
            logger.warning("Columns outside the coin schema: %s", ", ".join(unknown))
        missing = dataset.schema.missing_columns
        if missing:
            logger.warning("Coin schema fields missing from %s: %s", path.name, ", ".join(missing))

        self._dataset = dataset
        logger.info("Loaded %s rows from %s", f"{len(dataset):,}", path.name)
        return self

    def ensure_loaded(self) -> Dataset:
        """Load on first use; a no-op once rows are present. Returns the snapshot."""
        if self._dataset.is_empty:
            self.load()
        return self._dataset

    def _searched(self) -> list[Path]:
        if self._candidates is not None:
            return self._candidates
        return csv_candidates()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def dataset(self) -> Dataset:
        return self._dataset

    def row_count(self) -> int:
        return len(self._dataset)
