"""
Coin record schema and the tagged value type used by the loose coercion path.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class FieldType(str, Enum):
    TEXT = "text"
    SYMBOL = "symbol"      # text, lower-cased
    NUMBER = "number"
    DATE = "date"
    OBJECT = "object"      # single-quoted JSON dict, e.g. roi
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CoinField:
    """One column of the normalized coin record."""
    name: str
    type: FieldType
    fallbacks: tuple[str, ...] = ()   # alternative raw column names, tried in order


# Ordered: the normalized record keeps this key order
COIN_SCHEMA: tuple[CoinField, ...] = (
    CoinField("id", FieldType.TEXT),
    CoinField("symbol", FieldType.SYMBOL),
    CoinField("name", FieldType.TEXT),
    CoinField("image", FieldType.TEXT),
    CoinField("current_price", FieldType.NUMBER),
    CoinField("market_cap", FieldType.NUMBER),
    CoinField("market_cap_rank", FieldType.NUMBER),
    CoinField("fully_diluted_valuation", FieldType.NUMBER),
    CoinField("total_volume", FieldType.NUMBER),
    CoinField("high_24h", FieldType.NUMBER),
    CoinField("low_24h", FieldType.NUMBER),
    CoinField("price_change_24h", FieldType.NUMBER),
    CoinField("price_change_percentage_24h", FieldType.NUMBER),
    CoinField("market_cap_change_24h", FieldType.NUMBER),
    CoinField("market_cap_change_percentage_24h", FieldType.NUMBER),
    CoinField("circulating_supply", FieldType.NUMBER),
    CoinField("total_supply", FieldType.NUMBER),
    CoinField("max_supply", FieldType.NUMBER),
    CoinField("ath", FieldType.NUMBER),
    CoinField("ath_change_percentage", FieldType.NUMBER),
    CoinField("ath_date", FieldType.DATE),
    CoinField("atl", FieldType.NUMBER),
    CoinField("atl_change_percentage", FieldType.NUMBER),
    CoinField("atl_date", FieldType.DATE),
    CoinField("roi", FieldType.OBJECT),
    CoinField("last_updated", FieldType.DATE, fallbacks=("LastUpdate",)),
)

_FIELD_TYPES: dict[str, FieldType] = {}
for _f in COIN_SCHEMA:
    _FIELD_TYPES[_f.name] = _f.type
    for _alias in _f.fallbacks:
        _FIELD_TYPES[_alias] = _f.type


@dataclass(frozen=True)
class DatasetSchema:
    """Header columns of a loaded CSV, classified against COIN_SCHEMA."""
    columns: tuple[str, ...] = ()
    types: dict[str, FieldType] = field(default_factory=dict)

    @classmethod
    def from_header(cls, columns) -> "DatasetSchema":
        cols = tuple(str(c) for c in columns)
        return cls(columns=cols, types={c: _FIELD_TYPES.get(c, FieldType.UNKNOWN) for c in cols})

    @property
    def unknown_columns(self) -> list[str]:
        """Header columns that are not part of the coin record."""
        return [c for c in self.columns if self.types[c] == FieldType.UNKNOWN]

    @property
    def missing_columns(self) -> list[str]:
        """Coin record fields with no matching header column."""
        present = set(self.columns)
        return [
            f.name for f in COIN_SCHEMA
            if f.name not in present and not any(a in present for a in f.fallbacks)
        ]

    def type_of(self, column: str) -> FieldType:
        return self.types.get(column, FieldType.UNKNOWN)


# ---------------------------------------------------------------------------
# Loose coercion result (histogram path)
# ---------------------------------------------------------------------------

class ValueKind(str, Enum):
    NUMBER = "number"
    OBJECT = "object"
    TEXT = "text"
    EMPTY = "empty"


@dataclass(frozen=True)
class CoercedValue:
    """Result of normalize_value: exactly one of number / object / text / empty."""
    kind: ValueKind
    value: Any = None

    @property
    def number(self) -> Optional[float]:
        """Numeric view: numbers as-is, empty as 0, everything else None."""
        if self.kind == ValueKind.NUMBER:
            return self.value
        if self.kind == ValueKind.EMPTY:
            return 0.0
        return None
