"""
Raw CSV value parsing: strict coin records and the loose histogram coercion.
"""
from __future__ import annotations

import json
import math
import re
from typing import Any, Mapping, Optional

import pandas as pd

from crypto_analytics.data.schemas import COIN_SCHEMA, CoercedValue, FieldType, ValueKind


# ---------------------------------------------------------------------------
# Scalar parsers
# ---------------------------------------------------------------------------

# Leading decimal number, the way a browser parseFloat reads "12.5abc" as 12.5
_FLOAT_PREFIX_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")
# Whole-string decimal literal; float() extras such as "1_000" or "nan" do not match
_DECIMAL_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*$")


def _is_missing(val: Any) -> bool:
    if val is None:
        return True
    if isinstance(val, float) and math.isnan(val):
        return True
    return isinstance(val, str) and val == ""


def parse_float(val: Any) -> Optional[float]:
    """Parse a finite float from the leading part of val, else None."""
    if _is_missing(val) or isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        num = float(val)
    else:
        m = _FLOAT_PREFIX_RE.match(str(val))
        if not m:
            return None
        try:
            num = float(m.group(1))
        except (ValueError, OverflowError):
            return None
    return num if math.isfinite(num) else None


def parse_int(val: Any) -> Optional[int]:
    """Parse the leading integer of val, else None."""
    if _is_missing(val) or isinstance(val, bool):
        return None
    if isinstance(val, int):
        return val
    if isinstance(val, float):
        return int(val) if math.isfinite(val) else None
    m = _INT_PREFIX_RE.match(str(val))
    return int(m.group(1)) if m else None


def parse_date(val: Any) -> Optional[str]:
    """ISO-8601 UTC timestamp with millisecond precision, or None."""
    if _is_missing(val):
        return None
    try:
        ts = pd.to_datetime(str(val).strip(), utc=True, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def _parse_quoted_object(text: str) -> dict:
    """Parse "{'a': 1}" style dicts. Raises ValueError when it is not a JSON object."""
    parsed = json.loads(text.replace("'", '"'))
    if not isinstance(parsed, dict):
        raise ValueError("not a JSON object")
    return parsed


def parse_roi(val: Any) -> Optional[dict]:
    if _is_missing(val) or not isinstance(val, str):
        return None
    text = val.strip()
    if not (text.startswith("{") and text.endswith("}")):
        return None
    try:
        return _parse_quoted_object(text)
    except ValueError:
        return None


def _text(val: Any) -> str:
    return "" if _is_missing(val) else str(val).strip()


# ---------------------------------------------------------------------------
# Coin records
# ---------------------------------------------------------------------------

_PARSERS = {
    FieldType.TEXT: _text,
    FieldType.SYMBOL: lambda v: _text(v).lower(),
    FieldType.NUMBER: parse_float,
    FieldType.DATE: parse_date,
    FieldType.OBJECT: parse_roi,
}


def normalize_coin_data(row: Mapping[str, Any]) -> dict:
    """Map a raw CSV row onto the fixed coin schema.

    Never raises: unparseable numbers, dates, and roi objects become None,
    missing strings become "".
    """
    record = {}
    for f in COIN_SCHEMA:
        raw = row.get(f.name)
        for alias in f.fallbacks:
            if not _is_missing(raw):
                break
            raw = row.get(alias)
        record[f.name] = _PARSERS[f.type](raw)
    return record


# ---------------------------------------------------------------------------
# Loose coercion (histogram path)
# ---------------------------------------------------------------------------

def normalize_value(val: Any) -> CoercedValue:
    """Coerce a raw cell into a number, a parsed object, or text.

    Unlike normalize_coin_data, missing values are EMPTY (numeric 0), not None.
    """
    if _is_missing(val):
        return CoercedValue(ValueKind.EMPTY)
    if isinstance(val, bool):
        return CoercedValue(ValueKind.NUMBER, float(val))
    if isinstance(val, (int, float)):
        return CoercedValue(ValueKind.NUMBER, float(val))
    if isinstance(val, dict):
        return CoercedValue(ValueKind.OBJECT, val)

    text = str(val)
    if not text.strip():
        return CoercedValue(ValueKind.EMPTY)
    if _DECIMAL_RE.match(text):
        return CoercedValue(ValueKind.NUMBER, float(text))

    if text.startswith("{") and text.endswith("}"):
        try:
            return CoercedValue(ValueKind.OBJECT, _parse_quoted_object(text))
        except ValueError:
            pass
    return CoercedValue(ValueKind.TEXT, text)
