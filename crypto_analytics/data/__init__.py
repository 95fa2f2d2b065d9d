"""Data loading, normalization, and the load-once dataset store."""
from .loader import find_existing_csv, load_csv
from .store import Dataset, DataStore
from .schemas import COIN_SCHEMA, CoercedValue, DatasetSchema, FieldType, ValueKind
from .normalize import normalize_coin_data, normalize_value, parse_float, parse_int, parse_date
