"""Loading candle series from JSON and CSV files.

JSON input is an array of candle objects using either the long field
names (``open``, ``high``, ...) or the short keys (``o``, ``h``, ...).
CSV input is read with pandas; columns are matched case-insensitively
and the same long/short names are accepted.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import pandas as pd
from pydantic import TypeAdapter

from .models import Candle

_CANDLE_LIST = TypeAdapter(List[Candle])

# CSV headers mapped to model aliases
_CSV_COLUMNS: Dict[str, str] = {
    "open": "o",
    "o": "o",
    "high": "h",
    "h": "h",
    "low": "l",
    "l": "l",
    "close": "c",
    "c": "c",
    "buy_volume": "bv",
    "bv": "bv",
    "total_volume": "v",
    "volume": "v",
    "v": "v",
}


def parse_candles(records: Iterable[Dict[str, Any]]) -> List[Candle]:
    """Validate raw records into :class:`Candle` objects.

    Raises:
        pydantic.ValidationError: If a record is missing a price or holds
            a non-numeric value.
    """
    return _CANDLE_LIST.validate_python(list(records))


def _read_csv(path: Path) -> List[Dict[str, Any]]:
    df = pd.read_csv(path)
    rename = {}
    for column in df.columns:
        alias = _CSV_COLUMNS.get(str(column).strip().lower())
        # First matching column wins when both long and short names appear
        if alias is not None and alias not in rename.values():
            rename[column] = alias
    df = df[list(rename)].rename(columns=rename)
    records: List[Dict[str, Any]] = []
    for row in df.to_dict(orient="records"):
        # Missing optional volumes come through as NaN
        records.append({k: float(v) for k, v in row.items() if not pd.isna(v)})
    return records


def load_candles(path: Union[str, Path]) -> List[Candle]:
    """Read a candle series from ``path`` (``.csv`` or JSON).

    Raises:
        ValueError: If a JSON document is not an array of objects.
        pydantic.ValidationError: If a record cannot be parsed.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    if path.suffix.lower() == ".csv":
        return parse_candles(_read_csv(path))
    with path.open("r", encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, list):
        raise ValueError(f"{path}: expected a JSON array of candles")
    return parse_candles(payload)
