"""Tests for the candle model, aggregation, validation and input loading."""

from __future__ import annotations

import json
import math
from pathlib import Path
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from ohlcrender.candles import Aggregate, Candle, aggregate, check_candle, load_candles, validate_candles
from ohlcrender.errors import CandleValidationError, ChartError


def _candle(o: float, h: float, l: float, c: float, **volumes) -> Candle:
    return Candle(o=o, h=h, l=l, c=c, **volumes)


def test_candle_accepts_short_and_long_names() -> None:
    short = Candle(o=1, h=4, l=0, c=2, bv=3, v=5)
    long = Candle(open=1, high=4, low=0, close=2, buy_volume=3, total_volume=5)
    assert short == long
    assert short.range == 4
    assert Candle(o=1, h=2, l=0, c=1).buy_volume is None
    assert Candle(o=1, h=2, l=0, c=1).total_volume == 0.0


def test_candle_rejects_non_finite_values() -> None:
    with pytest.raises(ValidationError):
        Candle(o=math.nan, h=4, l=0, c=2)
    with pytest.raises(ValidationError):
        Candle(o=1, h=math.inf, l=0, c=2)


def test_candle_is_immutable() -> None:
    candle = _candle(1, 4, 0, 2)
    with pytest.raises(ValidationError):
        candle.close = 3


def test_aggregate_spans_the_series() -> None:
    candles = [
        _candle(3, 5, 2, 4, v=10),
        _candle(4, 9, 3, 8, v=20),
        _candle(8, 8, 1, 6, bv=7, v=30),
    ]
    summary = aggregate(candles)
    assert summary == Aggregate(open=3, high=9, low=1, close=6, buy_volume=7, total_volume=30)
    assert summary.range == 8


def test_aggregate_of_empty_series_is_zero() -> None:
    assert aggregate([]) == Aggregate()


def test_aggregate_accepts_duck_typed_candles() -> None:
    class Bar:
        def __init__(self, o, h, l, c):
            self.open, self.high, self.low, self.close = o, h, l, c
            self.buy_volume = None
            self.total_volume = 1.0

    summary = aggregate([Bar(1, 3, 0, 2), Bar(2, 5, 1, 4)])
    assert (summary.open, summary.high, summary.low, summary.close) == (1, 5, 0, 4)


@pytest.mark.parametrize(
    "values, message",
    [
        ((5, 4, 0, 2), "Opening value is higher than high value."),
        ((1, 4, 0, 6), "Closing value is higher than high value."),
        ((1, 4, 5, 2), "Low value is higher than high value."),
        ((1, 4, 2, 3), "Opening value is lower than low value."),
        ((4, 4, 1, 0), "Closing value is lower than low value."),
        ((1, 4, 0, 2), None),
        ((2, 2, 2, 2), None),
    ],
)
def test_check_candle(values, message) -> None:
    o, h, l, c = values
    assert check_candle(_candle(o, h, l, c)) == message


def test_check_candle_reports_low_above_high() -> None:
    """An inverted range is reported before the open/close bounds."""
    assert check_candle(_candle(2, 3, 4, 3)) == "Low value is higher than high value."


def test_validate_candles_reports_first_bad_index() -> None:
    candles = [_candle(1, 4, 0, 2), _candle(5, 4, 0, 2), _candle(1, 4, 0, 9)]
    with pytest.raises(CandleValidationError) as excinfo:
        validate_candles(candles)
    assert excinfo.value.index == 1
    assert excinfo.value.reason == "Opening value is higher than high value."
    assert "high" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)
    assert isinstance(excinfo.value, ChartError)


@pytest.mark.parametrize("field", ["open", "high", "low", "close"])
def test_validate_candles_rejects_nan_in_duck_typed_bars(field) -> None:
    """Comparisons with NaN are all false, so NaN needs its own check."""
    values = {"open": 1.0, "high": 4.0, "low": 0.0, "close": 2.0}
    values[field] = math.nan
    bars = [SimpleNamespace(open=1.0, high=4.0, low=0.0, close=2.0), SimpleNamespace(**values)]
    with pytest.raises(CandleValidationError) as excinfo:
        validate_candles(bars)
    assert excinfo.value.index == 1
    assert excinfo.value.reason == f"{field.capitalize()} value is not a finite number."


def test_validate_candles_accepts_valid_series() -> None:
    validate_candles([_candle(1, 4, 0, 2), _candle(2, 4, 0, 1)])


def test_validate_candles_rejects_empty_series() -> None:
    with pytest.raises(CandleValidationError) as excinfo:
        validate_candles([])
    assert excinfo.value.index is None


def test_load_json_with_short_keys(tmp_path: Path) -> None:
    path = tmp_path / "candles.json"
    path.write_text(json.dumps([{"o": 1, "h": 4, "l": 0, "c": 2, "v": 10}, {"o": 2, "h": 4, "l": 0, "c": 1}]))
    candles = load_candles(path)
    assert candles == [Candle(o=1, h=4, l=0, c=2, v=10), Candle(o=2, h=4, l=0, c=1)]


def test_load_json_with_long_names(tmp_path: Path) -> None:
    path = tmp_path / "candles.json"
    path.write_text(json.dumps([{"open": 1, "high": 4, "low": 0, "close": 2, "buy_volume": 1, "total_volume": 3}]))
    (candle,) = load_candles(str(path))
    assert candle.buy_volume == 1
    assert candle.total_volume == 3


def test_load_json_requires_an_array(tmp_path: Path) -> None:
    path = tmp_path / "candles.json"
    path.write_text(json.dumps({"o": 1, "h": 4, "l": 0, "c": 2}))
    with pytest.raises(ValueError):
        load_candles(path)


def test_load_json_missing_field(tmp_path: Path) -> None:
    path = tmp_path / "candles.json"
    path.write_text(json.dumps([{"o": 1, "h": 4, "l": 0}]))
    with pytest.raises(ValidationError):
        load_candles(path)


def test_load_csv_matches_headers_case_insensitively(tmp_path: Path) -> None:
    path = tmp_path / "candles.csv"
    path.write_text(
        "Timestamp,Open,High,Low,Close,Volume\n"
        "2024-01-01,1,4,0,2,10\n"
        "2024-01-02,2,4,0,1,12\n"
    )
    candles = load_candles(path)
    assert candles == [Candle(o=1, h=4, l=0, c=2, v=10), Candle(o=2, h=4, l=0, c=1, v=12)]


def test_load_csv_prefers_first_of_duplicate_headers(tmp_path: Path) -> None:
    """``close`` and ``c`` name the same field; the leftmost column is used."""
    path = tmp_path / "candles.csv"
    path.write_text("open,high,low,close,c\n1,4,0,2,3\n")
    (candle,) = load_candles(path)
    assert candle.close == 2


def test_load_csv_with_optional_buy_volume(tmp_path: Path) -> None:
    path = tmp_path / "candles.csv"
    path.write_text("o,h,l,c,bv,v\n1,4,0,2,3,10\n2,4,0,1,,12\n")
    first, second = load_candles(path)
    assert first.buy_volume == 3
    assert second.buy_volume is None
    assert second.total_volume == 12
