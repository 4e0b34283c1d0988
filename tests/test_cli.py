"""Tests for the ohlcrender command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from PIL import Image

from ohlcrender.cli import build_options, cli
from ohlcrender.candles import Candle

CANDLES = [{"o": 1, "h": 4, "l": 0, "c": 2}, {"o": 2, "h": 4, "l": 0, "c": 1}]


def _write_json(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload))
    return path


def _write_csv(path: Path, count: int) -> Path:
    lines = ["open,high,low,close,buy_volume,total_volume"]
    for i in range(count):
        lines.append(f"{10 + i},{12 + i},{9 + i},{11 + i},{i},{2 * i + 1}")
    path.write_text("\n".join(lines) + "\n")
    return path


def test_render_command_writes_image(tmp_path: Path) -> None:
    source = _write_json(tmp_path / "candles.json", CANDLES)
    out = tmp_path / "chart.png"
    result = CliRunner().invoke(cli, ["render", str(source), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert f"WROTE {out} (2 candles)" in result.output
    assert out.read_bytes()[:4] == b"\x89PNG"


def test_render_command_with_all_indicators(tmp_path: Path) -> None:
    source = _write_csv(tmp_path / "candles.csv", 48)
    out = tmp_path / "chart.png"
    args = ["render", str(source), "-o", str(out), "--bb", "--ema", "--dema", "--macd", "--rsi", "--volume"]
    result = CliRunner().invoke(cli, args + ["--title", "TEST", "--prefix", "$", "--grid-price", "5"])
    assert result.exit_code == 0, result.output
    with Image.open(out) as image:
        assert image.size == (1300, 650 + 135 + 175 + 175)


def test_render_command_uses_environment_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = _write_json(tmp_path / "candles.json", CANDLES)
    out = tmp_path / "from-env.png"
    monkeypatch.setenv("OHLCRENDER_OUTPUT", str(out))
    monkeypatch.setenv("OHLCRENDER_TITLE", "From env")
    result = CliRunner().invoke(cli, ["render", str(source)])
    assert result.exit_code == 0, result.output
    assert out.exists()


def test_render_command_reports_invalid_candles(tmp_path: Path) -> None:
    source = _write_json(tmp_path / "candles.json", [{"o": 5, "h": 4, "l": 0, "c": 2}])
    out = tmp_path / "chart.png"
    result = CliRunner().invoke(cli, ["render", str(source), "-o", str(out)])
    assert result.exit_code == 1
    assert "Opening value is higher than high value." in result.output
    assert not out.exists()


def test_render_command_reports_read_only_image_format(tmp_path: Path) -> None:
    source = _write_json(tmp_path / "candles.json", CANDLES)
    out = tmp_path / "chart.psd"
    result = CliRunner().invoke(cli, ["render", str(source), "-o", str(out)])
    assert result.exit_code == 1
    assert "Unsupported image extension '.psd'" in result.output
    assert not out.exists()


def test_render_command_reports_unreadable_input(tmp_path: Path) -> None:
    source = tmp_path / "candles.json"
    source.write_text("{not json")
    result = CliRunner().invoke(cli, ["render", str(source), "-o", str(tmp_path / "chart.png")])
    assert result.exit_code == 1
    assert "Could not read candles" in result.output


def test_render_command_rejects_bad_colour(tmp_path: Path) -> None:
    source = _write_json(tmp_path / "candles.json", CANDLES)
    result = CliRunner().invoke(cli, ["render", str(source), "--background", "purple"])
    assert result.exit_code == 2
    assert "--background" in result.output


def test_render_command_rejects_zero_time_units(tmp_path: Path) -> None:
    source = _write_json(tmp_path / "candles.json", CANDLES)
    result = CliRunner().invoke(cli, ["render", str(source), "--time-units", "0"])
    assert result.exit_code == 2


def test_summary_command(tmp_path: Path) -> None:
    source = _write_json(tmp_path / "candles.json", CANDLES)
    result = CliRunner().invoke(cli, ["summary", str(source)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "open": 1.0,
        "high": 4.0,
        "low": 0.0,
        "close": 1.0,
        "range": 4.0,
        "candles": 2,
    }


def test_summary_command_reports_invalid_candles(tmp_path: Path) -> None:
    source = _write_json(tmp_path / "candles.json", [{"o": 1, "h": 4, "l": 0, "c": 2}, {"o": 1, "h": 4, "l": 2, "c": 3}])
    result = CliRunner().invoke(cli, ["summary", str(source)])
    assert result.exit_code == 1
    assert "candle 1" in result.output


def test_build_options_picks_an_automatic_grid() -> None:
    candles = [Candle(o=100, h=180, l=100, c=150), Candle(o=150, h=160, l=120, c=130)]
    options = build_options(
        candles,
        title="",
        background=None,
        grid_price=None,
        grid_time=24,
        time_units=3600,
        prefix="",
        suffix="",
    )
    assert options.price_line_interval == 10.0
    assert options.time_line_interval == 24
    assert options.background_colour == 0x444444FF
