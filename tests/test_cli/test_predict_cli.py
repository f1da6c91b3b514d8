import logging
import sys

import numpy as np
import pandas as pd
import pytest

from cli import predict as cli_predict
from cli import download as cli_download
from predictor.strategy.config_loader import load_config_from_yaml


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def bars_csv(tmp_path):
    days = 40
    rng = np.random.RandomState(3)
    close = 200 + np.cumsum(rng.randn(days))
    open_ = close + rng.randn(days) * 0.5
    df = pd.DataFrame({
        "Open": open_,
        "High": np.maximum(open_, close) + 1,
        "Low": np.minimum(open_, close) - 1,
        "Close": close,
        "Volume": np.full(days, 5000.0),
    }, index=pd.date_range("2024-01-01", periods=days, freq="B"))
    df.index.name = "Date"
    path = tmp_path / "bars.csv"
    df.to_csv(path)
    return path


def _run(monkeypatch, module, *argv):
    monkeypatch.setattr(sys, "argv", [module.__name__, *argv])
    return module.main()


def test_backtest_report(monkeypatch, capsys, bars_csv):
    assert _run(monkeypatch, cli_predict, "--csv", str(bars_csv)) == 0
    out = capsys.readouterr().out
    assert "CLOSE PREDICTION" in out
    assert "Open (recorded):" in out
    assert "Training samples:  25" in out
    assert "Signal:" in out


def test_live_open(monkeypatch, capsys, bars_csv):
    assert _run(monkeypatch, cli_predict, "--csv", str(bars_csv), "--open-price", "210.5") == 0
    out = capsys.readouterr().out
    assert "Open (live input): 210.50" in out


def test_prompt_open(monkeypatch, capsys, bars_csv):
    monkeypatch.setattr("builtins.input", lambda _: "1,210.25")
    assert _run(monkeypatch, cli_predict, "--csv", str(bars_csv), "--prompt-open") == 0
    assert "1210.25" in capsys.readouterr().out


def test_prompt_open_invalid(monkeypatch, capsys, bars_csv):
    monkeypatch.setattr("builtins.input", lambda _: "abc")
    assert _run(monkeypatch, cli_predict, "--csv", str(bars_csv), "--prompt-open") == 1
    assert "Invalid input" in capsys.readouterr().err


def test_prompt_open_closed_stdin(monkeypatch, capsys, bars_csv):
    def closed_stdin(_):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed_stdin)
    assert _run(monkeypatch, cli_predict, "--csv", str(bars_csv), "--prompt-open") == 1
    assert "Invalid input" in capsys.readouterr().err


def test_overrides_and_save_config(monkeypatch, bars_csv, tmp_path):
    saved = tmp_path / "effective.yaml"
    code = _run(
        monkeypatch, cli_predict,
        "--csv", str(bars_csv), "--feature-set", "extended", "--lookback", "10",
        "--save-config", str(saved),
    )
    assert code == 0
    config = load_config_from_yaml(saved)
    assert config.feature_set.value == "extended"
    assert config.lookback_period == 10


def test_end_date_limits_history(monkeypatch, capsys, bars_csv):
    assert _run(monkeypatch, cli_predict, "--csv", str(bars_csv), "--end-date", "2024-01-31") == 0
    assert "Evaluation day:    2024-01-31" in capsys.readouterr().out


def test_too_few_bars(monkeypatch, bars_csv):
    assert _run(monkeypatch, cli_predict, "--csv", str(bars_csv), "--end-date", "2024-01-10") == 1


def test_missing_csv(monkeypatch, capsys, tmp_path):
    assert _run(monkeypatch, cli_predict, "--csv", str(tmp_path / "missing.csv")) == 1
    assert "Data file not found" in capsys.readouterr().err


def test_volume_feature_set_needs_volume(monkeypatch, capsys, tmp_path):
    path = tmp_path / "novol.csv"
    pd.DataFrame(
        {"Open": [1.0] * 20, "High": [2.0] * 20, "Low": [0.5] * 20, "Close": [1.5] * 20},
        index=pd.date_range("2024-01-01", periods=20, freq="B"),
    ).to_csv(path)
    assert _run(monkeypatch, cli_predict, "--csv", str(path)) == 1
    assert "Volume" in capsys.readouterr().err
    assert _run(monkeypatch, cli_predict, "--csv", str(path), "--feature-set", "indicators") == 0


def test_download_cli(monkeypatch, capsys):
    calls = []

    def fake_download_ticker(ticker, force_refresh=False, start_date=None):
        calls.append((ticker, force_refresh, start_date))
        return pd.DataFrame({"Close": [1.0, 2.0]}), ticker == "CACHED"

    monkeypatch.setattr(cli_download, "download_ticker", fake_download_ticker)
    code = _run(monkeypatch, cli_download, "NEW", "CACHED", "--refresh", "--start-date", "2020-01-01")
    assert code == 0
    assert calls == [("NEW", True, "2020-01-01"), ("CACHED", True, "2020-01-01")]
    out = capsys.readouterr().out
    assert "NEW: 2 rows (downloaded)" in out
    assert "CACHED: 2 rows (cached)" in out


def test_download_cli_failure(monkeypatch, capsys):
    def failing(ticker, force_refresh=False, start_date=None):
        raise ConnectionError("offline")

    monkeypatch.setattr(cli_download, "download_ticker", failing)
    assert _run(monkeypatch, cli_download, "AAPL") == 1
    assert "AAPL: offline" in capsys.readouterr().err


def test_download_cli_list(monkeypatch, capsys):
    monkeypatch.setattr(cli_download, "list_available_tickers", lambda: ["AAPL", "MSFT"])
    assert _run(monkeypatch, cli_download, "--list") == 0
    assert "AAPL\nMSFT" in capsys.readouterr().out
