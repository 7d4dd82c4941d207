"""Tests for CLI commands."""
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli import app


runner = CliRunner()

TRADES = [
    {"id": "t1", "pair": "EURUSD", "direction": "long", "entry_price": 1.08,
     "pnl": 100.0, "rr_ratio": 2.2, "trade_date": "2024-03-04", "mistakes": ["FOMO"]},
    {"id": "t2", "pair": "EURUSD", "direction": "short", "entry_price": 1.09,
     "pnl": -150.0, "rr_ratio": 0.8, "trade_date": "2024-03-05", "setup": "Reversal"},
    {"id": "t3", "pair": "GBPUSD", "direction": "long", "entry_price": 1.27,
     "pnl": 80.0, "trade_date": "2024-03-07", "emotion": "confident"},
    {"id": "t4", "pair": "GBPUSD", "direction": "long", "entry_price": 1.27,
     "pnl": None, "status": "open", "trade_date": "2024-03-08"},
]


@pytest.fixture
def trades_file(tmp_path: Path) -> Path:
    path = tmp_path / "trades.json"
    path.write_text(json.dumps(TRADES), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def db_dir(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setenv("DB_DIR", str(tmp_path / "db"))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    return tmp_path / "db"


class TestStatsCommand:
    def test_stats_from_file(self, trades_file):
        result = runner.invoke(app, ["--file", str(trades_file), "stats"])
        assert result.exit_code == 0
        assert "Trades: 3 (2W / 1L / 0BE)" in result.output
        assert "Win rate: 66.7%" in result.output
        assert "Profit factor: 1.20" in result.output

    def test_stats_with_pair_filter(self, trades_file):
        result = runner.invoke(app, ["--file", str(trades_file), "--pair", "GBPUSD", "stats"])
        assert result.exit_code == 0
        assert "Trades: 1 (1W / 0L / 0BE)" in result.output
        assert "Profit factor: ∞" in result.output

    def test_missing_file_exits_with_error(self, tmp_path):
        result = runner.invoke(app, ["--file", str(tmp_path / "nope.json"), "stats"])
        assert result.exit_code == 1

    def test_invalid_setting_exits_with_config_error(self, trades_file, monkeypatch):
        monkeypatch.setenv("ANALYTICS_TOP_N", "0")
        result = runner.invoke(app, ["--file", str(trades_file), "stats"])
        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestCurveCommands:
    def test_equity(self, trades_file):
        result = runner.invoke(app, ["--file", str(trades_file), "equity"])
        assert result.exit_code == 0
        assert "2024-03-05" in result.output
        assert "-50.00" in result.output

    def test_drawdown(self, trades_file):
        result = runner.invoke(app, ["--file", str(trades_file), "drawdown"])
        assert result.exit_code == 0
        assert "Max drawdown: 150.00" in result.output

    def test_date_range_filter(self, trades_file):
        result = runner.invoke(
            app, ["--file", str(trades_file), "--date-from", "2024-03-05", "equity"]
        )
        assert result.exit_code == 0
        assert "2024-03-04" not in result.output


class TestBreakdownCommand:
    def test_breakdown_day(self, trades_file):
        result = runner.invoke(app, ["--file", str(trades_file), "breakdown", "day"])
        assert result.exit_code == 0
        assert "Monday" in result.output
        assert "Sunday" in result.output

    def test_breakdown_mistake(self, trades_file):
        result = runner.invoke(app, ["--file", str(trades_file), "breakdown", "mistake"])
        assert result.exit_code == 0
        assert "FOMO" in result.output

    def test_breakdown_unknown_dimension(self, trades_file):
        result = runner.invoke(app, ["--file", str(trades_file), "breakdown", "moon"])
        assert result.exit_code == 1
        assert "Unknown dimension" in result.output


class TestOtherCommands:
    def test_rr(self, trades_file):
        result = runner.invoke(app, ["--file", str(trades_file), "rr"])
        assert result.exit_code == 0
        assert "3:1+" in result.output

    def test_weekly(self, trades_file):
        result = runner.invoke(app, ["--file", str(trades_file), "weekly", "--weeks", "4"])
        assert result.exit_code == 0
        assert "2024-03-04" in result.output

    def test_heatmap(self, trades_file):
        result = runner.invoke(app, ["--file", str(trades_file), "heatmap", "2024", "3"])
        assert result.exit_code == 0
        assert "2024-03-07" in result.output

    def test_heatmap_empty_month(self, trades_file):
        result = runner.invoke(app, ["--file", str(trades_file), "heatmap", "2023", "1"])
        assert result.exit_code == 0
        assert "No trades in 2023-01" in result.output

    def test_portfolio(self, trades_file):
        result = runner.invoke(app, ["--file", str(trades_file), "portfolio"])
        assert result.exit_code == 0
        assert "Positions: 3 closed, 1 open" in result.output
        assert "Longest win streak: 1" in result.output

    def test_report_is_json(self, trades_file):
        result = runner.invoke(app, ["--file", str(trades_file), "report", "--year", "2024", "--month", "3"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["stats"]["total_trades"] == 3
        assert payload["portfolio"]["max_drawdown"] == 150.0
        assert len(payload["heatmap"]) == 3


class TestJournalCommands:
    def test_init_creates_journal(self, db_dir):
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert (db_dir / "journal.db").exists()

    def test_import_then_stats_from_journal(self, trades_file):
        result = runner.invoke(app, ["import-trades", str(trades_file)])
        assert result.exit_code == 0
        assert "Imported 4 trades (4 in journal)" in result.output

        result = runner.invoke(app, ["stats"])
        assert result.exit_code == 0
        assert "Trades: 3 (2W / 1L / 0BE)" in result.output

    def test_import_invalid_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"id": "x"}]), encoding="utf-8")
        result = runner.invoke(app, ["import-trades", str(path)])
        assert result.exit_code == 1
        assert "Import failed" in result.output
