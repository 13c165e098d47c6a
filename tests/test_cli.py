"""
Tests for the command line interface.
"""

import csv
import json

import pytest

import cli
from config import get_config, loader


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("CHARTCORE_LOG_LEVEL", "CHARTCORE_SEED", "CHARTCORE_BARS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(loader, "CONFIG_PATHS", [tmp_path / "chartcore.toml"])
    monkeypatch.setattr(loader, "_active_config_path", None)
    get_config.cache_clear()


class TestGenerate:

    def test_generate_json_stdout(self, capsys):
        assert cli.main(["generate", "-n", "15", "--seed", "3", "--start", "2024-01-01"]) == 0
        rows = json.loads(capsys.readouterr().out)
        assert len(rows) == 15
        assert rows[0]["date"] == "2024-01-01"

    def test_generate_csv_file(self, tmp_path):
        out = tmp_path / "series.csv"
        assert cli.main(["generate", "-n", "10", "--seed", "1", "-f", "csv", "-o", str(out)]) == 0
        with open(out, newline="") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 10
        assert list(rows[0]) == cli.CSV_FIELDS

    def test_generate_invalid_count(self, capsys):
        assert cli.main(["generate", "-n", "0"]) == 2
        assert "Invalid n" in capsys.readouterr().err

    def test_generate_bad_start_date(self, capsys):
        assert cli.main(["generate", "--start", "2024-13-01"]) == 2
        assert "start" in capsys.readouterr().err


class TestIndicators:

    def test_indicators_from_generated(self, capsys):
        code = cli.main([
            "indicators", "-n", "40", "--seed", "5",
            "-i", "sma:5", "-i", "macd:3,6,4", "--no-rows",
        ])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["bar_count"] == 40
        assert set(data["lines"]) == {"sma_5", "macd_3_6_4", "macd_3_6_4_signal"}
        assert data["rows"] == []

    def test_indicators_default_requests_from_config(self, tmp_path, capsys):
        (tmp_path / "chartcore.toml").write_text(
            "[generator]\nbars = 30\nseed = 2\n"
            "[indicators]\nsma_periods = [5]\nrsi_period = 7\n"
            "macd_enabled = false\nvolume_sma_period = 3\n"
        )
        assert cli.main(["indicators"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["bar_count"] == 30
        assert set(data["lines"]) == {"sma_5", "rsi_7", "volume_sma_3"}

    def test_indicators_from_csv_round_trip(self, tmp_path):
        series_path = tmp_path / "series.csv"
        out = tmp_path / "payload.json"
        assert cli.main(["generate", "-n", "25", "--seed", "4", "-f", "csv", "-o", str(series_path)]) == 0
        assert cli.main(["indicators", "--input", str(series_path), "-i", "rsi:5", "-o", str(out)]) == 0

        data = json.loads(out.read_text())
        assert data["bar_count"] == 25
        assert len(data["lines"]["rsi_5"]) == 20

    def test_indicators_from_json_payload(self, tmp_path):
        first = tmp_path / "first.json"
        second = tmp_path / "second.json"
        assert cli.main(["indicators", "-n", "20", "--seed", "6", "-i", "sma:3", "-o", str(first)]) == 0
        assert cli.main(["indicators", "--input", str(first), "-i", "sma:4", "-o", str(second)]) == 0
        data = json.loads(second.read_text())
        assert data["bar_count"] == 20
        assert "sma_4" in data["lines"]

    def test_invalid_indicator(self, capsys):
        assert cli.main(["indicators", "-n", "20", "-i", "macd:26,12,9"]) == 2
        assert "fast" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path, capsys):
        (tmp_path / "chartcore.toml").write_text("[indicators]\nmacd_fast = 30\n")
        assert cli.main(["indicators"]) == 2
        assert "Invalid configuration" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path, capsys):
        assert cli.main(["indicators", "--input", str(tmp_path / "nope.csv")]) == 2
        err = capsys.readouterr().err
        assert "Invalid input" in err
        assert "Traceback" not in err

    def test_malformed_json_input(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text('[{"date": "2024-01-02", ')
        assert cli.main(["indicators", "--input", str(path)]) == 2
        assert "malformed JSON" in capsys.readouterr().err
