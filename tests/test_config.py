"""
Tests for configuration loading and validation.
"""

import pytest

from config import (
    ChartCoreConfig,
    ConfigError,
    GeneratorConfig,
    IndicatorConfig,
    get_config,
    load_config,
    reload_config,
)
from config import loader
from domain import DEFAULT_REQUESTS, IndicatorKind


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run each test in an empty directory with no CHARTCORE_* variables."""
    monkeypatch.chdir(tmp_path)
    for name in ("CHARTCORE_LOG_LEVEL", "CHARTCORE_SEED", "CHARTCORE_BARS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(loader, "CONFIG_PATHS", [tmp_path / "chartcore.toml"])
    monkeypatch.setattr(loader, "_active_config_path", None)
    get_config.cache_clear()
    yield
    get_config.cache_clear()


class TestSchema:
    """Tests for pydantic schema defaults and validators."""

    def test_defaults(self):
        config = ChartCoreConfig()
        assert config.log_level == "INFO"
        assert config.generator.bars == 90
        assert config.generator.base_price == 28000.0
        assert config.indicators.rsi_period == 14

    def test_default_requests_match_engine_defaults(self):
        assert IndicatorConfig().to_requests() == list(DEFAULT_REQUESTS)

    def test_to_requests_optional_sections(self):
        config = IndicatorConfig(
            sma_periods=[],
            ema_periods=[12, 26],
            wma_periods=[10],
            rsi_period=None,
            macd_enabled=False,
            volume_sma_period=None,
        )
        requests = config.to_requests()
        assert [r.key for r in requests] == ["ema_12", "ema_26", "wma_10"]
        assert all(r.kind in (IndicatorKind.EMA, IndicatorKind.WMA) for r in requests)

    def test_macd_slow_must_exceed_fast(self):
        with pytest.raises(ValueError):
            IndicatorConfig(macd_fast=26, macd_slow=12)

    def test_macd_fast_above_default_slow(self):
        with pytest.raises(ValueError):
            IndicatorConfig(macd_fast=30)

    def test_macd_slow_below_default_fast(self):
        with pytest.raises(ValueError):
            IndicatorConfig(macd_slow=10)

    def test_non_positive_sma_period(self):
        with pytest.raises(ValueError):
            IndicatorConfig(sma_periods=[20, 0])

    def test_volume_bounds_ordered(self):
        with pytest.raises(ValueError):
            GeneratorConfig(volume_min=100, volume_max=10)

    def test_log_level_normalized(self):
        assert ChartCoreConfig(log_level="debug").log_level == "DEBUG"


class TestLoader:
    """Tests for TOML + environment loading."""

    def test_no_file_gives_defaults(self):
        config = load_config()
        assert config == ChartCoreConfig()

    def test_explicit_file(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(
            'log_level = "WARNING"\n'
            "[generator]\n"
            "bars = 30\n"
            "seed = 7\n"
            "[indicators]\n"
            "sma_periods = [5, 10]\n"
        )
        config = load_config(path)
        assert config.log_level == "WARNING"
        assert config.generator.bars == 30
        assert config.generator.seed == 7
        assert config.indicators.sma_periods == [5, 10]

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "nope.toml")
        assert "not found" in str(exc_info.value)

    def test_search_path_used(self, tmp_path):
        (tmp_path / "chartcore.toml").write_text("[generator]\nbase_price = 100.0\n")
        assert load_config().generator.base_price == 100.0

    def test_invalid_value_reports_field(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[generator]\nbars = 0\n")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.field == "generator.bars"

    def test_macd_fast_alone_in_file(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[indicators]\nmacd_fast = 30\n")
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert exc_info.value.field == "indicators"
        assert "macd_slow" in str(exc_info.value)

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[generator\nbars = ")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.toml"
        path.write_text("[generator]\nbars = 30\nseed = 1\n")
        monkeypatch.setenv("CHARTCORE_SEED", "99")
        monkeypatch.setenv("CHARTCORE_LOG_LEVEL", "error")
        config = load_config(path)
        assert config.generator.seed == 99
        assert config.generator.bars == 30
        assert config.log_level == "ERROR"

    def test_get_config_cached_and_reloadable(self, tmp_path, monkeypatch):
        first = get_config()
        assert get_config() is first

        monkeypatch.setenv("CHARTCORE_BARS", "12")
        assert get_config().generator.bars == 90
        assert reload_config().generator.bars == 12

    def test_reload_with_path_stays_cached(self, tmp_path):
        path = tmp_path / "pinned.toml"
        path.write_text("[generator]\nbars = 45\n")

        assert reload_config(path).generator.bars == 45
        assert get_config().generator.bars == 45
        assert get_config() is get_config()

        # None goes back to the search path
        assert reload_config().generator.bars == 90

    def test_reload_bad_path_keeps_current_source(self, tmp_path):
        path = tmp_path / "pinned.toml"
        path.write_text("[generator]\nbars = 45\n")
        reload_config(path)

        with pytest.raises(ConfigError):
            reload_config(tmp_path / "missing.toml")
        assert get_config().generator.bars == 45
