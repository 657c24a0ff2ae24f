from pathlib import Path

import pytest

from macross.config import AppSettings, DataPaths
from macross.data.schemas import PriceField
from macross.errors import ConfigurationError
from macross.indicators import MovingAverageFamily
from macross.strategies import get_preset, preset_config


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)  # keep a developer .env out of the way
    for name in (
        "MACROSS_FAMILY",
        "MACROSS_FAST_PERIOD",
        "MACROSS_SLOW_PERIOD",
        "MACROSS_FAST_SOURCE",
        "MACROSS_SLOW_SOURCE",
        "MACROSS_STOP_TICKS",
        "MACROSS_TARGET_TICKS",
        "MACROSS_TICK_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("MACROSS_FAMILY", "hull")
    monkeypatch.setenv("MACROSS_FAST_PERIOD", "5")
    monkeypatch.setenv("MACROSS_SLOW_PERIOD", "21")
    monkeypatch.setenv("MACROSS_SLOW_SOURCE", "hlc_avg")
    monkeypatch.setenv("MACROSS_TICK_SIZE", "0.25")

    config = AppSettings().strategy_config()

    assert config.family is MovingAverageFamily.HULL
    assert config.fast_period == 5
    assert config.slow_period == 21
    assert config.slow_source is PriceField.HLC_AVG
    assert config.tick_size == pytest.approx(0.25)
    assert config.stop_ticks == 80


def test_overrides_take_precedence(monkeypatch):
    monkeypatch.setenv("MACROSS_TICK_SIZE", "0.25")

    config = AppSettings().strategy_config(tick_size=0.01, stop_ticks=10)

    assert config.tick_size == pytest.approx(0.01)
    assert config.stop_offset == pytest.approx(0.1)


def test_missing_tick_size_is_a_configuration_error():
    with pytest.raises(ConfigurationError, match="MACROSS_TICK_SIZE"):
        AppSettings().strategy_config()


def test_invalid_period_from_environment_is_rejected(monkeypatch):
    monkeypatch.setenv("MACROSS_FAST_PERIOD", "0")

    with pytest.raises(ConfigurationError):
        AppSettings().strategy_config(tick_size=1.0)


def test_data_paths_ensure_creates_directories(tmp_path):
    paths = DataPaths(bars=tmp_path / "bars", reports=tmp_path / "out" / "reports")

    paths.ensure()

    assert paths.bars.is_dir()
    assert paths.reports.is_dir()
    assert isinstance(AppSettings().data_paths.bars, Path)


@pytest.mark.parametrize(
    "name,family",
    [
        ("sma", MovingAverageFamily.SIMPLE),
        ("EMA Crossover Strategy", MovingAverageFamily.EXPONENTIAL),
        ("zlema", MovingAverageFamily.ZERO_LAG_EXPONENTIAL),
        ("Hull", MovingAverageFamily.HULL),
    ],
)
def test_presets_bind_their_family(name, family):
    config = preset_config(name, 0.25, fast_period=5, slow_period=20)

    assert config.family is family
    assert config.fast_period == 5
    assert get_preset(name).family is family


def test_unknown_preset_and_family_override_are_rejected():
    with pytest.raises(ConfigurationError):
        get_preset("kama")
    with pytest.raises(ConfigurationError):
        preset_config("sma", 0.25, family="hull")
