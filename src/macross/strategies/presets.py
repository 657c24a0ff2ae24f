"""The four named crossover studies, one per moving-average family."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..errors import ConfigurationError
from ..indicators.moving_average import MovingAverageFamily
from .crossover import StrategyConfig


@dataclass(slots=True, frozen=True)
class StudyPreset:
    key: str
    name: str
    family: MovingAverageFamily


PRESETS: Dict[str, StudyPreset] = {
    preset.key: preset
    for preset in (
        StudyPreset("sma", "SMA Crossover Strategy", MovingAverageFamily.SIMPLE),
        StudyPreset("ema", "EMA Crossover Strategy", MovingAverageFamily.EXPONENTIAL),
        StudyPreset("zlema", "ZLEMA Crossover Strategy",
                    MovingAverageFamily.ZERO_LAG_EXPONENTIAL),
        StudyPreset("hull", "Hull Crossover Strategy", MovingAverageFamily.HULL),
    )
}


def get_preset(name: str) -> StudyPreset:
    """Look a preset up by short key (``"ema"``) or display name."""

    normalized = name.strip().lower()
    for preset in PRESETS.values():
        if normalized in (preset.key, preset.name.lower()):
            return preset
    raise ConfigurationError(
        f"Unknown study preset {name!r}; expected one of {sorted(PRESETS)}")


def preset_config(name: str, tick_size: float, **overrides: Any) -> StrategyConfig:
    """Build a validated :class:`StrategyConfig` for the named study."""

    if "family" in overrides:
        raise ConfigurationError("presets fix the moving-average family")
    preset = get_preset(name)
    return StrategyConfig(tick_size=tick_size, family=preset.family, **overrides)


__all__ = ["PRESETS", "StudyPreset", "get_preset", "preset_config"]
