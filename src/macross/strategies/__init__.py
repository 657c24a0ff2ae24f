"""Strategy implementations for the crossover studies."""

from .crossover import (
    BarEvaluation,
    CrossoverStrategy,
    Decision,
    DecisionAction,
    StrategyConfig,
    decide,
)
from .presets import PRESETS, StudyPreset, get_preset, preset_config

__all__ = [
    "BarEvaluation",
    "CrossoverStrategy",
    "Decision",
    "DecisionAction",
    "PRESETS",
    "StrategyConfig",
    "StudyPreset",
    "decide",
    "get_preset",
    "preset_config",
]
