"""Replay harness: stored bars, a paper host and the crossover strategy."""

from .data import LocalBarFeed
from .engine import ReplayConfig, ReplayEngine, ReplayResult

__all__ = [
    "LocalBarFeed",
    "ReplayConfig",
    "ReplayEngine",
    "ReplayResult",
]
