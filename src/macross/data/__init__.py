"""Data layer exports for the crossover studies."""

from .schemas import BAR_COLUMNS, Bar, BarDataFrame, PriceField
from .stores import ParquetBarStore

__all__ = [
    "BAR_COLUMNS",
    "Bar",
    "BarDataFrame",
    "ParquetBarStore",
    "PriceField",
]
