"""Bar storage backends."""

from .local import ParquetBarStore, normalize_bar_size

__all__ = ["ParquetBarStore", "normalize_bar_size"]
