"""Exceptions raised by the crossover core."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid strategy or indicator parameters, rejected at construction."""
