"""Interfaces the strategy expects from its hosting trading platform."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .orders import OrderIntent


class PositionState(str, Enum):
    FLAT = "flat"
    LONG = "long"
    SHORT = "short"

    @classmethod
    def from_quantity(cls, quantity: int) -> "PositionState":
        if quantity > 0:
            return cls.LONG
        if quantity < 0:
            return cls.SHORT
        return cls.FLAT


@dataclass(slots=True, frozen=True)
class PositionSnapshot:
    """Net position as reported by the host (positive = long)."""

    quantity: int = 0
    symbol: str | None = None

    @property
    def state(self) -> PositionState:
        return PositionState.from_quantity(self.quantity)


class ExecutionHost(Protocol):
    """Position source and order sink owned by the host platform."""

    def get_position(self) -> PositionSnapshot:
        """Return the current net position."""

    def cancel_all_orders(self) -> None:
        """Cancel every working order for the instrument."""

    def flatten_position(self) -> None:
        """Request that the open position be closed."""

    def submit_entry(self, intent: OrderIntent) -> bool:
        """Submit a bracketed entry; ``False`` when the host rejects it."""


__all__ = ["ExecutionHost", "PositionSnapshot", "PositionState"]
