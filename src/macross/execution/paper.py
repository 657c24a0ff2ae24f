"""In-memory execution host used to replay bars through the strategy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .orders import OrderIntent
from .host import PositionSnapshot

logger = logging.getLogger(__name__)

CANCEL_ALL_ORDERS = "cancel_all_orders"
FLATTEN_POSITION = "flatten_position"
SUBMIT_ENTRY = "submit_entry"


@dataclass(slots=True)
class HostRequest:
    kind: str
    bar_index: int | None = None
    intent: OrderIntent | None = None
    accepted: bool | None = None


class PaperExecutionHost:
    """Record requests and move the position only when :meth:`settle` is called.

    Requested changes stay pending until the host settles, so a strategy that
    reads the position during the same bar still sees the previous quantity.
    No prices, fills, or P&L are tracked.
    """

    def __init__(
        self,
        *,
        symbol: str | None = None,
        initial_quantity: int = 0,
        max_position: int = 1,
        reject_entries: bool = False,
    ) -> None:
        if max_position <= 0:
            raise ValueError("max_position must be positive")
        self.symbol = symbol
        self.max_position = max_position
        self.reject_entries = reject_entries
        self.quantity = int(initial_quantity)
        self.pending_quantity = self.quantity
        self.working_orders = 0
        self.current_bar: int | None = None
        self.requests: List[HostRequest] = []

    def get_position(self) -> PositionSnapshot:
        return PositionSnapshot(quantity=self.quantity, symbol=self.symbol)

    def cancel_all_orders(self) -> None:
        self.requests.append(HostRequest(CANCEL_ALL_ORDERS, self.current_bar))
        self.working_orders = 0

    def flatten_position(self) -> None:
        self.requests.append(HostRequest(FLATTEN_POSITION, self.current_bar))
        self.pending_quantity = 0

    def submit_entry(self, intent: OrderIntent) -> bool:
        request = HostRequest(SUBMIT_ENTRY, self.current_bar, intent=intent)
        self.requests.append(request)
        if self.reject_entries:
            request.accepted = False
            return False
        projected = self.pending_quantity + intent.signed_quantity
        if abs(projected) > self.max_position:
            logger.warning(
                "Rejecting %s entry: projected position %s exceeds max %s",
                intent.direction.value,
                projected,
                self.max_position,
            )
            request.accepted = False
            return False
        self.pending_quantity = projected
        # Attached stop and target legs.
        self.working_orders += 2
        request.accepted = True
        return True

    def settle(self) -> PositionSnapshot:
        """Apply every pending change, making it visible to ``get_position``."""

        self.quantity = self.pending_quantity
        return self.get_position()

    def request_kinds(self) -> List[str]:
        return [request.kind for request in self.requests]


__all__ = [
    "CANCEL_ALL_ORDERS",
    "FLATTEN_POSITION",
    "HostRequest",
    "PaperExecutionHost",
    "SUBMIT_ENTRY",
]
