"""Execution-side types: order intents, the host protocol and a paper host."""

from .host import ExecutionHost, PositionSnapshot, PositionState
from .orders import Direction, OrderIntent, OrderKind, TimeInForce, build_order_intent
from .paper import HostRequest, PaperExecutionHost

__all__ = [
    "Direction",
    "ExecutionHost",
    "HostRequest",
    "OrderIntent",
    "OrderKind",
    "PaperExecutionHost",
    "PositionSnapshot",
    "PositionState",
    "TimeInForce",
    "build_order_intent",
]
