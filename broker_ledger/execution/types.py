"""
Execution-layer types: order status and portfolio snapshot.

What a broker adapter hands back instead of a bare fill count.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from broker_ledger.position import SecurityPosition


class OrderStatusKind(Enum):
    """Outcome of an order submitted to a broker/adapter."""

    FILLED = "filled"
    PARTIALLY_FILLED = "partially_filled"
    REJECTED = "rejected"


@dataclass(frozen=True)
class OrderStatus:
    """Result of submitting an order. Immutable."""

    status: OrderStatusKind
    order_id: str | None = None
    fill_price: float | None = None
    filled_quantity: int = 0
    requested_quantity: int = 0
    message: str | None = None
    timestamp: datetime | None = None


@dataclass
class PortfolioState:
    """
    Snapshot of an account (cash + cost-basis positions keyed by identifier).
    """

    cash: float = 0.0
    positions: dict[str, SecurityPosition] | None = None

    def __post_init__(self) -> None:
        if self.positions is None:
            object.__setattr__(self, "positions", {})

    def position(self, identifier: str) -> int:
        """Quantity held in identifier. 0 if not present."""
        held = self.positions.get(identifier)
        return held.quantity if held is not None else 0
