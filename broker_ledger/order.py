"""
Order: a request to buy or sell whole shares of one security at a given price.

Immutable. The account logs the executed order, whose quantity may be smaller
than the one requested.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from broker_ledger.errors import InvalidOrderError
from broker_ledger.position import SecurityPosition


class OrderKind(Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class Order:
    """Kind plus the position to trade (quantity = shares, price = per share)."""

    kind: OrderKind
    position: SecurityPosition

    def __post_init__(self) -> None:
        if not isinstance(self.kind, OrderKind):
            raise InvalidOrderError(f"unknown order kind {self.kind!r}")
        if not isinstance(self.position, SecurityPosition):
            raise InvalidOrderError(f"position must be a SecurityPosition, got {type(self.position).__name__}")

    @classmethod
    def buy(cls, identifier: str, quantity: int, price: float) -> Order:
        return cls(OrderKind.BUY, SecurityPosition(identifier, quantity, price))

    @classmethod
    def sell(cls, identifier: str, quantity: int, price: float) -> Order:
        return cls(OrderKind.SELL, SecurityPosition(identifier, quantity, price))

    @property
    def identifier(self) -> str:
        return self.position.identifier

    @property
    def quantity(self) -> int:
        return self.position.quantity

    @property
    def price(self) -> float:
        return self.position.price

    @property
    def notional(self) -> float:
        """Cash value of the order: quantity * price."""
        return self.position.market_value

    def with_quantity(self, quantity: int) -> Order:
        """Copy of this order with a different share count (same kind, identifier, price)."""
        return Order(self.kind, SecurityPosition(self.identifier, quantity, self.price))
