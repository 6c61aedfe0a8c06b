"""
SecurityPosition: a holding (or the traded amount) of one security.

Immutable. For a portfolio entry, price is the weighted-average cost basis;
inside an order it is the requested or executed price per share.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real

from broker_ledger.errors import InvalidOrderError


@dataclass(frozen=True)
class SecurityPosition:
    """Identifier, whole-share quantity and per-share price."""

    identifier: str
    quantity: int
    price: float

    def __post_init__(self) -> None:
        if not isinstance(self.identifier, str) or not self.identifier:
            raise InvalidOrderError(f"identifier must be a non-empty string, got {self.identifier!r}")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise InvalidOrderError(f"quantity must be a whole number of shares, got {self.quantity!r}")
        if self.quantity < 0:
            raise InvalidOrderError(f"quantity must be non-negative, got {self.quantity}")
        if isinstance(self.price, bool) or not isinstance(self.price, Real):
            raise InvalidOrderError(f"price must be a real number, got {self.price!r}")
        if not math.isfinite(self.price) or self.price < 0:
            raise InvalidOrderError(f"price must be finite and non-negative, got {self.price}")
        object.__setattr__(self, "price", float(self.price))

    @property
    def market_value(self) -> float:
        """quantity * price."""
        return self.quantity * self.price
