"""
Buy lots and FIFO consumption.

A Lot is an unconsumed purchase batch. Each security keeps its lots oldest
first in a deque; sells consume from the front. Consumption is the only place
cost basis is taken out of the ledger, so it lives here as a free function.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, replace

from broker_ledger.order import Order, OrderKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Lot:
    """One buy batch still (partly) held. Same shape as a buy order."""

    identifier: str
    quantity: int
    price: float
    kind: OrderKind = OrderKind.BUY

    @classmethod
    def from_order(cls, order: Order) -> Lot:
        return cls(identifier=order.identifier, quantity=order.quantity, price=order.price)

    @property
    def value(self) -> float:
        return self.quantity * self.price


def consume_lots(queue: deque[Lot], quantity: int) -> tuple[float, int]:
    """
    Remove `quantity` shares from the front of `queue`, oldest lot first.

    Fully consumed lots are popped; a partially consumed lot is replaced in
    place by a copy with the remaining quantity and consumption stops there.
    If the queue holds fewer shares than requested, everything is consumed.

    Returns
    -------
    (value_removed, quantity_removed)
        Sum of consumed shares * lot price, and number of shares consumed.
    """
    value_removed = 0.0
    quantity_removed = 0
    while quantity_removed < quantity and queue:
        lot = queue[0]
        take = min(quantity - quantity_removed, lot.quantity)
        if take == lot.quantity:
            queue.popleft()
        else:
            queue[0] = replace(lot, quantity=lot.quantity - take)
        value_removed += take * lot.price
        quantity_removed += take
        logger.debug("Consumed %d of lot %s x%d @ %.4f", take, lot.identifier, lot.quantity, lot.price)
    return value_removed, quantity_removed


def average_price(queue: deque[Lot]) -> float:
    """Quantity-weighted average price of the lots in `queue`. 0.0 when empty."""
    total = sum(lot.quantity for lot in queue)
    if total == 0:
        return 0.0
    return sum(lot.value for lot in queue) / total
