"""
Account: cash, cost-basis portfolio, FIFO buy lots and the transaction log.

Single-threaded, in-memory. All mutation goes through submit_order (and settle
in DEFERRED consistency mode). Orders that cannot be filled in full are
clamped to what cash or holdings allow; nothing is rejected for size.
"""

from __future__ import annotations

import logging
import math
import os
from collections import deque
from enum import Enum

from broker_ledger.errors import InvalidOrderError
from broker_ledger.lots import Lot, average_price, consume_lots
from broker_ledger.order import Order, OrderKind
from broker_ledger.position import SecurityPosition

logger = logging.getLogger(__name__)

# Environment variable consulted when no consistency mode is passed to Account.
CONSISTENCY_ENV = "BROKER_LEDGER_CONSISTENCY"


class ConsistencyMode(Enum):
    """When sell-side cost basis is recomputed."""

    STRICT = "strict"
    DEFERRED = "deferred"


def _resolve_consistency(mode: ConsistencyMode | str | None) -> ConsistencyMode:
    if isinstance(mode, ConsistencyMode):
        return mode
    if mode is None:
        mode = os.environ.get(CONSISTENCY_ENV, "") or ConsistencyMode.STRICT.value
    try:
        return ConsistencyMode(str(mode).strip().lower())
    except ValueError:
        raise ValueError(f"unknown consistency mode {mode!r}; expected 'strict' or 'deferred'") from None


class Account:
    """
    A brokerage account for whole-share buys and sells at caller-supplied prices.

    Buys are clamped to floor(cash / price); sells to the quantity held.
    Portfolio prices are weighted-average cost; on sell, cost is removed
    oldest lot first. Cash can never go negative.

    consistency=DEFERRED lets sells skip the cost-basis update; positions keep
    their previous average price until settle() is called.
    """

    def __init__(
        self,
        initial_cash: float,
        *,
        consistency: ConsistencyMode | str | None = None,
    ) -> None:
        if isinstance(initial_cash, bool) or not isinstance(initial_cash, (int, float)):
            raise ValueError(f"initial cash must be a number, got {initial_cash!r}")
        if not math.isfinite(initial_cash) or initial_cash < 0:
            raise ValueError(f"initial cash must be finite and non-negative, got {initial_cash}")
        self._cash = float(initial_cash)
        self._consistency = _resolve_consistency(consistency)
        self._portfolio: dict[str, SecurityPosition] = {}
        self._lot_queues: dict[str, deque[Lot]] = {}
        self._transactions: list[Order] = []
        self._pending_sells: deque[Order] = deque()

    def __repr__(self) -> str:
        return (
            f"Account(cash={self._cash:.2f}, positions={len(self._portfolio)}, "
            f"transactions={len(self._transactions)}, consistency={self._consistency.value})"
        )

    @property
    def consistency(self) -> ConsistencyMode:
        return self._consistency

    @property
    def pending_settlements(self) -> int:
        """Number of sells whose cost-basis update has not been applied yet."""
        return len(self._pending_sells)

    # --- Orders ---

    def submit_order(self, order: Order) -> int:
        """
        Buy or sell up to order.quantity shares. Returns the number actually traded.

        Buys fill min(requested, floor(cash / price)); a buy at price 0 raises
        InvalidOrderError. Sells fill min(requested, held); unheld securities
        fill 0. A zero fill changes nothing and is not logged.
        """
        if not isinstance(order, Order):
            raise InvalidOrderError(f"expected an Order, got {type(order).__name__}")

        if order.kind == OrderKind.BUY:
            filled = self._affordable_quantity(order)
        else:
            filled = self._sellable_quantity(order)

        if filled == 0:
            logger.info(
                "Order not filled: %s %s x%d @ %.4f (%s)",
                order.kind.value,
                order.identifier,
                order.quantity,
                order.price,
                "nothing requested" if order.quantity == 0 else self._shortfall_reason(order),
            )
            return 0
        if filled < order.quantity:
            logger.info(
                "Order clamped: %s %s requested %d, filled %d (%s)",
                order.kind.value,
                order.identifier,
                order.quantity,
                filled,
                self._shortfall_reason(order),
            )

        executed = order.with_quantity(filled)
        if executed.kind == OrderKind.BUY:
            self._handle_buy(executed)
        else:
            self._handle_sell(executed)
        return filled

    def _affordable_quantity(self, order: Order) -> int:
        if order.price == 0:
            raise InvalidOrderError(f"cannot buy {order.identifier} at a price of 0")
        affordable = self._cash / order.price
        if not math.isfinite(affordable):
            quantity = order.quantity
        else:
            quantity = min(order.quantity, math.floor(affordable))
        # cash / price can round up; never let the fill cost more than we hold
        while quantity > 0 and quantity * order.price > self._cash:
            quantity -= 1
        return quantity

    def _sellable_quantity(self, order: Order) -> int:
        held = self._portfolio.get(order.identifier)
        if held is None:
            return 0
        return min(order.quantity, held.quantity)

    def _shortfall_reason(self, order: Order) -> str:
        if order.kind == OrderKind.BUY:
            return "insufficient cash"
        if order.identifier not in self._portfolio:
            return "security not held"
        return "insufficient holdings"

    def _handle_buy(self, order: Order) -> None:
        """Apply a validated buy: average in the cost, queue a lot, pay, log."""
        if self._has_pending(order.identifier):
            self.settle(order.identifier)

        held = self._portfolio.get(order.identifier)
        if held is not None:
            quantity = held.quantity + order.quantity
            price = (order.quantity * order.price + held.quantity * held.price) / quantity
            self._portfolio[order.identifier] = SecurityPosition(order.identifier, quantity, price)
        else:
            self._portfolio[order.identifier] = order.position

        self._lot_queues.setdefault(order.identifier, deque()).append(Lot.from_order(order))
        self._cash -= order.notional
        self._transactions.append(order)
        logger.debug("Bought %d %s @ %.4f; cash %.2f", order.quantity, order.identifier, order.price, self._cash)

    def _handle_sell(self, order: Order) -> None:
        """Apply a validated sell: consume lots (or defer), reduce holding, collect cash, log."""
        held = self._portfolio[order.identifier]
        remaining = held.quantity - order.quantity

        if self._consistency == ConsistencyMode.DEFERRED:
            self._pending_sells.append(order)
            price = held.price
        else:
            queue = self._lot_queues[order.identifier]
            consume_lots(queue, order.quantity)
            # same value as (cost - value_removed) / remaining, without float cancellation
            price = None if remaining == 0 else average_price(queue)

        if remaining == 0:
            del self._portfolio[order.identifier]
        else:
            self._portfolio[order.identifier] = SecurityPosition(order.identifier, remaining, price)

        self._cash += order.notional
        self._transactions.append(order)
        logger.debug("Sold %d %s @ %.4f; cash %.2f", order.quantity, order.identifier, order.price, self._cash)

    # --- Deferred settlement ---

    def _has_pending(self, identifier: str) -> bool:
        return any(o.identifier == identifier for o in self._pending_sells)

    def settle(self, identifier: str | None = None) -> int:
        """
        Apply queued sell-side cost-basis updates, in submission order.

        Only affects DEFERRED accounts; limited to one security when identifier
        is given. Returns the number of sells settled.
        """
        if not self._pending_sells:
            return 0
        kept: deque[Order] = deque()
        touched: set[str] = set()
        settled = 0
        while self._pending_sells:
            order = self._pending_sells.popleft()
            if identifier is not None and order.identifier != identifier:
                kept.append(order)
                continue
            consume_lots(self._lot_queues[order.identifier], order.quantity)
            touched.add(order.identifier)
            settled += 1
        self._pending_sells = kept

        for ident in touched:
            held = self._portfolio.get(ident)
            if held is not None:
                price = average_price(self._lot_queues[ident])
                self._portfolio[ident] = SecurityPosition(ident, held.quantity, price)
        logger.debug("Settled %d pending sell(s) across %d security(ies)", settled, len(touched))
        return settled

    # --- Reads ---

    def get_positions(self) -> list[SecurityPosition]:
        """Current holdings, priced at weighted-average cost."""
        return list(self._portfolio.values())

    def get_transactions(self) -> list[Order]:
        """Executed orders, in processing order."""
        return list(self._transactions)

    def get_cash_balance(self) -> float:
        return self._cash

    def position(self, identifier: str) -> SecurityPosition | None:
        """Holding for identifier, or None if not held."""
        return self._portfolio.get(identifier)

    def lots(self, identifier: str) -> tuple[Lot, ...]:
        """Unconsumed buy lots for identifier, oldest first."""
        return tuple(self._lot_queues.get(identifier, ()))
