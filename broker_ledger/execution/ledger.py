"""
Ledger broker adapter: the BrokerAdapter interface over an in-memory Account.

Fills at the order's own price (no market data). Partial fills from the
account's clamping are reported as PARTIALLY_FILLED; zero fills and malformed
orders come back REJECTED with a reason instead of raising.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime

from broker_ledger.account import Account, ConsistencyMode
from broker_ledger.errors import InvalidOrderError
from broker_ledger.order import Order, OrderKind

from broker_ledger.execution.broker import BrokerAdapter
from broker_ledger.execution.types import OrderStatus, OrderStatusKind, PortfolioState

logger = logging.getLogger(__name__)


class LedgerBrokerAdapter(BrokerAdapter):
    """
    Broker adapter backed by an Account. Pass an existing account, or
    initial_cash (and optionally consistency) to have one created.
    Every submission, filled or not, is kept in the order log.
    """

    def __init__(
        self,
        initial_cash: float = 0.0,
        *,
        account: Account | None = None,
        consistency: ConsistencyMode | str | None = None,
    ) -> None:
        self._account = account if account is not None else Account(initial_cash, consistency=consistency)
        self._order_log: list[tuple[Order, OrderStatus]] = []
        logger.info("LedgerBrokerAdapter ready: %r", self._account)

    @property
    def account(self) -> Account:
        return self._account

    def submit_order(self, order: Order) -> OrderStatus:
        """Run the order through the account and describe the outcome."""
        requested = order.quantity if isinstance(order, Order) else 0
        try:
            filled = self._account.submit_order(order)
        except InvalidOrderError as exc:
            logger.info("Order rejected: %s", exc)
            status = OrderStatus(
                status=OrderStatusKind.REJECTED,
                requested_quantity=requested,
                message=str(exc),
                timestamp=datetime.now(),
            )
            self._order_log.append((order, status))
            return status

        if filled == 0:
            if requested == 0:
                reason = "Nothing requested"
            elif order.kind == OrderKind.BUY:
                reason = "Insufficient cash"
            else:
                reason = "Security not held"
            status = OrderStatus(
                status=OrderStatusKind.REJECTED,
                requested_quantity=requested,
                message=reason,
                timestamp=datetime.now(),
            )
            self._order_log.append((order, status))
            return status

        status = OrderStatus(
            status=OrderStatusKind.FILLED if filled == requested else OrderStatusKind.PARTIALLY_FILLED,
            order_id=f"ledger-{uuid.uuid4().hex[:12]}",
            fill_price=order.price,
            filled_quantity=filled,
            requested_quantity=requested,
            timestamp=datetime.now(),
        )
        self._order_log.append((order, status))
        return status

    def get_portfolio(self) -> PortfolioState:
        """Return current account state."""
        positions = {p.identifier: p for p in self._account.get_positions()}
        return PortfolioState(cash=self._account.get_cash_balance(), positions=positions)

    def get_order_log(self) -> list[tuple[Order, OrderStatus]]:
        """Return log of all submitted orders and their status (for debugging/reporting)."""
        return list(self._order_log)
