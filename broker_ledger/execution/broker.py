"""
Broker abstraction layer.

BrokerAdapter ABC: submit_order, get_portfolio. The ledger adapter implements
it on top of an in-memory Account.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from broker_ledger.order import Order

from broker_ledger.execution.types import OrderStatus, PortfolioState


class BrokerAdapter(ABC):
    """
    Abstract broker adapter. Orders go in, statuses come out.
    Implementations: LedgerBrokerAdapter (in this package).
    """

    @abstractmethod
    def submit_order(self, order: Order) -> OrderStatus:
        """
        Submit an order. Returns status (filled, partially filled, rejected).
        """
        ...

    @abstractmethod
    def get_portfolio(self) -> PortfolioState:
        """Return current portfolio snapshot (cash + positions)."""
        ...
