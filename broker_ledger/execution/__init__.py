"""
Execution layer: broker abstraction over the account ledger.

BrokerAdapter interface; ledger-backed adapter returning fill statuses.
"""

from broker_ledger.execution.broker import BrokerAdapter
from broker_ledger.execution.ledger import LedgerBrokerAdapter
from broker_ledger.execution.types import OrderStatus, OrderStatusKind, PortfolioState

__all__ = [
    "BrokerAdapter",
    "LedgerBrokerAdapter",
    "OrderStatus",
    "OrderStatusKind",
    "PortfolioState",
]
