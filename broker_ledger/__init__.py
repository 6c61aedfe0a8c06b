"""
broker-ledger: single-account brokerage ledger with FIFO cost basis.

Whole-share buys and sells at caller-supplied prices, clamped to available cash
and holdings. No market data, persistence or order matching.
"""

__version__ = "0.1.0"

from broker_ledger.errors import InvalidOrderError, LedgerError
from broker_ledger.position import SecurityPosition
from broker_ledger.order import Order, OrderKind
from broker_ledger.lots import Lot, consume_lots
from broker_ledger.account import Account, ConsistencyMode

__all__ = [
    "Account",
    "ConsistencyMode",
    "InvalidOrderError",
    "LedgerError",
    "Lot",
    "Order",
    "OrderKind",
    "SecurityPosition",
    "consume_lots",
]
