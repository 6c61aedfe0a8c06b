"""
Tests for execution layer: LedgerBrokerAdapter, types.
"""

import logging

from broker_ledger import Account, ConsistencyMode, Order, OrderKind, SecurityPosition
from broker_ledger.execution import BrokerAdapter, LedgerBrokerAdapter
from broker_ledger.execution.types import OrderStatusKind, PortfolioState


def test_ledger_broker_get_portfolio_initial():
    broker = LedgerBrokerAdapter(initial_cash=50_000.0)
    state = broker.get_portfolio()
    assert isinstance(broker, BrokerAdapter)
    assert state.cash == 50_000.0
    assert state.positions == {}
    assert state.position("SPY") == 0


def test_portfolio_state_defaults():
    state = PortfolioState()
    assert state.positions == {}
    assert state.position("SPY") == 0


def test_ledger_broker_submit_buy_fill():
    broker = LedgerBrokerAdapter(initial_cash=100_000.0)
    status = broker.submit_order(Order.buy("SPY", 10, 400.0))
    assert status.status == OrderStatusKind.FILLED
    assert status.fill_price == 400.0
    assert status.filled_quantity == 10
    assert status.requested_quantity == 10
    assert status.order_id.startswith("ledger-")
    state = broker.get_portfolio()
    assert state.cash == 100_000.0 - 10 * 400.0
    assert state.position("SPY") == 10
    assert state.positions["SPY"] == SecurityPosition("SPY", 10, 400.0)


def test_ledger_broker_partial_fill():
    broker = LedgerBrokerAdapter(initial_cash=1_000.0)
    status = broker.submit_order(Order.buy("SPY", 5, 400.0))
    assert status.status == OrderStatusKind.PARTIALLY_FILLED
    assert status.filled_quantity == 2
    assert status.requested_quantity == 5


def test_ledger_broker_submit_sell_fill():
    broker = LedgerBrokerAdapter(initial_cash=20 * 405.0)
    broker.submit_order(Order.buy("SPY", 20, 405.0))
    status = broker.submit_order(Order.sell("SPY", 10, 410.0))
    assert status.status == OrderStatusKind.FILLED
    assert broker.get_portfolio().position("SPY") == 10


def test_ledger_broker_rejects_insufficient_cash():
    broker = LedgerBrokerAdapter(initial_cash=100.0)
    status = broker.submit_order(Order.buy("SPY", 100, 400.0))
    assert status.status == OrderStatusKind.REJECTED
    assert status.message == "Insufficient cash"
    assert status.filled_quantity == 0
    assert status.order_id is None


def test_ledger_broker_rejects_unheld_sell():
    broker = LedgerBrokerAdapter(initial_cash=100.0)
    status = broker.submit_order(Order.sell("SPY", 1, 400.0))
    assert status.status == OrderStatusKind.REJECTED
    assert status.message == "Security not held"


def test_ledger_broker_rejects_zero_price_buy():
    broker = LedgerBrokerAdapter(initial_cash=100.0)
    status = broker.submit_order(Order.buy("SPY", 1, 0.0))
    assert status.status == OrderStatusKind.REJECTED
    assert "price of 0" in status.message
    assert broker.account.get_transactions() == []


def test_ledger_broker_order_log_records_everything():
    broker = LedgerBrokerAdapter(initial_cash=1_000.0)
    orders = [Order.buy("SPY", 1, 100.0), Order.sell("QQQ", 1, 100.0), Order.buy("SPY", 0, 100.0)]
    for order in orders:
        broker.submit_order(order)
    log = broker.get_order_log()
    assert [o for o, _ in log] == orders
    assert [s.status for _, s in log] == [OrderStatusKind.FILLED, OrderStatusKind.REJECTED, OrderStatusKind.REJECTED]
    assert log[2][1].message == "Nothing requested"


def test_ledger_broker_wraps_existing_account():
    account = Account(500.0)
    broker = LedgerBrokerAdapter(account=account)
    broker.submit_order(Order.buy("SPY", 1, 100.0))
    assert broker.account is account
    assert account.get_transactions()[0].kind == OrderKind.BUY
    assert account.get_cash_balance() == 400.0


def test_ledger_broker_passes_consistency():
    broker = LedgerBrokerAdapter(initial_cash=100.0, consistency=ConsistencyMode.DEFERRED)
    assert broker.account.consistency == ConsistencyMode.DEFERRED


def test_ledger_broker_logs_invalid_order_at_info(caplog):
    broker = LedgerBrokerAdapter(initial_cash=100.0)
    with caplog.at_level(logging.DEBUG, logger="broker_ledger"):
        broker.submit_order(Order.buy("SPY", 1, 0.0))
    rejected = [r for r in caplog.records if "rejected" in r.getMessage()]
    assert rejected and rejected[0].levelno == logging.INFO
    assert all(r.levelno < logging.WARNING for r in caplog.records)
