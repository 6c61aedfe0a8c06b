"""
Ledger walkthrough: average-cost buys, FIFO sells and clamped fills.

Shows: Account directly, then the same orders through LedgerBrokerAdapter
(statuses and order log), then the printed report.
"""

from __future__ import annotations

import logging

from broker_ledger import Account, Order
from broker_ledger.execution import LedgerBrokerAdapter
from broker_ledger.report import print_report, transactions_frame


ORDERS = [
    Order.buy("AAPL", 10, 10.0),
    Order.buy("AAPL", 10, 40.0),
    Order.sell("AAPL", 5, 60.0),
    Order.sell("AAPL", 10, 60.0),
    Order.buy("AAPL", 5, 45.0),
    Order.sell("MSFT", 3, 300.0),  # not held: fills 0
    Order.buy("MSFT", 1000, 300.0),  # clamped by cash
]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    initial_cash = 10_000.0

    print("--- Account: submit_order ---")
    account = Account(initial_cash)
    for order in ORDERS:
        filled = account.submit_order(order)
        held = account.position(order.identifier)
        print(f"  {order.kind.value:4} {order.identifier} x{order.quantity} @ {order.price:.2f} -> filled {filled}; holding {held}")

    print("\n--- Broker adapter: statuses ---")
    broker = LedgerBrokerAdapter(initial_cash=initial_cash)
    for order in ORDERS:
        broker.submit_order(order)
    for order, status in broker.get_order_log():
        print(f"  {order.identifier} {order.kind.value} {order.quantity} -> {status.status.value} ({status.filled_quantity}) {status.message or ''}")
    state = broker.get_portfolio()
    print(f"Portfolio: cash={state.cash:.2f}, positions={list(state.positions)}")

    print("\n--- Transactions ---")
    print(transactions_frame(account).to_string(index=False))
    print()
    print_report(account, initial_cash)


if __name__ == "__main__":
    main()
