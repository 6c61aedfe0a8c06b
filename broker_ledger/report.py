"""
Account report: pandas views of holdings and transactions, and a printed summary.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from broker_ledger.account import Account
from broker_ledger.order import OrderKind

POSITION_COLUMNS = ["identifier", "quantity", "price", "cost"]
TRANSACTION_COLUMNS = ["kind", "identifier", "quantity", "price", "cash_flow"]


@dataclass
class LedgerSummary:
    """Headline numbers for an account."""

    initial_cash: float
    cash: float
    invested_cost: float
    net_cash_flow: float
    buys: int
    sells: int
    holdings: int


def positions_frame(account: Account) -> pd.DataFrame:
    """One row per holding, sorted by identifier; cost = quantity * average price."""
    rows = [
        {"identifier": p.identifier, "quantity": p.quantity, "price": p.price, "cost": p.market_value}
        for p in account.get_positions()
    ]
    if not rows:
        return pd.DataFrame(columns=POSITION_COLUMNS)
    return pd.DataFrame(rows, columns=POSITION_COLUMNS).sort_values("identifier").reset_index(drop=True)


def transactions_frame(account: Account) -> pd.DataFrame:
    """One row per executed order, in processing order. cash_flow is negative for buys."""
    rows = [
        {
            "kind": o.kind.value,
            "identifier": o.identifier,
            "quantity": o.quantity,
            "price": o.price,
            "cash_flow": -o.notional if o.kind == OrderKind.BUY else o.notional,
        }
        for o in account.get_transactions()
    ]
    if not rows:
        return pd.DataFrame(columns=TRANSACTION_COLUMNS)
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)


def summarize(account: Account, initial_cash: float) -> LedgerSummary:
    positions = positions_frame(account)
    transactions = transactions_frame(account)
    kinds = transactions["kind"]
    return LedgerSummary(
        initial_cash=initial_cash,
        cash=account.get_cash_balance(),
        invested_cost=float(positions["cost"].sum()) if not positions.empty else 0.0,
        net_cash_flow=float(transactions["cash_flow"].sum()) if not transactions.empty else 0.0,
        buys=int((kinds == OrderKind.BUY.value).sum()),
        sells=int((kinds == OrderKind.SELL.value).sum()),
        holdings=len(positions),
    )


def print_report(account: Account, initial_cash: float) -> LedgerSummary:
    """
    Print an account summary followed by the holdings table.

    Parameters
    ----------
    account : Account
        The account to report on.
    initial_cash : float
        Cash the account was opened with.

    Returns
    -------
    LedgerSummary
        The computed summary (e.g. for programmatic use).
    """
    summary = summarize(account, initial_cash)
    print("--- Account Summary ---")
    print(f"Initial cash:    {summary.initial_cash:,.2f}")
    print(f"Cash:            {summary.cash:,.2f}")
    print(f"Invested (cost): {summary.invested_cost:,.2f}")
    print(f"Net cash flow:   {summary.net_cash_flow:,.2f}")
    print(f"Trades:          {summary.buys} buy / {summary.sells} sell")
    print(f"Holdings:        {summary.holdings}")
    print("-----------------------")
    positions = positions_frame(account)
    if not positions.empty:
        print(positions.to_string(index=False))
    return summary
