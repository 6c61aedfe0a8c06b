"""
Tests for report: positions_frame, transactions_frame, print_report.
"""

from broker_ledger import Account, Order
from broker_ledger.report import POSITION_COLUMNS, TRANSACTION_COLUMNS, positions_frame, print_report, transactions_frame


def _account() -> Account:
    account = Account(10_000.0)
    account.submit_order(Order.buy("MSFT", 10, 100.0))
    account.submit_order(Order.buy("AAPL", 10, 10.0))
    account.submit_order(Order.buy("AAPL", 10, 40.0))
    account.submit_order(Order.sell("AAPL", 5, 60.0))
    return account


def test_empty_frames_keep_columns():
    account = Account(100.0)
    assert list(positions_frame(account).columns) == POSITION_COLUMNS
    assert list(transactions_frame(account).columns) == TRANSACTION_COLUMNS
    assert positions_frame(account).empty
    assert transactions_frame(account).empty


def test_positions_frame_sorted_with_cost():
    df = positions_frame(_account())
    assert list(df["identifier"]) == ["AAPL", "MSFT"]
    assert list(df["quantity"]) == [15, 10]
    assert list(df["price"]) == [30.0, 100.0]
    assert list(df["cost"]) == [450.0, 1000.0]


def test_transactions_frame_cash_flow_signs():
    df = transactions_frame(_account())
    assert list(df["kind"]) == ["buy", "buy", "buy", "sell"]
    assert list(df["cash_flow"]) == [-1000.0, -100.0, -400.0, 300.0]
    assert df["cash_flow"].sum() == -1200.0


def test_print_report(capsys):
    account = _account()
    summary = print_report(account, 10_000.0)
    out = capsys.readouterr().out
    assert "Account Summary" in out
    assert "AAPL" in out
    assert summary.cash == account.get_cash_balance() == 8_800.0
    assert summary.invested_cost == 1450.0
    assert summary.net_cash_flow == -1200.0
    assert (summary.buys, summary.sells, summary.holdings) == (3, 1, 2)


def test_print_report_empty_account(capsys):
    summary = print_report(Account(50.0), 50.0)
    assert summary.holdings == 0
    assert summary.net_cash_flow == 0.0
    assert "Holdings:        0" in capsys.readouterr().out
