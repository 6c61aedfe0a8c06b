"""
Exceptions raised by the ledger.

Unfillable orders are not errors (they are clamped); only malformed input raises.
"""


class LedgerError(Exception):
    """Base class for ledger errors."""


class InvalidOrderError(LedgerError, ValueError):
    """Order or position violates a precondition (bad identifier, quantity, price or kind)."""
