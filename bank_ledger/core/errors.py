from __future__ import annotations

from decimal import Decimal


class LedgerError(Exception):
    """Base class for every failure surfaced to ledger callers."""


class ValidationError(LedgerError):
    """Raised for malformed input: empty field, bad DNI/email, non-positive amount."""


class DuplicateError(LedgerError):
    """Raised when a DNI is already registered."""


class NotFoundError(LedgerError):
    """Raised when a client or account is missing from the store."""


class InsufficientFundsError(LedgerError):
    """Raised when a savings withdrawal would drop the balance below zero."""


class OverdraftExceededError(LedgerError):
    """Raised when a checking withdrawal would pass the overdraft limit."""


class StoreError(LedgerError):
    """Raised when the ledger store fails to read or write."""


class PolicyRejected(Exception):
    """Raised by the store when a conditional balance update would cross its floor."""

    def __init__(self, account_number: str, balance: Decimal, floor: Decimal) -> None:
        super().__init__(
            f"Adjustment on {account_number} rejected: balance {balance}, floor {floor}"
        )
        self.account_number = account_number
        self.balance = balance
        self.floor = floor
