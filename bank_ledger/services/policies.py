"""Withdrawal policies keyed by account type.

A policy is the floor a balance may reach after a withdrawal and the error
raised when a withdrawal would cross it. Deposits are never restricted.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping

from ..core.errors import InsufficientFundsError, LedgerError, OverdraftExceededError
from ..models import AccountType

OVERDRAFT_LIMIT = Decimal("500")


@dataclass(frozen=True)
class Policy:
    floor: Decimal
    error: type[LedgerError]
    message: str

    def allowed(self, balance: Decimal, amount: Decimal) -> bool:
        """The predicate ``LedgerRepository.atomic_adjust_balance`` enforces in SQL
        when it is given ``floor``."""
        return balance - amount >= self.floor

    def rejection(self, balance: Decimal, amount: Decimal) -> LedgerError:
        return self.error(
            f"{self.message} Balance: {balance}, requested: {amount}, floor: {self.floor}."
        )


def build_policies(overdraft_limit: Decimal = OVERDRAFT_LIMIT) -> Mapping[AccountType, Policy]:
    return {
        AccountType.SAVINGS: Policy(
            floor=Decimal("0"),
            error=InsufficientFundsError,
            message="Insufficient funds. Operation cancelled.",
        ),
        AccountType.CHECKING: Policy(
            floor=-Decimal(overdraft_limit),
            error=OverdraftExceededError,
            message="Account limit exceeded. Operation cancelled.",
        ),
    }


DEFAULT_POLICIES = build_policies()
