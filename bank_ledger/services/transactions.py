from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..core.errors import NotFoundError, PolicyRejected
from ..core.money import parse_amount
from ..models import AccountModel, AccountType
from .policies import DEFAULT_POLICIES, Policy
from .repository import LedgerRepository


logger = logging.getLogger(__name__)


class AccountLocks:
    """One mutex per account number, created on first use."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def for_account(self, account_number: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(account_number)
            if lock is None:
                lock = self._locks[account_number] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, account_number: str) -> Iterator[None]:
        with self.for_account(account_number):
            yield


class TransactionExecutor:
    """Validates and applies deposits and withdrawals.

    The balance floor is enforced by the store's conditional update, so the
    check always runs against the persisted balance. The per-account lock
    keeps validate-then-persist serialized inside this process; the loaded
    account is refreshed only after the update commits.
    """

    def __init__(
        self,
        repository: LedgerRepository,
        policies: Optional[Mapping[AccountType, Policy]] = None,
        locks: Optional[AccountLocks] = None,
    ) -> None:
        self.repository = repository
        self.policies = policies or DEFAULT_POLICIES
        self.locks = locks or AccountLocks()

    def _get_account(self, account_number: str) -> AccountModel:
        account = self.repository.find_account(account_number)
        if account is None:
            raise NotFoundError(f"Account {account_number} not found")
        return account

    def _adjust(
        self,
        account: AccountModel,
        delta: Decimal,
        floor: Optional[Decimal],
    ) -> Decimal:
        try:
            new_balance = self.repository.atomic_adjust_balance(
                account.account_number, delta, floor
            )
            self.repository.commit()
        except Exception:
            self.repository.rollback()
            raise
        self.repository.refresh(account)
        return new_balance

    def deposit(self, account_number: str, amount: Any) -> Decimal:
        value = parse_amount(amount)
        account = self._get_account(account_number)

        with self.locks.hold(account_number):
            new_balance = self._adjust(account, value, floor=None)

        logger.info(
            "account.deposit",
            extra={
                "account_number": account_number,
                "amount": str(value),
                "balance": str(new_balance),
            },
        )
        return new_balance

    def withdraw(self, account_number: str, amount: Any) -> Decimal:
        value = parse_amount(amount)
        account = self._get_account(account_number)
        policy = self.policies[account.type]

        with self.locks.hold(account_number):
            try:
                new_balance = self._adjust(account, -value, floor=policy.floor)
            except PolicyRejected as exc:
                logger.warning(
                    "account.withdraw.rejected",
                    extra={
                        "account_number": account_number,
                        "amount": str(value),
                        "balance": str(exc.balance),
                        "floor": str(policy.floor),
                    },
                )
                raise policy.rejection(exc.balance, value) from exc

        logger.info(
            "account.withdraw",
            extra={
                "account_number": account_number,
                "amount": str(value),
                "balance": str(new_balance),
            },
        )
        return new_balance

    def check_balance(self, account_number: str) -> Decimal:
        return self.repository.read_balance(account_number)
