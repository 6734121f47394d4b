from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from ..core.errors import (
    DuplicateError,
    NotFoundError,
    PolicyRejected,
    StoreError,
    ValidationError,
)
from ..core.money import MAX_CENTS, from_cents, to_cents
from ..models import AccountModel, AccountNumberSequenceModel, ClientModel


logger = logging.getLogger(__name__)


class LedgerRepository:
    """Thin data access layer around the SQLModel session.

    Every SQLAlchemy failure leaves this class as a ``StoreError``; the
    duplicate-DNI constraint and the balance bounds are the only database
    outcomes translated into domain errors.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def _store_call(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error("store.failure", extra={"operation": operation, "error": str(exc)})
            raise StoreError(f"Ledger store failed during {operation}") from exc

    # Transaction control ------------------------------------------------
    def commit(self) -> None:
        with self._store_call("commit"):
            self.session.commit()

    def rollback(self) -> None:
        with self._store_call("rollback"):
            self.session.rollback()

    def refresh(self, instance: Any) -> None:
        with self._store_call("refresh"):
            self.session.refresh(instance)

    # Client operations --------------------------------------------------
    def find_client_by_dni(self, dni: str) -> Optional[ClientModel]:
        stmt = select(ClientModel).where(ClientModel.dni == dni)
        with self._store_call("find_client_by_dni"):
            return self.session.exec(stmt).first()

    def save_client(self, client: ClientModel) -> int:
        with self._store_call("save_client"):
            self.session.add(client)
            try:
                self.session.flush()
            except IntegrityError as exc:
                self.session.rollback()
                raise DuplicateError(
                    "DNI already exists. User can't be registered."
                ) from exc
            self.session.refresh(client)
        return client.id

    def list_account_numbers(self, client_id: int) -> list[str]:
        stmt = (
            select(AccountModel.account_number)
            .where(AccountModel.client_id == client_id)
            .order_by(AccountModel.id)
        )
        with self._store_call("list_account_numbers"):
            return list(self.session.exec(stmt))

    # Account operations -------------------------------------------------
    def find_account(self, account_number: str) -> Optional[AccountModel]:
        stmt = select(AccountModel).where(AccountModel.account_number == account_number)
        with self._store_call("find_account"):
            return self.session.exec(stmt).first()

    def next_account_number(self, prefix: str = "A") -> str:
        with self._store_call("next_account_number"):
            issued = AccountNumberSequenceModel()
            self.session.add(issued)
            self.session.flush()
        return f"{prefix}{issued.id:09d}"

    def save_account(self, account: AccountModel, client_id: int) -> AccountModel:
        account.client_id = client_id
        with self._store_call("save_account"):
            self.session.add(account)
            self.session.flush()
            self.session.refresh(account)
        return account

    # Balances -----------------------------------------------------------
    def read_balance(self, account_number: str) -> Decimal:
        stmt = select(AccountModel.balance_cents).where(
            AccountModel.account_number == account_number
        )
        with self._store_call("read_balance"):
            cents = self.session.exec(stmt).first()
        if cents is None:
            raise NotFoundError(f"Account {account_number} not found")
        return from_cents(cents)

    def atomic_adjust_balance(
        self,
        account_number: str,
        delta: Decimal,
        floor: Optional[Decimal] = None,
    ) -> Decimal:
        """Add ``delta`` to the stored balance in a single conditional UPDATE.

        With a ``floor`` the row only changes when the resulting balance stays
        at or above it; otherwise ``PolicyRejected`` carries the balance the
        database held at that moment. A result above ``MAX_CENTS`` is a
        ``ValidationError``. The caller owns commit/rollback.
        """
        delta_cents = to_cents(delta)
        lower = -MAX_CENTS if floor is None else to_cents(floor)
        stmt = (
            update(AccountModel)
            .where(AccountModel.account_number == account_number)
            .values(balance_cents=AccountModel.balance_cents + delta_cents)
        )
        # Bounds are checked on the stored balance so SQL never evaluates an
        # out-of-range sum (SQLite would silently turn it into REAL).
        if delta_cents > 0:
            stmt = stmt.where(AccountModel.balance_cents <= MAX_CENTS - delta_cents)
        if lower - delta_cents > -MAX_CENTS:
            stmt = stmt.where(AccountModel.balance_cents >= lower - delta_cents)

        with self._store_call("atomic_adjust_balance"):
            result = self.session.connection().execute(stmt)
            updated = result.rowcount

        current = self.read_balance(account_number)
        if updated == 0:
            if to_cents(current) + delta_cents > MAX_CENTS:
                raise ValidationError(
                    f"Balance limit exceeded on account {account_number}."
                )
            raise PolicyRejected(account_number, current, floor)
        return current
