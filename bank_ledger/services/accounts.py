from __future__ import annotations

import logging
from typing import Union

from ..core.errors import NotFoundError, ValidationError
from ..models import AccountModel, AccountType
from .clients import ClientRegistry
from .repository import LedgerRepository


logger = logging.getLogger(__name__)


def coerce_account_type(value: Union[AccountType, str]) -> AccountType:
    if isinstance(value, AccountType):
        return value
    try:
        return AccountType(str(value).strip().upper())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in AccountType)
        raise ValidationError(
            f"Unknown account type {value!r}. Expected one of: {allowed}."
        ) from exc


class AccountFactory:
    """Opens accounts for registered clients.

    Account numbers come from a store-issued sequence, so two accounts can
    never share one.
    """

    def __init__(
        self,
        repository: LedgerRepository,
        clients: ClientRegistry,
        prefix: str = "A",
    ) -> None:
        self.repository = repository
        self.clients = clients
        self.prefix = prefix

    def open(self, dni: str, account_type: Union[AccountType, str]) -> AccountModel:
        kind = coerce_account_type(account_type)
        client = self.clients.find(dni)

        try:
            account = AccountModel(
                account_number=self.repository.next_account_number(self.prefix),
                type=kind,
                balance_cents=0,
                client_id=client.id,
            )
            self.repository.save_account(account, client.id)
            self.repository.commit()
        except Exception:
            self.repository.rollback()
            raise
        self.repository.refresh(account)

        logger.info(
            "account.opened",
            extra={
                "account_number": account.account_number,
                "type": kind.value,
                "client_id": client.id,
            },
        )
        return account

    def get(self, account_number: str) -> AccountModel:
        account = self.repository.find_account(account_number)
        if account is None:
            raise NotFoundError(f"Account {account_number} not found")
        return account
