from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlmodel import Session

from ..core.config import Settings, get_settings
from ..models import (
    AccountModel,
    AccountResponse,
    AccountType,
    BalanceResponse,
    ClientModel,
    ClientResponse,
)
from .accounts import AccountFactory
from .clients import ClientRegistry
from .policies import Policy, build_policies
from .repository import LedgerRepository
from .transactions import AccountLocks, TransactionExecutor


class LedgerService:
    """Entry point for callers: wires the registry, factory and executor
    around one repository bound to ``session``."""

    def __init__(
        self,
        session: Session,
        repository: Optional[LedgerRepository] = None,
        *,
        locks: Optional[AccountLocks] = None,
        policies: Optional[Mapping[AccountType, Policy]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or get_settings()
        self.session = session
        self.repository = repository or LedgerRepository(session)
        self.clients = ClientRegistry(self.repository)
        self.accounts = AccountFactory(
            self.repository,
            self.clients,
            prefix=settings.account_number_prefix,
        )
        self.transactions = TransactionExecutor(
            self.repository,
            policies or build_policies(settings.checking_overdraft_limit),
            locks,
        )

    # ------------------------------------------------------------------
    # Helper utilities
    # ------------------------------------------------------------------
    def _client_to_response(self, client: ClientModel) -> ClientResponse:
        return ClientResponse(
            id=client.id,
            first_name=client.first_name,
            last_name=client.last_name,
            dni=client.dni,
            email=client.email,
            created_at=client.created_at,
            accounts=self.clients.account_numbers(client),
        )

    def _account_to_response(self, account: AccountModel) -> AccountResponse:
        return AccountResponse(
            account_number=account.account_number,
            type=account.type,
            client_id=account.client_id,
            created_at=account.created_at,
            balance=account.balance,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def register_client(
        self,
        first_name: Optional[str],
        last_name: Optional[str],
        dni: Optional[str],
        email: Optional[str],
    ) -> ClientResponse:
        client = self.clients.register(first_name, last_name, dni, email)
        return self._client_to_response(client)

    def get_client(self, dni: str) -> ClientResponse:
        return self._client_to_response(self.clients.find(dni))

    def open_account(self, dni: str, account_type: Any) -> AccountResponse:
        account = self.accounts.open(dni, account_type)
        return self._account_to_response(account)

    def get_account(self, account_number: str) -> AccountResponse:
        return self._account_to_response(self.accounts.get(account_number))

    def deposit(self, account_number: str, amount: Any) -> BalanceResponse:
        balance = self.transactions.deposit(account_number, amount)
        return BalanceResponse(account_number=account_number, balance=balance)

    def withdraw(self, account_number: str, amount: Any) -> BalanceResponse:
        balance = self.transactions.withdraw(account_number, amount)
        return BalanceResponse(account_number=account_number, balance=balance)

    def check_balance(self, account_number: str) -> BalanceResponse:
        balance = self.transactions.check_balance(account_number)
        return BalanceResponse(account_number=account_number, balance=balance)
