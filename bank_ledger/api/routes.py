from fastapi import APIRouter, Depends, status

from ..core.dependencies import get_ledger_service
from ..models import (
    AccountOpen,
    AccountResponse,
    BalanceResponse,
    ClientCreate,
    ClientResponse,
    MoneyMovementRequest,
)
from ..services import LedgerService


client_router = APIRouter(prefix="/clients", tags=["clients"])

@client_router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def register_client(
    payload: ClientCreate,
    service: LedgerService = Depends(get_ledger_service),
) -> ClientResponse:
    return service.register_client(
        payload.first_name, payload.last_name, payload.dni, payload.email
    )

@client_router.get("/{dni}", response_model=ClientResponse)
def get_client(
    dni: str,
    service: LedgerService = Depends(get_ledger_service),
) -> ClientResponse:
    return service.get_client(dni)

@client_router.post(
    "/{dni}/accounts",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
)
def open_account(
    dni: str,
    payload: AccountOpen,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    return service.open_account(dni, payload.type)

router = APIRouter(prefix="/accounts", tags=["accounts"])

@router.get("/{account_number}", response_model=AccountResponse)
def get_account(
    account_number: str,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    return service.get_account(account_number)

@router.post("/{account_number}/deposit", response_model=BalanceResponse)
def deposit(
    account_number: str,
    payload: MoneyMovementRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> BalanceResponse:
    return service.deposit(account_number, payload.amount)

@router.post("/{account_number}/withdraw", response_model=BalanceResponse)
def withdraw(
    account_number: str,
    payload: MoneyMovementRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> BalanceResponse:
    return service.withdraw(account_number, payload.amount)

@router.get("/{account_number}/balance", response_model=BalanceResponse)
def check_balance(
    account_number: str,
    service: LedgerService = Depends(get_ledger_service),
) -> BalanceResponse:
    return service.check_balance(account_number)

__all__ = ["client_router", "router"]
