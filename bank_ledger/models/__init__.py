from .db import Account as AccountModel
from .db import AccountNumberSequence as AccountNumberSequenceModel
from .db import AccountType
from .db import Client as ClientModel
from .schemas import (
    AccountOpen,
    AccountResponse,
    BalanceResponse,
    ClientCreate,
    ClientResponse,
    MoneyMovementRequest,
)

__all__ = [
    "AccountOpen",
    "AccountResponse",
    "BalanceResponse",
    "ClientCreate",
    "ClientResponse",
    "MoneyMovementRequest",
    "AccountType",
    "AccountModel",
    "AccountNumberSequenceModel",
    "ClientModel",
]
