from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from .db import AccountType


class ClientCreate(BaseModel):
    first_name: str = Field(..., description="Client's first name")
    last_name: str = Field(..., description="Client's last name")
    dni: str = Field(..., description="National identity number, exactly 8 digits")
    email: str


class ClientResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    dni: str
    email: str
    created_at: datetime
    accounts: list[str] = Field(default_factory=list, description="Owned account numbers")


class AccountOpen(BaseModel):
    type: str = Field(..., description="SAVINGS or CHECKING")


class AccountResponse(BaseModel):
    account_number: str
    type: AccountType
    client_id: int
    created_at: datetime
    balance: Decimal = Field(..., description="Signed balance with two decimals")


class MoneyMovementRequest(BaseModel):
    # Validated by the transaction executor so malformed amounts map to ValidationError.
    amount: Any = Field(..., description="Positive amount with at most two decimals")


class BalanceResponse(BaseModel):
    account_number: str
    balance: Decimal
