from __future__ import annotations
from datetime import datetime, UTC
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, SQLModel

from ..core.money import from_cents


class AccountType(str, Enum):
    SAVINGS = "SAVINGS"
    CHECKING = "CHECKING"


class Client(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str
    last_name: str
    dni: str = Field(index=True, unique=True, max_length=8)
    email: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Account(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    account_number: str = Field(index=True, unique=True)
    type: AccountType
    balance_cents: int = Field(default=0)
    client_id: int = Field(foreign_key="client.id", index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def balance(self) -> Decimal:
        return from_cents(self.balance_cents)


class AccountNumberSequence(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    issued_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
