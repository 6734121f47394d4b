from __future__ import annotations

import logging
import re
from typing import Optional

from ..core.errors import DuplicateError, NotFoundError, ValidationError
from ..models import ClientModel
from .repository import LedgerRepository


logger = logging.getLogger(__name__)

DNI_PATTERN = re.compile(r"[0-9]{8}")
EMAIL_PATTERN = re.compile(r"[A-Za-z0-9_.+-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+")


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


class ClientRegistry:
    """Validates and creates clients; a DNI identifies at most one client."""

    def __init__(self, repository: LedgerRepository) -> None:
        self.repository = repository

    def register(
        self,
        first_name: Optional[str],
        last_name: Optional[str],
        dni: Optional[str],
        email: Optional[str],
    ) -> ClientModel:
        fields = {
            "first_name": _clean(first_name),
            "last_name": _clean(last_name),
            "dni": _clean(dni),
            "email": _clean(email),
        }
        missing = [name for name, value in fields.items() if not value]
        if missing:
            raise ValidationError(f"All fields are required. Missing: {', '.join(missing)}.")
        if not DNI_PATTERN.fullmatch(fields["dni"]):
            raise ValidationError("Invalid DNI format. The DNI must be exactly 8 digits.")
        if not EMAIL_PATTERN.fullmatch(fields["email"]):
            raise ValidationError("Invalid email format.")

        if self.repository.find_client_by_dni(fields["dni"]) is not None:
            raise DuplicateError("DNI already exists. User can't be registered.")

        # The unique index on dni turns a concurrent duplicate into DuplicateError.
        client = ClientModel(**fields)
        try:
            self.repository.save_client(client)
            self.repository.commit()
        except Exception:
            self.repository.rollback()
            raise
        self.repository.refresh(client)

        logger.info(
            "client.registered",
            extra={"client_id": client.id, "dni": client.dni},
        )
        return client

    def find(self, dni: str) -> ClientModel:
        client = self.repository.find_client_by_dni(_clean(dni))
        if client is None:
            raise NotFoundError(f"Client with DNI {dni} not found")
        return client

    def account_numbers(self, client: ClientModel) -> list[str]:
        return self.repository.list_account_numbers(client.id)
