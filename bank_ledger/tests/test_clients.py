from concurrent.futures import ThreadPoolExecutor
from unittest import mock

import pytest

from ..core.errors import DuplicateError, NotFoundError, StoreError, ValidationError
from ..services import LedgerService


def test_register_assigns_increasing_ids(service: LedgerService) -> None:
    first = service.register_client("Ana", "Diaz", "11111111", "ana@mail.com")
    second = service.register_client("Luis", "Perez", "22222222", "luis@mail.com")

    assert first.id is not None
    assert second.id > first.id


def test_register_strips_whitespace(service: LedgerService) -> None:
    client = service.register_client(" Ana ", "Diaz", " 11111111", "ana@mail.com ")
    assert client.first_name == "Ana"
    assert client.dni == "11111111"
    assert client.email == "ana@mail.com"


def test_duplicate_dni_is_rejected(service: LedgerService) -> None:
    service.register_client("Ana", "Diaz", "11111111", "ana@mail.com")

    with pytest.raises(DuplicateError):
        service.register_client("Other", "Name", "11111111", "other@mail.com")


@pytest.mark.parametrize(
    "fields",
    [
        (None, "Diaz", "11111111", "ana@mail.com"),
        ("Ana", "", "11111111", "ana@mail.com"),
        ("Ana", "Diaz", "   ", "ana@mail.com"),
        ("Ana", "Diaz", "11111111", None),
    ],
)
def test_missing_fields_are_rejected(service: LedgerService, fields) -> None:
    with pytest.raises(ValidationError, match="All fields are required"):
        service.register_client(*fields)


@pytest.mark.parametrize("dni", ["1234567", "123456789", "1234567a", "12 34567"])
def test_malformed_dni_is_rejected(service: LedgerService, dni: str) -> None:
    with pytest.raises(ValidationError, match="DNI"):
        service.register_client("Ana", "Diaz", dni, "ana@mail.com")


@pytest.mark.parametrize("email", ["ana", "ana@", "@mail.com", "ana@mail", "ana mail@x.com"])
def test_malformed_email_is_rejected(service: LedgerService, email: str) -> None:
    with pytest.raises(ValidationError, match="email"):
        service.register_client("Ana", "Diaz", "11111111", email)


def test_find_unknown_client(service: LedgerService) -> None:
    with pytest.raises(NotFoundError):
        service.get_client("99999999")


def test_concurrent_registrations_with_same_dni(service_factory) -> None:
    def _register(index: int) -> str:
        with service_factory() as worker:
            try:
                worker.register_client(
                    "Ana", f"Diaz{index}", "11111111", f"ana{index}@mail.com"
                )
            except DuplicateError:
                return "duplicate"
        return "ok"

    with ThreadPoolExecutor(max_workers=4) as pool:
        outcomes = list(pool.map(_register, range(8)))

    assert outcomes.count("ok") == 1
    assert outcomes.count("duplicate") == 7


def test_failed_commit_rolls_back_registration(service: LedgerService) -> None:
    with mock.patch.object(
        service.repository, "commit", side_effect=StoreError("commit failed")
    ):
        with pytest.raises(StoreError):
            service.register_client("Ana", "Diaz", "11111111", "ana@mail.com")

    client = service.register_client("Ana", "Diaz", "11111111", "ana@mail.com")
    assert service.get_client("11111111").id == client.id
