from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager

import pytest
from sqlmodel import Session, SQLModel

from ..core.db import create_engine_for_url
from ..services import AccountLocks, LedgerService


@pytest.fixture
def engine(tmp_path):
    test_db = tmp_path / "ledger.db"
    engine = create_engine_for_url(f"sqlite:///{test_db}")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def service(session) -> LedgerService:
    return LedgerService(session)


@pytest.fixture
def service_factory(engine) -> Callable[[], AbstractContextManager[LedgerService]]:
    """Opens a service on its own session; all of them share one set of account locks."""
    locks = AccountLocks()

    @contextmanager
    def _build() -> Iterator[LedgerService]:
        with Session(engine) as session:
            yield LedgerService(session, locks=locks)

    return _build
