from functools import lru_cache

from fastapi import Depends
from sqlmodel import Session

from ..services import AccountLocks, LedgerRepository, LedgerService
from .db import get_session


@lru_cache(maxsize=1)
def get_account_locks() -> AccountLocks:
    return AccountLocks()


def get_ledger_service(
    session: Session = Depends(get_session),
    locks: AccountLocks = Depends(get_account_locks),
) -> LedgerService:
    repository = LedgerRepository(session)
    return LedgerService(session, repository, locks=locks)
