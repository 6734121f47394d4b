from .accounts import AccountFactory
from .clients import ClientRegistry
from .ledger import LedgerService
from .policies import DEFAULT_POLICIES, Policy, build_policies
from .repository import LedgerRepository
from .transactions import AccountLocks, TransactionExecutor

__all__ = [
    "AccountFactory",
    "AccountLocks",
    "ClientRegistry",
    "DEFAULT_POLICIES",
    "LedgerRepository",
    "LedgerService",
    "Policy",
    "TransactionExecutor",
    "build_policies",
]
