"""Unit of work interface for the vote ledger."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from quotevote.domain.repository.quote import QuoteRepository
from quotevote.domain.repository.vote import VoteRepository


@dataclass(frozen=True)
class LedgerTransaction:
    """Repositories bound to one open transaction."""

    quotes: QuoteRepository
    votes: VoteRepository


class UnitOfWork(ABC):
    """Scoped transaction for ledger writes.

    ``transaction()`` yields repositories that share one transaction. It
    commits when the block exits normally and rolls back on every other
    exit: exceptions, early failures and task cancellation.

    Infrastructure failures are raised as domain errors once the rollback
    is done:

    - ``TransientTransactionError`` for serialization failures and deadlocks
    - ``StoreUnavailableError`` for everything else the store raises

    Unique constraint violations (``IntegrityError``) pass through untouched
    so the caller can tell which rule was hit.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[LedgerTransaction]:
        pass
