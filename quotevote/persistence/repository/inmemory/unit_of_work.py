"""In-memory unit of work for testing."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from quotevote.domain.repository import LedgerTransaction, UnitOfWork
from quotevote.persistence.repository.inmemory.quote import InMemoryQuoteRepository
from quotevote.persistence.repository.inmemory.vote import InMemoryVoteRepository


class InMemoryUnitOfWork(UnitOfWork):
    """Serializes transactions on the quote store's lock and undoes failures.

    State is snapshotted when a transaction opens and restored if the
    block exits with any exception, cancellation included. Quote writes
    made outside a transaction take the same lock, so a restore never
    discards them.
    """

    def __init__(
        self,
        quote_repository: InMemoryQuoteRepository,
        vote_repository: InMemoryVoteRepository,
    ) -> None:
        self.quote_repository = quote_repository
        self.vote_repository = vote_repository

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[LedgerTransaction]:
        async with self.quote_repository.write_lock():
            quotes = self.quote_repository.snapshot()
            votes = self.vote_repository.snapshot()
            try:
                yield LedgerTransaction(
                    quotes=self.quote_repository, votes=self.vote_repository
                )
            except BaseException:
                self.quote_repository.restore(quotes)
                self.vote_repository.restore(votes)
                raise
