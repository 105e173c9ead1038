"""PostgreSQL unit of work for the vote ledger."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from quotevote.domain.error import StoreUnavailableError, TransientTransactionError
from quotevote.domain.repository import LedgerTransaction, UnitOfWork
from quotevote.persistence.database import is_transient_failure, sqlstate_of
from quotevote.persistence.repository.quote import PostgresQuoteRepository
from quotevote.persistence.repository.vote import PostgresVoteRepository


class PostgresUnitOfWork(UnitOfWork):
    """Opens a dedicated session per ledger transaction.

    ``session.begin()`` commits on normal exit and rolls back on any
    exception, including task cancellation, so no branch in the ledger has
    to roll back by hand.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize unit of work.

        Args:
            session_factory: Factory for ledger sessions
        """
        self.session_factory = session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[LedgerTransaction]:
        """Open a ledger transaction bound to a fresh session."""
        try:
            async with self.session_factory() as session, session.begin():
                yield LedgerTransaction(
                    quotes=PostgresQuoteRepository(session),
                    votes=PostgresVoteRepository(session),
                )
        except IntegrityError:
            logfire.warn("Ledger transaction rolled back on constraint violation")
            raise
        except DBAPIError as e:
            if is_transient_failure(e):
                logfire.warn(
                    "Ledger transaction hit a transient conflict",
                    sqlstate=sqlstate_of(e),
                )
                raise TransientTransactionError(str(e.orig)) from e
            logfire.error("Ledger transaction failed", error=str(e))
            raise StoreUnavailableError("Failed to process vote") from e
        except SQLAlchemyError as e:
            logfire.error("Ledger transaction failed", error=str(e))
            raise StoreUnavailableError("Failed to process vote") from e
        except OSError as e:
            logfire.error("Database unreachable", error=str(e))
            raise StoreUnavailableError("Failed to process vote") from e
