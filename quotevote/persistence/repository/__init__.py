"""PostgreSQL repository implementations."""

from quotevote.persistence.repository.quote import PostgresQuoteRepository
from quotevote.persistence.repository.summary import PostgresSummaryRepository
from quotevote.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresQuoteRepository",
    "PostgresSummaryRepository",
    "PostgresVoteRepository",
]
