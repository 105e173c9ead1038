"""In-memory repository implementations for testing."""

from quotevote.persistence.repository.inmemory.quote import InMemoryQuoteRepository
from quotevote.persistence.repository.inmemory.summary import (
    InMemorySummaryRepository,
)
from quotevote.persistence.repository.inmemory.unit_of_work import InMemoryUnitOfWork
from quotevote.persistence.repository.inmemory.vote import InMemoryVoteRepository

__all__ = [
    "InMemoryQuoteRepository",
    "InMemorySummaryRepository",
    "InMemoryUnitOfWork",
    "InMemoryVoteRepository",
]
