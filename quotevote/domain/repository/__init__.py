"""Repository interfaces for the quote vote domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from quotevote.domain.repository.quote import QuoteQuery, QuoteRepository
from quotevote.domain.repository.summary import SummaryRepository
from quotevote.domain.repository.unit_of_work import LedgerTransaction, UnitOfWork
from quotevote.domain.repository.vote import VoteRepository

__all__ = [
    "LedgerTransaction",
    "QuoteQuery",
    "QuoteRepository",
    "SummaryRepository",
    "UnitOfWork",
    "VoteRepository",
]
