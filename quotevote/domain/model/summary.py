"""Read-side aggregates computed from quotes and votes."""

from datetime import datetime
from typing import Optional

from quotevote.domain.model.common import DomainModel
from quotevote.domain.value import QuoteId, UserId


class TopVotedQuote(DomainModel):
    """A quote in the top-voted listing with its 1-based position."""

    rank: int
    id: QuoteId
    user_id: UserId
    content: str
    author: str
    category: Optional[str]
    vote_count: int
    created_at: datetime


class CategoryShare(DomainModel):
    """Share of a user's categorized quotes falling in one category."""

    category: str
    count: int
    percentage: float


class PersonalSummary(DomainModel):
    """Statistics about one user's quotes."""

    user_id: UserId
    total_quotes_created: int
    total_votes_received: int
    ranking: Optional[int]
    category_distribution: list[CategoryShare]


class UserStats(DomainModel):
    """Raw per-user aggregates read from one committed snapshot."""

    total_quotes_created: int
    total_votes_received: int
    ranking: Optional[int]
    categories: list[tuple[str, int]]
