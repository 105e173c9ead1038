"""In-memory aggregation repository for testing."""

from collections import Counter
from typing import List, Optional

from quotevote.domain.model import Quote, UserStats
from quotevote.domain.repository import SummaryRepository
from quotevote.domain.value import UserId
from quotevote.persistence.repository.inmemory.quote import InMemoryQuoteRepository


class InMemorySummaryRepository(SummaryRepository):
    """Aggregates computed over an in-memory quote repository."""

    def __init__(self, quote_repository: InMemoryQuoteRepository) -> None:
        self.quote_repository = quote_repository

    async def find_top_voted(self, limit: int) -> List[Quote]:
        """Quotes ordered by vote count, then newest first."""
        quotes = self.quote_repository.all()
        quotes.sort(key=lambda q: (q.vote_count, q.created_at, q.id), reverse=True)
        return quotes[:limit]

    async def find_user_stats(self, user_id: UserId) -> UserStats:
        """Aggregate a user's quotes from one copy of the store."""
        quotes = self.quote_repository.all()
        own = [q for q in quotes if q.user_id == user_id]

        counts: Counter[str] = Counter(q.category.lower() for q in own if q.category)
        return UserStats(
            total_quotes_created=len(own),
            total_votes_received=sum(q.vote_count for q in own),
            ranking=self._dense_rank(quotes, user_id),
            categories=sorted(counts.items(), key=lambda item: (-item[1], item[0])),
        )

    @staticmethod
    def _dense_rank(quotes: List[Quote], user_id: UserId) -> Optional[int]:
        totals: Counter[str] = Counter()
        for quote in quotes:
            totals[quote.user_id] += quote.vote_count

        user_total = totals.get(user_id, 0)
        if user_total <= 0:
            return None

        higher = {total for total in totals.values() if total > user_total}
        return len(higher) + 1
