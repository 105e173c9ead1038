"""In-memory quote repository for testing."""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, List, Optional

from quotevote.domain.model import Quote, QuoteChanges, QuoteDraft
from quotevote.domain.repository.quote import QuoteQuery, QuoteRepository
from quotevote.domain.value import QuoteId, QuoteSortField, SortDirection, UserId
from quotevote.persistence.repository.inmemory.vote import InMemoryVoteRepository


class InMemoryQuoteRepository(QuoteRepository):
    """In-memory implementation of QuoteRepository for testing."""

    def __init__(self, votes: Optional[InMemoryVoteRepository] = None) -> None:
        """Initialize the store.

        Args:
            votes: Vote store used to fill in each quote's voters on reads
        """
        self._quotes: dict[QuoteId, Quote] = {}
        self._next_id = 1
        self._votes = votes
        self._lock = asyncio.Lock()
        self._lock_owner: Optional[asyncio.Task] = None

    @asynccontextmanager
    async def write_lock(self) -> AsyncIterator[None]:
        """Hold the store exclusively for the current task.

        Re-entrant within one task, so writes made inside a ledger
        transaction do not wait on the transaction's own lock.
        """
        task = asyncio.current_task()
        if self._lock_owner is task:
            yield
            return
        async with self._lock:
            self._lock_owner = task
            try:
                yield
            finally:
                self._lock_owner = None

    def all(self) -> List[Quote]:
        """Every stored quote, in insertion order."""
        return list(self._quotes.values())

    def snapshot(self) -> tuple[dict[QuoteId, Quote], int]:
        return dict(self._quotes), self._next_id

    def restore(self, state: tuple[dict[QuoteId, Quote], int]) -> None:
        quotes, next_id = state
        self._quotes = dict(quotes)
        self._next_id = next_id

    async def find_by_id(self, quote_id: QuoteId) -> Optional[Quote]:
        """Find a quote by ID."""
        quote = self._quotes.get(quote_id)
        return self._with_voters(quote) if quote else None

    async def exists(self, quote_id: QuoteId) -> bool:
        """Check whether a quote exists."""
        return quote_id in self._quotes

    async def get_vote_count(self, quote_id: QuoteId) -> Optional[int]:
        """Read a quote's vote counter."""
        quote = self._quotes.get(quote_id)
        return quote.vote_count if quote else None

    async def increment_vote_count(self, quote_id: QuoteId) -> None:
        """Increment the vote counter by 1."""
        quote = self._quotes.get(quote_id)
        if quote:
            self._quotes[quote_id] = quote.model_copy(
                update={"vote_count": quote.vote_count + 1}
            )

    async def decrement_vote_count(self, quote_id: QuoteId) -> None:
        """Decrement the vote counter by 1 (minimum 0)."""
        quote = self._quotes.get(quote_id)
        if quote and quote.vote_count > 0:
            self._quotes[quote_id] = quote.model_copy(
                update={"vote_count": quote.vote_count - 1}
            )

    async def create(self, draft: QuoteDraft) -> Quote:
        """Store a new quote with the next sequential ID."""
        async with self.write_lock():
            now = datetime.now(timezone.utc)
            quote = Quote(
                id=QuoteId(self._next_id),
                user_id=draft.user_id,
                content=draft.content,
                author=draft.author,
                category=draft.category,
                tags=draft.tags,
                vote_count=0,
                created_at=now,
                updated_at=now,
            )
            self._quotes[quote.id] = quote
            self._next_id += 1
            return quote

    async def find_by_user_and_content(
        self, user_id: UserId, content: str
    ) -> Optional[Quote]:
        """Find a user's quote with the same text (case-insensitive, trimmed)."""
        needle = content.strip().lower()
        for quote in self._quotes.values():
            if quote.user_id == user_id and quote.content.strip().lower() == needle:
                return quote
        return None

    async def update_unvoted(
        self, quote_id: QuoteId, changes: QuoteChanges
    ) -> Optional[Quote]:
        """Apply changes only while the quote has zero votes."""
        async with self.write_lock():
            quote = self._quotes.get(quote_id)
            if quote is None or quote.vote_count != 0:
                return None
            updated = changes.apply_to(quote)
            self._quotes[quote_id] = updated
            return updated

    async def delete_unvoted(self, quote_id: QuoteId) -> bool:
        """Delete a quote only while it has zero votes."""
        async with self.write_lock():
            quote = self._quotes.get(quote_id)
            if quote is None or quote.vote_count != 0:
                return False
            del self._quotes[quote_id]
            return True

    async def find_all(
        self, query: QuoteQuery, limit: int = 10, offset: int = 0
    ) -> List[Quote]:
        """Find quotes matching a query, ordered and paginated."""
        quotes = self._filtered(query)

        # Tie-break first, then a stable sort on the requested field
        quotes.sort(key=lambda q: (q.created_at, q.id), reverse=True)
        reverse = query.sort_order == SortDirection.DESC
        if query.sort_by == QuoteSortField.VOTE_COUNT:
            quotes.sort(key=lambda q: q.vote_count, reverse=reverse)
        elif query.sort_by == QuoteSortField.CREATED_AT:
            quotes.sort(key=lambda q: q.created_at, reverse=reverse)
        elif query.sort_by == QuoteSortField.UPDATED_AT:
            quotes.sort(key=lambda q: q.updated_at, reverse=reverse)
        elif query.sort_by == QuoteSortField.AUTHOR:
            quotes.sort(key=lambda q: q.author.lower(), reverse=reverse)

        # Paginate
        return [self._with_voters(q) for q in quotes[offset : offset + limit]]

    async def count(self, query: QuoteQuery) -> int:
        """Count quotes matching a query's filters."""
        return len(self._filtered(query))

    def _with_voters(self, quote: Quote) -> Quote:
        if self._votes is None:
            return quote
        votes = sorted(
            (v for v in self._votes.all() if v.quote_id == quote.id),
            key=lambda v: v.created_at,
        )
        return quote.model_copy(
            update={"voted_user_ids": [v.user_id for v in votes]}
        )

    def _filtered(self, query: QuoteQuery) -> List[Quote]:
        quotes = list(self._quotes.values())
        if query.user_id is not None:
            quotes = [q for q in quotes if q.user_id == query.user_id]
        if query.category:
            category = query.category.lower()
            quotes = [q for q in quotes if q.category == category]
        if query.author:
            author = query.author.lower()
            quotes = [q for q in quotes if author in q.author.lower()]
        if query.search:
            term = query.search.lower()
            quotes = [
                q
                for q in quotes
                if term in q.content.lower() or term in q.author.lower()
            ]
        return quotes
