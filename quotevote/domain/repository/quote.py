"""Quote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from quotevote.domain.model.common import DomainModel
from quotevote.domain.model.quote import Quote, QuoteChanges, QuoteDraft
from quotevote.domain.value import QuoteId, QuoteSortField, SortDirection, UserId


class QuoteQuery(DomainModel):
    """Filters and ordering for quote listings.

    Ties on the sort field are broken by ``created_at`` descending.
    """

    category: Optional[str] = None
    author: Optional[str] = None  # case-insensitive substring
    search: Optional[str] = None  # substring of content or author
    user_id: Optional[UserId] = None  # only quotes owned by this user
    sort_by: QuoteSortField = QuoteSortField.VOTE_COUNT
    sort_order: SortDirection = SortDirection.DESC


class QuoteRepository(ABC):
    """Repository for Quote aggregate.

    The counter methods (``get_vote_count``, ``increment_vote_count``,
    ``decrement_vote_count``) are the vote ledger's only access to the
    denormalized counter. Increments and decrements are single atomic
    statements, never read-modify-write.
    """

    @abstractmethod
    async def find_by_id(self, quote_id: QuoteId) -> Optional[Quote]:
        """Find a quote by ID.

        Args:
            quote_id: The quote's unique identifier

        Returns:
            The quote if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, quote_id: QuoteId) -> bool:
        """Check whether a quote exists."""
        pass

    @abstractmethod
    async def get_vote_count(self, quote_id: QuoteId) -> Optional[int]:
        """Read a quote's vote counter.

        Returns:
            The counter, or None if the quote does not exist
        """
        pass

    @abstractmethod
    async def increment_vote_count(self, quote_id: QuoteId) -> None:
        """Atomically add one to a quote's vote counter."""
        pass

    @abstractmethod
    async def decrement_vote_count(self, quote_id: QuoteId) -> None:
        """Atomically subtract one from a quote's vote counter (minimum 0)."""
        pass

    @abstractmethod
    async def create(self, draft: QuoteDraft) -> Quote:
        """Store a new quote with ``vote_count = 0``.

        Args:
            draft: Validated quote fields

        Returns:
            The stored quote with its assigned ID and timestamps
        """
        pass

    @abstractmethod
    async def find_by_user_and_content(
        self, user_id: UserId, content: str
    ) -> Optional[Quote]:
        """Find a user's quote with the same text.

        Comparison ignores case and surrounding whitespace.
        """
        pass

    @abstractmethod
    async def update_unvoted(
        self, quote_id: QuoteId, changes: QuoteChanges
    ) -> Optional[Quote]:
        """Apply changes only if the quote still has zero votes.

        The vote count condition is part of the write itself so a vote
        landing between a read and this call cannot be bypassed.

        Returns:
            The updated quote, or None if it is missing or has votes
        """
        pass

    @abstractmethod
    async def delete_unvoted(self, quote_id: QuoteId) -> bool:
        """Delete a quote only if it still has zero votes.

        Returns:
            True if a quote was deleted
        """
        pass

    @abstractmethod
    async def find_all(
        self, query: QuoteQuery, limit: int = 10, offset: int = 0
    ) -> List[Quote]:
        """Find quotes matching a query, ordered and paginated."""
        pass

    @abstractmethod
    async def count(self, query: QuoteQuery) -> int:
        """Count quotes matching a query's filters."""
        pass
