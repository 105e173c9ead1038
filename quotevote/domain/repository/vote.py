"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from quotevote.domain.model.vote import Vote
from quotevote.domain.value import QuoteId, UserId, VoteId


class VoteRepository(ABC):
    """Repository for the vote ledger.

    Implementations must enforce two uniqueness rules independently:
    one vote per user, and one vote per (user, quote).
    """

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> Optional[Vote]:
        """Find a user's single active vote.

        Args:
            user_id: The user's ID

        Returns:
            The vote if the user has one, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_quote(
        self, user_id: UserId, quote_id: QuoteId
    ) -> Optional[Vote]:
        """Find a user's vote on a specific quote.

        Args:
            user_id: The user's ID
            quote_id: The quote's ID

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a vote.

        Args:
            vote: The vote to save

        Returns:
            The saved vote

        Raises:
            IntegrityError: If the user already has a vote (unique constraint)
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote.

        Returns:
            True if a row was deleted, False if it was already gone
        """
        pass

    @abstractmethod
    async def count_by_quote(self, quote_id: QuoteId) -> int:
        """Count the active votes referencing a quote."""
        pass
