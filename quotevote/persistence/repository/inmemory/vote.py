"""In-memory vote repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from quotevote.domain.model.vote import Vote
from quotevote.domain.repository.vote import VoteRepository
from quotevote.domain.value import QuoteId, UserId, VoteId


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Mirrors both unique constraints of the votes table.
    """

    def __init__(self) -> None:
        self._votes: list[Vote] = []

    def all(self) -> list[Vote]:
        """Every stored vote."""
        return list(self._votes)

    def snapshot(self) -> list[Vote]:
        return list(self._votes)

    def restore(self, state: list[Vote]) -> None:
        self._votes = list(state)

    async def find_by_user(self, user_id: UserId) -> Optional[Vote]:
        """Find a user's single active vote."""
        for vote in self._votes:
            if vote.user_id == user_id:
                return vote
        return None

    async def find_by_user_and_quote(
        self, user_id: UserId, quote_id: QuoteId
    ) -> Optional[Vote]:
        """Find a user's vote on a specific quote."""
        for vote in self._votes:
            if vote.user_id == user_id and vote.quote_id == quote_id:
                return vote
        return None

    async def save(self, vote: Vote) -> Vote:
        """Save a vote.

        Raises:
            IntegrityError: If the user already has a vote (duplicate)
        """
        if any(v.user_id == vote.user_id for v in self._votes):
            raise IntegrityError("Duplicate vote", None, Exception())

        self._votes.append(vote)
        return vote

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote by ID."""
        remaining = [v for v in self._votes if v.id != vote_id]
        deleted = len(remaining) != len(self._votes)
        self._votes = remaining
        return deleted

    async def count_by_quote(self, quote_id: QuoteId) -> int:
        """Count the active votes referencing a quote."""
        return sum(1 for v in self._votes if v.quote_id == quote_id)
