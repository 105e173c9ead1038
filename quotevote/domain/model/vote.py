"""Vote entity.

Votes form the ledger: the single source of truth for who has voted for
what. A user holds at most one active vote across all quotes.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from quotevote.domain.model.common import DomainModel
from quotevote.domain.value import QuoteId, UserId, VoteId, VoteValue


class Vote(DomainModel):
    """Vote entity.

    Represents a user's single active upvote.
    Business rules:
    - At most one vote per user across the whole corpus (unique constraint)
    - At most one vote per (user, quote) pair (unique constraint)
    - Retracting deletes the row; ``vote_value`` is always +1
    """

    id: VoteId
    user_id: UserId
    quote_id: QuoteId
    vote_value: VoteValue = VoteValue.UP
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CurrentVote(DomainModel):
    """A user's active vote joined with the voted quote's summary fields."""

    id: VoteId
    quote_id: QuoteId
    vote_value: VoteValue
    created_at: datetime
    content: str
    author: str
    vote_count: int


class VoteEligibility(DomainModel):
    """Point-in-time answer to "would a cast currently succeed?".

    This is a hint for the client only; casting always re-validates
    inside its own transaction.
    """

    quote_id: QuoteId
    quote_has_zero_votes: bool
    user_has_not_voted: bool
    existing_vote_value: Optional[VoteValue] = None

    @property
    def can_vote(self) -> bool:
        return self.quote_has_zero_votes and self.user_has_not_voted
