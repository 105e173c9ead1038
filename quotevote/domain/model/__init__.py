"""Domain model entities for quote voting."""

from quotevote.domain.model.quote import Quote, QuoteChanges, QuoteDraft
from quotevote.domain.model.summary import (
    CategoryShare,
    PersonalSummary,
    TopVotedQuote,
    UserStats,
)
from quotevote.domain.model.vote import CurrentVote, Vote, VoteEligibility

__all__ = [
    "Quote",
    "QuoteChanges",
    "QuoteDraft",
    "Vote",
    "CurrentVote",
    "VoteEligibility",
    "TopVotedQuote",
    "CategoryShare",
    "PersonalSummary",
    "UserStats",
]
