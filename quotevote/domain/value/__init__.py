"""Domain value objects for quote voting."""

from quotevote.domain.value.identifiers import QuoteId, UserId, VoteId
from quotevote.domain.value.types import (
    ConflictReason,
    QuoteSortField,
    SortDirection,
    VoteValue,
)

__all__ = [
    # Identifiers
    "QuoteId",
    "UserId",
    "VoteId",
    # Types
    "ConflictReason",
    "QuoteSortField",
    "SortDirection",
    "VoteValue",
]
