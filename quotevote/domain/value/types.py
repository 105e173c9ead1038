"""Domain value types."""

from enum import Enum, IntEnum


class VoteValue(IntEnum):
    """Value carried by an active vote.

    A vote is a unary row: its existence means +1 for the quote and
    retracting it deletes the row. There is no stored negative value.
    """

    UP = 1


class QuoteSortField(str, Enum):
    """Sortable quote columns for listings."""

    VOTE_COUNT = "vote_count"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    AUTHOR = "author"

    @classmethod
    def parse(cls, value: str | None) -> "QuoteSortField":
        """Parse a sort field, falling back to vote count for unknown values."""
        try:
            return cls(value) if value else cls.VOTE_COUNT
        except ValueError:
            return cls.VOTE_COUNT


class SortDirection(str, Enum):
    """Sort direction for listings."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: str | None) -> "SortDirection":
        """Parse a direction case-insensitively; anything but ASC is DESC."""
        if value and value.upper() == cls.ASC.value:
            return cls.ASC
        return cls.DESC


class ConflictReason(str, Enum):
    """Machine-readable reasons for vote state conflicts."""

    ALREADY_VOTED = "already_voted"
    CONFLICTING_ACTIVE_VOTE = "conflicting_active_vote"
    NO_ACTIVE_VOTE = "no_active_vote"
