"""Quote aggregate root.

Quotes are short texts attributed to an author. Each quote keeps a
denormalized ``vote_count`` that mirrors the number of active votes
referencing it; only the vote ledger writes that counter.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator

from quotevote.domain.model.common import DomainModel
from quotevote.domain.value import QuoteId, UserId

MAX_TAGS = 10


def normalize_tags(tags: Optional[list[str]]) -> list[str]:
    """Trim and lower-case tags, dropping empties and keeping the first ten."""
    if not tags:
        return []
    cleaned = [tag.strip().lower() for tag in tags if tag and tag.strip()]
    return cleaned[:MAX_TAGS]


def normalize_category(category: Optional[str]) -> Optional[str]:
    """Lower-case a category; blank categories become None."""
    if category is None or not category.strip():
        return None
    return category.strip().lower()


class QuoteDraft(DomainModel):
    """A quote that has not been stored yet (no id assigned)."""

    user_id: UserId
    content: str = Field(min_length=10, max_length=1000)
    author: str = Field(min_length=2, max_length=100)
    category: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("content", "author", mode="before")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip() if isinstance(value, str) else value

    @field_validator("category", mode="before")
    @classmethod
    def lower_category(cls, value: Optional[str]) -> Optional[str]:
        return normalize_category(value)

    @field_validator("tags", mode="before")
    @classmethod
    def clean_tags(cls, value: Optional[list[str]]) -> list[str]:
        return normalize_tags(value)


class QuoteChanges(DomainModel):
    """Partial update of a quote's editable fields.

    Fields left as None keep their current value.
    """

    content: Optional[str] = Field(default=None, min_length=10, max_length=1000)
    author: Optional[str] = Field(default=None, min_length=2, max_length=100)
    category: Optional[str] = None
    tags: Optional[list[str]] = None

    @field_validator("content", "author", mode="before")
    @classmethod
    def strip_text(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if isinstance(value, str) else value

    @field_validator("category", mode="before")
    @classmethod
    def lower_category(cls, value: Optional[str]) -> Optional[str]:
        return normalize_category(value)

    @field_validator("tags", mode="before")
    @classmethod
    def clean_tags(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        return None if value is None else normalize_tags(value)

    def apply_to(self, quote: "Quote") -> "Quote":
        """Return a copy of ``quote`` with these changes applied."""
        updates = self.model_dump(exclude_none=True)
        updates["updated_at"] = datetime.now(timezone.utc)
        return quote.model_copy(update=updates)


class Quote(DomainModel):
    """Quote aggregate root.

    Business rules:
    - ``vote_count`` is never negative and equals the number of votes
      referencing the quote
    - Content is frozen once any vote lands (owner may edit or delete only
      while ``vote_count == 0``)
    """

    id: QuoteId
    user_id: UserId
    content: str
    author: str
    category: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    vote_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Users whose active vote is on this quote, oldest vote first.
    # Filled by listing reads only; empty on write results.
    voted_user_ids: list[UserId] = Field(default_factory=list)

    @property
    def is_locked(self) -> bool:
        """Whether the quote has received votes and can no longer change."""
        return self.vote_count != 0

    def is_owned_by(self, user_id: UserId) -> bool:
        return self.user_id == user_id
