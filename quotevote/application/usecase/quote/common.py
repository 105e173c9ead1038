"""Shared quote response models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from quotevote.domain.model import Quote


class QuoteItem(BaseModel):
    """Quote as returned by the API."""

    id: int
    user_id: str
    content: str
    author: str
    category: Optional[str]
    tags: list[str]
    vote_count: int
    created_at: datetime
    updated_at: datetime
    voted_user_ids: list[str] = []

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuoteItem":
        return cls(
            id=quote.id,
            user_id=quote.user_id,
            content=quote.content,
            author=quote.author,
            category=quote.category,
            tags=quote.tags,
            vote_count=quote.vote_count,
            created_at=quote.created_at,
            updated_at=quote.updated_at,
            voted_user_ids=list(quote.voted_user_ids),
        )
