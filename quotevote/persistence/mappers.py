"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

import json
from typing import Any, Dict
from uuid import UUID

from quotevote.domain.model import Quote, QuoteChanges, QuoteDraft, Vote
from quotevote.domain.value import QuoteId, UserId, VoteId, VoteValue


def _tags_from_row(value: Any) -> list[str]:
    """Decode stored tags, which may arrive as a list or a JSON string."""
    if value is None:
        return []
    if isinstance(value, str):
        decoded = json.loads(value)
        return decoded if isinstance(decoded, list) else []
    return list(value)


def row_to_quote(row: Dict[str, Any]) -> Quote:
    """Convert database row to Quote domain model.

    Args:
        row: Database row as dict

    Returns:
        Quote domain model
    """
    return Quote(
        id=QuoteId(row["id"]),
        user_id=UserId(str(row["user_id"])),
        content=row["content"],
        author=row["author"],
        category=row.get("category"),
        tags=_tags_from_row(row.get("tags")),
        vote_count=row["vote_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        voted_user_ids=[UserId(str(u)) for u in row.get("voted_user_ids") or []],
    )


def draft_to_dict(draft: QuoteDraft) -> Dict[str, Any]:
    """Convert QuoteDraft to a database insert dict.

    The id, counter and timestamps are filled in by the database.
    """
    return {
        "user_id": draft.user_id,
        "content": draft.content,
        "author": draft.author,
        "category": draft.category,
        "tags": draft.tags,
        "vote_count": 0,
    }


def changes_to_dict(changes: QuoteChanges) -> Dict[str, Any]:
    """Convert QuoteChanges to a database update dict (set fields only)."""
    return changes.model_dump(exclude_none=True)


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        user_id=UserId(str(row["user_id"])),
        quote_id=QuoteId(row["quote_id"]),
        vote_value=VoteValue(row["vote_value"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Args:
        vote: Vote domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": vote.id,
        "user_id": vote.user_id,
        "quote_id": vote.quote_id,
        "vote_value": int(vote.vote_value),
        "created_at": vote.created_at,
    }
