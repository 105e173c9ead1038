"""Test configuration and fixtures."""

import os
from typing import Optional

import logfire

from quotevote.config import AuthSettings
from quotevote.domain.model import QuoteDraft
from quotevote.domain.value import UserId
from quotevote.util.jwt import create_token

os.environ.setdefault("ENVIRONMENT", "test")

# Console and cloud export off; spans still run
logfire.configure(send_to_logfire=False, console=False)


def make_draft(
    user_id: str = "user-1",
    content: str = "The only way to do great work is to love what you do.",
    author: str = "Steve Jobs",
    category: Optional[str] = None,
    tags: Optional[list[str]] = None,
) -> QuoteDraft:
    """Helper to build a valid quote draft for tests."""
    return QuoteDraft(
        user_id=UserId(user_id),
        content=content,
        author=author,
        category=category,
        tags=tags or [],
    )


def auth_header(user_id: str, settings: AuthSettings) -> dict[str, str]:
    """Bearer header for a user, signed with the given settings."""
    return {"Authorization": f"Bearer {create_token(user_id, settings)}"}
