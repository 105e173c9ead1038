"""Strongly typed identifiers for quote vote domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Quotes use store-assigned serial integers
QuoteId = NewType("QuoteId", int)

# Users are owned by the identity provider; ids arrive as opaque strings
UserId = NewType("UserId", str)

VoteId = NewType("VoteId", UUID)
