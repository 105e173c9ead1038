"""Domain services."""

from .base import Service
from .jwt_service import JWTService
from .quote_service import QuoteService
from .summary_service import SummaryService
from .vote_service import VoteService

__all__ = [
    "JWTService",
    "QuoteService",
    "Service",
    "SummaryService",
    "VoteService",
]
