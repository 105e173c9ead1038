"""Summary use cases."""

from .get_personal_summary import (
    GetPersonalSummaryRequest,
    GetPersonalSummaryResponse,
    GetPersonalSummaryUseCase,
)
from .get_top_voted import GetTopVotedResponse, GetTopVotedUseCase, TopVotedItem

__all__ = [
    "GetPersonalSummaryRequest",
    "GetPersonalSummaryResponse",
    "GetPersonalSummaryUseCase",
    "GetTopVotedResponse",
    "GetTopVotedUseCase",
    "TopVotedItem",
]
