"""Get top voted quotes use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from quotevote.application.usecase.base import BaseUseCase
from quotevote.domain.service import SummaryService


class TopVotedItem(BaseModel):
    """Quote in the top-voted listing."""

    rank: int
    id: int
    user_id: str
    content: str
    author: str
    category: Optional[str]
    vote_count: int
    created_at: datetime


class GetTopVotedResponse(BaseModel):
    """Get top voted response."""

    quotes: list[TopVotedItem]


class GetTopVotedUseCase(BaseUseCase):
    """Use case for the most voted quotes."""

    def __init__(self, summary_service: SummaryService) -> None:
        self.summary_service = summary_service

    async def execute(self, request: None = None) -> GetTopVotedResponse:
        top = await self.summary_service.get_top_voted()
        return GetTopVotedResponse(
            quotes=[TopVotedItem.model_validate(q.model_dump()) for q in top]
        )
