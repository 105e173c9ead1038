"""Get personal summary use case."""

from typing import Optional

from pydantic import BaseModel

from quotevote.application.usecase.base import BaseUseCase
from quotevote.domain.service import SummaryService
from quotevote.domain.value import UserId


class GetPersonalSummaryRequest(BaseModel):
    """Get personal summary request."""

    user_id: str


class CategoryShareItem(BaseModel):
    """Share of the user's categorized quotes in one category."""

    category: str
    count: int
    percentage: float


class GetPersonalSummaryResponse(BaseModel):
    """Statistics about the caller's quotes."""

    total_quotes_created: int
    total_votes_received: int
    ranking: Optional[int]
    category_distribution: list[CategoryShareItem]


class GetPersonalSummaryUseCase(BaseUseCase):
    """Use case for the caller's personal statistics."""

    def __init__(self, summary_service: SummaryService) -> None:
        """Initialize personal summary use case.

        Args:
            summary_service: Aggregation domain service
        """
        self.summary_service = summary_service

    async def execute(
        self, request: GetPersonalSummaryRequest
    ) -> GetPersonalSummaryResponse:
        summary = await self.summary_service.get_personal_summary(
            UserId(request.user_id)
        )
        return GetPersonalSummaryResponse(
            total_quotes_created=summary.total_quotes_created,
            total_votes_received=summary.total_votes_received,
            ranking=summary.ranking,
            category_distribution=[
                CategoryShareItem(
                    category=share.category,
                    count=share.count,
                    percentage=share.percentage,
                )
                for share in summary.category_distribution
            ],
        )
