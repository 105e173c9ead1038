"""Check vote eligibility use case."""

from typing import Optional

from pydantic import BaseModel

from quotevote.application.usecase.base import BaseUseCase
from quotevote.domain.service import VoteService
from quotevote.domain.value import QuoteId, UserId


class CheckEligibilityRequest(BaseModel):
    """Check eligibility request."""

    quote_id: int
    user_id: str


class CheckEligibilityResponse(BaseModel):
    """Whether a cast would currently succeed, and why not."""

    quote_id: int
    can_vote: bool
    quote_has_zero_votes: bool
    user_has_not_voted: bool
    existing_vote_value: Optional[int] = None


class CheckEligibilityUseCase(BaseUseCase):
    """Use case for the non-binding "can I vote?" hint."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(
        self, request: CheckEligibilityRequest
    ) -> CheckEligibilityResponse:
        """Execute eligibility check.

        Raises:
            QuoteNotFoundError: If the quote does not exist
        """
        eligibility = await self.vote_service.check_eligibility(
            QuoteId(request.quote_id), UserId(request.user_id)
        )
        return CheckEligibilityResponse(
            quote_id=eligibility.quote_id,
            can_vote=eligibility.can_vote,
            quote_has_zero_votes=eligibility.quote_has_zero_votes,
            user_has_not_voted=eligibility.user_has_not_voted,
            existing_vote_value=(
                int(eligibility.existing_vote_value)
                if eligibility.existing_vote_value is not None
                else None
            ),
        )
