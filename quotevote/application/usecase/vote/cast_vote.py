"""Cast vote use case."""

from pydantic import BaseModel

from quotevote.application.usecase.base import BaseUseCase
from quotevote.domain.service import VoteService
from quotevote.domain.value import QuoteId, UserId


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    quote_id: int
    user_id: str  # User ID from authenticated user


class CastVoteData(BaseModel):
    """Details of the recorded vote."""

    quote_id: int
    vote_value: int


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    success: bool
    message: str
    data: CastVoteData


class CastVoteUseCase(BaseUseCase):
    """Use case for casting the caller's single active vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            Cast vote response with the vote details

        Raises:
            QuoteNotFoundError: If the quote does not exist
            VoteStateConflictError: If the user already holds a vote
        """
        vote = await self.vote_service.cast(
            QuoteId(request.quote_id), UserId(request.user_id)
        )
        return CastVoteResponse(
            success=True,
            message="Vote recorded successfully",
            data=CastVoteData(quote_id=vote.quote_id, vote_value=int(vote.vote_value)),
        )
