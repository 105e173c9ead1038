"""Retract vote use case."""

from pydantic import BaseModel

from quotevote.application.usecase.base import BaseUseCase
from quotevote.domain.service import VoteService
from quotevote.domain.value import QuoteId, UserId


class RetractVoteRequest(BaseModel):
    """Retract vote request."""

    quote_id: int
    user_id: str  # User ID from authenticated user


class RetractVoteData(BaseModel):
    """Result of the retraction."""

    quote_id: int
    removed: bool


class RetractVoteResponse(BaseModel):
    """Retract vote response."""

    success: bool
    message: str
    data: RetractVoteData


class RetractVoteUseCase(BaseUseCase):
    """Use case for removing the caller's vote from a quote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize retract vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: RetractVoteRequest) -> RetractVoteResponse:
        """Execute retract vote flow.

        Raises:
            QuoteNotFoundError: If the quote does not exist
            NoActiveVoteError: If the user has no vote on the quote
        """
        vote = await self.vote_service.retract(
            QuoteId(request.quote_id), UserId(request.user_id)
        )
        return RetractVoteResponse(
            success=True,
            message="Vote removed successfully",
            data=RetractVoteData(quote_id=vote.quote_id, removed=True),
        )
