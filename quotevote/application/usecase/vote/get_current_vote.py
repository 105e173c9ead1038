"""Get current vote use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from quotevote.application.usecase.base import BaseUseCase
from quotevote.domain.service import VoteService
from quotevote.domain.value import UserId


class GetCurrentVoteRequest(BaseModel):
    """Get current vote request."""

    user_id: str


class CurrentVoteResponse(BaseModel):
    """The caller's active vote with the voted quote's summary."""

    id: str
    quote_id: int
    vote_value: int
    created_at: datetime
    content: str
    author: str
    vote_count: int


class GetCurrentVoteUseCase(BaseUseCase):
    """Use case for reading the caller's single active vote."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(
        self, request: GetCurrentVoteRequest
    ) -> Optional[CurrentVoteResponse]:
        """Execute get current vote flow.

        Returns:
            The active vote, or None if the user has not voted
        """
        current = await self.vote_service.get_current_vote(UserId(request.user_id))
        if current is None:
            return None

        return CurrentVoteResponse(
            id=str(current.id),
            quote_id=current.quote_id,
            vote_value=int(current.vote_value),
            created_at=current.created_at,
            content=current.content,
            author=current.author,
            vote_count=current.vote_count,
        )
