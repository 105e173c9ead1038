"""Delete quote use case."""

from pydantic import BaseModel

from quotevote.application.usecase.base import BaseUseCase
from quotevote.domain.service import QuoteService
from quotevote.domain.value import QuoteId, UserId


class DeleteQuoteRequest(BaseModel):
    """Delete quote request."""

    quote_id: int
    user_id: str


class DeleteQuoteResponse(BaseModel):
    """Delete quote response."""

    success: bool
    message: str


class DeleteQuoteUseCase(BaseUseCase):
    """Use case for deleting a quote that has not been voted on."""

    def __init__(self, quote_service: QuoteService) -> None:
        self.quote_service = quote_service

    async def execute(self, request: DeleteQuoteRequest) -> DeleteQuoteResponse:
        """Execute delete quote flow.

        Raises:
            QuoteNotFoundError: If the quote does not exist
            NotAuthorizedError: If the user doesn't own the quote
            QuoteLockedError: If the quote has votes
        """
        await self.quote_service.delete_quote(
            QuoteId(request.quote_id), UserId(request.user_id)
        )
        return DeleteQuoteResponse(success=True, message="Quote deleted successfully")
