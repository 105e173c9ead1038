"""Update quote use case."""

from typing import Optional

from pydantic import BaseModel

from quotevote.application.usecase.base import BaseUseCase
from quotevote.application.usecase.quote.common import QuoteItem
from quotevote.domain.model import QuoteChanges
from quotevote.domain.service import QuoteService
from quotevote.domain.value import QuoteId, UserId


class UpdateQuoteRequest(BaseModel):
    """Update quote request. Unset fields are left unchanged."""

    quote_id: int
    user_id: str  # Requesting user, must own the quote
    content: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[list[str]] = None


class UpdateQuoteUseCase(BaseUseCase):
    """Use case for editing a quote that has not been voted on."""

    def __init__(self, quote_service: QuoteService) -> None:
        """Initialize update quote use case.

        Args:
            quote_service: Quote domain service
        """
        self.quote_service = quote_service

    async def execute(self, request: UpdateQuoteRequest) -> QuoteItem:
        """Execute update quote flow.

        Raises:
            QuoteNotFoundError: If the quote does not exist
            NotAuthorizedError: If the user doesn't own the quote
            QuoteLockedError: If the quote has votes
        """
        changes = QuoteChanges(
            content=request.content,
            author=request.author,
            category=request.category,
            tags=request.tags,
        )
        quote = await self.quote_service.update_quote(
            QuoteId(request.quote_id), UserId(request.user_id), changes
        )
        return QuoteItem.from_quote(quote)
