"""Create quote use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from quotevote.application.usecase.base import BaseUseCase
from quotevote.application.usecase.quote.common import QuoteItem
from quotevote.domain.model import QuoteDraft
from quotevote.domain.service import QuoteService
from quotevote.domain.value import UserId


class CreateQuoteRequest(BaseModel):
    """Create quote request."""

    user_id: str  # Owner, from the authenticated user
    content: str
    author: str
    category: Optional[str] = None
    tags: list[str] = []


class CreateQuoteUseCase(BaseUseCase):
    """Use case for creating a new quote."""

    def __init__(self, quote_service: QuoteService) -> None:
        """Initialize create quote use case.

        Args:
            quote_service: Quote domain service
        """
        self.quote_service = quote_service

    async def execute(self, request: CreateQuoteRequest) -> QuoteItem:
        """Execute create quote flow.

        Args:
            request: Create quote request

        Returns:
            The stored quote

        Raises:
            ValueError: If the fields fail validation
            DuplicateQuoteError: If the user already created this text
        """
        with logfire.span("create_quote.execute", user_id=request.user_id):
            draft = QuoteDraft(
                user_id=UserId(request.user_id),
                content=request.content,
                author=request.author,
                category=request.category,
                tags=request.tags,
            )
            quote = await self.quote_service.create_quote(draft)
            return QuoteItem.from_quote(quote)
