"""Get quote use case."""

from pydantic import BaseModel

from quotevote.application.usecase.base import BaseUseCase
from quotevote.application.usecase.quote.common import QuoteItem
from quotevote.domain.service import QuoteService
from quotevote.domain.value import QuoteId


class GetQuoteRequest(BaseModel):
    """Get quote request."""

    quote_id: int


class GetQuoteUseCase(BaseUseCase):
    """Use case for fetching a single quote."""

    def __init__(self, quote_service: QuoteService) -> None:
        self.quote_service = quote_service

    async def execute(self, request: GetQuoteRequest) -> QuoteItem:
        quote = await self.quote_service.get_quote(QuoteId(request.quote_id))
        return QuoteItem.from_quote(quote)
