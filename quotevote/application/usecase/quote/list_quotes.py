"""List quotes use case."""

import math
from typing import Optional

import logfire
from pydantic import BaseModel, Field

from quotevote.application.usecase.base import BaseUseCase
from quotevote.application.usecase.quote.common import QuoteItem
from quotevote.domain.repository import QuoteQuery
from quotevote.domain.service import QuoteService
from quotevote.domain.value import QuoteSortField, SortDirection, UserId


class ListQuotesRequest(BaseModel):
    """List quotes request."""

    category: Optional[str] = None
    author: Optional[str] = None
    search: Optional[str] = None
    user_id: Optional[str] = None  # Restrict to this owner's quotes
    sort_by: Optional[str] = None  # Unknown fields fall back to vote_count
    sort_order: Optional[str] = None  # ASC or DESC (default)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=50)


class ListQuotesResponse(BaseModel):
    """List quotes response."""

    quotes: list[QuoteItem]
    total: int
    page: int
    limit: int
    total_pages: int


class ListQuotesUseCase(BaseUseCase):
    """Use case for listing quotes with filtering, sorting and pagination."""

    def __init__(self, quote_service: QuoteService) -> None:
        """Initialize list quotes use case.

        Args:
            quote_service: Quote domain service
        """
        self.quote_service = quote_service

    async def execute(self, request: ListQuotesRequest) -> ListQuotesResponse:
        """Execute list quotes flow.

        Args:
            request: List quotes request with filters and pagination

        Returns:
            One page of quotes plus the total match count
        """
        with logfire.span(
            "list_quotes.execute",
            sort_by=request.sort_by,
            sort_order=request.sort_order,
            page=request.page,
            limit=request.limit,
        ):
            query = QuoteQuery(
                category=request.category,
                author=request.author,
                search=request.search,
                user_id=UserId(request.user_id) if request.user_id else None,
                sort_by=QuoteSortField.parse(request.sort_by),
                sort_order=SortDirection.parse(request.sort_order),
            )
            offset = (request.page - 1) * request.limit
            quotes, total = await self.quote_service.list_quotes(
                query, limit=request.limit, offset=offset
            )

            return ListQuotesResponse(
                quotes=[QuoteItem.from_quote(q) for q in quotes],
                total=total,
                page=request.page,
                limit=request.limit,
                total_pages=math.ceil(total / request.limit) if total else 0,
            )
