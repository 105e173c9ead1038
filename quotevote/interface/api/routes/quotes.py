"""Quote routes."""

from typing import Optional

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, Query, status
from pydantic import BaseModel, Field

from quotevote.application.usecase.quote import (
    CreateQuoteRequest,
    CreateQuoteUseCase,
    DeleteQuoteRequest,
    DeleteQuoteResponse,
    DeleteQuoteUseCase,
    GetQuoteRequest,
    GetQuoteUseCase,
    ListQuotesRequest,
    ListQuotesResponse,
    ListQuotesUseCase,
    QuoteItem,
    UpdateQuoteRequest,
    UpdateQuoteUseCase,
)
from quotevote.application.usecase.summary import (
    GetPersonalSummaryRequest,
    GetPersonalSummaryResponse,
    GetPersonalSummaryUseCase,
    GetTopVotedResponse,
    GetTopVotedUseCase,
)
from quotevote.domain.error import DomainError
from quotevote.domain.service import JWTService
from quotevote.interface.api.auth import require_user_id
from quotevote.interface.api.errors import domain_error_to_http

router = APIRouter(prefix="/quotes", tags=["quotes"], route_class=DishkaRoute)


class CreateQuoteAPIRequest(BaseModel):
    """API request for creating a quote."""

    content: str = Field(min_length=10, max_length=1000)
    author: str = Field(min_length=2, max_length=100)
    category: Optional[str] = Field(default=None, max_length=50)
    tags: list[str] = Field(default_factory=list)


class UpdateQuoteAPIRequest(BaseModel):
    """API request for updating a quote. Omitted fields stay unchanged."""

    content: Optional[str] = Field(default=None, min_length=10, max_length=1000)
    author: Optional[str] = Field(default=None, min_length=2, max_length=100)
    category: Optional[str] = Field(default=None, max_length=50)
    tags: Optional[list[str]] = None


@router.post("", response_model=QuoteItem, status_code=status.HTTP_201_CREATED)
async def create_quote(
    request: CreateQuoteAPIRequest,
    create_quote_use_case: FromDishka[CreateQuoteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> QuoteItem:
    """Create a new quote.

    Requires authentication.

    Args:
        request: Quote creation data
        create_quote_use_case: Create quote use case from DI
        jwt_service: JWT service for token verification (injected)
        authorization: Bearer token header

    Returns:
        The created quote

    Raises:
        HTTPException: If not authenticated, invalid, or a duplicate
    """
    user_id = require_user_id(jwt_service, authorization, "create quotes")

    try:
        return await create_quote_use_case.execute(
            CreateQuoteRequest(
                user_id=user_id,
                content=request.content,
                author=request.author,
                category=request.category,
                tags=request.tags,
            )
        )
    except DomainError as e:
        raise domain_error_to_http(e, "Create quote")
    except ValueError as e:
        logfire.warn("Quote creation validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.get("", response_model=ListQuotesResponse)
async def list_quotes(
    list_quotes_use_case: FromDishka[ListQuotesUseCase],
    category: str | None = None,
    author: str | None = None,
    search: str | None = None,
    user_id: str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=50),
) -> ListQuotesResponse:
    """List quotes with filtering, sorting and pagination.

    Args:
        list_quotes_use_case: List quotes use case from DI
        category: Exact category (case-insensitive)
        author: Author substring (case-insensitive)
        search: Substring of content or author
        user_id: Only quotes created by this user
        sort_by: vote_count (default), created_at, updated_at or author
        sort_order: ASC or DESC (default)
        page: 1-based page number
        limit: Page size (max 50)
    """
    try:
        return await list_quotes_use_case.execute(
            ListQuotesRequest(
                category=category,
                author=author,
                search=search,
                user_id=user_id,
                sort_by=sort_by,
                sort_order=sort_order,
                page=page,
                limit=limit,
            )
        )
    except DomainError as e:
        raise domain_error_to_http(e, "List quotes")


@router.get("/top-voted", response_model=GetTopVotedResponse)
async def get_top_voted(
    get_top_voted_use_case: FromDishka[GetTopVotedUseCase],
) -> GetTopVotedResponse:
    """Get the most voted quotes, newest first among equal counts."""
    try:
        return await get_top_voted_use_case.execute()
    except DomainError as e:
        raise domain_error_to_http(e, "Get top voted")


@router.get("/summary/personal", response_model=GetPersonalSummaryResponse)
async def get_personal_summary(
    get_personal_summary_use_case: FromDishka[GetPersonalSummaryUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> GetPersonalSummaryResponse:
    """Get statistics about the caller's quotes.

    Requires authentication.
    """
    user_id = require_user_id(jwt_service, authorization, "view your summary")

    try:
        return await get_personal_summary_use_case.execute(
            GetPersonalSummaryRequest(user_id=user_id)
        )
    except DomainError as e:
        raise domain_error_to_http(e, "Get personal summary")


@router.get("/{quote_id}", response_model=QuoteItem)
async def get_quote(
    quote_id: int,
    get_quote_use_case: FromDishka[GetQuoteUseCase],
) -> QuoteItem:
    """Get a single quote.

    Raises:
        HTTPException: If the quote is not found
    """
    try:
        return await get_quote_use_case.execute(GetQuoteRequest(quote_id=quote_id))
    except DomainError as e:
        raise domain_error_to_http(e, "Get quote")


@router.put("/{quote_id}", response_model=QuoteItem)
async def update_quote(
    quote_id: int,
    request: UpdateQuoteAPIRequest,
    update_quote_use_case: FromDishka[UpdateQuoteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> QuoteItem:
    """Update a quote.

    Only the owner may edit, and only while the quote has no votes.

    Args:
        quote_id: Quote ID
        request: Fields to change
        update_quote_use_case: Update quote use case from DI
        jwt_service: JWT service for token verification (injected)
        authorization: Bearer token header

    Raises:
        HTTPException: If not authenticated, not the owner, voted on, or
            not found
    """
    user_id = require_user_id(jwt_service, authorization, "edit quotes")

    try:
        return await update_quote_use_case.execute(
            UpdateQuoteRequest(
                quote_id=quote_id,
                user_id=user_id,
                content=request.content,
                author=request.author,
                category=request.category,
                tags=request.tags,
            )
        )
    except DomainError as e:
        raise domain_error_to_http(e, "Update quote")
    except ValueError as e:
        logfire.warn("Quote update validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.delete("/{quote_id}", response_model=DeleteQuoteResponse)
async def delete_quote(
    quote_id: int,
    delete_quote_use_case: FromDishka[DeleteQuoteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> DeleteQuoteResponse:
    """Delete a quote.

    Only the owner may delete, and only while the quote has no votes.
    """
    user_id = require_user_id(jwt_service, authorization, "delete quotes")

    try:
        return await delete_quote_use_case.execute(
            DeleteQuoteRequest(quote_id=quote_id, user_id=user_id)
        )
    except DomainError as e:
        raise domain_error_to_http(e, "Delete quote")
