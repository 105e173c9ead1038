"""Vote routes."""

from typing import Optional

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status

from quotevote.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    CheckEligibilityRequest,
    CheckEligibilityResponse,
    CheckEligibilityUseCase,
    CurrentVoteResponse,
    GetCurrentVoteRequest,
    GetCurrentVoteUseCase,
    RetractVoteRequest,
    RetractVoteResponse,
    RetractVoteUseCase,
)
from quotevote.domain.error import DomainError
from quotevote.domain.service import JWTService
from quotevote.interface.api.auth import require_user_id
from quotevote.interface.api.errors import domain_error_to_http

router = APIRouter(prefix="/votes", tags=["votes"], route_class=DishkaRoute)


@router.get("/me", response_model=Optional[CurrentVoteResponse])
async def get_current_vote(
    get_current_vote_use_case: FromDishka[GetCurrentVoteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> Optional[CurrentVoteResponse]:
    """Get the caller's active vote.

    Requires authentication.

    Returns:
        The active vote with the voted quote's summary, or null
    """
    user_id = require_user_id(jwt_service, authorization, "view your vote")

    try:
        return await get_current_vote_use_case.execute(
            GetCurrentVoteRequest(user_id=user_id)
        )
    except DomainError as e:
        raise domain_error_to_http(e, "Get current vote")


@router.get("/check/{quote_id}", response_model=CheckEligibilityResponse)
async def check_eligibility(
    quote_id: int,
    check_eligibility_use_case: FromDishka[CheckEligibilityUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> CheckEligibilityResponse:
    """Check whether the caller could vote on a quote right now.

    The answer is a hint; casting re-validates.

    Args:
        quote_id: Quote ID
        check_eligibility_use_case: Eligibility use case from DI
        jwt_service: JWT service for token verification (injected)
        authorization: Bearer token header

    Raises:
        HTTPException: If not authenticated or the quote is not found
    """
    user_id = require_user_id(jwt_service, authorization, "check eligibility")

    try:
        return await check_eligibility_use_case.execute(
            CheckEligibilityRequest(quote_id=quote_id, user_id=user_id)
        )
    except DomainError as e:
        raise domain_error_to_http(e, "Eligibility check")


@router.post(
    "/{quote_id}",
    response_model=CastVoteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def cast_vote(
    quote_id: int,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> CastVoteResponse:
    """Vote for a quote.

    Requires authentication. A user holds at most one vote at a time.

    Args:
        quote_id: Quote ID
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        authorization: Bearer token header

    Returns:
        Vote details

    Raises:
        HTTPException: If not authenticated, already voted, or quote not found
    """
    user_id = require_user_id(jwt_service, authorization, "vote")

    try:
        return await cast_vote_use_case.execute(
            CastVoteRequest(quote_id=quote_id, user_id=user_id)
        )
    except DomainError as e:
        raise domain_error_to_http(e, "Cast vote")
    except Exception as e:
        logfire.error("Unexpected error casting vote", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to cast vote",
        )


@router.delete("/{quote_id}", response_model=RetractVoteResponse)
async def retract_vote(
    quote_id: int,
    retract_vote_use_case: FromDishka[RetractVoteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
) -> RetractVoteResponse:
    """Remove the caller's vote from a quote.

    Requires authentication.

    Args:
        quote_id: Quote ID
        retract_vote_use_case: Retract vote use case from DI
        jwt_service: JWT service for token verification (injected)
        authorization: Bearer token header

    Raises:
        HTTPException: If not authenticated, not voted, or quote not found
    """
    user_id = require_user_id(jwt_service, authorization, "remove your vote")

    try:
        return await retract_vote_use_case.execute(
            RetractVoteRequest(quote_id=quote_id, user_id=user_id)
        )
    except DomainError as e:
        raise domain_error_to_http(e, "Retract vote")
    except Exception as e:
        logfire.error("Unexpected error retracting vote", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove vote",
        )
