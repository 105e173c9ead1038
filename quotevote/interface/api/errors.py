"""Translation of domain errors into HTTP responses."""

import logfire
from fastapi import HTTPException, status

from quotevote.domain.error import (
    ConflictingActiveVoteError,
    DomainError,
    DuplicateQuoteError,
    NotAuthorizedError,
    NotFoundError,
    QuoteLockedError,
    StoreUnavailableError,
    TransientTransactionError,
    VoteStateConflictError,
)


def domain_error_to_http(error: DomainError, operation: str) -> HTTPException:
    """Map a domain error to the matching HTTPException.

    Expected failures are logged as warnings, store failures as errors.

    Args:
        error: The domain error raised by a use case
        operation: Short operation name for the log event

    Returns:
        HTTPException to raise from the route
    """
    if isinstance(error, VoteStateConflictError):
        detail: dict[str, object] = {
            "message": str(error),
            "reason": error.reason.value,
        }
        if isinstance(error, ConflictingActiveVoteError):
            detail["current_voted_quote_id"] = error.current_voted_quote_id
        logfire.warn(f"{operation} rejected", reason=error.reason.value)
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

    if isinstance(error, NotFoundError):
        logfire.warn(f"{operation} target not found", error=str(error))
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))

    if isinstance(error, (NotAuthorizedError, QuoteLockedError)):
        logfire.warn(f"{operation} forbidden", error=str(error))
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))

    if isinstance(error, DuplicateQuoteError):
        logfire.warn(f"{operation} duplicate", error=str(error))
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))

    if isinstance(error, TransientTransactionError):
        logfire.warn(f"{operation} lost a concurrent update", error=str(error))
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="The request conflicted with a concurrent update, please retry",
        )

    if isinstance(error, StoreUnavailableError):
        logfire.error(f"{operation} store unavailable", error=str(error))
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service temporarily unavailable",
        )

    logfire.error(f"Unexpected domain error in {operation}", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {operation.lower()}",
    )
