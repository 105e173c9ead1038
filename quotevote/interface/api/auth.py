"""Bearer token authentication for routes."""

from typing import Optional

from fastapi import HTTPException, status

from quotevote.domain.service import JWTService

BEARER_PREFIX = "bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    if not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    return token or None


def require_user_id(
    jwt_service: JWTService, authorization: Optional[str], action: str
) -> str:
    """Resolve the caller's user id or reject the request.

    Args:
        jwt_service: JWT service for token verification
        authorization: Raw Authorization header
        action: What the caller is trying to do, for the error message

    Returns:
        The authenticated user id

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    user_id = jwt_service.get_user_id_from_token(extract_bearer_token(authorization))
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
