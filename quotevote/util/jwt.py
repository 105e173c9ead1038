"""JWT token utilities."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import AliasChoices, BaseModel, Field

from quotevote.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload.

    Tokens issued by the account service carry the user id as ``id``;
    tokens issued here use ``user_id``. Both are accepted.
    """

    user_id: str = Field(validation_alias=AliasChoices("user_id", "id"))
    email: Optional[str] = None
    exp: Optional[datetime] = None


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str, settings: AuthSettings, email: Optional[str] = None
) -> str:
    """Create a JWT token for the user.

    Args:
        user_id: User ID
        settings: Authentication settings
        email: Optional email claim

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "email": email,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    user_id = payload.get("user_id") or payload.get("id")
    if not user_id:
        raise JWTError("Invalid or malformed token")
    return TokenPayload(
        user_id=str(user_id), email=payload.get("email"), exp=payload.get("exp")
    )
