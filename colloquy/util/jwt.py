"""JWT credential utilities.

Tokens are issued by the identity provider; this service verifies them and
reads the caller's id, handle and role from the claims. ``create_token`` is
used by tooling and tests to mint credentials with the shared secret.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from colloquy.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    handle: str
    role: str = "member"
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str,
    handle: str,
    settings: AuthSettings,
    role: str = "member",
    expires_in: timedelta | None = None,
) -> str:
    """Create a signed JWT for a principal.

    Args:
        user_id: User ID
        handle: Display handle
        settings: Authentication settings
        role: Role claim ("member" or "moderator")
        expires_in: Lifetime override (settings default when None)

    Returns:
        Encoded JWT token
    """
    lifetime = expires_in or timedelta(days=settings.jwt_expiry_days)
    payload = {
        "user_id": user_id,
        "handle": handle,
        "role": role,
        "exp": datetime.now(timezone.utc) + lifetime,
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
        JWTError: If token is invalid, expired or missing claims
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    try:
        return TokenPayload(**payload)
    except PydanticValidationError as e:
        raise JWTError(f"Malformed token claims: {e.error_count()} error(s)")
