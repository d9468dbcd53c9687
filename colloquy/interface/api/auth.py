"""Credential extraction for API routes."""

from fastapi import Cookie, Header

from colloquy.domain.error import UnauthenticatedError
from colloquy.domain.service import JWTService
from colloquy.domain.value import Principal


def credential(
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> str | None:
    """Read the bearer token, falling back to the ``auth_token`` cookie."""
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token:
            return token.strip()
    return auth_token


def require_principal(jwt_service: JWTService, token: str | None) -> Principal:
    """Resolve the caller for a mutating operation.

    Raises:
        UnauthenticatedError: If the credential is missing, invalid or expired
    """
    principal = jwt_service.get_principal_from_token(token)
    if principal is None:
        raise UnauthenticatedError()
    return principal
