"""JWT credential domain service."""

from uuid import UUID

import logfire
from pydantic import ValidationError as PydanticValidationError

from colloquy.config import AuthSettings
from colloquy.domain.value import Handle, Principal, UserId, UserRole
from colloquy.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT credential operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, principal: Principal) -> str:
        """Create a JWT token for a principal.

        Args:
            principal: Caller identity to encode

        Returns:
            JWT token string
        """
        with logfire.span(
            "jwt_service.create_token", user_id=str(principal.user_id)
        ):
            token = create_token(
                str(principal.user_id),
                str(principal.handle),
                self.auth_settings,
                role=principal.role.value,
            )
            logfire.info(
                "JWT token created",
                user_id=str(principal.user_id),
                role=principal.role.value,
            )
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.debug("JWT token verified", user_id=payload.user_id)
                return payload
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_principal_from_token(self, token: str | None) -> Principal | None:
        """Resolve the caller from a JWT token without raising.

        Used by routes that serve both anonymous and authenticated readers.

        Args:
            token: JWT token string (optional)

        Returns:
            Principal if the token is valid, None if missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return Principal(
                user_id=UserId(UUID(payload.user_id)),
                handle=Handle(payload.handle),
                role=UserRole(payload.role),
            )
        except (JWTError, ValueError, PydanticValidationError) as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
