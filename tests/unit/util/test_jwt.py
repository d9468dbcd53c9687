"""Unit tests for JWT utilities and JWTService."""

from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from colloquy.config import AuthSettings
from colloquy.domain.service import JWTService
from colloquy.domain.value import Handle, Principal, UserId, UserRole
from colloquy.util.jwt import JWTError, create_token, verify_token

SETTINGS = AuthSettings(jwt_secret="test-secret")


class TestTokenUtilities:
    """Tests for create_token / verify_token."""

    def test_round_trip_keeps_claims(self):
        user_id = str(uuid4())
        token = create_token(user_id, "alice", SETTINGS, role="moderator")

        payload = verify_token(token, SETTINGS)

        assert payload.user_id == user_id
        assert payload.handle == "alice"
        assert payload.role == "moderator"

    def test_role_defaults_to_member(self):
        token = create_token(str(uuid4()), "bob", SETTINGS)

        assert verify_token(token, SETTINGS).role == "member"

    def test_expired_token_rejected(self):
        token = create_token(
            str(uuid4()), "alice", SETTINGS, expires_in=timedelta(seconds=-1)
        )

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, SETTINGS)

    def test_wrong_secret_rejected(self):
        token = create_token(str(uuid4()), "alice", AuthSettings(jwt_secret="other"))

        with pytest.raises(JWTError, match="Invalid token"):
            verify_token(token, SETTINGS)

    def test_missing_claims_rejected(self):
        token = jwt.encode(
            {"user_id": str(uuid4())}, SETTINGS.jwt_secret, algorithm="HS256"
        )

        with pytest.raises(JWTError, match="Malformed"):
            verify_token(token, SETTINGS)


class TestJWTService:
    """Tests for JWTService."""

    def test_principal_round_trip(self):
        service = JWTService(SETTINGS)
        principal = Principal(
            user_id=UserId(uuid4()), handle=Handle("mod"), role=UserRole.MODERATOR
        )

        resolved = service.get_principal_from_token(service.create_token(principal))

        assert resolved == principal
        assert resolved.is_moderator

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    def test_missing_or_garbage_token_is_anonymous(self, token):
        assert JWTService(SETTINGS).get_principal_from_token(token) is None

    def test_non_uuid_user_id_is_anonymous(self):
        token = create_token("not-a-uuid", "alice", SETTINGS)

        assert JWTService(SETTINGS).get_principal_from_token(token) is None

    def test_unknown_role_is_anonymous(self):
        token = create_token(str(uuid4()), "alice", SETTINGS, role="admin")

        assert JWTService(SETTINGS).get_principal_from_token(token) is None

    def test_verify_token_propagates_errors(self):
        with pytest.raises(JWTError):
            JWTService(SETTINGS).verify_token("not-a-jwt")
