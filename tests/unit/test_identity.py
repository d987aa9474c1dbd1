"""
Unit tests for the identity provider.

Tests account provisioning, sign-in, compensation and session tokens.
"""

import jwt
import pytest
from datetime import datetime, timedelta

from cmis_api.errors import AuthError
from cmis_api.models import AuthAccount
from cmis_api.services import IdentityProvider


class TestCreateAccount:
    """Test IdentityProvider.create_account."""

    @pytest.mark.asyncio
    async def test_returns_subject_id(self, identity, test_db):
        subject_id = await identity.create_account("new@example.com", "Coopabcdefgh!")

        account = test_db.query(AuthAccount).filter(AuthAccount.id == subject_id).first()
        assert account is not None
        assert account.email == "new@example.com"

    @pytest.mark.asyncio
    async def test_duplicate_email_raises_auth_error(self, identity):
        await identity.create_account("dup@example.com", "pw")

        with pytest.raises(AuthError):
            await identity.create_account("DUP@example.com", "pw")


class TestAuthenticate:
    """Test IdentityProvider.authenticate."""

    @pytest.mark.asyncio
    async def test_valid_credentials(self, identity):
        subject_id = await identity.create_account("jane@example.com", "correct-horse")

        assert await identity.authenticate("Jane@Example.com", "correct-horse") == subject_id

    @pytest.mark.asyncio
    async def test_wrong_password(self, identity):
        await identity.create_account("jane@example.com", "correct-horse")

        with pytest.raises(AuthError) as exc_info:
            await identity.authenticate("jane@example.com", "wrong")
        assert exc_info.value.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_unknown_email(self, identity):
        with pytest.raises(AuthError):
            await identity.authenticate("nobody@example.com", "pw")


class TestDeleteAccount:
    """Test compensation delete."""

    @pytest.mark.asyncio
    async def test_deletes_existing(self, identity, test_db):
        subject_id = await identity.create_account("temp@example.com", "pw")

        assert await identity.delete_account(subject_id) is True
        assert test_db.query(AuthAccount).count() == 0

    @pytest.mark.asyncio
    async def test_missing_returns_false(self, identity):
        assert await identity.delete_account("does-not-exist") is False


class TestSessionTokens:
    """Test token issue/decode."""

    def test_round_trip(self, identity):
        token, expires_in = identity.issue_token("subject-1")

        assert expires_in == 3600
        assert identity.decode_token(token) == "subject-1"

    def test_expired_token(self, identity):
        token = jwt.encode(
            {"sub": "subject-1", "exp": datetime.utcnow() - timedelta(minutes=1), "type": "session"},
            identity.secret_key,
            algorithm="HS256",
        )
        assert identity.decode_token(token) is None

    def test_wrong_secret(self, identity):
        other = IdentityProvider(None, "another-secret")
        token, _ = other.issue_token("subject-1")
        assert identity.decode_token(token) is None

    def test_wrong_token_type(self, identity):
        """Document links must not work as session tokens."""
        token = jwt.encode(
            {"sub": "subject-1", "exp": datetime.utcnow() + timedelta(minutes=5), "type": "document"},
            identity.secret_key,
            algorithm="HS256",
        )
        assert identity.decode_token(token) is None

    def test_garbage(self, identity):
        assert identity.decode_token("not-a-token") is None
