### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Identity Provider -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Identity Provider

Owns sign-in credentials (AuthAccount) and session tokens:
- create_account: provision credentials, returns the new subject id
- authenticate: email/password sign-in
- issue_token / decode_token: HS256 JWT session tokens
- delete_account: compensation when directory provisioning fails

Account creation commits on its own; it is a separate step from writing
the directory row, which is why UserDirectory compensates on failure.
"""

import logging
from datetime import datetime, timedelta

import jwt
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from cmis_api.errors import AuthError
from cmis_api.models import AuthAccount

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
TOKEN_TYPE = "session"


class IdentityProvider:
    """Local identity provider backed by the auth_accounts table"""

    def __init__(self, db: Session, secret_key: str, token_ttl_minutes: int = 480):
        """
        Initialize the provider.

        Args:
            db: Database session
            secret_key: Key used to sign session tokens
            token_ttl_minutes: Session token lifetime
        """
        self.db = db
        self.secret_key = secret_key
        self.token_ttl = timedelta(minutes=token_ttl_minutes)

    async def create_account(self, email: str, password: str) -> str:
        """
        Provision sign-in credentials.

        Args:
            email: Sign-in email
            password: Initial password (stored hashed)

        Returns:
            The subject id of the new account

        Raises:
            AuthError: If the email is already registered or the write fails
        """
        account = AuthAccount.create_account(email, password)
        existing = self.db.query(AuthAccount).filter(AuthAccount.email == account.email).first()
        if existing:
            raise AuthError(f"An account for {account.email} is already registered")

        self.db.add(account)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise AuthError(f"An account for {account.email} is already registered") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise AuthError(f"Failed to create sign-in account: {e.__class__.__name__}") from e

        logger.info("Created identity account %s for %s", account.id, account.email)
        return account.id

    async def authenticate(self, email: str, password: str) -> str:
        """
        Verify email/password credentials.

        Returns:
            The subject id

        Raises:
            AuthError: On unknown email or wrong password
        """
        account = (
            self.db.query(AuthAccount)
            .filter(AuthAccount.email == email.strip().lower())
            .first()
        )
        if not account or not account.verify_password(password):
            raise AuthError("Invalid email or password")

        account.record_sign_in()
        self.db.commit()
        return account.id

    async def delete_account(self, subject_id: str) -> bool:
        """
        Remove an account (compensation for a failed provisioning).

        Returns:
            True if an account was removed
        """
        account = self.db.query(AuthAccount).filter(AuthAccount.id == subject_id).first()
        if not account:
            return False
        self.db.delete(account)
        self.db.commit()
        logger.info("Deleted identity account %s", subject_id)
        return True

    def issue_token(self, subject_id: str) -> tuple[str, int]:
        """
        Sign a session token for a subject.

        Returns:
            Tuple of (token, expires_in_seconds)
        """
        expire = datetime.utcnow() + self.token_ttl
        token = jwt.encode(
            {"sub": subject_id, "exp": expire, "type": TOKEN_TYPE},
            self.secret_key,
            algorithm=TOKEN_ALGORITHM,
        )
        return token, int(self.token_ttl.total_seconds())

    def decode_token(self, token: str) -> str | None:
        """Return the subject id of a valid session token, else None"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[TOKEN_ALGORITHM])
        except jwt.ExpiredSignatureError:
            return None
        except jwt.InvalidTokenError:
            return None
        if payload.get("type") != TOKEN_TYPE:
            return None
        return payload.get("sub")
