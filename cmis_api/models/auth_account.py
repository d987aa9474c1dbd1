### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - Identity Account Model -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
Identity Account Model

Sign-in credentials owned by the identity provider:
- Subject id (shared with users.id)
- Email used to sign in
- Hashed password (bcrypt) - the plaintext is never stored
"""

import secrets
import string
from datetime import datetime

import bcrypt as _bcrypt
from sqlalchemy import Column, DateTime, String

from cmis_api.database import Base, new_id

# Lowercase base-36 alphabet used for temporary credentials
BASE36_CHARS = string.digits + string.ascii_lowercase


def hash_password(plaintext: str) -> str:
    """Hash a password using bcrypt"""
    return _bcrypt.hashpw(plaintext.encode(), _bcrypt.gensalt()).decode()


def verify_password_hash(plaintext: str, hashed: str) -> bool:
    """Verify a plaintext password against a hash"""
    return _bcrypt.checkpw(plaintext.encode(), hashed.encode())


def generate_temp_password(length: int = 8) -> str:
    """
    Generate a temporary sign-in credential for a newly created user.

    Format: Coop{random_base36}!
    Example: Coopk3x9a0qz!

    Args:
        length: Length of the random portion (default 8)

    Returns:
        Temporary password string
    """
    random_part = "".join(secrets.choice(BASE36_CHARS) for _ in range(length))
    return f"Coop{random_part}!"


class AuthAccount(Base):
    """
    Identity account - credential record behind a console user.

    Created by IdentityProvider.create_account; the id becomes the
    users.id of the directory row.
    """

    __tablename__ = "auth_accounts"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_sign_in_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<AuthAccount(id={self.id}, email='{self.email}')>"

    @classmethod
    def create_account(cls, email: str, password: str) -> "AuthAccount":
        """Build an account with the password hashed (not yet persisted)"""
        return cls(email=email.strip().lower(), password_hash=hash_password(password))

    def verify_password(self, plaintext: str) -> bool:
        """
        Verify a plaintext password against this account's hash.

        Args:
            plaintext: The password to verify

        Returns:
            True if the password matches, False otherwise
        """
        return verify_password_hash(plaintext, self.password_hash)

    def record_sign_in(self):
        """Record a successful sign-in"""
        self.last_sign_in_at = datetime.utcnow()
