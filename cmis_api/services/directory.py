### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - User Directory Service -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
User Directory Service

CRUD over users and their {user, role, tenant} assignments.

- Users are never hard-deleted; deactivation flips every role assignment
  of the user to INACTIVE.
- Role assignments are soft-deleted; granting an identical assignment
  again reactivates the existing row.
- create_user is a multi-step write (identity account, then user row and
  initial role in one transaction). If the directory writes fail the
  identity account is deleted again.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from cmis_api.database import commit_or_raise
from cmis_api.errors import AuthError, ConstraintError, DependencyError, NotFoundError, ValidationError
from cmis_api.models import RoleName, Tenant, User, UserRole, generate_temp_password
from cmis_api.services.identity import IdentityProvider

logger = logging.getLogger(__name__)

EMAIL_ADAPTER = TypeAdapter(EmailStr)

# Columns update_user may patch
UPDATABLE_FIELDS = ("email", "full_name", "phone", "id_number", "tenant_id")


@dataclass
class UserFilters:
    """Optional list_users filters"""

    role: str | None = None
    tenant_id: str | None = None
    search: str | None = None
    is_active: bool | None = None


@dataclass
class NewUser:
    """Input for create_user"""

    email: str
    full_name: str
    tenant_id: str
    role: str
    phone: str | None = None
    id_number: str | None = None


@dataclass
class CreatedUser:
    """create_user result; temp_password is shown to the admin once"""

    user_id: str
    email: str
    temp_password: str


@dataclass
class UserPage:
    rows: list[User]
    total_count: int
    total_pages: int


def _normalize_email(value: str | None) -> str:
    """Validate an email address and return it lowercased"""
    try:
        return EMAIL_ADAPTER.validate_python((value or "").strip()).lower()
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid email address '{value}'") from e


def _validate_role(role: str | None) -> str:
    if not role or role not in RoleName.__members__:
        raise ValidationError(f"Unknown role '{role}'")
    return role


class UserDirectory:
    """
    Service layer for the user/role directory.

    Args:
        db: Database session
        identity: Identity provider used to provision sign-in accounts
    """

    def __init__(self, db: Session, identity: IdentityProvider | None = None):
        self.db = db
        self.identity = identity

    def _get_user(self, user_id: str) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def _get_tenant(self, tenant_id: str) -> Tenant:
        tenant = self.db.query(Tenant).filter(Tenant.id == tenant_id).first()
        if not tenant:
            raise NotFoundError(f"Tenant {tenant_id} not found")
        return tenant

    async def list_users(
        self,
        filters: UserFilters | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> UserPage:
        """
        List users with their role assignments.

        - **tenant_id**: home tenant of the user
        - **role**: users holding this role as an ACTIVE assignment
        - **search**: case-insensitive substring of full name, email or ID number
        - **is_active**: True = has an active role, False = deactivated

        Role filtering happens in the query, so total_count always matches
        the filtered set.
        """
        filters = filters or UserFilters()
        if page < 1 or page_size < 1:
            raise ValidationError("page and page_size must be positive")

        query = self.db.query(User).options(selectinload(User.roles).selectinload(UserRole.tenant))

        if filters.tenant_id:
            query = query.filter(User.tenant_id == filters.tenant_id)

        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.filter(
                or_(
                    User.full_name.ilike(pattern),
                    User.email.ilike(pattern),
                    User.id_number.ilike(pattern),
                )
            )

        if filters.role:
            _validate_role(filters.role)
            query = query.filter(
                User.roles.any((UserRole.role == filters.role) & UserRole.is_active.is_(True))
            )

        if filters.is_active is not None:
            has_active_role = User.roles.any(UserRole.is_active.is_(True))
            query = query.filter(has_active_role if filters.is_active else ~has_active_role)

        total = query.count()
        rows = (
            query.order_by(User.created_at.desc(), User.id)
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )
        return UserPage(rows=rows, total_count=total, total_pages=math.ceil(total / page_size))

    async def get_user(self, user_id: str) -> User:
        return self._get_user(user_id)

    async def create_user(self, data: NewUser, assigned_by: str | None = None) -> CreatedUser:
        """
        Provision a user: identity account, directory row and initial role.

        Args:
            data: New user details
            assigned_by: Acting admin's user id (recorded on the role)

        Returns:
            CreatedUser with the one-time temporary password

        Raises:
            ValidationError: Missing/malformed input (before any write)
            NotFoundError: Unknown tenant (before any write)
            AuthError: The identity provider refused the account
            ConstraintError: The email is already in the directory
            DependencyError: The role could not be granted
        """
        required = {
            "full_name": data.full_name,
            "email": data.email,
            "phone": data.phone,
            "id_number": data.id_number,
            "tenant_id": data.tenant_id,
        }
        missing = [name for name, value in required.items() if not (value and value.strip())]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        email = _normalize_email(data.email)
        _validate_role(data.role)
        self._get_tenant(data.tenant_id)

        if self.identity is None:
            raise AuthError("No identity provider configured")

        temp_password = generate_temp_password()
        user_id = await self.identity.create_account(email, temp_password)

        user = User(
            id=user_id,
            email=email,
            full_name=data.full_name.strip(),
            phone=data.phone.strip(),
            id_number=data.id_number.strip(),
            tenant_id=data.tenant_id,
        )
        try:
            self.db.add(user)
            self.db.flush()
        except IntegrityError as e:
            await self._compensate(user_id)
            raise ConstraintError(f"A user with email {email} already exists") from e
        except SQLAlchemyError as e:
            await self._compensate(user_id)
            raise DependencyError(f"Failed to create user record: {e.__class__.__name__}") from e

        try:
            self.db.add(
                UserRole(user_id=user_id, role=data.role, tenant_id=data.tenant_id, assigned_by=assigned_by)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            await self._compensate(user_id)
            raise DependencyError(f"User account created but role assignment failed: {e.__class__.__name__}") from e

        logger.info("Created user %s (%s) with role %s", user_id, email, data.role)
        return CreatedUser(user_id=user_id, email=email, temp_password=temp_password)

    async def _compensate(self, user_id: str):
        """Undo the directory writes and remove the orphaned identity account"""
        self.db.rollback()
        try:
            await self.identity.delete_account(user_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Could not remove identity account %s after failed provisioning: %s", user_id, e)

    async def update_user(self, user_id: str, fields: dict) -> User:
        """
        Patch user columns.

        Raises:
            ValidationError: Unknown field or malformed email
            NotFoundError: User (or new tenant) does not exist
            ConstraintError: Email already used by another user
        """
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if "email" in fields:
            fields = {**fields, "email": _normalize_email(fields["email"])}
        if fields.get("tenant_id"):
            self._get_tenant(fields["tenant_id"])

        user = self._get_user(user_id)
        for field, value in fields.items():
            setattr(user, field, value)
        user.updated_at = datetime.utcnow()

        commit_or_raise(self.db, "update user")
        self.db.refresh(user)
        return user

    async def deactivate_user(self, user_id: str) -> int:
        """
        Deactivate a user by flipping all of their role assignments to INACTIVE.

        Returns:
            Number of assignments that were active
        """
        user = self._get_user(user_id)
        changed = 0
        for assignment in user.active_roles:
            assignment.deactivate()
            changed += 1

        commit_or_raise(self.db, "deactivate user")
        logger.info("Deactivated user %s (%d role(s))", user_id, changed)
        return changed

    async def assign_role(
        self, user_id: str, role: str, tenant_id: str, assigned_by: str | None
    ) -> UserRole:
        """
        Grant a role within a tenant.

        Idempotent: an existing {user, tenant, role} row is reactivated and
        its assigned_at refreshed instead of inserting a duplicate.

        Raises:
            AuthError: No acting user
            ValidationError: Unknown role
            NotFoundError: User or tenant does not exist
        """
        if not assigned_by:
            raise AuthError("Not authenticated")
        _validate_role(role)
        self._get_user(user_id)
        self._get_tenant(tenant_id)

        assignment = (
            self.db.query(UserRole)
            .filter(
                UserRole.user_id == user_id,
                UserRole.tenant_id == tenant_id,
                UserRole.role == role,
            )
            .first()
        )
        if assignment:
            assignment.activate()
            assignment.assigned_by = assigned_by
        else:
            assignment = UserRole(
                user_id=user_id, role=role, tenant_id=tenant_id, assigned_by=assigned_by
            )
            self.db.add(assignment)

        commit_or_raise(self.db, "assign role")
        self.db.refresh(assignment)
        logger.info("Granted %s to user %s in tenant %s", role, user_id, tenant_id)
        return assignment

    async def remove_role(self, role_id: str) -> UserRole:
        """
        Soft-delete a role assignment.

        Raises:
            NotFoundError: If the assignment does not exist
        """
        assignment = self.db.query(UserRole).filter(UserRole.id == role_id).first()
        if not assignment:
            raise NotFoundError(f"Role assignment {role_id} not found")

        assignment.deactivate()
        commit_or_raise(self.db, "remove role")
        self.db.refresh(assignment)
        return assignment
