### Description ###
# CMIS Admin Console - Cooperative Registration Administration
# - User & Role Assignment Models -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
User & Role Assignment Models

User rows are keyed by the identity provider's subject id and are never
hard-deleted. Deactivation lives on the role assignments: a user with no
active assignment is the deactivated state.

UserRole is the many-to-many {user, role, tenant} grant. Assignments are
soft-deleted only; the ACTIVE/INACTIVE state is exposed through
``UserRole.state`` and changed with ``activate()`` / ``deactivate()``.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from cmis_api.database import Base, new_id


class RoleName(str, Enum):
    """Fixed set of grantable roles"""

    SUPER_ADMIN = "SUPER_ADMIN"
    COUNTY_ADMIN = "COUNTY_ADMIN"
    COUNTY_OFFICER = "COUNTY_OFFICER"
    COOPERATIVE_ADMIN = "COOPERATIVE_ADMIN"
    AUDITOR = "AUDITOR"
    TRAINER = "TRAINER"
    CITIZEN = "CITIZEN"


# Roles whose view of applications is restricted to their own tenant
COUNTY_SCOPED_ROLES = (RoleName.COUNTY_ADMIN, RoleName.COUNTY_OFFICER)


class AssignmentState(str, Enum):
    """Soft-delete state of a role assignment"""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class User(Base):
    """
    User model - a person known to the console.

    The id is the identity provider's subject id (see AuthAccount).
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=False, unique=True)
    full_name = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=True)
    id_number = Column(String(50), nullable=True)
    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    tenant = relationship("Tenant")
    roles = relationship(
        "UserRole",
        back_populates="user",
        foreign_keys="UserRole.user_id",
        order_by="UserRole.assigned_at",
    )

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"

    @property
    def active_roles(self) -> list["UserRole"]:
        """Role assignments currently in the ACTIVE state"""
        return [r for r in self.roles if r.state is AssignmentState.ACTIVE]

    @property
    def is_deactivated(self) -> bool:
        """A user without any active role is deactivated"""
        return not self.active_roles


class UserRole(Base):
    """
    Role assignment - grants a role to a user within a tenant.

    A user may hold several concurrently active roles across tenants.
    Rows are never deleted; (user_id, tenant_id, role) identifies an
    assignment and re-granting reactivates the existing row.
    """

    __tablename__ = "user_roles"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    role = Column(String(30), nullable=False)
    tenant_id = Column(String(36), ForeignKey("tenants.id"), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    assigned_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    assigned_by = Column(String(36), ForeignKey("users.id"), nullable=True)

    # Relationships
    user = relationship("User", back_populates="roles", foreign_keys=[user_id])
    tenant = relationship("Tenant")

    __table_args__ = (
        Index("ix_user_roles_user_tenant_role", "user_id", "tenant_id", "role"),
    )

    def __repr__(self):
        return f"<UserRole(id={self.id}, user_id={self.user_id}, role='{self.role}', state={self.state.value})>"

    @property
    def state(self) -> AssignmentState:
        return AssignmentState.ACTIVE if self.is_active else AssignmentState.INACTIVE

    def activate(self, assigned_at: datetime | None = None):
        """Move to ACTIVE and refresh the assignment timestamp"""
        self.is_active = True
        self.assigned_at = assigned_at or datetime.utcnow()

    def deactivate(self):
        """Move to INACTIVE (the soft delete)"""
        self.is_active = False
