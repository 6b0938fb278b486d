"""
User Entity

A tenant-scoped principal (company super admin, company admin or employee).
"""

from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import ApprovalStatus, Role


class User(SQLModel, table=True):
    """
    User entity - a principal bound to exactly one tenant.

    Business Rules:
    - (tenant_id, email) is unique; email stored lower-cased
    - Password stored as bcrypt hash
    - approval_status must be approved (and is_active true) to obtain a token
    - role only changes through the change-role use case
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    email: str = Field(max_length=255, index=True)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)

    role: Role = Field(nullable=False)
    is_active: bool = Field(default=True)

    # Approval workflow
    approval_status: ApprovalStatus = Field(default=ApprovalStatus.pending)
    approved_by: Optional[UUID] = Field(default=None)
    approved_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    rejection_reason: Optional[str] = Field(default=None)

    # Timestamps
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_user_tenant_email", "tenant_id", "email", unique=True),
        Index("idx_user_approval_status", "approval_status"),
    )
