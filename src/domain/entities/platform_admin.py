"""
PlatformAdmin Entity

Platform staff: global, tenant-less principals.
"""

from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from .enums import Role


class PlatformAdmin(SQLModel, table=True):
    """
    PlatformAdmin entity - operator of the whole platform.

    Business Rules:
    - Email is globally unique (lower-cased)
    - role is platform_admin or platform_super_admin
    - Created only by a platform_super_admin, active immediately
    - Never bound to a tenant; tokens carry the platform sentinel
    """

    __tablename__ = "platform_admins"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)

    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)

    role: Role = Field(default=Role.platform_admin)
    is_active: bool = Field(default=True)

    # Timestamps
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )
