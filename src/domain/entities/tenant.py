"""
Tenant Entity

A company: the isolation boundary for all tenant-scoped data.
"""

from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import TenantStatus


class Tenant(SQLModel, table=True):
    """
    Tenant entity - a customer company.

    Business Rules:
    - domain is unique and stored lower-cased (case-insensitive lookups)
    - Created active by platform staff, or pending by company self-registration
    - Founding self-registration approval activates it, rejection suspends it
    - Only active tenants can log in or refresh tokens
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    domain: str = Field(max_length=255, unique=True, index=True)

    industry: Optional[str] = Field(default=None, max_length=100)
    company_size: Optional[str] = Field(default=None, max_length=50)

    status: TenantStatus = Field(default=TenantStatus.active)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_tenant_status", "status"),)
