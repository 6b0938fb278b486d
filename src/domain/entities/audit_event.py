"""
AuditEvent Entity

Immutable log of authentication, authorization and workflow decisions.
"""

from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - append-only trace of a decision.

    Business Rules:
    - Immutable (never updated or deleted)
    - tenant_id nullable for platform-level events
    - actor_id nullable for anonymous actions (self-registration, failed login)
    - Metadata stores decision context (reason, roles, target ids)
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: Optional[UUID] = Field(default=None, index=True)
    actor_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g., "login", "approval_approved"
    resource_type: Optional[str] = Field(default=None, max_length=100)
    resource_id: Optional[UUID] = Field(default=None)
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_tenant_action", "tenant_id", "action"),
    )
