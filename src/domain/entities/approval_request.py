"""
ApprovalRequest Entity

Pending-review record gating activation of a newly created principal.
"""

from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import ApprovalStatus, RequestType, Role


class ApprovalRequest(SQLModel, table=True):
    """
    ApprovalRequest entity - one registration awaiting review.

    Business Rules:
    - Created in the same transaction as its subject user
    - pending -> approved | rejected, exactly once (conditional update)
    - No mutation after reaching a terminal status
    - Visible only to reviewers allowed to approve requested_role in tenant_id
    """

    __tablename__ = "approval_requests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", nullable=False, index=True)

    requested_role: Role = Field(nullable=False)
    request_type: RequestType = Field(nullable=False)
    status: ApprovalStatus = Field(default=ApprovalStatus.pending)

    # Resolution
    reviewed_by: Optional[UUID] = Field(default=None)
    reviewed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    rejection_reason: Optional[str] = Field(default=None)
    review_notes: Optional[str] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_approval_tenant_status", "tenant_id", "status"),
        Index("idx_approval_requested_role", "requested_role"),
    )
