"""
Approval Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import ApprovalRequest, User


class SubjectSummary(BaseModel):
    """The principal an approval request is about"""

    id: str
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: str
    approval_status: str


class ApprovalRequestInfo(BaseModel):
    id: str
    user_id: str
    tenant_id: str
    requested_role: str
    request_type: str
    status: str
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    review_notes: Optional[str] = None
    created_at: datetime
    subject: Optional[SubjectSummary] = None

    @classmethod
    def from_entity(
        cls, request: ApprovalRequest, subject: Optional[User] = None
    ) -> "ApprovalRequestInfo":
        return cls(
            id=str(request.id),
            user_id=str(request.user_id),
            tenant_id=str(request.tenant_id),
            requested_role=request.requested_role.value,
            request_type=request.request_type.value,
            status=request.status.value,
            reviewed_by=str(request.reviewed_by) if request.reviewed_by else None,
            reviewed_at=request.reviewed_at,
            rejection_reason=request.rejection_reason,
            review_notes=request.review_notes,
            created_at=request.created_at,
            subject=(
                SubjectSummary(
                    id=str(subject.id),
                    email=subject.email,
                    first_name=subject.first_name,
                    last_name=subject.last_name,
                    phone=subject.phone,
                    role=subject.role.value,
                    approval_status=subject.approval_status.value,
                )
                if subject
                else None
            ),
        )


class ApprovalPage(BaseModel):
    """One page of approval requests"""

    items: List[ApprovalRequestInfo]
    total: int
    page: int
    limit: int


class ResolveApprovalResponse(BaseModel):
    request_id: str
    status: str
    user_id: str
    reviewed_by: str
    reviewed_at: datetime
    tenant_status: Optional[str] = None
