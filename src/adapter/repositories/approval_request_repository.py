from datetime import UTC, datetime
from typing import Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.scoping import apply_tenant_scope
from src.app.repositories.approval_request_repository import IApprovalRequestRepository
from src.domain.entities import ApprovalRequest, ApprovalStatus, Role, User
from src.domain.scoping import TenantScope


class ApprovalRequestRepository(IApprovalRequestRepository):
    """ApprovalRequest repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, request_id: UUID) -> Optional[ApprovalRequest]:
        """Get approval request by ID, overwriting any stale copy in the session"""
        stmt = (
            select(ApprovalRequest)
            .where(ApprovalRequest.id == request_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, request: ApprovalRequest) -> ApprovalRequest:
        """Create a new approval request"""
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def list_pending(
        self,
        scope: TenantScope,
        requested_roles: Iterable[Role],
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Tuple[ApprovalRequest, User]], int]:
        """List pending requests in scope for the given requested roles, newest first"""
        roles = list(requested_roles)
        if not roles:
            return [], 0

        conditions = (
            ApprovalRequest.status == ApprovalStatus.pending,
            col(ApprovalRequest.requested_role).in_(roles),
        )

        stmt = (
            select(ApprovalRequest, User)
            .join(User, User.id == ApprovalRequest.user_id)
            .where(*conditions)
        )
        stmt = apply_tenant_scope(stmt, ApprovalRequest.tenant_id, scope)
        stmt = (
            stmt.order_by(ApprovalRequest.created_at.desc()).offset(offset).limit(limit)
        )

        count_stmt = select(func.count()).select_from(ApprovalRequest).where(*conditions)
        count_stmt = apply_tenant_scope(count_stmt, ApprovalRequest.tenant_id, scope)

        result = await self.session.exec(stmt)
        total = await self.session.exec(count_stmt)
        return [(request, user) for request, user in result.all()], total.one()

    async def list_by_user(
        self, user_id: UUID, offset: int = 0, limit: int = 20
    ) -> Tuple[List[ApprovalRequest], int]:
        """All requests for one subject user, newest first"""
        stmt = (
            select(ApprovalRequest)
            .where(ApprovalRequest.user_id == user_id)
            .order_by(ApprovalRequest.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        count_stmt = (
            select(func.count())
            .select_from(ApprovalRequest)
            .where(ApprovalRequest.user_id == user_id)
        )

        result = await self.session.exec(stmt)
        total = await self.session.exec(count_stmt)
        return list(result.all()), total.one()

    async def resolve_if_pending(
        self,
        request_id: UUID,
        status: ApprovalStatus,
        reviewer_id: UUID,
        reviewed_at: datetime,
        rejection_reason: Optional[str] = None,
        review_notes: Optional[str] = None,
    ) -> bool:
        """
        Conditional update guarded by status = pending.

        The database serializes concurrent writers on the row; the loser's
        WHERE clause no longer matches, so its rowcount is 0.
        """
        stmt = (
            update(ApprovalRequest)
            .where(
                ApprovalRequest.id == request_id,
                ApprovalRequest.status == ApprovalStatus.pending,
            )
            .values(
                status=status,
                reviewed_by=reviewer_id,
                reviewed_at=reviewed_at,
                rejection_reason=rejection_reason,
                review_notes=review_notes,
                updated_at=datetime.now(UTC),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
