from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional, Tuple
from uuid import UUID

from src.domain.entities import ApprovalRequest, ApprovalStatus, Role, User
from src.domain.scoping import TenantScope


class IApprovalRequestRepository(ABC):
    """ApprovalRequest repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, request_id: UUID) -> Optional[ApprovalRequest]:
        """Get approval request by ID (always re-read from the store)"""
        pass

    @abstractmethod
    async def create(self, request: ApprovalRequest) -> ApprovalRequest:
        """Create a new approval request"""
        pass

    @abstractmethod
    async def list_pending(
        self,
        scope: TenantScope,
        requested_roles: Iterable[Role],
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Tuple[ApprovalRequest, User]], int]:
        """
        List pending requests within a tenant scope, restricted to requested_roles.

        Returns:
            Tuple of (page of (request, subject user) pairs newest first, total count)
        """
        pass

    @abstractmethod
    async def list_by_user(
        self, user_id: UUID, offset: int = 0, limit: int = 20
    ) -> Tuple[List[ApprovalRequest], int]:
        """All requests (any status) for one subject user, newest first"""
        pass

    @abstractmethod
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
        Atomically move a request from pending to a terminal status.

        Compare-and-set guarded by status = pending: of any number of
        concurrent callers exactly one gets True.
        """
        pass
