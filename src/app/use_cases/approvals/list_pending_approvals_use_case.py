"""
List Pending Approvals Use Case

Pending requests the actor is allowed to decide, newest first.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.domain.authorization import Capabilities, authorize_claims, manageable_roles
from src.domain.errors import FORBIDDEN, VALIDATION_FAILED
from src.domain.scoping import TenantScope
from src.libs.result import Error, Result, Return
from .dtos import ApprovalPage, ApprovalRequestInfo
from src.app.use_cases.pagination import check_page, page_offset

logger = logging.getLogger(__name__)


class ListPendingApprovalsUseCase:
    """
    Business Rules:
    - Requires review_approvals
    - Tenant actors only see their own tenant; platform actors see all
      tenants and may narrow to one with tenant_id
    - Only requests for roles the actor may approve are listed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor: TokenClaims,
        page: int = 1,
        limit: int = 20,
        tenant_id: Optional[UUID] = None,
    ) -> Result[ApprovalPage]:
        problem = check_page(page, limit)
        if problem:
            return Return.err(Error(VALIDATION_FAILED, problem))

        decision = authorize_claims(actor, Capabilities.REVIEW_APPROVALS, actor.tenant_id)
        if not decision:
            logger.warning(f"Approval listing denied for {actor.user_id}: {decision.reason.value}")
            return Return.err(
                Error(FORBIDDEN, "Not allowed to review approvals", reason=decision.reason.value)
            )

        scope = TenantScope.for_claims(actor).narrow(tenant_id)

        async with self.uow:
            rows, total = await self.uow.approval_requests.list_pending(
                scope,
                manageable_roles(actor.role),
                offset=page_offset(page, limit),
                limit=limit,
            )

        return Return.ok(
            ApprovalPage(
                items=[ApprovalRequestInfo.from_entity(request, user) for request, user in rows],
                total=total,
                page=page,
                limit=limit,
            )
        )
