"""
List Users Use Case

Tenant-scoped user directory with an optional approval status filter.
"""

from typing import Optional
from uuid import UUID

from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.pagination import check_page, page_offset
from src.domain.authorization import Capabilities, authorize_claims
from src.domain.entities import ApprovalStatus
from src.domain.errors import FORBIDDEN, VALIDATION_FAILED
from src.domain.scoping import TenantScope
from src.libs.result import Error, Result, Return
from .dtos import UserInfo, UserPage


class ListUsersUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor: TokenClaims,
        page: int = 1,
        limit: int = 20,
        approval_status: Optional[ApprovalStatus] = None,
        tenant_id: Optional[UUID] = None,
    ) -> Result[UserPage]:
        problem = check_page(page, limit)
        if problem:
            return Return.err(Error(VALIDATION_FAILED, problem))

        decision = authorize_claims(actor, Capabilities.VIEW_DIRECTORY, actor.tenant_id)
        if not decision:
            return Return.err(
                Error(FORBIDDEN, "Not allowed to view the directory", reason=decision.reason.value)
            )

        scope = TenantScope.for_claims(actor).narrow(tenant_id)

        async with self.uow:
            users, total = await self.uow.users.list_scoped(
                scope,
                approval_status=approval_status,
                offset=page_offset(page, limit),
                limit=limit,
            )

        return Return.ok(
            UserPage(
                items=[UserInfo.from_user(u) for u in users], total=total, page=page, limit=limit
            )
        )
