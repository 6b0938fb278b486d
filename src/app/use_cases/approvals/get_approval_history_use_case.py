"""
Get Approval History Use Case

All approval requests (any status) for one subject principal.
"""

from uuid import UUID

from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.domain.authorization import Capabilities, authorize_claims, authorize_review
from src.domain.errors import FORBIDDEN, NOT_FOUND, VALIDATION_FAILED
from src.domain.scoping import TenantScope
from src.libs.result import Error, Result, Return
from .dtos import ApprovalPage, ApprovalRequestInfo
from src.app.use_cases.pagination import check_page, page_offset


class GetApprovalHistoryUseCase:
    """
    Business Rules:
    - Requires review_approvals
    - A subject outside the actor's tenant scope is reported as NOT_FOUND
    - The actor must be able to review the subject's role
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, actor: TokenClaims, page: int = 1, limit: int = 20
    ) -> Result[ApprovalPage]:
        problem = check_page(page, limit)
        if problem:
            return Return.err(Error(VALIDATION_FAILED, problem))

        decision = authorize_claims(actor, Capabilities.REVIEW_APPROVALS, actor.tenant_id)
        if not decision:
            return Return.err(
                Error(FORBIDDEN, "Not allowed to review approvals", reason=decision.reason.value)
            )

        async with self.uow:
            subject = await self.uow.users.get_by_id(user_id)
            if subject is None or not TenantScope.for_claims(actor).allows(subject.tenant_id):
                return Return.err(Error(NOT_FOUND, "User not found"))

            decision = authorize_review(actor.role, actor.tenant_id, subject.role, subject.tenant_id)
            if not decision:
                return Return.err(
                    Error(
                        FORBIDDEN,
                        "Not allowed to view this user's approvals",
                        reason=decision.reason.value,
                    )
                )

            requests, total = await self.uow.approval_requests.list_by_user(
                user_id, offset=page_offset(page, limit), limit=limit
            )

        return Return.ok(
            ApprovalPage(
                items=[ApprovalRequestInfo.from_entity(r, subject) for r in requests],
                total=total,
                page=page,
                limit=limit,
            )
        )
