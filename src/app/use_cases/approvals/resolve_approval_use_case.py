"""
Resolve Approval Use Case

Moves an approval request from pending to approved or rejected, exactly
once, and applies the outcome to the subject principal (and to a founding
company's tenant).
"""

import logging
from datetime import UTC, datetime
from typing import Optional, Union
from uuid import UUID

from src.app.services.audit_recorder import AuditRecorder
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.domain.authorization import authorize_review
from src.domain.entities import ApprovalStatus, RequestType, TenantStatus
from src.domain.errors import ALREADY_RESOLVED, FORBIDDEN, NOT_FOUND, VALIDATION_FAILED
from src.libs.result import Error, Result, Return
from .dtos import ResolveApprovalResponse

logger = logging.getLogger(__name__)

TERMINAL_OUTCOMES = (ApprovalStatus.approved, ApprovalStatus.rejected)


class ResolveApprovalUseCase:
    """
    Business Rules (checked in this order):
    1. outcome is approved or rejected; rejection needs a reason
    2. Unknown request -> NOT_FOUND
    3. Actor must be able to see the request -> FORBIDDEN (audited)
    4. Request no longer pending -> ALREADY_RESOLVED
    5. Conditional update on status = pending; losing a race -> ALREADY_RESOLVED
    6. Approve: subject approved and active; founding signup activates the tenant
    7. Reject: subject rejected; founding signup suspends the tenant
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(
        self,
        request_id: UUID,
        actor: TokenClaims,
        outcome: Union[ApprovalStatus, str],
        reason: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Result[ResolveApprovalResponse]:
        """
        Execute resolve approval use case.

        Args:
            request_id: ApprovalRequest ID
            actor: Verified claims of the reviewer
            outcome: approved or rejected
            reason: Rejection reason (required when rejecting)
            notes: Optional reviewer notes

        Returns:
            Result with ResolveApprovalResponse, or Error
        """
        try:
            outcome = ApprovalStatus(outcome)
        except ValueError:
            outcome = None
        if outcome not in TERMINAL_OUTCOMES:
            return Return.err(Error(VALIDATION_FAILED, "outcome must be approved or rejected"))

        reason = reason.strip() if reason else None
        if outcome == ApprovalStatus.rejected and not reason:
            return Return.err(Error(VALIDATION_FAILED, "A rejection reason is required"))

        async with self.uow:
            request = await self.uow.approval_requests.get_by_id(request_id)
            if request is None:
                return Return.err(Error(NOT_FOUND, "Approval request not found"))

            decision = authorize_review(
                actor.role, actor.tenant_id, request.requested_role, request.tenant_id
            )
            if not decision:
                logger.warning(
                    f"Approval {request_id} denied for {actor.user_id}: {decision.reason.value}"
                )
                await self.audit.record(
                    "approval_denied",
                    actor_id=actor.user_id,
                    tenant_id=actor.tenant_id,
                    resource_type="approval_request",
                    resource_id=request.id,
                    metadata={"outcome": outcome.value, "reason": decision.reason.value},
                )
                await self.uow.commit()
                return Return.err(
                    Error(FORBIDDEN, "Not allowed to resolve this request", reason=decision.reason.value)
                )

            if request.status != ApprovalStatus.pending:
                return Return.err(Error(ALREADY_RESOLVED, "Approval request already resolved"))

            reviewed_at = datetime.now(UTC)
            won = await self.uow.approval_requests.resolve_if_pending(
                request.id,
                outcome,
                actor.user_id,
                reviewed_at,
                rejection_reason=reason if outcome == ApprovalStatus.rejected else None,
                review_notes=notes,
            )
            if not won:
                return Return.err(Error(ALREADY_RESOLVED, "Approval request already resolved"))

            user = await self.uow.users.get_by_id(request.user_id)
            if user is None:
                return Return.err(Error(NOT_FOUND, "Subject user not found"))

            if outcome == ApprovalStatus.approved:
                user.approval_status = ApprovalStatus.approved
                user.is_active = True
                user.approved_by = actor.user_id
                user.approved_at = reviewed_at
                user.rejection_reason = None
            else:
                user.approval_status = ApprovalStatus.rejected
                user.is_active = False
                user.rejection_reason = reason
            user.updated_at = reviewed_at
            await self.uow.users.update(user)

            tenant_status = None
            if request.request_type == RequestType.new_signup:
                tenant = await self.uow.tenants.get_by_id(request.tenant_id)
                if tenant is not None and tenant.status == TenantStatus.pending:
                    # Founding company signup decides the tenant too
                    tenant.status = (
                        TenantStatus.active
                        if outcome == ApprovalStatus.approved
                        else TenantStatus.suspended
                    )
                    tenant.updated_at = reviewed_at
                    await self.uow.tenants.update(tenant)
                    tenant_status = tenant.status.value

            await self.audit.record(
                f"approval_{outcome.value}",
                actor_id=actor.user_id,
                tenant_id=request.tenant_id,
                resource_type="approval_request",
                resource_id=request.id,
                metadata={
                    "user_id": str(user.id),
                    "requested_role": request.requested_role.value,
                    "reason": reason,
                    "notes": notes,
                    "tenant_status": tenant_status,
                },
            )

            await self.uow.commit()

        logger.info(f"Approval {request_id} {outcome.value} by {actor.user_id}")
        return Return.ok(
            ResolveApprovalResponse(
                request_id=str(request_id),
                status=outcome.value,
                user_id=str(user.id),
                reviewed_by=str(actor.user_id),
                reviewed_at=reviewed_at,
                tenant_status=tenant_status,
            )
        )
