"""
Set User Active Use Case

Deactivates or reactivates a principal. Deactivation is how access is
revoked: login and refresh both refuse inactive principals, and existing
tokens run out at expiry.
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from src.app.services.audit_recorder import AuditRecorder
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.domain.authorization import authorize_management
from src.domain.errors import FORBIDDEN, NOT_FOUND
from src.domain.scoping import TenantScope
from src.libs.result import Error, Result, Return
from .dtos import SetUserActiveResponse

logger = logging.getLogger(__name__)


class SetUserActiveUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(
        self, actor: TokenClaims, target_user_id: UUID, is_active: bool
    ) -> Result[SetUserActiveResponse]:
        if actor.user_id == target_user_id:
            return Return.err(
                Error(FORBIDDEN, "You cannot change your own status", reason="self_modification")
            )

        async with self.uow:
            target = await self.uow.users.get_by_id(target_user_id)
            if target is None or not TenantScope.for_claims(actor).allows(target.tenant_id):
                return Return.err(Error(NOT_FOUND, "User not found"))

            decision = authorize_management(
                actor.role, actor.tenant_id, target.role, target.tenant_id
            )
            if not decision:
                logger.warning(
                    f"Status change on {target_user_id} denied for {actor.user_id}: "
                    f"{decision.reason.value}"
                )
                return Return.err(
                    Error(FORBIDDEN, "Not allowed to manage this user", reason=decision.reason.value)
                )

            target.is_active = is_active
            target.updated_at = datetime.now(UTC)
            await self.uow.users.update(target)

            await self.audit.record(
                "user_activated" if is_active else "user_deactivated",
                actor_id=actor.user_id,
                tenant_id=target.tenant_id,
                resource_type="user",
                resource_id=target.id,
            )

            await self.uow.commit()

        logger.info(f"User {target_user_id} is_active={is_active} (by {actor.user_id})")
        return Return.ok(SetUserActiveResponse(user_id=str(target_user_id), is_active=is_active))
