"""
Change User Role Use Case

Handles changing a principal's role within its tenant.
"""

import logging
from datetime import UTC, datetime
from typing import Union
from uuid import UUID

from src.app.services.audit_recorder import AuditRecorder
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.domain.authorization import TENANT_ROLES, authorize_management
from src.domain.entities import ApprovalStatus, Role
from src.domain.errors import FORBIDDEN, NOT_FOUND, VALIDATION_FAILED
from src.domain.scoping import TenantScope
from src.libs.result import Error, Result, Return
from .dtos import ChangeRoleResponse

logger = logging.getLogger(__name__)


class ChangeRoleUseCase:
    """
    Use case for changing a principal's role.

    Business Rules:
    - New role must be a company role
    - Actors cannot change their own role
    - Target outside the actor's tenant scope is NOT_FOUND
    - Actor must be able to manage both the current and the new role
    - Only approved principals can be re-roled
    - Creates audit event for compliance tracking
    - Existing tokens keep the old role until they expire; refresh picks up the new one
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(
        self, actor: TokenClaims, target_user_id: UUID, new_role: Union[Role, str]
    ) -> Result[ChangeRoleResponse]:
        """
        Execute change role use case.

        Args:
            actor: Verified claims of the admin making the change
            target_user_id: User ID whose role is being changed
            new_role: New company role

        Returns:
            Result with ChangeRoleResponse, or Error
        """
        try:
            new_role = Role(new_role)
        except ValueError:
            new_role = None
        if new_role not in TENANT_ROLES:
            return Return.err(
                Error(
                    VALIDATION_FAILED,
                    "Invalid role. Must be one of: company_super_admin, company_admin, employee",
                )
            )

        if actor.user_id == target_user_id:
            return Return.err(
                Error(FORBIDDEN, "You cannot change your own role", reason="self_modification")
            )

        async with self.uow:
            target = await self.uow.users.get_by_id(target_user_id)
            if target is None or not TenantScope.for_claims(actor).allows(target.tenant_id):
                return Return.err(Error(NOT_FOUND, "User not found"))

            for role in (target.role, new_role):
                decision = authorize_management(
                    actor.role, actor.tenant_id, role, target.tenant_id
                )
                if not decision:
                    logger.warning(
                        f"Role change on {target_user_id} denied for {actor.user_id}: "
                        f"{decision.reason.value}"
                    )
                    await self.audit.record(
                        "role_change_denied",
                        actor_id=actor.user_id,
                        tenant_id=target.tenant_id,
                        resource_type="user",
                        resource_id=target.id,
                        metadata={"new_role": new_role.value, "reason": decision.reason.value},
                    )
                    await self.uow.commit()
                    return Return.err(
                        Error(FORBIDDEN, "Not allowed to change this role", reason=decision.reason.value)
                    )

            if target.approval_status != ApprovalStatus.approved:
                return Return.err(
                    Error(VALIDATION_FAILED, "Only approved users can change role")
                )

            # Store old role for audit
            old_role = target.role

            target.role = new_role
            target.updated_at = datetime.now(UTC)
            await self.uow.users.update(target)

            await self.audit.record(
                "role_changed",
                actor_id=actor.user_id,
                tenant_id=target.tenant_id,
                resource_type="user",
                resource_id=target.id,
                metadata={"old_role": old_role.value, "new_role": new_role.value},
            )

            await self.uow.commit()

        logger.info(f"Role of {target_user_id} changed {old_role.value} -> {new_role.value}")
        return Return.ok(
            ChangeRoleResponse(
                user_id=str(target_user_id), old_role=old_role.value, new_role=new_role.value
            )
        )
