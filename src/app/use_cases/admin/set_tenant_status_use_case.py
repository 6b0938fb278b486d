"""
Use Case: Suspend / Activate Tenant

Suspending a tenant blocks login and refresh for every principal in it;
tokens already issued run out at expiry.
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from src.app.services.audit_recorder import AuditRecorder
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.domain.authorization import Capabilities, authorize_claims
from src.domain.entities.enums import TenantStatus
from src.domain.errors import FORBIDDEN, NOT_FOUND, VALIDATION_FAILED
from src.libs.result import Error, Result, Return
from .dtos import TenantStatusResponse

logger = logging.getLogger(__name__)


class SetTenantStatusUseCase:
    """
    Suspend or activate a tenant.

    Business Logic:
    1. Require manage_tenants
    2. Validate tenant exists
    3. Update tenant status
    4. Create audit event

    Idempotent: suspending an already-suspended tenant succeeds
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(
        self, actor: TokenClaims, tenant_id: UUID, status: TenantStatus
    ) -> Result[TenantStatusResponse]:
        """
        Execute set tenant status use case.

        Args:
            actor: Verified claims of the platform admin
            tenant_id: UUID of tenant to update
            status: active or suspended

        Returns:
            Result[TenantStatusResponse] with the new status
        """
        if status not in (TenantStatus.active, TenantStatus.suspended):
            return Return.err(Error(VALIDATION_FAILED, "status must be active or suspended"))

        decision = authorize_claims(actor, Capabilities.MANAGE_TENANTS)
        if not decision:
            return Return.err(
                Error(FORBIDDEN, "Not allowed to manage tenants", reason=decision.reason.value)
            )

        async with self.uow:
            # 1. Get tenant
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if not tenant:
                return Return.err(Error(NOT_FOUND, "Tenant not found"))

            # 2. Update tenant status
            previous = tenant.status
            tenant.status = status
            tenant.updated_at = datetime.now(UTC)
            await self.uow.tenants.update(tenant)

            # 3. Create audit event
            await self.audit.record(
                "tenant_suspended" if status == TenantStatus.suspended else "tenant_activated",
                actor_id=actor.user_id,
                tenant_id=tenant_id,
                resource_type="tenant",
                resource_id=tenant_id,
                metadata={"previous_status": previous.value},
            )

            # 4. Commit transaction
            await self.uow.commit()

        logger.info(f"Tenant {tenant_id} {previous.value} -> {status.value} by {actor.user_id}")
        return Return.ok(TenantStatusResponse(tenant_id=str(tenant_id), status=status.value))
