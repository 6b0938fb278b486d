"""
Use Case: Update Tenant

Platform staff edit a company's name, domain, industry or size. Status
changes go through SetTenantStatusUseCase.
"""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from src.app.services.audit_recorder import AuditRecorder
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.registrations.validation import check_domain, normalize_domain
from src.domain.authorization import Capabilities, authorize_claims
from src.domain.errors import CONFLICT, FORBIDDEN, NOT_FOUND, VALIDATION_FAILED
from src.libs.result import Error, Result, Return
from .dtos import TenantResponse, UpdateTenantCommand

logger = logging.getLogger(__name__)


class UpdateTenantUseCase:
    """
    Edit tenant details.

    Business Logic:
    1. Require manage_tenants
    2. Validate the new name and domain
    3. Reject a domain owned by another tenant (CONFLICT)
    4. Apply the changes and audit the changed fields
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(
        self, actor: TokenClaims, tenant_id: UUID, command: UpdateTenantCommand
    ) -> Result[TenantResponse]:
        decision = authorize_claims(actor, Capabilities.MANAGE_TENANTS)
        if not decision:
            return Return.err(
                Error(FORBIDDEN, "Not allowed to manage tenants", reason=decision.reason.value)
            )

        if command.name is not None and not command.name.strip():
            return Return.err(Error(VALIDATION_FAILED, "name must not be empty"))
        if command.domain is not None:
            problem = check_domain(command.domain)
            if problem:
                return Return.err(Error(VALIDATION_FAILED, problem))

        changes = {}
        if command.name is not None:
            changes["name"] = command.name.strip()
        if command.domain is not None:
            changes["domain"] = normalize_domain(command.domain)
        if command.industry is not None:
            changes["industry"] = command.industry
        if command.company_size is not None:
            changes["company_size"] = command.company_size

        try:
            async with self.uow:
                tenant = await self.uow.tenants.get_by_id(tenant_id)
                if tenant is None:
                    return Return.err(Error(NOT_FOUND, "Tenant not found"))

                if "domain" in changes and changes["domain"] != tenant.domain:
                    owner = await self.uow.tenants.get_by_domain(changes["domain"])
                    if owner is not None and owner.id != tenant.id:
                        return Return.err(Error(CONFLICT, "Company domain already registered"))

                changed = {
                    field: value
                    for field, value in changes.items()
                    if getattr(tenant, field) != value
                }
                for field, value in changed.items():
                    setattr(tenant, field, value)

                if changed:
                    tenant.updated_at = datetime.now(UTC)
                    tenant = await self.uow.tenants.update(tenant)

                    await self.audit.record(
                        "tenant_updated",
                        actor_id=actor.user_id,
                        tenant_id=tenant.id,
                        resource_type="tenant",
                        resource_id=tenant.id,
                        metadata={"changes": changed},
                    )

                    await self.uow.commit()
        except IntegrityError:
            return Return.err(Error(CONFLICT, "Company domain already registered"))

        logger.info(f"Tenant {tenant_id} updated by {actor.user_id}: {sorted(changed)}")
        return Return.ok(TenantResponse.from_tenant(tenant))
