"""
Use Case: Create Tenant

Platform staff create a company directly; it is active immediately.
"""

import logging

from sqlalchemy.exc import IntegrityError

from src.app.services.audit_recorder import AuditRecorder
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.registrations.validation import check_domain, normalize_domain
from src.domain.authorization import Capabilities, authorize_claims
from src.domain.entities import Tenant, TenantStatus
from src.domain.errors import CONFLICT, FORBIDDEN, VALIDATION_FAILED
from src.libs.result import Error, Result, Return
from .dtos import CreateTenantCommand, TenantResponse

logger = logging.getLogger(__name__)


class CreateTenantUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(
        self, actor: TokenClaims, command: CreateTenantCommand
    ) -> Result[TenantResponse]:
        decision = authorize_claims(actor, Capabilities.MANAGE_TENANTS)
        if not decision:
            return Return.err(
                Error(FORBIDDEN, "Not allowed to manage tenants", reason=decision.reason.value)
            )

        problem = check_domain(command.domain)
        if problem is None and not command.name.strip():
            problem = "name is required"
        if problem:
            return Return.err(Error(VALIDATION_FAILED, problem))

        domain = normalize_domain(command.domain)

        try:
            async with self.uow:
                if await self.uow.tenants.get_by_domain(domain) is not None:
                    return Return.err(Error(CONFLICT, "Company domain already registered"))

                tenant = await self.uow.tenants.create(
                    Tenant(
                        name=command.name.strip(),
                        domain=domain,
                        industry=command.industry,
                        company_size=command.company_size,
                        status=TenantStatus.active,
                    )
                )

                await self.audit.record(
                    "tenant_created",
                    actor_id=actor.user_id,
                    tenant_id=tenant.id,
                    resource_type="tenant",
                    resource_id=tenant.id,
                    metadata={"domain": domain},
                )

                await self.uow.commit()
        except IntegrityError:
            return Return.err(Error(CONFLICT, "Company domain already registered"))

        logger.info(f"Tenant {domain} created by {actor.user_id}")
        return Return.ok(TenantResponse.from_tenant(tenant))
