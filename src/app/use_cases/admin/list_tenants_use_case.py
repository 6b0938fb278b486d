"""
Use Case: List Tenants

Platform staff browse companies with their user counts.
"""

from typing import Optional

from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.pagination import check_page, page_offset
from src.domain.authorization import Capabilities, authorize_claims
from src.domain.errors import FORBIDDEN, VALIDATION_FAILED
from src.libs.result import Error, Result, Return
from .dtos import TenantPage, TenantResponse, TenantSummary


class ListTenantsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor: TokenClaims,
        page: int = 1,
        limit: int = 20,
        search: Optional[str] = None,
    ) -> Result[TenantPage]:
        problem = check_page(page, limit)
        if problem:
            return Return.err(Error(VALIDATION_FAILED, problem))

        decision = authorize_claims(actor, Capabilities.MANAGE_TENANTS)
        if not decision:
            return Return.err(
                Error(FORBIDDEN, "Not allowed to manage tenants", reason=decision.reason.value)
            )

        async with self.uow:
            rows, total = await self.uow.tenants.list_with_user_counts(
                search=search, offset=page_offset(page, limit), limit=limit
            )

        items = [
            TenantSummary(
                **TenantResponse.from_tenant(tenant).model_dump(), user_count=user_count
            )
            for tenant, user_count in rows
        ]
        return Return.ok(TenantPage(items=items, total=total, page=page, limit=limit))
