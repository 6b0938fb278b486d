"""
Load Context Use Case

Loads the current principal and its tenant from verified token claims.
"""

from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import NOT_FOUND
from src.libs.result import Error, Result, Return
from .dtos import MeResponse, TenantContext, UserInfo


class LoadContextUseCase:
    """
    Use case for loading current user and tenant context.

    Business Rules:
    - Platform principals are loaded from platform admins and have no tenant
    - Tenant principals are loaded together with their tenant
    - A principal that no longer exists is NOT_FOUND
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: TokenClaims) -> Result[MeResponse]:
        async with self.uow:
            if actor.is_platform:
                admin = await self.uow.platform_admins.get_by_id(actor.user_id)
                if admin is None:
                    return Return.err(Error(NOT_FOUND, "User not found"))
                return Return.ok(MeResponse(user=UserInfo.from_platform_admin(admin)))

            user = await self.uow.users.get_by_id(actor.user_id)
            if user is None or user.tenant_id != actor.tenant_id:
                return Return.err(Error(NOT_FOUND, "User not found"))

            tenant = await self.uow.tenants.get_by_id(user.tenant_id)
            if tenant is None:
                return Return.err(Error(NOT_FOUND, "Tenant not found"))

            return Return.ok(
                MeResponse(user=UserInfo.from_user(user), tenant=TenantContext.from_tenant(tenant))
            )
