"""
Refresh Token Use Case

Exchanges a still-valid token for a fresh one after re-checking the
principal in the store.
"""

import logging

from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.authorization import is_platform_role
from src.domain.entities import ApprovalStatus, TenantStatus
from src.domain.errors import FORBIDDEN
from src.libs.result import Error, Result, Return
from .dtos import RefreshTokenResponse

logger = logging.getLogger(__name__)


class RefreshTokenUseCase:
    """
    Use case for token refresh.

    Business Rules:
    - Token errors (TOKEN_INVALID / TOKEN_EXPIRED) pass through unchanged
    - The principal must still exist, be active and be approved
    - A tenant principal's tenant must still be active
    - The new token carries the stored role, not the one in the old token
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(self, token: str) -> Result[RefreshTokenResponse]:
        verified = self.token_service.verify(token)
        if verified.is_err():
            return verified
        claims = verified.value

        async with self.uow:
            if claims.is_platform:
                admin = await self.uow.platform_admins.get_by_id(claims.user_id)
                eligible = (
                    admin is not None and admin.is_active and is_platform_role(admin.role)
                )
                principal, tenant_id = admin, None
            else:
                user = await self.uow.users.get_by_id(claims.user_id)
                eligible = (
                    user is not None
                    and user.tenant_id == claims.tenant_id
                    and user.is_active
                    and user.approval_status == ApprovalStatus.approved
                )
                if eligible:
                    tenant = await self.uow.tenants.get_by_id(user.tenant_id)
                    eligible = tenant is not None and tenant.status == TenantStatus.active
                principal, tenant_id = user, claims.tenant_id

        if not eligible:
            logger.warning(f"Refresh refused for principal {claims.user_id}")
            return Return.err(
                Error(FORBIDDEN, "Principal is no longer active", reason="principal_inactive")
            )

        return Return.ok(
            RefreshTokenResponse(
                access_token=self.token_service.issue(principal.id, tenant_id, principal.role),
                expires_in=self.token_service.expires_seconds,
            )
        )
