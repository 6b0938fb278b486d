"""
Login Use Case

Single authentication entry point for every login path. The path only
decides which roles are admitted and whether a company is named.
"""

import logging
from datetime import UTC, datetime
from typing import Optional, Union

from src.app.services.audit_recorder import AuditRecorder
from src.app.services.credential_verifier import CredentialVerifier
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.authorization import TENANT_ROLES
from src.domain.entities import ApprovalStatus, PlatformAdmin, Tenant, TenantStatus, User
from src.domain.errors import INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE, VALIDATION_FAILED
from src.libs.result import Error, Result, Return
from .dtos import LoginCommand, LoginResponse, PrincipalInfo, TenantInfo

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for login and token issuance.

    Business Rules:
    - Unknown company, inactive company, unknown principal, unapproved or
      deactivated principal, role outside the path and wrong password all
      return the same INVALID_CREDENTIALS
    - A dummy bcrypt comparison runs when the principal is missing
    - The real failure reason is logged and audited, never returned
    - On success: stamp last_login_at, audit login, commit, issue token
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_service: TokenService,
        credentials: CredentialVerifier,
    ):
        self.uow = uow
        self.token_service = token_service
        self.credentials = credentials
        self.audit = AuditRecorder(uow)

    async def execute(self, command: LoginCommand) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            command: LoginCommand with credentials, company domain and role filter

        Returns:
            Result with LoginResponse containing the access token, or Error
        """
        email = command.email.strip().lower()
        wants_tenant = bool(command.allowed_roles & TENANT_ROLES)

        if wants_tenant and not command.company_domain:
            return Return.err(
                Error(VALIDATION_FAILED, "company_domain is required for this login path")
            )

        async with self.uow:
            tenant: Optional[Tenant] = None
            principal: Optional[Union[User, PlatformAdmin]] = None
            failure: Optional[str] = None

            if wants_tenant:
                tenant = await self.uow.tenants.get_by_domain(command.company_domain.strip())
                if tenant is None:
                    failure = "unknown_tenant"
                elif tenant.status != TenantStatus.active:
                    failure = "tenant_not_active"
                else:
                    principal = await self.uow.users.get_by_tenant_and_email(tenant.id, email)
            else:
                principal = await self.uow.platform_admins.get_by_email(email)

            if failure is None and principal is None:
                failure = "unknown_principal"

            # Always run one bcrypt comparison (dummy hash when no principal)
            password_valid = self.credentials.verify_password(
                command.password, principal.password_hash if principal else None
            )

            if failure is None:
                failure = self._check_principal(principal, command)
            if failure is None and not password_valid:
                failure = "wrong_password"

            if failure is not None:
                logger.warning(f"Login failed for {email}: {failure}")
                await self.audit.record(
                    "login_failed",
                    actor_id=principal.id if principal else None,
                    tenant_id=tenant.id if tenant else None,
                    metadata={"email": email, "reason": failure},
                )
                await self.uow.commit()
                return Return.err(Error(INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE))

            # Update last_login_at
            principal.last_login_at = datetime.now(UTC)
            if isinstance(principal, PlatformAdmin):
                await self.uow.platform_admins.update(principal)
            else:
                await self.uow.users.update(principal)

            await self.audit.record(
                "login",
                actor_id=principal.id,
                tenant_id=tenant.id if tenant else None,
                resource_type="user",
                resource_id=principal.id,
                metadata={"email": email, "role": principal.role.value},
            )

            # Commit transaction
            await self.uow.commit()

            access_token = self.token_service.issue(
                principal.id, tenant.id if tenant else None, principal.role
            )

            return Return.ok(
                LoginResponse(
                    access_token=access_token,
                    expires_in=self.token_service.expires_seconds,
                    user=PrincipalInfo(
                        id=str(principal.id),
                        email=principal.email,
                        first_name=principal.first_name,
                        last_name=principal.last_name,
                        role=principal.role.value,
                        tenant_id=str(tenant.id) if tenant else None,
                    ),
                    tenant=(
                        TenantInfo(id=str(tenant.id), name=tenant.name, domain=tenant.domain)
                        if tenant
                        else None
                    ),
                )
            )

    @staticmethod
    def _check_principal(principal, command: LoginCommand) -> Optional[str]:
        if isinstance(principal, User) and principal.approval_status != ApprovalStatus.approved:
            return "not_approved"
        if not principal.is_active:
            return "inactive"
        if principal.role not in command.allowed_roles:
            return "role_not_allowed"
        return None
