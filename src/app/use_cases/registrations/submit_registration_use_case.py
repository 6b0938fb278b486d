"""
Submit Registration Use Case

Creates new principals. Anything above employee level, and anything
self-registered, starts pending behind an ApprovalRequest created in the
same transaction.
"""

import logging
from datetime import UTC, datetime
from typing import Optional, Union

from sqlalchemy.exc import IntegrityError

from src.app.services.audit_recorder import AuditRecorder
from src.app.services.credential_verifier import CredentialVerifier
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.domain.authorization import TENANT_ROLES, authorize_management
from src.domain.entities import (
    ApprovalRequest,
    ApprovalStatus,
    RequestType,
    Role,
    Tenant,
    TenantStatus,
    User,
)
from src.domain.errors import CONFLICT, FORBIDDEN, NOT_FOUND, VALIDATION_FAILED
from src.libs.result import Error, Result, Return
from .dtos import CompanySignupCommand, MemberRegistrationCommand, RegistrationResponse
from .validation import check_domain, check_principal_fields, normalize_domain, normalize_email

logger = logging.getLogger(__name__)

# Roles a member may ask for when registering without an actor
SELF_REGISTERABLE_ROLES = frozenset({Role.employee, Role.company_admin})


class SubmitRegistrationUseCase:
    """
    Registration submission.

    Business Rules:
    - Email, names and password strength are validated before any store access
    - Company signup: pending Tenant + pending company_super_admin + new_signup request
    - Member self-registration: active company required, pending + new_signup request
    - Admin-created: manage_principals plus the management refinement;
      employee is approved immediately, higher roles get an admin_created request
    - Duplicate domain or (tenant, email) returns CONFLICT
    """

    def __init__(self, uow: UnitOfWork, credentials: CredentialVerifier):
        self.uow = uow
        self.credentials = credentials
        self.audit = AuditRecorder(uow)

    async def execute(
        self,
        command: Union[CompanySignupCommand, MemberRegistrationCommand],
        actor: Optional[TokenClaims] = None,
    ) -> Result[RegistrationResponse]:
        """
        Execute registration use case.

        Args:
            command: CompanySignupCommand or MemberRegistrationCommand
            actor: Verified claims of the creating admin, None for self-registration

        Returns:
            Result with RegistrationResponse, or Error
        """
        problem = check_principal_fields(
            self.credentials,
            command.email,
            command.password,
            command.first_name,
            command.last_name,
        )
        if problem is None and isinstance(command, CompanySignupCommand):
            problem = check_domain(command.company_domain)
            if problem is None and not command.company_name.strip():
                problem = "company_name is required"
        if problem is not None:
            return Return.err(Error(VALIDATION_FAILED, problem))

        try:
            if isinstance(command, CompanySignupCommand):
                if actor is not None:
                    return Return.err(
                        Error(VALIDATION_FAILED, "Company signup is a public operation")
                    )
                return await self._signup_company(command)
            if actor is None:
                return await self._self_register_member(command)
            return await self._create_by_admin(command, actor)
        except IntegrityError:
            # Unique index hit by a concurrent registration
            logger.warning(f"Registration conflict for {normalize_email(command.email)}")
            return Return.err(Error(CONFLICT, "Company domain or email already registered"))

    async def _signup_company(self, command: CompanySignupCommand) -> Result[RegistrationResponse]:
        domain = normalize_domain(command.company_domain)
        email = normalize_email(command.email)

        async with self.uow:
            if await self.uow.tenants.get_by_domain(domain) is not None:
                return Return.err(Error(CONFLICT, "Company domain already registered"))

            tenant = await self.uow.tenants.create(
                Tenant(
                    name=command.company_name.strip(),
                    domain=domain,
                    industry=command.industry,
                    company_size=command.company_size,
                    status=TenantStatus.pending,
                )
            )

            user = await self.uow.users.create(
                self._new_user(command, email, tenant.id, Role.company_super_admin)
            )
            request = await self.uow.approval_requests.create(
                ApprovalRequest(
                    user_id=user.id,
                    tenant_id=tenant.id,
                    requested_role=Role.company_super_admin,
                    request_type=RequestType.new_signup,
                )
            )

            await self.audit.record(
                "company_registered",
                tenant_id=tenant.id,
                resource_type="tenant",
                resource_id=tenant.id,
                metadata={"domain": domain, "email": email, "approval_request_id": str(request.id)},
            )

            await self.uow.commit()

        logger.info(f"Company {domain} registered, pending approval")
        return Return.ok(
            self._response(user, request, "Company registration submitted for approval")
        )

    async def _self_register_member(
        self, command: MemberRegistrationCommand
    ) -> Result[RegistrationResponse]:
        if command.role not in SELF_REGISTERABLE_ROLES:
            return Return.err(
                Error(VALIDATION_FAILED, "Role must be employee or company_admin")
            )
        if check_domain(command.company_domain) is not None:
            return Return.err(Error(VALIDATION_FAILED, "Invalid company domain"))

        email = normalize_email(command.email)

        async with self.uow:
            tenant = await self.uow.tenants.get_by_domain(normalize_domain(command.company_domain))
            if tenant is None or tenant.status != TenantStatus.active:
                return Return.err(Error(NOT_FOUND, "Company not found"))

            if await self.uow.users.get_by_tenant_and_email(tenant.id, email) is not None:
                return Return.err(Error(CONFLICT, "Email already registered in this company"))

            user = await self.uow.users.create(
                self._new_user(command, email, tenant.id, command.role)
            )
            request = await self.uow.approval_requests.create(
                ApprovalRequest(
                    user_id=user.id,
                    tenant_id=tenant.id,
                    requested_role=command.role,
                    request_type=RequestType.new_signup,
                )
            )

            await self.audit.record(
                "member_registered",
                tenant_id=tenant.id,
                resource_type="user",
                resource_id=user.id,
                metadata={"email": email, "role": command.role.value},
            )

            await self.uow.commit()

        logger.info(f"Member {email} registered as {command.role.value}, pending approval")
        return Return.ok(self._response(user, request, "Registration submitted for approval"))

    async def _create_by_admin(
        self, command: MemberRegistrationCommand, actor: TokenClaims
    ) -> Result[RegistrationResponse]:
        if command.role not in TENANT_ROLES:
            return Return.err(Error(VALIDATION_FAILED, "Role must be a company role"))

        if actor.is_platform:
            if command.tenant_id is None:
                return Return.err(Error(VALIDATION_FAILED, "tenant_id is required"))
            target_tenant_id = command.tenant_id
        else:
            target_tenant_id = actor.tenant_id

        email = normalize_email(command.email)

        async with self.uow:
            decision = authorize_management(
                actor.role, actor.tenant_id, command.role, target_tenant_id
            )
            if not decision:
                logger.warning(
                    f"Principal creation denied for {actor.user_id}: {decision.reason.value}"
                )
                await self.audit.record(
                    "registration_denied",
                    actor_id=actor.user_id,
                    tenant_id=actor.tenant_id,
                    metadata={"requested_role": command.role.value, "reason": decision.reason.value},
                )
                await self.uow.commit()
                return Return.err(
                    Error(FORBIDDEN, "Not allowed to create this principal", reason=decision.reason.value)
                )

            tenant = await self.uow.tenants.get_by_id(target_tenant_id)
            if tenant is None:
                return Return.err(Error(NOT_FOUND, "Company not found"))
            if tenant.status != TenantStatus.active:
                return Return.err(Error(VALIDATION_FAILED, "Company is not active"))

            if await self.uow.users.get_by_tenant_and_email(tenant.id, email) is not None:
                return Return.err(Error(CONFLICT, "Email already registered in this company"))

            user = self._new_user(command, email, tenant.id, command.role)
            request = None

            if command.role == Role.employee:
                # Creator already holds the authority to approve an employee
                user.approval_status = ApprovalStatus.approved
                user.is_active = True
                user.approved_by = actor.user_id
                user.approved_at = datetime.now(UTC)
                user = await self.uow.users.create(user)
            else:
                user = await self.uow.users.create(user)
                request = await self.uow.approval_requests.create(
                    ApprovalRequest(
                        user_id=user.id,
                        tenant_id=tenant.id,
                        requested_role=command.role,
                        request_type=RequestType.admin_created,
                    )
                )

            await self.audit.record(
                "user_created",
                actor_id=actor.user_id,
                tenant_id=tenant.id,
                resource_type="user",
                resource_id=user.id,
                metadata={
                    "email": email,
                    "role": command.role.value,
                    "approval_status": user.approval_status.value,
                },
            )

            await self.uow.commit()

        logger.info(
            f"User {email} created as {command.role.value} by {actor.user_id} "
            f"({user.approval_status.value})"
        )
        message = "User created" if request is None else "User created, pending approval"
        return Return.ok(self._response(user, request, message))

    def _new_user(self, command, email, tenant_id, role: Role) -> User:
        return User(
            tenant_id=tenant_id,
            email=email,
            password_hash=self.credentials.hash_password(command.password),
            first_name=command.first_name.strip(),
            last_name=command.last_name.strip(),
            phone=command.phone,
            role=role,
            is_active=False,
            approval_status=ApprovalStatus.pending,
        )

    @staticmethod
    def _response(
        user: User, request: Optional[ApprovalRequest], message: str
    ) -> RegistrationResponse:
        return RegistrationResponse(
            user_id=str(user.id),
            tenant_id=str(user.tenant_id),
            role=user.role.value,
            approval_status=user.approval_status.value,
            approval_request_id=str(request.id) if request else None,
            message=message,
        )
