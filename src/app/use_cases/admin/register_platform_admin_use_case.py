"""
Use Case: Register Platform Admin

Only a platform_super_admin creates platform staff. The creator already
holds the top rank, so the new admin is active immediately.
"""

import logging

from sqlalchemy.exc import IntegrityError

from src.app.services.audit_recorder import AuditRecorder
from src.app.services.credential_verifier import CredentialVerifier
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.registrations.validation import check_principal_fields, normalize_email
from src.domain.authorization import PLATFORM_ROLES, Capabilities, authorize_claims
from src.domain.entities import PlatformAdmin
from src.domain.errors import CONFLICT, FORBIDDEN, VALIDATION_FAILED
from src.libs.result import Error, Result, Return
from .dtos import PlatformAdminResponse, RegisterPlatformAdminCommand

logger = logging.getLogger(__name__)


class RegisterPlatformAdminUseCase:
    def __init__(self, uow: UnitOfWork, credentials: CredentialVerifier):
        self.uow = uow
        self.credentials = credentials
        self.audit = AuditRecorder(uow)

    async def execute(
        self, actor: TokenClaims, command: RegisterPlatformAdminCommand
    ) -> Result[PlatformAdminResponse]:
        decision = authorize_claims(actor, Capabilities.MANAGE_PLATFORM_ADMINS)
        if not decision:
            logger.warning(f"Platform admin creation denied for {actor.user_id}")
            return Return.err(
                Error(FORBIDDEN, "Not allowed to manage platform admins", reason=decision.reason.value)
            )

        problem = check_principal_fields(
            self.credentials,
            command.email,
            command.password,
            command.first_name,
            command.last_name,
        )
        if problem is None and command.role not in PLATFORM_ROLES:
            problem = "role must be platform_admin or platform_super_admin"
        if problem:
            return Return.err(Error(VALIDATION_FAILED, problem))

        email = normalize_email(command.email)

        try:
            async with self.uow:
                if await self.uow.platform_admins.get_by_email(email) is not None:
                    return Return.err(Error(CONFLICT, "Email already registered"))

                admin = await self.uow.platform_admins.create(
                    PlatformAdmin(
                        email=email,
                        password_hash=self.credentials.hash_password(command.password),
                        first_name=command.first_name.strip(),
                        last_name=command.last_name.strip(),
                        role=command.role,
                        is_active=True,
                    )
                )

                await self.audit.record(
                    "platform_admin_created",
                    actor_id=actor.user_id,
                    resource_type="platform_admin",
                    resource_id=admin.id,
                    metadata={"email": email, "role": command.role.value},
                )

                await self.uow.commit()
        except IntegrityError:
            return Return.err(Error(CONFLICT, "Email already registered"))

        logger.info(f"Platform admin {email} ({command.role.value}) created by {actor.user_id}")
        return Return.ok(
            PlatformAdminResponse(
                id=str(admin.id),
                email=admin.email,
                first_name=admin.first_name,
                last_name=admin.last_name,
                role=admin.role.value,
                is_active=admin.is_active,
            )
        )
