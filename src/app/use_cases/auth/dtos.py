"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from enum import Enum
from typing import FrozenSet, Mapping, Optional

from pydantic import BaseModel

from src.domain.authorization import PLATFORM_ROLES, TENANT_ROLES
from src.domain.entities import Role


class LoginPath(str, Enum):
    """Login entry points; each one admits a fixed set of roles"""

    platform = "platform"
    company_super_admin = "company_super_admin"
    company_admin = "company_admin"
    employee = "employee"
    company = "company"


ROLES_BY_LOGIN_PATH: Mapping[LoginPath, FrozenSet[Role]] = {
    LoginPath.platform: PLATFORM_ROLES,
    LoginPath.company_super_admin: frozenset({Role.company_super_admin}),
    LoginPath.company_admin: frozenset({Role.company_admin}),
    LoginPath.employee: frozenset({Role.employee}),
    LoginPath.company: TENANT_ROLES,
}


# ============================================================================
# Command DTOs
# ============================================================================


class LoginCommand(BaseModel):
    """
    Login intent.

    company_domain is None for the platform path; allowed_roles is the
    role pre-filter declared by the login path.
    """

    email: str
    password: str
    company_domain: Optional[str] = None
    allowed_roles: FrozenSet[Role]

    @classmethod
    def for_path(
        cls,
        path: LoginPath,
        email: str,
        password: str,
        company_domain: Optional[str] = None,
    ) -> "LoginCommand":
        return cls(
            email=email,
            password=password,
            company_domain=None if path is LoginPath.platform else company_domain,
            allowed_roles=ROLES_BY_LOGIN_PATH[path],
        )


# ============================================================================
# Response DTOs
# ============================================================================


class PrincipalInfo(BaseModel):
    """Authenticated principal in login responses"""

    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    tenant_id: Optional[str] = None


class TenantInfo(BaseModel):
    """Tenant information in authentication responses"""

    id: str
    name: str
    domain: str


class LoginResponse(BaseModel):
    """Response for user login use case"""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: PrincipalInfo
    tenant: Optional[TenantInfo] = None


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
