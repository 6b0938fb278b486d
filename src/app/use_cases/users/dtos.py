"""
User Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import PlatformAdmin, Tenant, User


class UserInfo(BaseModel):
    """A principal as shown to admins and to itself"""

    id: str
    tenant_id: Optional[str] = None
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: str
    is_active: bool
    approval_status: str
    last_login_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            tenant_id=str(user.tenant_id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            role=user.role.value,
            is_active=user.is_active,
            approval_status=user.approval_status.value,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
        )

    @classmethod
    def from_platform_admin(cls, admin: PlatformAdmin) -> "UserInfo":
        # Platform staff never go through approval
        return cls(
            id=str(admin.id),
            email=admin.email,
            first_name=admin.first_name,
            last_name=admin.last_name,
            role=admin.role.value,
            is_active=admin.is_active,
            approval_status="approved",
            last_login_at=admin.last_login_at,
            created_at=admin.created_at,
        )


class TenantContext(BaseModel):
    id: str
    name: str
    domain: str
    status: str

    @classmethod
    def from_tenant(cls, tenant: Tenant) -> "TenantContext":
        return cls(
            id=str(tenant.id), name=tenant.name, domain=tenant.domain, status=tenant.status.value
        )


class MeResponse(BaseModel):
    """GET /me response payload"""

    user: UserInfo
    tenant: Optional[TenantContext] = None


class UserPage(BaseModel):
    items: List[UserInfo]
    total: int
    page: int
    limit: int


class ChangeRoleResponse(BaseModel):
    user_id: str
    old_role: str
    new_role: str


class SetUserActiveResponse(BaseModel):
    user_id: str
    is_active: bool
