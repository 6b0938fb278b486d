"""
Platform Administration DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import Role, Tenant


class CreateTenantCommand(BaseModel):
    name: str
    domain: str
    industry: Optional[str] = None
    company_size: Optional[str] = None


class TenantResponse(BaseModel):
    id: str
    name: str
    domain: str
    industry: Optional[str] = None
    company_size: Optional[str] = None
    status: str
    created_at: datetime

    @classmethod
    def from_tenant(cls, tenant: Tenant) -> "TenantResponse":
        return cls(
            id=str(tenant.id),
            name=tenant.name,
            domain=tenant.domain,
            industry=tenant.industry,
            company_size=tenant.company_size,
            status=tenant.status.value,
            created_at=tenant.created_at,
        )


class UpdateTenantCommand(BaseModel):
    """Fields left as None keep their current value"""

    name: Optional[str] = None
    domain: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None


class TenantSummary(TenantResponse):
    user_count: int


class TenantPage(BaseModel):
    items: List[TenantSummary]
    total: int
    page: int
    limit: int


class TenantStatusResponse(BaseModel):
    tenant_id: str
    status: str


class RegisterPlatformAdminCommand(BaseModel):
    email: str
    password: str
    first_name: str
    last_name: str
    role: Role = Role.platform_admin


class PlatformAdminResponse(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool
