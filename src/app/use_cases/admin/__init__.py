"""
Platform Administration Use Cases

Tenant lifecycle and platform staff management.
"""

from .create_tenant_use_case import CreateTenantUseCase
from .list_tenants_use_case import ListTenantsUseCase
from .update_tenant_use_case import UpdateTenantUseCase
from .set_tenant_status_use_case import SetTenantStatusUseCase
from .register_platform_admin_use_case import RegisterPlatformAdminUseCase
from .dtos import (
    CreateTenantCommand,
    PlatformAdminResponse,
    RegisterPlatformAdminCommand,
    TenantPage,
    TenantResponse,
    TenantStatusResponse,
    TenantSummary,
    UpdateTenantCommand,
)

__all__ = [
    "CreateTenantUseCase",
    "ListTenantsUseCase",
    "UpdateTenantUseCase",
    "SetTenantStatusUseCase",
    "RegisterPlatformAdminUseCase",
    "CreateTenantCommand",
    "PlatformAdminResponse",
    "RegisterPlatformAdminCommand",
    "TenantPage",
    "TenantResponse",
    "TenantStatusResponse",
    "TenantSummary",
    "UpdateTenantCommand",
]
