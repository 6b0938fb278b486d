"""
Admin API Routes - Platform Administration Endpoints

Authenticated with platform staff bearer tokens.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_for_error
from src.app.services.credential_verifier import CredentialVerifier
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import (
    CreateTenantCommand,
    CreateTenantUseCase,
    ListTenantsUseCase,
    PlatformAdminResponse,
    RegisterPlatformAdminCommand,
    RegisterPlatformAdminUseCase,
    SetTenantStatusUseCase,
    TenantPage,
    TenantResponse,
    TenantStatusResponse,
    UpdateTenantCommand,
    UpdateTenantUseCase,
)
from src.depends import get_credential_verifier, get_current_user, get_unit_of_work
from src.domain.entities import TenantStatus

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/tenants", status_code=status.HTTP_201_CREATED, response_model=TenantResponse)
async def create_tenant(
    request: CreateTenantCommand,
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Tenant

    Requires: platform_admin or above

    Raises:
        - 403 Forbidden: insufficient_role
        - 409 Conflict: Company domain already registered
        - 422 Unprocessable Entity: Invalid domain or name
    """
    result = await CreateTenantUseCase(uow).execute(current_user, request)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/tenants", status_code=status.HTTP_200_OK, response_model=TenantPage)
async def list_tenants(
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, max_length=255, description="Match on name or domain"),
):
    """
    List Tenants

    Requires: platform_admin or above

    Raises:
        - 403 Forbidden: insufficient_role
    """
    result = await ListTenantsUseCase(uow).execute(
        current_user, page=page, limit=limit, search=search
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch(
    "/tenants/{tenant_id}", status_code=status.HTTP_200_OK, response_model=TenantResponse
)
async def update_tenant(
    tenant_id: UUID,
    request: UpdateTenantCommand,
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Tenant

    Requires: platform_admin or above

    Raises:
        - 403 Forbidden: insufficient_role
        - 404 Not Found: Unknown tenant
        - 409 Conflict: Company domain already registered
        - 422 Unprocessable Entity: Invalid domain or empty name
    """
    result = await UpdateTenantUseCase(uow).execute(current_user, tenant_id, request)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


async def _set_status(uow, actor, tenant_id, tenant_status):
    result = await SetTenantStatusUseCase(uow).execute(actor, tenant_id, tenant_status)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/tenants/{tenant_id}/suspend",
    status_code=status.HTTP_200_OK,
    response_model=TenantStatusResponse,
)
async def suspend_tenant(
    tenant_id: UUID,
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Suspend Tenant

    Blocks login and refresh for every principal of the company.

    Raises:
        - 403 Forbidden: insufficient_role
        - 404 Not Found: Unknown tenant
    """
    return await _set_status(uow, current_user, tenant_id, TenantStatus.suspended)


@router.post(
    "/tenants/{tenant_id}/activate",
    status_code=status.HTTP_200_OK,
    response_model=TenantStatusResponse,
)
async def activate_tenant(
    tenant_id: UUID,
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Activate Tenant

    Raises:
        - 403 Forbidden: insufficient_role
        - 404 Not Found: Unknown tenant
    """
    return await _set_status(uow, current_user, tenant_id, TenantStatus.active)


@router.post(
    "/platform-admins",
    status_code=status.HTTP_201_CREATED,
    response_model=PlatformAdminResponse,
)
async def register_platform_admin(
    request: RegisterPlatformAdminCommand,
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    credentials: CredentialVerifier = Depends(get_credential_verifier),
):
    """
    Register Platform Admin

    Requires: platform_super_admin

    Raises:
        - 403 Forbidden: insufficient_role
        - 409 Conflict: Email already registered
        - 422 Unprocessable Entity: Invalid input or weak password
    """
    result = await RegisterPlatformAdminUseCase(uow, credentials).execute(current_user, request)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
