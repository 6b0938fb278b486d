from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.app.services.credential_verifier import CredentialVerifier
from src.app.services.token_service import TokenClaims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.registrations import (
    MemberRegistrationCommand,
    RegistrationResponse,
    SubmitRegistrationUseCase,
)
from src.app.use_cases.users import (
    ChangeRoleResponse,
    ChangeRoleUseCase,
    ListUsersUseCase,
    LoadContextUseCase,
    MeResponse,
    SetUserActiveResponse,
    SetUserActiveUseCase,
    UserPage,
)
from src.depends import get_credential_verifier, get_current_user, get_unit_of_work
from src.domain.entities import ApprovalStatus, Role

router = APIRouter(tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Load Current User & Tenant Context

    Returns current user information and tenant context based on the token.

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 404 Not Found: Principal no longer exists
    """
    result = await LoadContextUseCase(uow).execute(current_user)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class CreateUserRequest(BaseModel):
    """Admin-created principal"""

    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    role: Role = Role.employee
    tenant_id: Optional[UUID] = Field(None, description="Platform staff only: target company")


@router.post("/users", status_code=status.HTTP_201_CREATED, response_model=RegistrationResponse)
async def create_user(
    request: CreateUserRequest,
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    credentials: CredentialVerifier = Depends(get_credential_verifier),
):
    """
    Create Principal

    Employees are active immediately; higher roles wait for approval.

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: Caller cannot create this role
        - 409 Conflict: Email already registered in the company
        - 422 Unprocessable Entity: Invalid input or weak password
    """
    command = MemberRegistrationCommand(**request.model_dump())

    result = await SubmitRegistrationUseCase(uow, credentials).execute(command, actor=current_user)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/users", status_code=status.HTTP_200_OK, response_model=UserPage)
async def list_users(
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    approval_status: Optional[ApprovalStatus] = Query(None),
    tenant_id: Optional[UUID] = Query(None, description="Platform staff only: narrow to one company"),
):
    """
    User Directory

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: insufficient_role
    """
    result = await ListUsersUseCase(uow).execute(
        current_user,
        page=page,
        limit=limit,
        approval_status=approval_status,
        tenant_id=tenant_id,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ChangeRoleRequest(BaseModel):
    """Change role request payload"""

    role: str = Field(..., description="company_super_admin, company_admin or employee")


@router.patch(
    "/users/{user_id}/role", status_code=status.HTTP_200_OK, response_model=ChangeRoleResponse
)
async def change_role(
    user_id: UUID,
    request: ChangeRoleRequest,
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change User Role

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: Caller cannot manage the current or new role, or targets itself
        - 404 Not Found: User unknown or outside the caller's company
        - 422 Unprocessable Entity: Invalid role
    """
    result = await ChangeRoleUseCase(uow).execute(current_user, user_id, request.role)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class SetStatusRequest(BaseModel):
    is_active: bool


@router.patch(
    "/users/{user_id}/status",
    status_code=status.HTTP_200_OK,
    response_model=SetUserActiveResponse,
)
async def set_status(
    user_id: UUID,
    request: SetStatusRequest,
    current_user: TokenClaims = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Activate / Deactivate User

    A deactivated user can no longer log in or refresh.

    Raises:
        - 401 Unauthorized: Invalid or expired token
        - 403 Forbidden: Caller cannot manage this user, or targets itself
        - 404 Not Found: User unknown or outside the caller's company
    """
    result = await SetUserActiveUseCase(uow).execute(current_user, user_id, request.is_active)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
