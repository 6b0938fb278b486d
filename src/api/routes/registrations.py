"""
Registration API Routes

Public self-registration endpoints. Admin-created principals go through
POST /users (see users.py).
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.app.services.credential_verifier import CredentialVerifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.registrations import (
    CompanySignupCommand,
    MemberRegistrationCommand,
    RegistrationResponse,
    SubmitRegistrationUseCase,
)
from src.depends import get_credential_verifier, get_unit_of_work
from src.domain.entities import Role

router = APIRouter(prefix="/registrations", tags=["Registrations"])


class CompanyRegistrationRequest(BaseModel):
    """
    Company registration HTTP request payload

    Creates a pending company together with its company_super_admin.
    """

    company_name: str = Field(..., min_length=1, max_length=255)
    company_domain: str = Field(..., min_length=3, max_length=255)
    industry: Optional[str] = Field(None, max_length=100)
    company_size: Optional[str] = Field(None, max_length=50)
    email: EmailStr = Field(..., description="Admin email address")
    password: str = Field(..., min_length=8, description="Password (min 8 chars)")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)


@router.post(
    "/company", status_code=status.HTTP_201_CREATED, response_model=RegistrationResponse
)
async def register_company(
    request: CompanyRegistrationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    credentials: CredentialVerifier = Depends(get_credential_verifier),
):
    """
    Company Self-Registration

    Raises:
        - 409 Conflict: Company domain already registered
        - 422 Unprocessable Entity: Invalid input or weak password
    """
    command = CompanySignupCommand(**request.model_dump())

    result = await SubmitRegistrationUseCase(uow, credentials).execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class MemberRegistrationRequest(BaseModel):
    """Member self-registration into an existing company"""

    company_domain: str = Field(..., min_length=3, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    role: Role = Field(Role.employee, description="employee or company_admin")


@router.post(
    "/member", status_code=status.HTTP_201_CREATED, response_model=RegistrationResponse
)
async def register_member(
    request: MemberRegistrationRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    credentials: CredentialVerifier = Depends(get_credential_verifier),
):
    """
    Member Self-Registration

    The new principal stays pending until a reviewer approves it.

    Raises:
        - 404 Not Found: No active company with that domain
        - 409 Conflict: Email already registered in the company
        - 422 Unprocessable Entity: Invalid input, weak password or role not allowed
    """
    command = MemberRegistrationCommand(**request.model_dump())

    result = await SubmitRegistrationUseCase(uow, credentials).execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
