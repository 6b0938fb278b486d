from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, EmailStr, Field

from src.api.error import ClientError, raise_for_error
from src.app.services.credential_verifier import CredentialVerifier
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    LoginCommand,
    LoginPath,
    LoginResponse,
    LoginUseCase,
    RefreshTokenResponse,
    RefreshTokenUseCase,
)
from src.depends import (
    get_credential_verifier,
    get_token_service,
    get_unit_of_work,
    security,
)
from src.domain.errors import TOKEN_INVALID
from src.libs.result import Error

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    company_domain names the company for every path except platform.
    """

    email: EmailStr = Field(..., description="Principal email address")
    password: str = Field(..., min_length=1, description="Password")
    company_domain: Optional[str] = Field(
        None, max_length=255, description="Company domain (omit for platform login)"
    )


async def _login(
    path: LoginPath,
    request: LoginRequest,
    uow: UnitOfWork,
    tokens: TokenService,
    credentials: CredentialVerifier,
) -> LoginResponse:
    command = LoginCommand.for_path(
        path, request.email, request.password, request.company_domain
    )
    result = await LoginUseCase(uow, tokens, credentials).execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
    credentials: CredentialVerifier = Depends(get_credential_verifier),
):
    """
    Company Login (any company role)

    Raises:
        - 401 Unauthorized: INVALID_CREDENTIALS (one answer for every failure)
        - 422 Unprocessable Entity: Invalid input or missing company_domain
    """
    return await _login(LoginPath.company, request, uow, tokens, credentials)


@router.post(
    "/login/{login_path}", status_code=status.HTTP_200_OK, response_model=LoginResponse
)
async def login_with_path(
    login_path: LoginPath,
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
    credentials: CredentialVerifier = Depends(get_credential_verifier),
):
    """
    Role-specific Login

    login_path is one of platform, company_super_admin, company_admin,
    employee or company; it decides which roles may log in here.

    Raises:
        - 401 Unauthorized: INVALID_CREDENTIALS
        - 422 Unprocessable Entity: Invalid input or missing company_domain
    """
    return await _login(login_path, request, uow, tokens, credentials)


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse)
async def refresh(
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Refresh Access Token

    Exchanges a still-valid bearer token for a fresh one carrying the
    principal's current role.

    Raises:
        - 401 Unauthorized: TOKEN_INVALID / TOKEN_EXPIRED
        - 403 Forbidden: Principal deactivated, unapproved or company not active
    """
    if bearer is None:
        raise ClientError(
            Error(TOKEN_INVALID, "Missing bearer token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    result = await RefreshTokenUseCase(uow, tokens).execute(bearer.credentials)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class VerifyTokenRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Bearer token to check")


class VerifyTokenResponse(BaseModel):
    valid: bool
    user_id: str
    tenant_id: Optional[str]
    role: str
    issued_at: datetime
    expires_at: datetime


@router.post(
    "/verify-token", status_code=status.HTTP_200_OK, response_model=VerifyTokenResponse
)
async def verify_token(
    request: VerifyTokenRequest, tokens: TokenService = Depends(get_token_service)
):
    """
    Verify Token

    Used by the business-line services to validate a bearer token. Never
    touches the store.

    Raises:
        - 401 Unauthorized: TOKEN_INVALID / TOKEN_EXPIRED
    """
    result = tokens.verify(request.token)

    if result.is_err():
        raise_for_error(result.error)

    claims = result.value
    return VerifyTokenResponse(
        valid=True,
        user_id=str(claims.user_id),
        tenant_id=str(claims.tenant_id) if claims.tenant_id else None,
        role=claims.role.value,
        issued_at=claims.issued_at,
        expires_at=claims.expires_at,
    )
