"""
Authentication Use Cases

All authentication-related business logic.
"""

from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .dtos import (
    ROLES_BY_LOGIN_PATH,
    LoginCommand,
    LoginPath,
    LoginResponse,
    PrincipalInfo,
    RefreshTokenResponse,
    TenantInfo,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RefreshTokenUseCase",
    # DTOs - Commands
    "LoginCommand",
    "LoginPath",
    "ROLES_BY_LOGIN_PATH",
    # DTOs - Responses
    "LoginResponse",
    "RefreshTokenResponse",
    # DTOs - Nested Models
    "PrincipalInfo",
    "TenantInfo",
]
