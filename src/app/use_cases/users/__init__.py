"""
User Management Use Cases
"""

from .load_context_use_case import LoadContextUseCase
from .change_role_use_case import ChangeRoleUseCase
from .set_user_active_use_case import SetUserActiveUseCase
from .list_users_use_case import ListUsersUseCase
from .dtos import (
    ChangeRoleResponse,
    MeResponse,
    SetUserActiveResponse,
    TenantContext,
    UserInfo,
    UserPage,
)

__all__ = [
    "LoadContextUseCase",
    "ChangeRoleUseCase",
    "SetUserActiveUseCase",
    "ListUsersUseCase",
    "ChangeRoleResponse",
    "MeResponse",
    "SetUserActiveResponse",
    "TenantContext",
    "UserInfo",
    "UserPage",
]
