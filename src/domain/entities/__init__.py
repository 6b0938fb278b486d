"""
Identity Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ApprovalStatus,
    RequestType,
    Role,
    TenantStatus,
)

# Export all entities
from .tenant import Tenant
from .user import User
from .platform_admin import PlatformAdmin
from .approval_request import ApprovalRequest
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "ApprovalStatus",
    "RequestType",
    "Role",
    "TenantStatus",
    # Entities
    "Tenant",
    "User",
    "PlatformAdmin",
    "ApprovalRequest",
    "AuditEvent",
]
