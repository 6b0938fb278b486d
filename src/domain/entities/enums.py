"""
Identity Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class Role(str, Enum):
    """Principal role, highest privilege first (ranks live in domain.authorization)"""

    platform_super_admin = "platform_super_admin"
    platform_admin = "platform_admin"
    company_super_admin = "company_super_admin"
    company_admin = "company_admin"
    employee = "employee"


class TenantStatus(str, Enum):
    """Company lifecycle status"""

    pending = "pending"
    active = "active"
    suspended = "suspended"


class ApprovalStatus(str, Enum):
    """Approval state of a principal and of its approval request"""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class RequestType(str, Enum):
    """How an approval request came to exist"""

    new_signup = "new_signup"
    admin_created = "admin_created"
