"""
Role Hierarchy & Authorization Engine

Pure decision functions: given an actor (role + tenant), a capability and
the tenant that owns the target resource, decide allow or deny. Callers are
responsible for auditing the decision.

Rules:
- Rank: deny "insufficient_role" unless rank(actor) >= rank(capability.min_role)
- Scope: TENANT_SCOPED capabilities deny "tenant_mismatch" when tenants differ,
  unless the actor ranks at or above platform_admin
- Target role: reviewing/managing a principal additionally requires the
  target role to be in the actor's manageable set
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Mapping, Optional
from uuid import UUID

from src.domain.entities.enums import Role

ROLE_RANK: Mapping[Role, int] = {
    Role.employee: 1,
    Role.company_admin: 2,
    Role.company_super_admin: 3,
    Role.platform_admin: 4,
    Role.platform_super_admin: 5,
}

PLATFORM_ROLES: FrozenSet[Role] = frozenset(
    {Role.platform_admin, Role.platform_super_admin}
)
TENANT_ROLES: FrozenSet[Role] = frozenset(
    {Role.company_super_admin, Role.company_admin, Role.employee}
)

# Roles an actor may review (approve/reject/view requests for) and manage
# (create, re-role, deactivate). Platform tiers cover every tenant role.
MANAGEABLE_ROLES: Mapping[Role, FrozenSet[Role]] = {
    Role.employee: frozenset(),
    Role.company_admin: frozenset({Role.employee}),
    Role.company_super_admin: frozenset({Role.employee, Role.company_admin}),
    Role.platform_admin: TENANT_ROLES,
    Role.platform_super_admin: TENANT_ROLES,
}


def rank(role: Role) -> int:
    return ROLE_RANK[Role(role)]


def is_platform_role(role: Role) -> bool:
    return rank(role) >= ROLE_RANK[Role.platform_admin]


def manageable_roles(role: Role) -> FrozenSet[Role]:
    return MANAGEABLE_ROLES[Role(role)]


class ScopeMode(str, Enum):
    GLOBAL = "GLOBAL"
    TENANT_SCOPED = "TENANT_SCOPED"


class DenyReason(str, Enum):
    insufficient_role = "insufficient_role"
    tenant_mismatch = "tenant_mismatch"
    role_cannot_approve_target_role = "role_cannot_approve_target_role"
    role_cannot_manage_target_role = "role_cannot_manage_target_role"


@dataclass(frozen=True)
class Capability:
    name: str
    min_role: Role
    scope: ScopeMode


class Capabilities:
    """Named permission checks used across the service"""

    MANAGE_PLATFORM_ADMINS = Capability(
        "manage_platform_admins", Role.platform_super_admin, ScopeMode.GLOBAL
    )
    MANAGE_TENANTS = Capability("manage_tenants", Role.platform_admin, ScopeMode.GLOBAL)
    MANAGE_PRINCIPALS = Capability(
        "manage_principals", Role.company_admin, ScopeMode.TENANT_SCOPED
    )
    REVIEW_APPROVALS = Capability(
        "review_approvals", Role.company_admin, ScopeMode.TENANT_SCOPED
    )
    VIEW_DIRECTORY = Capability(
        "view_directory", Role.company_admin, ScopeMode.TENANT_SCOPED
    )
    VIEW_AUDIT_LOG = Capability(
        "view_audit_log", Role.company_admin, ScopeMode.TENANT_SCOPED
    )


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[DenyReason] = None

    @classmethod
    def allow(cls) -> "Decision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> "Decision":
        return cls(allowed=False, reason=reason)

    def __bool__(self) -> bool:
        return self.allowed


def authorize(
    actor_role: Role,
    actor_tenant: Optional[UUID],
    capability: Capability,
    target_tenant: Optional[UUID] = None,
) -> Decision:
    """
    Decide whether an actor holds a capability over a target tenant.

    Args:
        actor_role: Role from the verified token
        actor_tenant: Tenant from the verified token (None for platform tiers)
        capability: Required capability
        target_tenant: Tenant owning the target resource (ignored for GLOBAL)

    Returns:
        Decision.allow() or Decision.deny(reason)
    """
    if rank(actor_role) < rank(capability.min_role):
        return Decision.deny(DenyReason.insufficient_role)

    if capability.scope is ScopeMode.TENANT_SCOPED and not is_platform_role(actor_role):
        if actor_tenant is None or actor_tenant != target_tenant:
            return Decision.deny(DenyReason.tenant_mismatch)

    return Decision.allow()


def authorize_review(
    actor_role: Role,
    actor_tenant: Optional[UUID],
    requested_role: Role,
    target_tenant: Optional[UUID],
) -> Decision:
    """
    Visibility and approval eligibility for an approval request.

    Seeing a request and deciding it are the same predicate.
    """
    decision = authorize(
        actor_role, actor_tenant, Capabilities.REVIEW_APPROVALS, target_tenant
    )
    if not decision.allowed:
        return decision

    if Role(requested_role) not in manageable_roles(actor_role):
        return Decision.deny(DenyReason.role_cannot_approve_target_role)

    return Decision.allow()


def authorize_management(
    actor_role: Role,
    actor_tenant: Optional[UUID],
    target_role: Role,
    target_tenant: Optional[UUID],
) -> Decision:
    """Whether an actor may create, re-role or (de)activate a principal of target_role"""
    decision = authorize(
        actor_role, actor_tenant, Capabilities.MANAGE_PRINCIPALS, target_tenant
    )
    if not decision.allowed:
        return decision

    if Role(target_role) not in manageable_roles(actor_role):
        return Decision.deny(DenyReason.role_cannot_manage_target_role)

    return Decision.allow()


def authorize_claims(claims, capability: Capability, target_tenant: Optional[UUID] = None) -> Decision:
    """authorize() for decoded token claims (anything with .role and .tenant_id)"""
    return authorize(claims.role, claims.tenant_id, capability, target_tenant)
