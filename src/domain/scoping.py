"""
Tenant Scoping

The one place that decides which tenant's rows an actor may touch.
Repositories apply it to queries via src.adapter.repositories.scoping;
use cases apply it to single loaded records via TenantScope.allows().
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from src.domain.authorization import is_platform_role
from src.domain.entities.enums import Role


@dataclass(frozen=True)
class TenantScope:
    """
    Row filter derived from an actor.

    - unrestricted=True: platform tier, no tenant filter
    - otherwise: only rows whose tenant_id equals tenant_id
    """

    tenant_id: Optional[UUID] = None
    unrestricted: bool = False

    @classmethod
    def for_actor(cls, role: Role, tenant_id: Optional[UUID]) -> "TenantScope":
        if is_platform_role(role):
            return cls(tenant_id=None, unrestricted=True)
        if tenant_id is None:
            # A tenant filter on NULL would match platform rows
            raise ValueError(f"Role {Role(role).value} requires a tenant")
        return cls(tenant_id=tenant_id, unrestricted=False)

    @classmethod
    def for_claims(cls, claims) -> "TenantScope":
        return cls.for_actor(claims.role, claims.tenant_id)

    @classmethod
    def single(cls, tenant_id: UUID) -> "TenantScope":
        return cls(tenant_id=tenant_id, unrestricted=False)

    def allows(self, resource_tenant_id: Optional[UUID]) -> bool:
        if self.unrestricted:
            return True
        return resource_tenant_id is not None and resource_tenant_id == self.tenant_id

    def narrow(self, tenant_id: Optional[UUID]) -> "TenantScope":
        """
        Optional tenant filter requested by the caller.

        Platform actors may narrow to any tenant; tenant actors stay pinned
        to their own tenant whatever they ask for.
        """
        if tenant_id is None or not self.unrestricted:
            return self
        return TenantScope.single(tenant_id)
