from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import Tenant


class ITenantRepository(ABC):
    """Tenant repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        pass

    @abstractmethod
    async def get_by_domain(self, domain: str) -> Optional[Tenant]:
        """Get tenant by (lower-cased) domain"""
        pass

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        pass

    @abstractmethod
    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        pass

    @abstractmethod
    async def list_with_user_counts(
        self, search: Optional[str] = None, offset: int = 0, limit: int = 20
    ) -> Tuple[List[Tuple[Tenant, int]], int]:
        """
        List tenants with their user counts, newest first.

        Args:
            search: Case-insensitive match on name or domain
            offset: Rows to skip
            limit: Maximum rows to return

        Returns:
            Tuple of ([(tenant, user_count)], total matching tenants)
        """
        pass
