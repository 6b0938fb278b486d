from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import PlatformAdmin


class IPlatformAdminRepository(ABC):
    """PlatformAdmin repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, admin_id: UUID) -> Optional[PlatformAdmin]:
        """Get platform admin by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[PlatformAdmin]:
        """Get platform admin by (lower-cased) email"""
        pass

    @abstractmethod
    async def create(self, admin: PlatformAdmin) -> PlatformAdmin:
        """Create a new platform admin"""
        pass

    @abstractmethod
    async def update(self, admin: PlatformAdmin) -> PlatformAdmin:
        """Update existing platform admin"""
        pass
