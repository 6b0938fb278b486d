from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.platform_admin_repository import IPlatformAdminRepository
from src.domain.entities import PlatformAdmin


class PlatformAdminRepository(IPlatformAdminRepository):
    """PlatformAdmin repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, admin_id: UUID) -> Optional[PlatformAdmin]:
        stmt = select(PlatformAdmin).where(PlatformAdmin.id == admin_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[PlatformAdmin]:
        stmt = select(PlatformAdmin).where(PlatformAdmin.email == email.lower())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, admin: PlatformAdmin) -> PlatformAdmin:
        self.session.add(admin)
        await self.session.flush()
        await self.session.refresh(admin)
        return admin

    async def update(self, admin: PlatformAdmin) -> PlatformAdmin:
        self.session.add(admin)
        await self.session.flush()
        await self.session.refresh(admin)
        return admin
