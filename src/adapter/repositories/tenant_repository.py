from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.tenant_repository import ITenantRepository
from src.domain.entities import Tenant, User


class TenantRepository(ITenantRepository):
    """Tenant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_domain(self, domain: str) -> Optional[Tenant]:
        """Get tenant by (lower-cased) domain"""
        stmt = select(Tenant).where(Tenant.domain == domain.lower())
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def list_with_user_counts(
        self, search: Optional[str] = None, offset: int = 0, limit: int = 20
    ) -> Tuple[List[Tuple[Tenant, int]], int]:
        """List tenants with their user counts, newest first"""
        stmt = (
            select(Tenant, func.count(User.id))
            .outerjoin(User, User.tenant_id == Tenant.id)
            .group_by(Tenant.id)
        )
        count_stmt = select(func.count()).select_from(Tenant)

        if search and search.strip():
            pattern = f"%{search.strip().lower()}%"
            matches = or_(func.lower(Tenant.name).like(pattern), col(Tenant.domain).like(pattern))
            stmt = stmt.where(matches)
            count_stmt = count_stmt.where(matches)

        stmt = stmt.order_by(Tenant.created_at.desc(), Tenant.id).offset(offset).limit(limit)

        result = await self.session.exec(stmt)
        total = await self.session.exec(count_stmt)
        return [(tenant, user_count) for tenant, user_count in result.all()], total.one()
