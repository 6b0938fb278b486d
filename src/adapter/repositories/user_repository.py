from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.scoping import apply_tenant_scope
from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import ApprovalStatus, User
from src.domain.scoping import TenantScope


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_tenant_and_email(self, tenant_id: UUID, email: str) -> Optional[User]:
        """Get user by tenant and (normalized) email"""
        stmt = select(User).where(User.tenant_id == tenant_id, User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def list_scoped(
        self,
        scope: TenantScope,
        approval_status: Optional[ApprovalStatus] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[User], int]:
        """List users visible within a tenant scope, newest first"""
        stmt = apply_tenant_scope(select(User), User.tenant_id, scope)
        count_stmt = apply_tenant_scope(
            select(func.count()).select_from(User), User.tenant_id, scope
        )
        if approval_status is not None:
            stmt = stmt.where(User.approval_status == approval_status)
            count_stmt = count_stmt.where(User.approval_status == approval_status)

        stmt = stmt.order_by(User.created_at.desc()).offset(offset).limit(limit)

        result = await self.session.exec(stmt)
        total = await self.session.exec(count_stmt)
        return list(result.all()), total.one()
