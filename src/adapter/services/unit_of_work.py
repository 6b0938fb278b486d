from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.approval_request_repository import ApprovalRequestRepository
from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.platform_admin_repository import PlatformAdminRepository
from src.adapter.repositories.tenant_repository import TenantRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.tenants = TenantRepository(self.session)
        self.platform_admins = PlatformAdminRepository(self.session)
        self.approval_requests = ApprovalRequestRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
