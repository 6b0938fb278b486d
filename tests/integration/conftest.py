from typing import Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.credential_verifier import CredentialVerifier
from src.depends import get_credential_verifier, get_token_service, get_unit_of_work
from src.domain.entities import (
    ApprovalStatus,
    PlatformAdmin,
    Role,
    Tenant,
    TenantStatus,
    User,
)

DEFAULT_PASSWORD = "Secret123"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def credentials():
    return CredentialVerifier(rounds=4)


@pytest_asyncio.fixture
async def client(db_session, credentials):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_credential_verifier] = lambda: credentials

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class Seeder:
    """Writes fixtures straight into the store, bypassing the workflow"""

    def __init__(self, session: AsyncSession, credentials: CredentialVerifier):
        self.session = session
        self.credentials = credentials

    async def _save(self, entity):
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def tenant(
        self, domain: str, status: TenantStatus = TenantStatus.active, name: Optional[str] = None
    ) -> Tenant:
        return await self._save(
            Tenant(name=name or domain.split(".")[0].title(), domain=domain, status=status)
        )

    async def user(
        self,
        tenant: Tenant,
        email: str,
        role: Role = Role.employee,
        password: str = DEFAULT_PASSWORD,
        approval_status: ApprovalStatus = ApprovalStatus.approved,
        is_active: bool = True,
    ) -> User:
        return await self._save(
            User(
                tenant_id=tenant.id,
                email=email,
                password_hash=self.credentials.hash_password(password),
                first_name="Test",
                last_name="User",
                role=role,
                approval_status=approval_status,
                is_active=is_active,
            )
        )

    async def platform_admin(
        self,
        email: str = "ops@platform.io",
        role: Role = Role.platform_super_admin,
        password: str = DEFAULT_PASSWORD,
    ) -> PlatformAdmin:
        return await self._save(
            PlatformAdmin(
                email=email,
                password_hash=self.credentials.hash_password(password),
                first_name="Platform",
                last_name="Ops",
                role=role,
            )
        )


@pytest.fixture
def seed(db_session, credentials):
    return Seeder(db_session, credentials)


@pytest.fixture
def auth_headers():
    """Bearer header for a seeded principal (User or PlatformAdmin)"""

    def _headers(principal) -> dict:
        token = get_token_service().issue(
            principal.id, getattr(principal, "tenant_id", None), principal.role
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers
