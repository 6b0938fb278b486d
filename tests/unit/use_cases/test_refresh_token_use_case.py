from uuid import uuid4

import pytest

from src.app.use_cases.auth import RefreshTokenUseCase
from src.domain.entities import ApprovalStatus, PlatformAdmin, Role, Tenant, TenantStatus, User
from src.domain.errors import FORBIDDEN, TOKEN_EXPIRED, TOKEN_INVALID


@pytest.fixture
def tenant():
    return Tenant(id=uuid4(), name="Acme Corp", domain="acme.com", status=TenantStatus.active)


@pytest.fixture
def user(tenant):
    return User(
        id=uuid4(),
        tenant_id=tenant.id,
        email="jane@acme.com",
        password_hash="x",
        first_name="Jane",
        last_name="Doe",
        role=Role.employee,
        is_active=True,
        approval_status=ApprovalStatus.approved,
    )


@pytest.fixture
def use_case(mock_uow, token_service):
    return RefreshTokenUseCase(mock_uow, token_service)


@pytest.mark.asyncio
async def test_refresh_issues_token_with_stored_role(use_case, mock_uow, token_service, tenant, user):
    token = token_service.issue(user.id, tenant.id, Role.employee)
    user.role = Role.company_admin  # promoted since the token was issued
    mock_uow.users.get_by_id.return_value = user
    mock_uow.tenants.get_by_id.return_value = tenant

    result = await use_case.execute(token)

    assert result.is_ok()
    claims = token_service.verify(result.value.access_token).value
    assert claims.role == Role.company_admin
    assert claims.tenant_id == tenant.id


@pytest.mark.asyncio
async def test_refresh_platform_admin(use_case, mock_uow, token_service):
    admin = PlatformAdmin(
        id=uuid4(),
        email="ops@platform.io",
        password_hash="x",
        first_name="Op",
        last_name="Erator",
        role=Role.platform_admin,
    )
    mock_uow.platform_admins.get_by_id.return_value = admin

    result = await use_case.execute(token_service.issue(admin.id, None, Role.platform_admin))

    assert result.is_ok()
    assert token_service.verify(result.value.access_token).value.is_platform


@pytest.mark.asyncio
async def test_expired_token_passes_through(use_case, token_service, clock, user, tenant):
    token = token_service.issue(user.id, tenant.id, Role.employee)
    clock.advance(3600)

    result = await use_case.execute(token)

    assert result.error.code == TOKEN_EXPIRED


@pytest.mark.asyncio
async def test_invalid_token_passes_through(use_case, mock_uow):
    result = await use_case.execute("not-a-token")

    assert result.error.code == TOKEN_INVALID
    mock_uow.users.get_by_id.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "mutate",
    [
        lambda user, tenant: setattr(user, "is_active", False),
        lambda user, tenant: setattr(user, "approval_status", ApprovalStatus.rejected),
        lambda user, tenant: setattr(tenant, "status", TenantStatus.suspended),
        lambda user, tenant: setattr(user, "tenant_id", uuid4()),
    ],
)
async def test_ineligible_principal_is_forbidden(
    use_case, mock_uow, token_service, user, tenant, mutate
):
    token = token_service.issue(user.id, tenant.id, Role.employee)
    mutate(user, tenant)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.tenants.get_by_id.return_value = tenant

    result = await use_case.execute(token)

    assert result.error.code == FORBIDDEN
    assert result.error.reason == "principal_inactive"


@pytest.mark.asyncio
async def test_deleted_principal_is_forbidden(use_case, token_service):
    result = await use_case.execute(token_service.issue(uuid4(), uuid4(), Role.employee))

    assert result.error.code == FORBIDDEN
