from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.credential_verifier import CredentialVerifier
from src.app.services.token_service import TokenClaims, TokenService
from src.domain.entities import Role


class FrozenClock:
    """Injectable clock for token tests"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int):
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_tenant_and_email = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.list_scoped = AsyncMock(return_value=([], 0))

    uow.tenants = MagicMock()
    uow.tenants.get_by_id = AsyncMock(return_value=None)
    uow.tenants.get_by_domain = AsyncMock(return_value=None)
    uow.tenants.create = AsyncMock(side_effect=lambda tenant: tenant)
    uow.tenants.update = AsyncMock(side_effect=lambda tenant: tenant)
    uow.tenants.list_with_user_counts = AsyncMock(return_value=([], 0))

    uow.platform_admins = MagicMock()
    uow.platform_admins.get_by_id = AsyncMock(return_value=None)
    uow.platform_admins.get_by_email = AsyncMock(return_value=None)
    uow.platform_admins.create = AsyncMock(side_effect=lambda admin: admin)
    uow.platform_admins.update = AsyncMock(side_effect=lambda admin: admin)

    uow.approval_requests = MagicMock()
    uow.approval_requests.get_by_id = AsyncMock(return_value=None)
    uow.approval_requests.create = AsyncMock(side_effect=lambda request: request)
    uow.approval_requests.list_pending = AsyncMock(return_value=([], 0))
    uow.approval_requests.list_by_user = AsyncMock(return_value=([], 0))
    uow.approval_requests.resolve_if_pending = AsyncMock(return_value=True)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock(side_effect=lambda event: event)
    uow.audit_events.get_scoped_paginated = AsyncMock(return_value=([], None))
    return uow


@pytest.fixture
def audit_actions():
    """Actions of every audit event created through a mock uow"""

    def _actions(uow) -> list:
        return [call.args[0].action for call in uow.audit_events.create.await_args_list]

    return _actions


@pytest.fixture
def clock():
    return FrozenClock(datetime(2025, 1, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def token_service(clock):
    return TokenService(
        secret="unit-test-secret",
        expires_seconds=3600,
        issuer="workforce-identity",
        audience="workforce-services",
        clock=clock,
    )


@pytest.fixture
def credentials():
    # Minimum bcrypt cost keeps the suite fast
    return CredentialVerifier(rounds=4)


@pytest.fixture
def make_claims():
    def _make(role: Role, tenant_id=None, user_id=None) -> TokenClaims:
        now = datetime.now(UTC)
        return TokenClaims(
            user_id=user_id or uuid4(),
            tenant_id=tenant_id,
            role=role,
            issued_at=now,
            expires_at=now + timedelta(hours=1),
        )

    return _make
