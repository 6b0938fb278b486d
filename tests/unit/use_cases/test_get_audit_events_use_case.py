from uuid import uuid4

import pytest

from src.app.use_cases.audit import GetAuditEventsUseCase
from src.domain.entities import ApprovalStatus, AuditEvent, Role, User
from src.domain.errors import FORBIDDEN
from src.domain.scoping import TenantScope


@pytest.mark.asyncio
async def test_events_are_tenant_scoped_and_resolve_actor_email(mock_uow, make_claims):
    tenant_id = uuid4()
    actor_user = User(
        id=uuid4(),
        tenant_id=tenant_id,
        email="boss@acme.com",
        password_hash="x",
        first_name="B",
        last_name="Oss",
        role=Role.company_admin,
        approval_status=ApprovalStatus.approved,
    )
    events = [
        AuditEvent(tenant_id=tenant_id, actor_id=actor_user.id, action="login"),
        AuditEvent(tenant_id=tenant_id, actor_id=actor_user.id, action="user_created"),
        AuditEvent(tenant_id=tenant_id, action="member_registered"),
    ]
    mock_uow.audit_events.get_scoped_paginated.return_value = (events, "next")
    mock_uow.users.get_by_id.return_value = actor_user
    actor = make_claims(Role.company_admin, tenant_id=tenant_id)

    result = await GetAuditEventsUseCase(mock_uow).execute(actor, limit=3)

    assert result.is_ok()
    assert [e.action for e in result.value.events] == ["login", "user_created", "member_registered"]
    assert [e.actor_email for e in result.value.events] == ["boss@acme.com", "boss@acme.com", None]
    assert result.value.next_cursor == "next"
    # One lookup per distinct actor
    mock_uow.users.get_by_id.assert_awaited_once_with(actor_user.id)

    call = mock_uow.audit_events.get_scoped_paginated.await_args
    assert call.args[0] == TenantScope.single(tenant_id)


@pytest.mark.asyncio
async def test_employee_cannot_read_audit_log(mock_uow, make_claims):
    result = await GetAuditEventsUseCase(mock_uow).execute(
        make_claims(Role.employee, tenant_id=uuid4())
    )

    assert result.error.code == FORBIDDEN
    mock_uow.audit_events.get_scoped_paginated.assert_not_awaited()


@pytest.mark.asyncio
async def test_platform_actor_reads_all_tenants(mock_uow, make_claims):
    await GetAuditEventsUseCase(mock_uow).execute(make_claims(Role.platform_admin))

    assert mock_uow.audit_events.get_scoped_paginated.await_args.args[0].unrestricted
