from datetime import UTC, datetime
from uuid import uuid4

import pytest

from src.adapter.repositories.approval_request_repository import ApprovalRequestRepository
from src.domain.entities import ApprovalRequest, ApprovalStatus, RequestType, Role
from src.domain.scoping import TenantScope


async def _pending_request(seed, db_session, domain="acme.com", role=Role.employee):
    tenant = await seed.tenant(domain)
    user = await seed.user(
        tenant, f"member@{domain}", role, approval_status=ApprovalStatus.pending, is_active=False
    )
    request = ApprovalRequest(
        user_id=user.id,
        tenant_id=tenant.id,
        requested_role=role,
        request_type=RequestType.new_signup,
    )
    db_session.add(request)
    await db_session.commit()
    return tenant, user, request


@pytest.mark.asyncio
async def test_resolve_if_pending_succeeds_once(db_session, seed):
    _, _, request = await _pending_request(seed, db_session)
    repo = ApprovalRequestRepository(db_session)
    reviewer = uuid4()

    first = await repo.resolve_if_pending(
        request.id, ApprovalStatus.approved, reviewer, datetime.now(UTC)
    )
    second = await repo.resolve_if_pending(
        request.id, ApprovalStatus.rejected, uuid4(), datetime.now(UTC), rejection_reason="late"
    )
    await db_session.commit()

    assert first is True
    assert second is False

    stored = await repo.get_by_id(request.id)
    assert stored.status == ApprovalStatus.approved
    assert stored.reviewed_by == reviewer
    assert stored.rejection_reason is None


@pytest.mark.asyncio
async def test_list_pending_scopes_by_tenant_and_role(db_session, seed):
    acme, _, acme_request = await _pending_request(seed, db_session, "acme.com")
    await _pending_request(seed, db_session, "globex.io")
    await _pending_request(seed, db_session, "initech.com", Role.company_admin)
    repo = ApprovalRequestRepository(db_session)

    scoped, total = await repo.list_pending(TenantScope.single(acme.id), [Role.employee])
    assert total == 1
    assert [request.id for request, _ in scoped] == [acme_request.id]

    everything, total = await repo.list_pending(
        TenantScope(unrestricted=True), [Role.employee, Role.company_admin]
    )
    assert total == 3
    assert len(everything) == 3

    employees_only, total = await repo.list_pending(TenantScope(unrestricted=True), [Role.employee])
    assert total == 2

    nothing, total = await repo.list_pending(TenantScope(unrestricted=True), [])
    assert (nothing, total) == ([], 0)
