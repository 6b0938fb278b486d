"""
N reviewers resolving the same request at once: exactly one wins.

Runs against an in-memory store whose conditional update has the same
semantics as the SQL one (check-and-set with no await in between).
"""

import asyncio
from types import SimpleNamespace
from uuid import uuid4

import pytest

from src.app.use_cases.approvals import ResolveApprovalUseCase
from src.domain.entities import (
    ApprovalRequest,
    ApprovalStatus,
    AuditEvent,
    RequestType,
    Role,
    Tenant,
    TenantStatus,
    User,
)
from src.domain.errors import ALREADY_RESOLVED

SNAPSHOT_FIELDS = ("id", "user_id", "tenant_id", "requested_role", "request_type", "status")


class InMemoryStore:
    def __init__(self):
        self.requests = {}
        self.users = {}
        self.tenants = {}
        self.audit = []


class InMemoryApprovalRequests:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, request_id):
        await asyncio.sleep(0)
        request = self.store.requests.get(request_id)
        if request is None:
            return None
        # Snapshot, like a row read from the database
        return SimpleNamespace(
            **{field: getattr(request, field) for field in SNAPSHOT_FIELDS}
        )

    async def resolve_if_pending(
        self, request_id, status, reviewer_id, reviewed_at, rejection_reason=None, review_notes=None
    ):
        await asyncio.sleep(0)
        request = self.store.requests[request_id]
        if request.status != ApprovalStatus.pending:
            return False
        request.status = status
        request.reviewed_by = reviewer_id
        request.reviewed_at = reviewed_at
        request.rejection_reason = rejection_reason
        request.review_notes = review_notes
        return True


class InMemoryUsers:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, user_id):
        return self.store.users.get(user_id)

    async def update(self, user):
        self.store.users[user.id] = user
        return user


class InMemoryTenants:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_id(self, tenant_id):
        return self.store.tenants.get(tenant_id)

    async def update(self, tenant):
        self.store.tenants[tenant.id] = tenant
        return tenant


class InMemoryAuditEvents:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def create(self, event: AuditEvent):
        self.store.audit.append(event)
        return event


class InMemoryUnitOfWork:
    def __init__(self, store: InMemoryStore):
        self.approval_requests = InMemoryApprovalRequests(store)
        self.users = InMemoryUsers(store)
        self.tenants = InMemoryTenants(store)
        self.audit_events = InMemoryAuditEvents(store)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False

    async def commit(self):
        await asyncio.sleep(0)

    async def rollback(self):
        pass


@pytest.mark.asyncio
@pytest.mark.parametrize("resolvers", [2, 8, 32])
async def test_exactly_one_concurrent_resolver_wins(make_claims, resolvers):
    store = InMemoryStore()
    tenant = Tenant(id=uuid4(), name="Acme Corp", domain="acme.com", status=TenantStatus.active)
    user = User(
        id=uuid4(),
        tenant_id=tenant.id,
        email="new@acme.com",
        password_hash="x",
        first_name="New",
        last_name="Hire",
        role=Role.employee,
        is_active=False,
    )
    request = ApprovalRequest(
        id=uuid4(),
        user_id=user.id,
        tenant_id=tenant.id,
        requested_role=Role.employee,
        request_type=RequestType.new_signup,
    )
    store.tenants[tenant.id] = tenant
    store.users[user.id] = user
    store.requests[request.id] = request

    async def resolve(i):
        actor = make_claims(Role.company_admin, tenant_id=tenant.id)
        outcome = "approved" if i % 2 == 0 else "rejected"
        return await ResolveApprovalUseCase(InMemoryUnitOfWork(store)).execute(
            request.id, actor, outcome, reason="No"
        )

    results = await asyncio.gather(*(resolve(i) for i in range(resolvers)))

    winners = [r for r in results if r.is_ok()]
    losers = [r for r in results if r.is_err()]
    assert len(winners) == 1
    assert all(r.error.code == ALREADY_RESOLVED for r in losers)

    # Terminal state matches the single winner, and only it was audited
    assert request.status.value == winners[0].value.status
    assert user.approval_status.value == winners[0].value.status
    assert [e.action for e in store.audit] == [f"approval_{winners[0].value.status}"]
