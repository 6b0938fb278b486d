import pytest
import pytest_asyncio

from src.domain.entities import Role

DEFAULT_PASSWORD = "Secret123"


async def _register_member(client, domain, email, role="employee"):
    response = await client.post(
        "/registrations/member",
        json={
            "company_domain": domain,
            "email": email,
            "password": DEFAULT_PASSWORD,
            "first_name": "New",
            "last_name": "Member",
            "role": role,
        },
    )
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def two_companies(seed):
    x = await seed.tenant("x-corp.com")
    y = await seed.tenant("y-corp.com")
    return x, y


@pytest.mark.asyncio
async def test_company_admin_only_sees_own_tenant(client, seed, auth_headers, two_companies):
    x, y = two_companies
    admin_x = await seed.user(x, "admin@x-corp.com", Role.company_admin)
    await _register_member(client, "y-corp.com", "worker@y-corp.com")
    own = await _register_member(client, "x-corp.com", "worker@x-corp.com")

    response = await client.get("/approvals/pending", headers=auth_headers(admin_x))

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert [item["id"] for item in body["items"]] == [own["approval_request_id"]]
    assert all(item["tenant_id"] == str(x.id) for item in body["items"])


@pytest.mark.asyncio
async def test_tenant_filter_cannot_escape_scope(client, seed, auth_headers, two_companies):
    x, y = two_companies
    admin_x = await seed.user(x, "admin@x-corp.com", Role.company_admin)
    await _register_member(client, "y-corp.com", "worker@y-corp.com")

    response = await client.get(
        "/approvals/pending", params={"tenant_id": str(y.id)}, headers=auth_headers(admin_x)
    )

    assert response.status_code == 200
    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_company_admin_cannot_approve_super_admin(client, seed, auth_headers, two_companies):
    x, _ = two_companies
    ops = await seed.platform_admin()
    admin_x = await seed.user(x, "admin@x-corp.com", Role.company_admin)
    created = await client.post(
        "/users",
        json={
            "email": "boss@x-corp.com",
            "password": DEFAULT_PASSWORD,
            "first_name": "Big",
            "last_name": "Boss",
            "role": "company_super_admin",
            "tenant_id": str(x.id),
        },
        headers=auth_headers(ops),
    )
    assert created.status_code == 201
    request_id = created.json()["approval_request_id"]

    response = await client.post(f"/approvals/{request_id}/approve", headers=auth_headers(admin_x))

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"
    assert response.json()["error"]["reason"] == "role_cannot_approve_target_role"


@pytest.mark.asyncio
async def test_company_admin_cannot_approve_peer_admin(client, seed, auth_headers, two_companies):
    x, _ = two_companies
    admin_x = await seed.user(x, "admin@x-corp.com", Role.company_admin)
    pending = await _register_member(client, "x-corp.com", "other@x-corp.com", "company_admin")

    response = await client.post(
        f"/approvals/{pending['approval_request_id']}/approve", headers=auth_headers(admin_x)
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_cross_tenant_resolution_denied(client, seed, auth_headers, two_companies):
    x, _ = two_companies
    super_x = await seed.user(x, "ceo@x-corp.com", Role.company_super_admin)
    pending = await _register_member(client, "y-corp.com", "worker@y-corp.com")

    response = await client.post(
        f"/approvals/{pending['approval_request_id']}/approve", headers=auth_headers(super_x)
    )

    assert response.status_code == 403
    assert response.json()["error"]["reason"] == "tenant_mismatch"


@pytest.mark.asyncio
async def test_resolving_twice_conflicts(client, seed, auth_headers, two_companies):
    x, _ = two_companies
    admin_x = await seed.user(x, "admin@x-corp.com", Role.company_admin)
    pending = await _register_member(client, "x-corp.com", "worker@x-corp.com")
    url = f"/approvals/{pending['approval_request_id']}"

    first = await client.post(f"{url}/approve", headers=auth_headers(admin_x))
    second = await client.post(
        f"{url}/reject", json={"reason": "changed my mind"}, headers=auth_headers(admin_x)
    )

    assert first.status_code == 200
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "ALREADY_RESOLVED"

    login = await client.post(
        "/auth/login",
        json={"email": "worker@x-corp.com", "password": DEFAULT_PASSWORD, "company_domain": "x-corp.com"},
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_rejection_requires_reason(client, seed, auth_headers, two_companies):
    x, _ = two_companies
    admin_x = await seed.user(x, "admin@x-corp.com", Role.company_admin)
    pending = await _register_member(client, "x-corp.com", "worker@x-corp.com")

    response = await client.post(
        f"/approvals/{pending['approval_request_id']}/reject",
        json={"reason": ""},
        headers=auth_headers(admin_x),
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_rejected_member_cannot_log_in_and_history_shows_reason(
    client, seed, auth_headers, two_companies
):
    x, _ = two_companies
    admin_x = await seed.user(x, "admin@x-corp.com", Role.company_admin)
    pending = await _register_member(client, "x-corp.com", "worker@x-corp.com")

    reject = await client.post(
        f"/approvals/{pending['approval_request_id']}/reject",
        json={"reason": "Unknown applicant"},
        headers=auth_headers(admin_x),
    )
    assert reject.status_code == 200

    login = await client.post(
        "/auth/login",
        json={"email": "worker@x-corp.com", "password": DEFAULT_PASSWORD, "company_domain": "x-corp.com"},
    )
    assert login.status_code == 401

    history = await client.get(
        f"/approvals/history/{pending['user_id']}", headers=auth_headers(admin_x)
    )
    assert history.status_code == 200
    items = history.json()["items"]
    assert len(items) == 1
    assert items[0]["status"] == "rejected"
    assert items[0]["rejection_reason"] == "Unknown applicant"


@pytest.mark.asyncio
async def test_employee_cannot_list_pending(client, seed, auth_headers, two_companies):
    x, _ = two_companies
    employee = await seed.user(x, "worker@x-corp.com", Role.employee)

    response = await client.get("/approvals/pending", headers=auth_headers(employee))

    assert response.status_code == 403
    assert response.json()["error"]["reason"] == "insufficient_role"


@pytest.mark.asyncio
async def test_pending_requires_token(client):
    response = await client.get("/approvals/pending")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "TOKEN_INVALID"
