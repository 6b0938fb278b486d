import pytest

from src.domain.entities import Role

DEFAULT_PASSWORD = "Secret123"


def _login_body(email):
    return {"email": email, "password": DEFAULT_PASSWORD, "company_domain": "acme.com"}


@pytest.mark.asyncio
async def test_deactivation_blocks_refresh_and_login(client, seed, auth_headers):
    tenant = await seed.tenant("acme.com")
    admin = await seed.user(tenant, "admin@acme.com", Role.company_admin)
    worker = await seed.user(tenant, "worker@acme.com", Role.employee)

    login = await client.post("/auth/login", json=_login_body("worker@acme.com"))
    assert login.status_code == 200
    worker_token = login.json()["access_token"]

    deactivate = await client.patch(
        f"/users/{worker.id}/status", json={"is_active": False}, headers=auth_headers(admin)
    )
    assert deactivate.status_code == 200
    assert deactivate.json() == {"user_id": str(worker.id), "is_active": False}

    refresh = await client.post(
        "/auth/refresh", headers={"Authorization": f"Bearer {worker_token}"}
    )
    assert refresh.status_code == 403

    relogin = await client.post("/auth/login", json=_login_body("worker@acme.com"))
    assert relogin.status_code == 401


@pytest.mark.asyncio
async def test_me_returns_profile_and_company(client, seed, auth_headers):
    tenant = await seed.tenant("acme.com")
    worker = await seed.user(tenant, "worker@acme.com")

    response = await client.get("/me", headers=auth_headers(worker))

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "worker@acme.com"
    assert response.json()["tenant"]["domain"] == "acme.com"


@pytest.mark.asyncio
async def test_me_requires_token(client):
    response = await client.get("/me")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_admin_created_employee_can_log_in(client, seed, auth_headers):
    tenant = await seed.tenant("acme.com")
    admin = await seed.user(tenant, "admin@acme.com", Role.company_admin)

    created = await client.post(
        "/users",
        json={
            "email": "new@acme.com",
            "password": DEFAULT_PASSWORD,
            "first_name": "New",
            "last_name": "Hire",
        },
        headers=auth_headers(admin),
    )

    assert created.status_code == 201
    assert created.json()["approval_status"] == "approved"
    assert created.json()["approval_request_id"] is None

    login = await client.post("/auth/login/employee", json=_login_body("new@acme.com"))
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_company_admin_cannot_create_company_admin(client, seed, auth_headers):
    tenant = await seed.tenant("acme.com")
    admin = await seed.user(tenant, "admin@acme.com", Role.company_admin)

    response = await client.post(
        "/users",
        json={
            "email": "peer@acme.com",
            "password": DEFAULT_PASSWORD,
            "first_name": "Peer",
            "last_name": "Admin",
            "role": "company_admin",
        },
        headers=auth_headers(admin),
    )

    assert response.status_code == 403
    assert response.json()["error"]["reason"] == "role_cannot_manage_target_role"


@pytest.mark.asyncio
async def test_directory_is_tenant_scoped(client, seed, auth_headers):
    acme = await seed.tenant("acme.com")
    globex = await seed.tenant("globex.io")
    admin = await seed.user(acme, "admin@acme.com", Role.company_admin)
    await seed.user(acme, "worker@acme.com")
    await seed.user(globex, "worker@globex.io")

    response = await client.get("/users", headers=auth_headers(admin))

    assert response.status_code == 200
    emails = {item["email"] for item in response.json()["items"]}
    assert emails == {"admin@acme.com", "worker@acme.com"}
    assert response.json()["total"] == 2


@pytest.mark.asyncio
async def test_super_admin_promotes_employee(client, seed, auth_headers):
    tenant = await seed.tenant("acme.com")
    boss = await seed.user(tenant, "ceo@acme.com", Role.company_super_admin)
    worker = await seed.user(tenant, "worker@acme.com")

    response = await client.patch(
        f"/users/{worker.id}/role", json={"role": "company_admin"}, headers=auth_headers(boss)
    )

    assert response.status_code == 200
    assert response.json() == {
        "user_id": str(worker.id),
        "old_role": "employee",
        "new_role": "company_admin",
    }

    login = await client.post("/auth/login/company_admin", json=_login_body("worker@acme.com"))
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_cannot_change_own_role(client, seed, auth_headers):
    tenant = await seed.tenant("acme.com")
    boss = await seed.user(tenant, "ceo@acme.com", Role.company_super_admin)

    response = await client.patch(
        f"/users/{boss.id}/role", json={"role": "employee"}, headers=auth_headers(boss)
    )

    assert response.status_code == 403
    assert response.json()["error"]["reason"] == "self_modification"


@pytest.mark.asyncio
async def test_user_in_other_company_is_not_found(client, seed, auth_headers):
    acme = await seed.tenant("acme.com")
    globex = await seed.tenant("globex.io")
    boss = await seed.user(acme, "ceo@acme.com", Role.company_super_admin)
    outsider = await seed.user(globex, "worker@globex.io")

    response = await client.patch(
        f"/users/{outsider.id}/status", json={"is_active": False}, headers=auth_headers(boss)
    )

    assert response.status_code == 404
