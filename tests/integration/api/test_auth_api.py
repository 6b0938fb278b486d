import pytest

from src.domain.entities import ApprovalStatus, Role, TenantStatus

DEFAULT_PASSWORD = "Secret123"


def _login_body(email, domain="acme.com", password=DEFAULT_PASSWORD):
    body = {"email": email, "password": password}
    if domain:
        body["company_domain"] = domain
    return body


@pytest.mark.asyncio
async def test_tenant_login_returns_token_and_context(client, seed):
    tenant = await seed.tenant("acme.com")
    user = await seed.user(tenant, "worker@acme.com", Role.employee)

    response = await client.post("/auth/login", json=_login_body("Worker@Acme.com"))

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["expires_in"] == 3600
    assert body["user"]["id"] == str(user.id)
    assert body["tenant"]["id"] == str(tenant.id)

    verified = await client.post("/auth/verify-token", json={"token": body["access_token"]})
    assert verified.status_code == 200
    assert verified.json()["role"] == "employee"
    assert verified.json()["tenant_id"] == str(tenant.id)


@pytest.mark.asyncio
async def test_platform_login_has_no_tenant(client, seed):
    await seed.platform_admin("ops@platform.io", Role.platform_admin)

    response = await client.post("/auth/login/platform", json=_login_body("ops@platform.io", None))

    assert response.status_code == 200
    assert response.json()["tenant"] is None

    verified = await client.post(
        "/auth/verify-token", json={"token": response.json()["access_token"]}
    )
    assert verified.json()["tenant_id"] is None
    assert verified.json()["role"] == "platform_admin"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,domain,password,path",
    [
        ("worker@acme.com", "acme.com", "WrongPass1", "company"),
        ("nobody@acme.com", "acme.com", DEFAULT_PASSWORD, "company"),
        ("worker@acme.com", "globex.io", DEFAULT_PASSWORD, "company"),
        ("worker@acme.com", "acme.com", DEFAULT_PASSWORD, "company_admin"),
        ("pending@acme.com", "acme.com", DEFAULT_PASSWORD, "company"),
    ],
)
async def test_login_failures_look_identical(client, seed, email, domain, password, path):
    tenant = await seed.tenant("acme.com")
    await seed.user(tenant, "worker@acme.com", Role.employee)
    await seed.user(
        tenant,
        "pending@acme.com",
        Role.employee,
        approval_status=ApprovalStatus.pending,
        is_active=False,
    )

    response = await client.post(f"/auth/login/{path}", json=_login_body(email, domain, password))

    assert response.status_code == 401
    assert response.json() == {
        "error": {"code": "INVALID_CREDENTIALS", "message": "Invalid email, company or password"}
    }


@pytest.mark.asyncio
async def test_suspended_company_cannot_log_in(client, seed):
    tenant = await seed.tenant("acme.com", TenantStatus.suspended)
    await seed.user(tenant, "worker@acme.com")

    response = await client.post("/auth/login", json=_login_body("worker@acme.com"))

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_company_login_requires_domain(client):
    response = await client.post("/auth/login", json=_login_body("worker@acme.com", None))

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_FAILED"


@pytest.mark.asyncio
async def test_unknown_login_path(client):
    response = await client.post("/auth/login/superuser", json=_login_body("worker@acme.com"))

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_refresh_issues_new_token(client, seed, auth_headers):
    tenant = await seed.tenant("acme.com")
    user = await seed.user(tenant, "worker@acme.com")

    response = await client.post("/auth/refresh", headers=auth_headers(user))

    assert response.status_code == 200
    verified = await client.post(
        "/auth/verify-token", json={"token": response.json()["access_token"]}
    )
    assert verified.json()["user_id"] == str(user.id)


@pytest.mark.asyncio
async def test_refresh_without_token(client):
    response = await client.post("/auth/refresh")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "TOKEN_INVALID"


@pytest.mark.asyncio
async def test_refresh_after_company_suspended(client, seed, auth_headers):
    tenant = await seed.tenant("acme.com")
    user = await seed.user(tenant, "worker@acme.com")
    ops = await seed.platform_admin()

    suspend = await client.post(f"/admin/tenants/{tenant.id}/suspend", headers=auth_headers(ops))
    assert suspend.status_code == 200

    response = await client.post("/auth/refresh", headers=auth_headers(user))

    assert response.status_code == 403
    assert response.json()["error"]["reason"] == "principal_inactive"


@pytest.mark.asyncio
async def test_verify_rejects_garbage(client):
    response = await client.post("/auth/verify-token", json={"token": "not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "TOKEN_INVALID"
