import pytest
from helpers import signup


@pytest.mark.asyncio
async def test_issue_token(client):
    r = await client.post("/jwt", json={"email": "someone@example.com"})
    assert r.status_code == 200
    assert r.json()["token"]


@pytest.mark.asyncio
async def test_issue_token_requires_email(client):
    r = await client.post("/jwt", json={})
    assert r.status_code == 400
    assert "email" in r.json()["message"]


@pytest.mark.asyncio
async def test_missing_token_is_401(client):
    r = await client.get("/users/me")
    assert r.status_code == 401
    assert r.json() == {"message": "Unauthorized access"}


@pytest.mark.asyncio
async def test_bad_token_is_403(client):
    r = await client.get("/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 403
    assert r.json() == {"message": "Forbidden access"}


@pytest.mark.asyncio
async def test_admin_gate_rejects_plain_user(client):
    _, hdrs = await signup(client)
    r = await client.get("/users", headers=hdrs)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_admin_gate_rejects_unregistered_token(client):
    r = await client.post("/jwt", json={"email": "ghost@example.com"})
    hdrs = {"Authorization": f"Bearer {r.json()['token']}"}
    assert (await client.get("/users", headers=hdrs)).status_code == 403
