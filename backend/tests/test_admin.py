import pytest
from helpers import signup, signup_admin, create_contest, approve


@pytest.mark.asyncio
async def test_admin_listing_filters_by_status(client):
    _, admin = await signup_admin(client)
    _, hdrs = await signup(client)
    ids = [(await create_contest(client, hdrs, name=f"C{i}"))["id"] for i in range(3)]
    await approve(client, admin, ids[0])
    await approve(client, admin, ids[1], status="rejected")

    everything = (await client.get("/admin/contests", headers=admin)).json()
    assert everything["total"] == 3
    assert everything["totalPages"] == 1
    assert [c["id"] for c in everything["contests"]] == list(reversed(ids))

    pending = (await client.get("/admin/contests", headers=admin, params={"status": "pending"})).json()
    assert [c["id"] for c in pending["contests"]] == [ids[2]]

    paged = (await client.get("/admin/contests", headers=admin, params={"limit": 2, "page": 2})).json()
    assert paged["totalPages"] == 2
    assert [c["id"] for c in paged["contests"]] == [ids[0]]


@pytest.mark.asyncio
async def test_admin_routes_require_admin(client):
    _, hdrs = await signup(client)
    ch = await create_contest(client, hdrs)
    assert (await client.get("/admin/contests", headers=hdrs)).status_code == 403
    r = await client.patch(f"/admin/contests/{ch['id']}/status", headers=hdrs, json={"status": "approved"})
    assert r.status_code == 403
    assert (await client.delete(f"/admin/contests/{ch['id']}", headers=hdrs)).status_code == 403


@pytest.mark.asyncio
async def test_status_validation_and_missing_contest(client):
    _, admin = await signup_admin(client)
    _, hdrs = await signup(client)
    ch = await create_contest(client, hdrs)

    bad = await client.patch(f"/admin/contests/{ch['id']}/status", headers=admin, json={"status": "archived"})
    assert bad.status_code == 400

    missing = await client.patch(
        "/admin/contests/00000000-0000-0000-0000-000000000000/status", headers=admin, json={"status": "approved"},
    )
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_admin_delete_is_unconditional(client):
    _, admin = await signup_admin(client)
    _, hdrs = await signup(client)
    ch = await create_contest(client, hdrs)
    await approve(client, admin, ch["id"])

    r = await client.delete(f"/admin/contests/{ch['id']}", headers=admin)
    assert r.json() == {"deletedCount": 1}
    assert (await client.get(f"/contests/{ch['id']}")).status_code == 404

    again = await client.delete(f"/admin/contests/{ch['id']}", headers=admin)
    assert again.json() == {"deletedCount": 0}
