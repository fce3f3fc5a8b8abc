import pytest
import stripe
from contesthub.config import settings
from contesthub.services.payments import to_minor_units, is_payable_price
from helpers import signup, signup_admin, create_contest, approve, pay


def test_minor_units():
    assert to_minor_units(25.00) == 2500
    assert to_minor_units(19.99) == 1999
    assert to_minor_units(0.1) == 10


def test_payable_price():
    assert is_payable_price(25.0)
    assert not is_payable_price(0)
    assert not is_payable_price(-3)
    assert not is_payable_price(None)
    assert not is_payable_price("abc")
    assert not is_payable_price(True)


@pytest.fixture
def fake_stripe(monkeypatch):
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        return {"id": "pi_test_123", "client_secret": "pi_test_123_secret_abc"}

    monkeypatch.setattr(settings, "stripe_secret_key", "sk_test_dummy")
    monkeypatch.setattr(stripe.PaymentIntent, "create", create)
    return calls


@pytest.mark.asyncio
async def test_create_intent_uses_minor_units(client, fake_stripe):
    email, hdrs = await signup(client)
    ch = await create_contest(client, hdrs, price=25.00)

    r = await client.post("/payments/create-intent", headers=hdrs, json={"contestId": ch["id"]})
    assert r.status_code == 200, r.text
    assert r.json() == {"clientSecret": "pi_test_123_secret_abc"}
    assert fake_stripe[0]["amount"] == 2500
    assert fake_stripe[0]["currency"] == "usd"
    assert fake_stripe[0]["metadata"] == {"contest_id": ch["id"], "user_email": email}


@pytest.mark.asyncio
async def test_create_intent_processor_error_is_502(client, monkeypatch):
    def create(**kwargs):
        raise stripe.StripeError("card declined")

    monkeypatch.setattr(settings, "stripe_secret_key", "sk_test_dummy")
    monkeypatch.setattr(stripe.PaymentIntent, "create", create)
    _, hdrs = await signup(client)
    ch = await create_contest(client, hdrs, price=10)

    r = await client.post("/payments/create-intent", headers=hdrs, json={"contestId": ch["id"]})
    assert r.status_code == 502
    assert r.json() == {"message": "Payment processor error"}


@pytest.mark.asyncio
async def test_create_intent_validation(client, fake_stripe):
    _, hdrs = await signup(client)
    free = await create_contest(client, hdrs, price=0)

    assert (await client.post("/payments/create-intent", headers=hdrs, json={})).status_code == 400
    r = await client.post("/payments/create-intent", headers=hdrs, json={"contestId": free["id"]})
    assert r.status_code == 400
    assert r.json() == {"message": "Invalid contest price"}
    r = await client.post(
        "/payments/create-intent", headers=hdrs, json={"contestId": "00000000-0000-0000-0000-000000000000"},
    )
    assert r.status_code == 404
    assert fake_stripe == []


@pytest.mark.asyncio
async def test_create_intent_without_stripe_key(client):
    _, hdrs = await signup(client)
    ch = await create_contest(client, hdrs)
    r = await client.post("/payments/create-intent", headers=hdrs, json={"contestId": ch["id"]})
    assert r.status_code == 500
    assert r.json() == {"message": "Stripe not configured"}


@pytest.mark.asyncio
async def test_record_payment_counts_participation(client):
    _, owner = await signup(client)
    ch = await create_contest(client, owner)
    _, p1 = await signup(client)
    _, p2 = await signup(client)

    saved = await pay(client, p1, ch["id"], txn="pi_one")
    assert saved["paymentStatus"] == "paid"
    await pay(client, p2, ch["id"], txn="pi_two")

    contest = (await client.get(f"/contests/{ch['id']}")).json()
    assert contest["participationCount"] == 2


@pytest.mark.asyncio
async def test_record_payment_is_idempotent_by_transaction(client):
    _, owner = await signup(client)
    ch = await create_contest(client, owner)
    _, hdrs = await signup(client)
    _, other = await signup(client)

    first = await pay(client, hdrs, ch["id"], txn="pi_repeat")
    r = await client.post("/payments", headers=hdrs, json={
        "contestId": ch["id"], "amount": 25, "transactionId": "pi_repeat",
    })
    assert r.status_code == 200, r.text
    assert r.json()["id"] == first["id"]
    assert (await client.get(f"/contests/{ch['id']}")).json()["participationCount"] == 1

    r = await client.post("/payments", headers=other, json={
        "contestId": ch["id"], "amount": 25, "transactionId": "pi_repeat",
    })
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_record_payment_validation(client):
    _, hdrs = await signup(client)
    ch = await create_contest(client, hdrs)
    for body in (
        {"amount": 25, "transactionId": "pi_x"},
        {"contestId": ch["id"], "transactionId": "pi_x"},
        {"contestId": ch["id"], "amount": 25},
    ):
        assert (await client.post("/payments", headers=hdrs, json=body)).status_code == 400
    r = await client.post("/payments", headers=hdrs, json={
        "contestId": "00000000-0000-0000-0000-000000000000", "amount": 25, "transactionId": "pi_x",
    })
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_registration_and_my_payments(client):
    _, admin = await signup_admin(client)
    _, owner = await signup(client)
    kept = await create_contest(client, owner, name="Kept")
    dropped = await create_contest(client, owner, name="Dropped")
    _, hdrs = await signup(client)

    r = await client.get(f"/payments/registered/{kept['id']}", headers=hdrs)
    assert r.json() == {"registered": False}

    await pay(client, hdrs, kept["id"])
    await pay(client, hdrs, dropped["id"])
    r = await client.get(f"/payments/registered/{kept['id']}", headers=hdrs)
    assert r.json() == {"registered": True}

    mine = (await client.get("/payments/my", headers=hdrs)).json()
    assert {p["contest"]["name"] for p in mine} == {"Kept", "Dropped"}

    await client.delete(f"/admin/contests/{dropped['id']}", headers=admin)
    mine = (await client.get("/payments/my", headers=hdrs)).json()
    assert [p["contest"]["name"] for p in mine] == ["Kept"]
    assert mine[0]["contestId"] == kept["id"]

    stats = (await client.get("/users/stats", headers=hdrs)).json()
    assert stats == {"participated": 2, "wins": 0}


@pytest.mark.asyncio
async def test_payment_wire_format_is_camel_case(client):
    _, owner = await signup(client)
    ch = await create_contest(client, owner)
    _, hdrs = await signup(client)

    r = await client.post("/payments", headers=hdrs, json={
        "contestId": ch["id"], "amount": 25, "transactionId": "pi_camel",
    })
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["transactionId"] == "pi_camel"
    assert body["paymentStatus"] == "paid"
    assert "transaction_id" not in body and "contest_id" not in body
