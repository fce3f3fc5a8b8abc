"""Shared request helpers for the API tests."""
import uuid
from datetime import datetime, timedelta, timezone
from httpx import AsyncClient
from sqlalchemy import update
from contesthub.db import SessionLocal
from contesthub.models.user import User


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10]}@example.com"


async def signup(ac: AsyncClient, email: str | None = None, name: str | None = None) -> tuple[str, dict]:
    """Register a user and return (email, auth headers)."""
    email = email or unique_email()
    r = await ac.post("/users", json={"email": email, "name": name or "Test User"})
    assert r.status_code in (200, 201), r.text
    r = await ac.post("/jwt", json={"email": email})
    assert r.status_code == 200, r.text
    return email, {"Authorization": f"Bearer {r.json()['token']}"}


async def set_role(email: str, role: str) -> None:
    async with SessionLocal() as session:
        await session.execute(update(User).where(User.email == email).values(role=role))
        await session.commit()


async def signup_admin(ac: AsyncClient) -> tuple[str, dict]:
    email, hdrs = await signup(ac, unique_email("admin"))
    await set_role(email, "admin")
    return email, hdrs


def contest_payload(**overrides) -> dict:
    payload = {
        "name": "Logo Design Sprint",
        "image": "https://img.example.com/logo.png",
        "description": "Design a logo for a coffee brand",
        "price": 25.00,
        "prizeMoney": 500,
        "taskInstruction": "Upload a link to your SVG",
        "type": "design",
        "deadline": (datetime.now(timezone.utc) + timedelta(days=7)).isoformat(),
    }
    payload.update(overrides)
    return payload


async def create_contest(ac: AsyncClient, hdrs: dict, **overrides) -> dict:
    r = await ac.post("/contests", headers=hdrs, json=contest_payload(**overrides))
    assert r.status_code == 201, r.text
    return r.json()


async def approve(ac: AsyncClient, admin_hdrs: dict, contest_id: str, status: str = "approved") -> None:
    r = await ac.patch(f"/admin/contests/{contest_id}/status", headers=admin_hdrs, json={"status": status})
    assert r.status_code == 200, r.text


async def pay(ac: AsyncClient, hdrs: dict, contest_id: str, amount: float = 25.0, txn: str | None = None) -> dict:
    r = await ac.post("/payments", headers=hdrs, json={
        "contestId": contest_id,
        "amount": amount,
        "transactionId": txn or f"pi_{uuid.uuid4().hex[:16]}",
    })
    assert r.status_code == 201, r.text
    return r.json()
