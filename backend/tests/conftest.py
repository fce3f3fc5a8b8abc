import os
import tempfile

# Point the app at a throwaway SQLite file before contesthub.config is imported.
_db_dir = tempfile.mkdtemp(prefix="contesthub-test-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir}/contesthub.db"
os.environ["ACCESS_TOKEN_SECRET"] = "test-secret"
os.environ["STRIPE_SECRET_KEY"] = ""

import httpx
import pytest_asyncio
from httpx import AsyncClient
from contesthub.db import Base, engine
from contesthub.main import app


@pytest_asyncio.fixture
async def client():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    await engine.dispose()
