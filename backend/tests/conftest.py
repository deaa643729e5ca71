import os
import tempfile

# Must be set before the application modules read their settings.
_DB_DIR = tempfile.mkdtemp(prefix="comic-studio-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["GEMINI_API_KEY"] = ""
os.environ["STRIPE_SECRET"] = ""

import pytest
from httpx import ASGITransport, AsyncClient

from comic_studio.auth import create_access_token
from comic_studio.db import AsyncSessionLocal, engine
from comic_studio.main import app
from comic_studio.models import Base


@pytest.fixture
async def db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def auth_headers():
    token = create_access_token("user-123", "artist@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(db, auth_headers):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=auth_headers,
    ) as c:
        yield c


@pytest.fixture
async def anon_client(db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
