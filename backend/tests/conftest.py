"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator, List, Optional

# Set test env vars before any app import
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("OPENAI_API_KEY", "")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_completion_service
from app.core.database import get_db
from app.main import app
from app.models import Base
from app.services.completion import BaseCompletionService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
API = "/api/v1"


class FakeCompletionService(BaseCompletionService):
    """Completion capability returning canned answers and recording calls."""

    def __init__(self, summary: str = "A short summary.", tags: Optional[List[str]] = None):
        self.summary = summary
        self.tags = tags if tags is not None else ["python", "notes"]
        self.calls: List[tuple] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    async def summarize(self, text, max_length, title=None):
        self.calls.append(("summarize", text, max_length, title))
        return self.summary

    async def generate_tags(self, text, max_tags):
        self.calls.append(("generate_tags", text, max_tags))
        return self.tags[:max_tags]


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh in-memory database for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def completion() -> FakeCompletionService:
    return FakeCompletionService()


@pytest_asyncio.fixture(scope="function")
async def client(
    db_session: AsyncSession, completion: FakeCompletionService
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and completion overrides."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_completion_service] = lambda: completion

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_note(client: AsyncClient):
    """Factory creating a note through the API and returning its JSON."""

    async def _make_note(**fields) -> dict:
        payload = {"title": "Test note", "content": "Some plain content"}
        payload.update(fields)
        response = await client.post(f"{API}/notes", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]["note"]

    return _make_note
