"""
Pytest Configuration and Fixtures
"""

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from template_store.domain.templates import CreateTemplateRequest, OwnerType
from template_store.infrastructure.database.repositories import SqlTemplateRepository
from template_store.infrastructure.database.session import build_session_factory, init_db
from template_store.modules.templates import TemplateService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
OWNER_ID = "6b1f3c1e-2d4a-4f7e-9c1a-0d6f3e8b5a21"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory database with the schema created."""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    factory = build_session_factory(engine)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def repository(session: AsyncSession) -> SqlTemplateRepository:
    return SqlTemplateRepository(session)


@pytest.fixture
def service(session: AsyncSession) -> TemplateService:
    return TemplateService.with_session(session)


@pytest.fixture
def make_request():
    """Build a create request with sensible defaults."""

    def _make(**overrides) -> CreateTemplateRequest:
        values = {
            "owner_id": OWNER_ID,
            "owner_type": OwnerType.USER,
            "template_type": "checklist",
            "name": "Daily",
            "description": None,
            "body": {"steps": [1, 2]},
        }
        values.update(overrides)
        return CreateTemplateRequest(**values)

    return _make
