"""
Shared fixtures: an in-memory SQLite database with seeded types and rules.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.db.models import AccidentTypeRecord, RuleRecord
from app.schemas.accident import AccidentType, Rule

TEST_DATABASE_URL = "sqlite+aiosqlite://"

SEED_TYPES = [
    AccidentType(id=1, name="Two cars"),
    AccidentType(id=2, name="Car and pedestrian"),
    AccidentType(id=3, name="Car and bicycle"),
]
SEED_RULES = [
    Rule(id=1, name="Article 1"),
    Rule(id=2, name="Article 2"),
    Rule(id=3, name="Article 3"),
    Rule(id=4, name="Article 4"),
]


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database with all tables created"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    """Session factory with types and rules already seeded"""
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )
    async with factory() as session:
        for accident_type in SEED_TYPES:
            session.add(AccidentTypeRecord(id=accident_type.id, name=accident_type.name))
        for rule in SEED_RULES:
            session.add(RuleRecord(id=rule.id, name=rule.name))
        await session.commit()
    return factory


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def accident_types():
    return {t.id: t for t in SEED_TYPES}


@pytest.fixture
def rules():
    return {r.id: r for r in SEED_RULES}
