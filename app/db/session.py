"""
Accidents Database Configuration.

This module handles the setup and configuration of the database connection
using SQLModel (which wraps SQLAlchemy). It initializes the async engine and
the session factory based on the application settings.

Attributes:
    engine: The global async engine instance used for database operations.
    AsyncSessionLocal: Factory producing SQLModel ``AsyncSession`` objects.
"""

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from app.core.config import settings

engine_kwargs = {}

database_url = settings.DATABASE_URL

# Ensure usage of asyncpg driver for async operation with PostgreSQL
if database_url.startswith("postgresql://"):
    database_url = database_url.replace("postgresql://", "postgresql+asyncpg://")

# SQLite (tests, local runs) does not take queue pool options
if not database_url.startswith("sqlite"):
    engine_kwargs.update(
        {
            "pool_size": 10,
            "max_overflow": 20,
            "pool_timeout": 30,
            "pool_recycle": 1800,
            "pool_pre_ping": True,
        }
    )

engine = create_async_engine(database_url, **engine_kwargs)

AsyncSessionLocal = async_sessionmaker(
    autoflush=False,
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)
