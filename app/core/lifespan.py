from contextlib import asynccontextmanager
from fastapi import FastAPI

from app.core.config import insecure_settings_warnings, settings
from app.core.logging import get_logger, setup_logging
from app.core.security import DatabaseUserStore, default_user
from app.db.session import engine

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan function for the FastAPI application.
    Handles startup and shutdown events for application services.
    """
    # 1. Configure logging
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.LOG_DATE_FORMAT)
    logger.info("Starting %s", settings.PROJECT_NAME)
    for message in insecure_settings_warnings(settings):
        logger.warning(message)

    # 2. Seed the default account when users live in the database
    store = app.state.user_store
    if isinstance(store, DatabaseUserStore):
        await store.ensure_user(default_user(settings))

    yield

    # 3. Dispose Database Engine
    await engine.dispose()
