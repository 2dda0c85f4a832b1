"""
Credential storage and password hashing.

Passwords are stored as ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``.
The user store is an async lookup by username. ``InMemoryUserStore`` holds
the account seeded from settings; ``DatabaseUserStore`` reads the users and
authorities tables. Either one is picked by ``Settings.USER_STORE``.

Hashing is CPU-bound, so ``authenticate`` runs it in the threadpool.
"""

import hashlib
import hmac
import secrets
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Optional, Protocol

from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.core.config import Settings
from app.core.logging import get_logger
from app.db.models import AuthorityRecord, UserRecord

logger = get_logger(__name__)

HASH_ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 390_000


def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS) -> str:
    """
    Hash a password with PBKDF2-SHA256 and a random salt.

    Args:
        password: The plain password.
        iterations: PBKDF2 work factor.

    Returns:
        The encoded hash, safe to store.
    """
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations
    )
    return f"{HASH_ALGORITHM}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """
    Check a plain password against an encoded hash.

    Returns:
        True if the password matches, False otherwise (including malformed
        hashes).
    """
    try:
        algorithm, iterations, salt, expected = encoded.split("$")
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != HASH_ALGORITHM:
        return False

    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), rounds
    )
    return hmac.compare_digest(digest.hex(), expected)


@dataclass(frozen=True)
class UserCredentials:
    """Stored account: username, password hash and granted roles."""

    username: str
    password_hash: str
    roles: FrozenSet[str] = field(default_factory=frozenset)
    enabled: bool = True


class UserStore(Protocol):
    async def find_by_username(self, username: str) -> Optional[UserCredentials]: ...


class InMemoryUserStore:
    """User store backed by a dict, filled at startup."""

    def __init__(self, users: Iterable[UserCredentials] = ()):
        self._users: Dict[str, UserCredentials] = {u.username: u for u in users}

    def add(self, user: UserCredentials) -> None:
        self._users[user.username] = user

    async def find_by_username(self, username: str) -> Optional[UserCredentials]:
        return self._users.get(username)


class DatabaseUserStore:
    """User store over the users / authorities tables."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def find_by_username(self, username: str) -> Optional[UserCredentials]:
        async with self.session_factory() as session:
            record = await session.get(UserRecord, username)
            if record is None:
                return None
            result = await session.execute(
                select(AuthorityRecord.authority).where(
                    AuthorityRecord.username == username
                )
            )
            roles = frozenset(result.scalars().all())
        return UserCredentials(
            username=record.username,
            password_hash=record.password,
            roles=roles,
            enabled=record.enabled,
        )

    async def ensure_user(self, user: UserCredentials) -> bool:
        """
        Insert an account with its roles unless the username already exists.

        Returns:
            True if the account was created.
        """
        async with self.session_factory() as session:
            if await session.get(UserRecord, user.username) is not None:
                return False
            session.add(
                UserRecord(
                    username=user.username,
                    password=user.password_hash,
                    enabled=user.enabled,
                )
            )
            await session.flush()
            for role in sorted(user.roles):
                session.add(AuthorityRecord(username=user.username, authority=role))
            await session.commit()
        logger.info("Created user %r in the database", user.username)
        return True


def default_user(settings: Settings) -> UserCredentials:
    """The account configured by DEFAULT_USERNAME / DEFAULT_PASSWORD / DEFAULT_ROLES."""
    return UserCredentials(
        username=settings.DEFAULT_USERNAME,
        password_hash=hash_password(settings.DEFAULT_PASSWORD),
        roles=frozenset(settings.DEFAULT_ROLES),
    )


def build_user_store(
    settings: Settings,
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> UserStore:
    """
    Build the user store selected by ``settings.USER_STORE``.

    The in-memory store is seeded right away. The database store is seeded
    by ``DatabaseUserStore.ensure_user`` at startup, once the loop is running.
    """
    if settings.USER_STORE == "database":
        if session_factory is None:
            raise ValueError("USER_STORE=database needs a session factory")
        return DatabaseUserStore(session_factory)

    store = InMemoryUserStore()
    store.add(default_user(settings))
    logger.info("Registered default user %r", settings.DEFAULT_USERNAME)
    return store


async def authenticate(
    store: UserStore, username: str, password: str
) -> Optional[UserCredentials]:
    """Return the user if it is enabled and the password matches, otherwise None."""
    user = await store.find_by_username(username)
    if user is None or not user.enabled:
        return None
    if not await run_in_threadpool(verify_password, password, user.password_hash):
        return None
    return user
