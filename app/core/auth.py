"""
Login gate.

Every request except the public paths must carry a session holding a user
with one of the authorized roles; anything else is redirected to the login
form. The session itself is managed by Starlette's ``SessionMiddleware``,
which has to wrap this middleware.
"""

from typing import Iterable, MutableMapping, Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp

from app.core.security import UserCredentials

SESSION_USER_KEY = "username"
SESSION_ROLES_KEY = "roles"

LOGIN_PATH = "/login"
LOGOUT_PATH = "/logout"


def login_session(session: MutableMapping[str, Any], user: UserCredentials) -> None:
    """Mark the session as authenticated for ``user``."""
    session.clear()
    session[SESSION_USER_KEY] = user.username
    session[SESSION_ROLES_KEY] = sorted(user.roles)


def logout_session(session: MutableMapping[str, Any]) -> None:
    session.clear()


def is_authorized(session: MutableMapping[str, Any], authorized_roles: Iterable[str]) -> bool:
    """True if the session belongs to a user holding an authorized role."""
    if not session.get(SESSION_USER_KEY):
        return False
    roles = set(session.get(SESSION_ROLES_KEY) or [])
    return bool(roles & set(authorized_roles))


class AuthGateMiddleware(BaseHTTPMiddleware):
    """Redirect unauthenticated requests to the login form."""

    def __init__(
        self,
        app: ASGIApp,
        authorized_roles: Iterable[str] = ("ADMIN", "USER"),
        public_paths: Iterable[str] = (LOGIN_PATH, LOGOUT_PATH),
        login_url: str = LOGIN_PATH,
    ):
        super().__init__(app)
        self.authorized_roles = frozenset(authorized_roles)
        self.public_paths = frozenset(public_paths)
        self.login_url = login_url

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.public_paths:
            return await call_next(request)
        if is_authorized(request.session, self.authorized_roles):
            return await call_next(request)
        return RedirectResponse(self.login_url, status_code=302)
