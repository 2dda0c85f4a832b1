"""
Login / logout pages.
"""

from typing import Optional

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import RedirectResponse

from app.core.auth import LOGIN_PATH, login_session, logout_session
from app.core.logging import get_logger
from app.core.security import authenticate
from app.web.router import templates

logger = get_logger(__name__)

router = APIRouter()


@router.get(LOGIN_PATH)
async def login_form(
    request: Request, error: Optional[str] = None, logout: Optional[str] = None
):
    """Render the login form. ``error`` / ``logout`` only toggle messages."""
    return templates.TemplateResponse(
        request,
        "login.html",
        {"error": error is not None, "logout": logout is not None},
    )


@router.post(LOGIN_PATH)
async def login(request: Request, username: str = Form(""), password: str = Form("")):
    user = await authenticate(request.app.state.user_store, username, password)
    if user is None:
        logger.warning("Failed login for %r", username)
        return RedirectResponse(
            f"{LOGIN_PATH}?error=true", status_code=status.HTTP_303_SEE_OTHER
        )

    login_session(request.session, user)
    logger.info("User %r logged in", user.username)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.api_route("/logout", methods=["GET", "POST"])
async def logout(request: Request):
    logout_session(request.session)
    return RedirectResponse(
        f"{LOGIN_PATH}?logout=true", status_code=status.HTTP_303_SEE_OTHER
    )
