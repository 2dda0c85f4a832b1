from dotenv import load_dotenv


from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from app.api.api_v1 import router as api_v1
from app.core.auth import AuthGateMiddleware
from app.core.config import settings
from app.core.lifespan import lifespan
from app.core.security import build_user_store
from app.db.session import AsyncSessionLocal
from app.web.auth import router as auth_router
from app.web.router import router as web_router

load_dotenv()  # Load .env variables into os.environ for libraries


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
app.state.user_store = build_user_store(settings, AsyncSessionLocal)

# Middleware added last runs first: the session must be loaded before the gate.
app.add_middleware(AuthGateMiddleware, authorized_roles=settings.AUTHORIZED_ROLES)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    https_only=settings.SESSION_HTTPS_ONLY,
)

app.include_router(auth_router)
app.include_router(web_router)
app.include_router(api_v1)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
