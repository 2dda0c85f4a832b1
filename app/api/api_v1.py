from fastapi import APIRouter
from app.api.endpoints import accidents_router

router = APIRouter(prefix="/api")

router.include_router(accidents_router, tags=["accidents"])
