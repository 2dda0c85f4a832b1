from .accidents import router as accidents_router

__all__ = ["accidents_router"]
