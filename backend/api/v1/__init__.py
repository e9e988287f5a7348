"""Version 1 API routers."""

from fastapi import APIRouter

from .groups import router as groups_router
from .notf_prefs import router as notf_prefs_router

api_router = APIRouter()
api_router.include_router(notf_prefs_router)
api_router.include_router(groups_router)

__all__ = ["api_router"]
