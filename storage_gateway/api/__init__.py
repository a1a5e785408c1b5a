"""HTTP API routers"""

from fastapi import APIRouter

from .routers.auth import router as auth_router
from .routers.files import router as files_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(files_router)
