"""API router composition."""

from fastapi import APIRouter

from canteen.api.endpoints import admin, auth, entries, health, logs

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(entries.router, prefix="/entries", tags=["entries"])
api_router.include_router(logs.router, prefix="/logs", tags=["logs"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
