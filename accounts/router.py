"""Central API router aggregating all domain routers."""

from fastapi import APIRouter

from accounts.health.router import router as health_router
from accounts.user.router import router as user_router


def build_api_router(prefix: str) -> APIRouter:
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(health_router)
    api_router.include_router(user_router)
    return api_router
