from fastapi import APIRouter

from gateway.interfaces.http.routers import admin, dispatch, scripts


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(admin.router, tags=["admin"])
    router.include_router(scripts.router, prefix="/script", tags=["scripts"])
    router.include_router(dispatch.router, prefix="/dispatch", tags=["dispatch"])
    return router


__all__ = [
    "create_api_router",
]
