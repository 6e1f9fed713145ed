from fastapi import APIRouter

from . import templates


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(templates.router, prefix="/templates", tags=["templates"])
    return router


__all__ = [
    "create_api_router",
]
