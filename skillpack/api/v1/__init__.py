from fastapi import APIRouter

from .skills import router as skills_router

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(skills_router, prefix="/skills")

__all__ = ["v1_router"]
