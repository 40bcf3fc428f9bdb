"""API v1 routes."""

from fastapi import APIRouter

from gatehouse.api.v1 import auth, health, users

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
