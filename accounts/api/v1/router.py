"""API router aggregation: one prefix and tag per endpoint module."""

from fastapi import APIRouter

from accounts.api.v1.endpoints import auth, health, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
