"""API v1 router."""

from fastapi import APIRouter

from app.api.v1.endpoints import ai, notes

api_router = APIRouter()

api_router.include_router(notes.router, prefix="/notes", tags=["Notes"])
api_router.include_router(ai.router, prefix="/ai", tags=["AI"])
