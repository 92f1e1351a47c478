"""Main API router aggregating all v1 routes."""

from fastapi import APIRouter

from app.api.v1 import logs, scheduler

api_router = APIRouter()

# Include all route modules
api_router.include_router(scheduler.router)
api_router.include_router(logs.router)
