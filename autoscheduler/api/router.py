from __future__ import annotations

from fastapi import APIRouter

from autoscheduler.api.v1.schedule import router as schedule_router

api_router = APIRouter()
api_router.include_router(schedule_router, tags=["schedule"])
