from __future__ import annotations
from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from datetime import datetime, timezone
from contesthub.config import settings

router = APIRouter(tags=["system"])

@router.get("/", response_class=PlainTextResponse)
async def root():
    return f"{settings.app_display_name} Server is running"

@router.get("/health")
async def health(request: Request):
    return {
        "status": "ok",
        "env": settings.environment,
        "time": datetime.now(timezone.utc).isoformat(),
        "request_id": request.headers.get("x-request-id") or request.state.request_id,
    }

@router.get("/version")
async def version():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "git_sha": settings.git_sha,
    }
