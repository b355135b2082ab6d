"""System router: liveness and server metadata."""

import platform

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.config import settings
from app.database import DB_TYPE

router = APIRouter(tags=["system"])


@router.get("/hello", response_class=PlainTextResponse)
async def hello():
    return "Hello"


@router.get("/ping")
async def ping():
    """Server version, build and platform details."""
    return {
        "version": settings.VERSION,
        "buildNumber": settings.BUILD_NUMBER,
        "edition": settings.EDITION,
        "dbType": DB_TYPE,
        "osType": platform.system().lower(),
        "osArch": platform.machine(),
    }
