from fastapi import APIRouter

from app.platform.config import settings
from app.platform.response import api_response

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check():
    return api_response({"status": "ok", "version": settings.APP_VERSION})
