from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.platform.config import settings
from app.platform.logger import get_logger
from app.platform.response import error_response
from app.platform.utils.bot_detection import detect_bot

logger = get_logger(__name__)


class BotDetectionMiddleware(BaseHTTPMiddleware):
    """Reject automated clients on the public verification endpoints."""

    async def dispatch(self, request: Request, call_next):
        if not settings.BOT_DETECTION_ENABLED or request.url.path not in settings.BOT_PROTECTED_PATHS:
            return await call_next(request)

        if detect_bot(request):
            client_ip = request.client.host if request.client else "unknown"
            logger.warning(
                f"Automated access blocked - path: {request.url.path}, ip: {client_ip}, "
                f"user_agent: {request.headers.get('user-agent', '')!r}"
            )
            return error_response(
                "This endpoint is not available for automated access.",
                status_code=403,
            )

        return await call_next(request)
