# app/middlewares/rate_limit.py
import time
from typing import Optional, Tuple

from fastapi import Request
from redis.asyncio import Redis
from starlette.middleware.base import BaseHTTPMiddleware

from app.platform.config import settings
from app.platform.response import error_response

MEMORY_PRUNE_INTERVAL = 60


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app):
        super().__init__(app)
        self.redis = None
        self.memory_store = {}
        self.next_prune_at = 0.0

    def resolve_limit(self, path: str) -> Optional[Tuple[str, int, int]]:
        """Return (bucket, max requests, window seconds) for a path, or None."""
        if path in settings.RATE_LIMITS:
            limit, window = settings.RATE_LIMITS[path]
            return path, limit, window

        default = settings.RATE_LIMITS.get("*")
        if default and path.startswith(settings.API_PREFIX):
            limit, window = default
            return "*", limit, window
        return None

    async def dispatch(self, request: Request, call_next):
        if not settings.RATE_LIMIT_ENABLED:
            return await call_next(request)

        client_ip = request.client.host if request.client else "testclient"

        # Skip limit if whitelisted
        if client_ip in settings.WHITELIST_IPS:
            return await call_next(request)

        resolved = self.resolve_limit(request.url.path)

        # If endpoint is not rate-limited, continue
        if resolved is None:
            return await call_next(request)

        bucket, limit, window = resolved

        # ---------------------------
        # In-memory store
        # ---------------------------
        if settings.RATE_LIMIT_BACKEND == "memory":
            self.prune_expired(time.time())
            key = f"{client_ip}:{bucket}"
            count, expiry = self.memory_store.get(key, (0, time.time() + window))

            if time.time() > expiry:
                count = 0
                expiry = time.time() + window

            if count >= limit:
                retry_after = max(int(expiry - time.time()), 1)
                return self._too_many_requests(retry_after)

            self.memory_store[key] = (count + 1, expiry)
            return await call_next(request)

        # ---------------------------
        # PRODUCTION: Redis store
        # ---------------------------
        if self.redis is None:
            self.redis = Redis.from_url(settings.REDIS_URL, decode_responses=True)

        key = f"rl:{client_ip}:{bucket}"
        current_count = await self.redis.get(key)

        if current_count is None:
            await self.redis.set(key, 1, ex=window)
        else:
            current_count = int(current_count)
            if current_count >= limit:
                ttl = await self.redis.ttl(key)
                return self._too_many_requests(max(ttl, 1))
            await self.redis.incr(key)

        return await call_next(request)

    def prune_expired(self, now: float) -> None:
        """Drop finished windows, at most once per MEMORY_PRUNE_INTERVAL seconds."""
        if now < self.next_prune_at:
            return
        self.next_prune_at = now + MEMORY_PRUNE_INTERVAL
        expired = [key for key, (_, expiry) in self.memory_store.items() if expiry <= now]
        for key in expired:
            del self.memory_store[key]

    @staticmethod
    def _too_many_requests(retry_after: int):
        return error_response(
            "Too many requests from this IP, please try again later.",
            status_code=429,
            headers={"Retry-After": str(retry_after)},
        )
