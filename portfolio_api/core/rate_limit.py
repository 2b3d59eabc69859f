"""
Fixed-window rate limiting per client IP, counters kept in Redis.
Used as a router dependency; fails open if Redis is unreachable.
"""

import logging

from fastapi import HTTPException, Request, status
from redis.exceptions import RedisError

from portfolio_api.cache import redis_client
from portfolio_api.config import get_settings

logger = logging.getLogger(__name__)


class RateLimiter:
    """Allow `max_requests` per `window_seconds` for each client under a named scope."""

    def __init__(self, scope: str, max_requests: int, window_seconds: int, message: str | None = None):
        self.scope = scope
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.message = message or "Too many requests from this IP, please try again later."

    def key_for(self, request: Request) -> str:
        client_ip = request.client.host if request.client else "unknown"
        return f"ratelimit:{self.scope}:{client_ip}"

    async def __call__(self, request: Request) -> None:
        if not get_settings().rate_limit_enabled:
            return
        key = self.key_for(request)
        try:
            client = await redis_client.get_redis()
            # One MULTI/EXEC round trip; NX starts the window on the first hit only (Redis >= 7)
            async with client.pipeline(transaction=True) as pipe:
                pipe.incr(key)
                pipe.expire(key, self.window_seconds, nx=True)
                count, _ = await pipe.execute()
        except (RedisError, OSError) as e:
            logger.warning("Rate limiter unavailable (%s); allowing request", e)
            return
        if count > self.max_requests:
            logger.warning("Rate limit exceeded: scope=%s key=%s count=%s", self.scope, key, count)
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=self.message,
                headers={"Retry-After": str(self.window_seconds)},
            )


_settings = get_settings()

api_rate_limiter = RateLimiter(
    "api",
    max_requests=_settings.rate_limit_requests,
    window_seconds=_settings.rate_limit_window_seconds,
)

auth_rate_limiter = RateLimiter(
    "auth",
    max_requests=_settings.auth_rate_limit_requests,
    window_seconds=_settings.rate_limit_window_seconds,
    message="Too many authentication attempts, please try again later.",
)
