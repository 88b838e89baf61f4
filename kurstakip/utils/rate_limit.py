"""
Per-caller request limits for the outbound messaging endpoints.

Fixed window counters kept in process memory, keyed by client IP and path.
Counters are not shared between processes, so several app instances each enforce
their own limit.
"""
import logging
import math
import time
from typing import Callable

from fastapi import Request
from limits import RateLimitItemPerMinute, RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

logger = logging.getLogger(__name__)

storage = MemoryStorage()
limiter = FixedWindowRateLimiter(storage)


class RateLimitExceeded(Exception):
    def __init__(self, reset_at: float):
        self.reset_at = reset_at
        self.retry_after = max(1, math.ceil(reset_at - time.time()))
        super().__init__("Too many requests. Please try again later.")


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "anonymous"


def rate_limit(max_requests: int, window_seconds: int = 60) -> Callable[[Request], None]:
    """FastAPI dependency allowing `max_requests` per window for each (IP, path)."""
    if window_seconds % 60 == 0:
        item = RateLimitItemPerMinute(max_requests, window_seconds // 60)
    else:
        item = RateLimitItemPerSecond(max_requests, window_seconds)

    def dependency(request: Request) -> None:
        ip = client_ip(request)
        path = request.url.path
        if not limiter.hit(item, ip, path):
            reset_at, _remaining = limiter.get_window_stats(item, ip, path)
            logger.warning("Rate limit hit for %s on %s", ip, path)
            raise RateLimitExceeded(reset_at)

    return dependency


def reset() -> None:
    storage.reset()
