# -----------------------------------------------------------------------------
# app/security/rate_guard.py — Per-client sliding window limiter, body size cap
# -----------------------------------------------------------------------------

import asyncio
import math
import time
from dataclasses import dataclass

from starlette.requests import Request

# express.json({limit: "1mb"})
MAX_BODY_BYTES = 1024 * 1024


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: int

    def headers(self) -> dict[str, str]:
        return {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_after),
        }


class RateLimiter:
    def __init__(self, max_requests: int, window_sec: float, clock=time.monotonic) -> None:
        self.max_requests = max_requests
        self.window_sec = window_sec
        self._store: dict[str, list[float]] = {}
        self._clock = clock
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._store)

    def _evict_expired(self, now: float) -> None:
        stale = [k for k, ts in self._store.items() if not ts or now - ts[-1] >= self.window_sec]
        for k in stale:
            del self._store[k]

    async def hit(self, key: str) -> RateLimitDecision:
        async with self._lock:
            now = self._clock()
            self._evict_expired(now)
            timestamps = self._store.setdefault(key, [])
            timestamps[:] = [t for t in timestamps if now - t < self.window_sec]
            allowed = len(timestamps) < self.max_requests
            if allowed:
                timestamps.append(now)
            reset_after = math.ceil(self.window_sec - (now - timestamps[0])) if timestamps else 0
            return RateLimitDecision(
                allowed=allowed,
                limit=self.max_requests,
                remaining=max(0, self.max_requests - len(timestamps)),
                reset_after=max(0, reset_after),
            )


def client_ip(request: Request, trust_proxy: bool = False) -> str:
    # X-Forwarded-For is client-controlled unless a trusted proxy sets it
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded and forwarded.split(",")[0].strip():
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def check_content_length(value: str | None) -> None:
    if value is None:
        return
    try:
        declared = int(value)
    except ValueError:
        return
    if declared > MAX_BODY_BYTES:
        raise ValueError("request body exceeds maximum size")


def check_body_size(body: bytes) -> None:
    if len(body) > MAX_BODY_BYTES:
        raise ValueError("request body exceeds maximum size")
