from __future__ import annotations

import time

from fastapi import Depends, Request

from api.dependencies import get_rate_limiter
from api.errors import ApiError
from api.rate_limit import SlidingWindowRateLimiter


def resolve_client_key(request: Request) -> str:
    forwarded = request.headers.get("x-client-id")
    if forwarded:
        return forwarded
    if request.client:
        return request.client.host
    return "anonymous"


async def enforce_rate_limit(
    request: Request,
    rate_limiter: SlidingWindowRateLimiter = Depends(get_rate_limiter),
) -> None:
    allowed = await rate_limiter.allow(resolve_client_key(request), now_seconds=time.time())
    if not allowed:
        raise ApiError("RATE_LIMIT_EXCEEDED", "Too many requests", 429)


def record_estimate_method(request: Request, method: str) -> None:
    metrics = getattr(request.app.state, "prom_metrics", None)
    if metrics is not None:
        metrics.record_estimate(method)
