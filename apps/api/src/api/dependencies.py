from __future__ import annotations

import random

from devkit.config import load_settings
from devkit.db import AsyncDatabaseManager
from devkit.redis import create_redis_client
from route_engine.fallback import RegionHeuristicEstimator

from api.circuit_breaker import CircuitBreaker
from api.clients.completion_client import CompletionClient
from api.rate_limit import InMemoryRateLimitStore, RedisRateLimitStore, SlidingWindowRateLimiter
from api.repositories.pincode_repository import InMemoryPincodeRepository, SqlPincodeRepository
from api.services.ai_route_service import AIRouteService
from api.services.location_service import LocationService
from api.services.route_service import RouteService

settings = load_settings("route-intelligence-api")

if settings.DATABASE_URL:
    _database = AsyncDatabaseManager(settings.DATABASE_URL)
    _pincode_repository = SqlPincodeRepository(_database)
else:
    _database = None
    _pincode_repository = InMemoryPincodeRepository()

_location_service = LocationService(
    _pincode_repository,
    search_limit=settings.PINCODE_SEARCH_LIMIT,
    prefix_limit=settings.PINCODE_PREFIX_LIMIT,
)
_route_service = RouteService(_location_service)

if settings.LLM_BASE_URL:
    _completion_client = CompletionClient(
        base_url=settings.LLM_BASE_URL,
        model=settings.LLM_MODEL,
        api_key=settings.LLM_API_KEY,
        timeout_seconds=settings.LLM_TIMEOUT_SECONDS,
    )
else:
    _completion_client = None
_circuit_breaker = CircuitBreaker("completion", failure_threshold=3, recovery_timeout_seconds=30)
_ai_route_service = AIRouteService(
    client=_completion_client,
    fallback=RegionHeuristicEstimator(rng=random.Random(settings.FALLBACK_RANDOM_SEED)),
    circuit_breaker=_circuit_breaker,
)

_redis_client = create_redis_client(settings.REDIS_URL)
if _redis_client is not None:
    _rate_limit_store = RedisRateLimitStore(_redis_client, window_seconds=60)
else:
    _rate_limit_store = InMemoryRateLimitStore()
_rate_limiter = SlidingWindowRateLimiter(
    _rate_limit_store,
    limit_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    window_seconds=60,
)


def get_database() -> AsyncDatabaseManager | None:
    return _database


def get_location_service() -> LocationService:
    return _location_service


def get_route_service() -> RouteService:
    return _route_service


def get_ai_route_service() -> AIRouteService:
    return _ai_route_service


def get_rate_limiter() -> SlidingWindowRateLimiter:
    return _rate_limiter


def get_redis_client():
    return _redis_client
