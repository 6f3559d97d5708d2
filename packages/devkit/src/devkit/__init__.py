"""Runtime devkit for the route service: settings, logging, tracing, storage clients."""

from devkit.config import ServiceSettings, load_settings
from devkit.db import (
    AsyncDatabaseManager,
    Base,
    create_all_tables,
    create_async_engine,
    create_session_factory,
    normalize_postgres_dsn,
)
from devkit.observability import (
    build_log_formatter,
    configure_logging,
    configure_otel,
    configure_probe_access_log_filter,
)
from devkit.redis import AsyncRedisManager, create_redis_client

__all__ = [
    "AsyncDatabaseManager",
    "AsyncRedisManager",
    "Base",
    "ServiceSettings",
    "build_log_formatter",
    "configure_logging",
    "configure_otel",
    "configure_probe_access_log_filter",
    "create_all_tables",
    "create_async_engine",
    "create_redis_client",
    "create_session_factory",
    "load_settings",
    "normalize_postgres_dsn",
]
