from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from devkit.observability import configure_logging, configure_otel, configure_probe_access_log_filter
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from route_engine.errors import RouteEngineError
from sqlalchemy.exc import SQLAlchemyError

from api.dependencies import get_database, get_redis_client, settings
from api.errors import ApiError, to_api_error
from api.middleware import ObservabilityMiddleware
from api.observability import (
    CompositeApiMetricsCollector,
    InMemoryApiMetricsCollector,
    PrometheusApiMetricsCollector,
    get_trace_id,
)
from api.response import error_response, success_response
from api.routers.pincodes import router as pincodes_router
from api.routers.routes import router as routes_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    try:
        yield
    finally:
        database = get_database()
        if database is not None:
            await database.disconnect()
        redis_client = get_redis_client()
        if redis_client is not None:
            await redis_client.close()


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)
    app = FastAPI(title="Route Intelligence API", version="0.1.0", lifespan=lifespan)
    configure_otel(service_name=settings.SERVICE_NAME)
    configure_probe_access_log_filter()
    app.state.api_metrics = InMemoryApiMetricsCollector()
    app.state.prom_metrics = PrometheusApiMetricsCollector()
    app.state.composite_metrics = CompositeApiMetricsCollector(
        [app.state.api_metrics, app.state.prom_metrics]
    )
    app.add_middleware(ObservabilityMiddleware, collector=app.state.composite_metrics)
    app.include_router(routes_router)
    app.include_router(pincodes_router)

    @app.get("/healthz")
    async def healthz() -> dict:
        return success_response({"status": "ok"}, meta={})

    @app.get("/readyz")
    async def readyz() -> Response:
        database = get_database()
        if database is not None:
            try:
                await database.connect()
            except (SQLAlchemyError, OSError):
                logger.warning("readiness_database_unavailable")
                return JSONResponse(
                    status_code=503,
                    content=error_response("NOT_READY", "pincode store is unavailable"),
                )
        return JSONResponse(content=success_response({"status": "ready"}, meta={}))

    @app.get("/metrics")
    async def metrics() -> Response:
        payload = app.state.prom_metrics.render()
        return Response(content=payload, media_type="text/plain; version=0.0.4")

    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_response(exc.code, exc.message))

    @app.exception_handler(RouteEngineError)
    async def handle_route_engine_error(request: Request, exc: RouteEngineError) -> JSONResponse:
        api_error = to_api_error(exc)
        if api_error.status_code >= 500:
            logger.error(
                "request_failed",
                extra={
                    "path": request.url.path,
                    "code": api_error.code,
                    "status_code": api_error.status_code,
                    "trace_id": get_trace_id(),
                },
            )
        return JSONResponse(status_code=api_error.status_code, content=error_response(api_error.code, api_error.message))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        message = "; ".join(err["msg"] for err in exc.errors())
        return JSONResponse(
            status_code=422,
            content=error_response("VALIDATION_ERROR", message),
        )

    return app


app = create_app()
