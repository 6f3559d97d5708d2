from __future__ import annotations

from dataclasses import dataclass

from route_engine.errors import (
    InvalidComputation,
    NotFoundError,
    RouteEngineError,
    UpstreamUnavailable,
    ValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[RouteEngineError], int], ...] = (
    (ValidationError, 422),
    (NotFoundError, 404),
    (UpstreamUnavailable, 503),
    (InvalidComputation, 502),
)


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int


def to_api_error(exc: RouteEngineError) -> ApiError:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return ApiError(exc.code, exc.message, status_code)
    return ApiError(exc.code, exc.message, 500)
