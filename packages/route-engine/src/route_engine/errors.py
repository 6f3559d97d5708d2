from __future__ import annotations

from enum import Enum


class RouteSide(str, Enum):
    ORIGIN = "from"
    DESTINATION = "to"


class RouteEngineError(Exception):
    code = "ROUTE_ENGINE_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(RouteEngineError):
    code = "VALIDATION_ERROR"


class NotFoundError(RouteEngineError):
    """A code is unknown to the lookup store, or known but without coordinates."""

    code = "NOT_FOUND"

    def __init__(
        self,
        message: str,
        side: RouteSide | None = None,
        missing_coordinates: bool = False,
    ) -> None:
        super().__init__(message, code=self._code_for(side, missing_coordinates))
        self.side = side
        self.missing_coordinates = missing_coordinates

    @staticmethod
    def _code_for(side: RouteSide | None, missing_coordinates: bool) -> str:
        if side is None:
            return "PINCODE_NO_COORDINATES" if missing_coordinates else "PINCODE_NOT_FOUND"
        prefix = "FROM" if side is RouteSide.ORIGIN else "TO"
        suffix = "NO_COORDINATES" if missing_coordinates else "NOT_FOUND"
        return f"{prefix}_PINCODE_{suffix}"


class UpstreamUnavailable(RouteEngineError):
    code = "UPSTREAM_UNAVAILABLE"


class InvalidComputation(RouteEngineError):
    code = "INVALID_COMPUTATION"
