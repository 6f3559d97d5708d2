from __future__ import annotations

from route_engine.distance import haversine_km
from route_engine.errors import RouteSide
from route_engine.estimates import estimate_coordinate_route, estimate_lookup_route
from route_engine.models import EstimateMethod

from api.schemas.route import (
    CoordinateRouteRequest,
    CoordinateRouteResult,
    DistanceResult,
    LatLon,
    PincodeRouteRequest,
    PincodeRouteResult,
    estimate_fields,
)
from api.services.location_service import LocationService


class RouteService:
    def __init__(self, locations: LocationService) -> None:
        self._locations = locations

    async def distance(self, request: CoordinateRouteRequest) -> DistanceResult:
        return DistanceResult(
            from_coordinates=LatLon.from_coordinate(request.origin),
            to_coordinates=LatLon.from_coordinate(request.destination),
            distance_km=haversine_km(request.origin, request.destination),
            method=EstimateMethod.HAVERSINE.value,
        )

    async def estimate_by_coordinates(self, request: CoordinateRouteRequest) -> CoordinateRouteResult:
        estimate = estimate_coordinate_route(request.origin, request.destination)
        return CoordinateRouteResult(
            from_coordinates=LatLon.from_coordinate(request.origin),
            to_coordinates=LatLon.from_coordinate(request.destination),
            **estimate_fields(estimate),
        )

    async def estimate_by_pincodes(self, request: PincodeRouteRequest) -> PincodeRouteResult:
        # Origin is resolved first so a request with two bad codes reports the origin.
        origin = await self._locations.lookup(request.from_pincode, RouteSide.ORIGIN)
        origin_point = self._locations.require_coordinate(origin, RouteSide.ORIGIN)
        destination = await self._locations.lookup(request.to_pincode, RouteSide.DESTINATION)
        destination_point = self._locations.require_coordinate(destination, RouteSide.DESTINATION)

        estimate = estimate_lookup_route(origin_point, destination_point)
        return PincodeRouteResult(
            from_pincode=origin.code,
            from_location=origin.display_name,
            from_coordinates=LatLon.from_coordinate(origin_point),
            to_pincode=destination.code,
            to_location=destination.display_name,
            to_coordinates=LatLon.from_coordinate(destination_point),
            **estimate_fields(estimate),
        )
