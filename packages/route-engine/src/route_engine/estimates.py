from __future__ import annotations

from route_engine.classification import classify_trip
from route_engine.distance import great_circle_km, haversine_km, round_half_away
from route_engine.models import Coordinate, EstimateMethod, RouteEstimate
from route_engine.pricing import AUGMENTATION_PRICING, TIERED_PRICING, FareStrategy, road_factor
from route_engine.travel_time import FLAT_TRAVEL_TIME, PIECEWISE_TRAVEL_TIME, TravelTimeStrategy


def build_estimate(
    distance_km: float,
    method: EstimateMethod,
    travel_time: TravelTimeStrategy = PIECEWISE_TRAVEL_TIME,
    pricing: FareStrategy = TIERED_PRICING,
) -> RouteEstimate:
    if distance_km < 0:
        raise ValueError("distance_km must be >= 0")
    hours = travel_time.estimate_hours(distance_km)
    return RouteEstimate(
        distance_km=distance_km,
        hours=hours,
        classification=classify_trip(distance_km),
        approx_price=pricing.price(distance_km, hours),
        method=method,
    )


def estimate_coordinate_route(start: Coordinate, end: Coordinate) -> RouteEstimate:
    return build_estimate(haversine_km(start, end), EstimateMethod.HAVERSINE)


def estimate_lookup_route(start: Coordinate, end: Coordinate) -> RouteEstimate:
    return build_estimate(
        haversine_km(start, end),
        EstimateMethod.HAVERSINE_WITH_LOOKUP,
        travel_time=FLAT_TRAVEL_TIME,
    )


def road_distance_km(start: Coordinate, end: Coordinate) -> float:
    straight_line = great_circle_km(start, end)
    return round_half_away(straight_line * road_factor(straight_line), 2)


def estimate_road_route(start: Coordinate, end: Coordinate) -> RouteEstimate:
    return build_estimate(
        road_distance_km(start, end),
        EstimateMethod.HAVERSINE_WITH_LOOKUP,
        travel_time=FLAT_TRAVEL_TIME,
        pricing=AUGMENTATION_PRICING,
    )
