"""Route estimation core: distances, trip classes, travel times and fares."""

from route_engine.ai_output import (
    ModelRouteFields,
    UnparseableModelOutput,
    build_route_prompt,
    coerce_route_fields,
    parse_model_output,
    strip_code_fences,
)
from route_engine.classification import classify_trip, trip_category
from route_engine.distance import great_circle_km, haversine_km, round_half_away
from route_engine.errors import (
    InvalidComputation,
    NotFoundError,
    RouteEngineError,
    RouteSide,
    UpstreamUnavailable,
    ValidationError,
)
from route_engine.estimates import (
    build_estimate,
    estimate_coordinate_route,
    estimate_lookup_route,
    estimate_road_route,
    road_distance_km,
)
from route_engine.fallback import RegionHeuristicEstimator, pincode_region
from route_engine.models import (
    Coordinate,
    EstimateMethod,
    LocationRecord,
    RouteEstimate,
    TripCategory,
    TripClassification,
)
from route_engine.pricing import (
    AUGMENTATION_PRICING,
    TIERED_PRICING,
    AugmentationFarePricing,
    TieredFarePricing,
    road_factor,
)
from route_engine.ranking import MatchTier, is_numeric_query, rank_prefix_matches, rank_text_matches
from route_engine.travel_time import (
    FLAT_TRAVEL_TIME,
    PIECEWISE_TRAVEL_TIME,
    FlatSpeedTravelTime,
    PiecewiseSpeedTravelTime,
)

__all__ = [
    "AUGMENTATION_PRICING",
    "AugmentationFarePricing",
    "Coordinate",
    "EstimateMethod",
    "FLAT_TRAVEL_TIME",
    "FlatSpeedTravelTime",
    "InvalidComputation",
    "LocationRecord",
    "MatchTier",
    "ModelRouteFields",
    "NotFoundError",
    "PIECEWISE_TRAVEL_TIME",
    "PiecewiseSpeedTravelTime",
    "RegionHeuristicEstimator",
    "RouteEngineError",
    "RouteEstimate",
    "RouteSide",
    "TIERED_PRICING",
    "TieredFarePricing",
    "TripCategory",
    "TripClassification",
    "UnparseableModelOutput",
    "UpstreamUnavailable",
    "ValidationError",
    "build_estimate",
    "build_route_prompt",
    "classify_trip",
    "coerce_route_fields",
    "estimate_coordinate_route",
    "estimate_lookup_route",
    "estimate_road_route",
    "great_circle_km",
    "haversine_km",
    "is_numeric_query",
    "parse_model_output",
    "pincode_region",
    "rank_prefix_matches",
    "rank_text_matches",
    "road_distance_km",
    "road_factor",
    "round_half_away",
    "strip_code_fences",
    "trip_category",
]
