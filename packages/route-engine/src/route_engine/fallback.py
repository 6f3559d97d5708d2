"""Heuristic route estimate from pincode regions.

Used when the model service is unreachable or its answer cannot be parsed.
The leading three digits of an Indian pincode identify a sorting region; the
absolute difference between two regions selects a distance band. The distance
is drawn uniformly inside that band, so two calls with the same codes usually
differ. Pass a seeded :class:`random.Random` to make the draw repeatable.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from route_engine.classification import classify_trip
from route_engine.distance import round_half_away
from route_engine.errors import ValidationError
from route_engine.models import EstimateMethod, RouteEstimate, TripClassification
from route_engine.pricing import TIERED_PRICING, FareStrategy

REGION_DIGITS = 3
DISTANCE_STEP_KM = 0.01


@dataclass(frozen=True)
class DistanceBand:
    max_region_diff: float
    min_km: float
    span_km: float
    speed_kmh: float
    is_local: bool

    @property
    def max_km(self) -> float:
        return self.min_km + self.span_km


DISTANCE_BANDS: tuple[DistanceBand, ...] = (
    DistanceBand(max_region_diff=0, min_km=15, span_km=35, speed_kmh=30, is_local=True),
    DistanceBand(max_region_diff=5, min_km=80, span_km=120, speed_kmh=45, is_local=False),
    DistanceBand(max_region_diff=20, min_km=200, span_km=300, speed_kmh=50, is_local=False),
    DistanceBand(max_region_diff=float("inf"), min_km=500, span_km=500, speed_kmh=55, is_local=False),
)


def pincode_region(code: str) -> int:
    prefix = code.strip()[:REGION_DIGITS]
    if len(prefix) < REGION_DIGITS or not prefix.isdigit():
        raise ValidationError(f"pincode {code!r} does not start with {REGION_DIGITS} digits")
    return int(prefix)


def band_for(region_diff: int) -> DistanceBand:
    for band in DISTANCE_BANDS:
        if region_diff <= band.max_region_diff:
            return band
    return DISTANCE_BANDS[-1]


class RegionHeuristicEstimator:
    def __init__(
        self,
        rng: random.Random | None = None,
        pricing: FareStrategy = TIERED_PRICING,
    ) -> None:
        self._rng = rng or random.Random()
        self._pricing = pricing

    def estimate(self, from_code: str, to_code: str) -> RouteEstimate:
        region_diff = abs(pincode_region(from_code) - pincode_region(to_code))
        band = band_for(region_diff)
        # bands are half-open, so the upper edge never leaks into the next category
        raw_distance = min(band.min_km + self._rng.random() * band.span_km, band.max_km - DISTANCE_STEP_KM)
        distance_km = round_half_away(raw_distance, 2)
        hours = round_half_away(raw_distance / band.speed_kmh, 2)
        return RouteEstimate(
            distance_km=distance_km,
            hours=hours,
            classification=TripClassification(
                is_local=band.is_local,
                is_outstation=not band.is_local,
                category=classify_trip(distance_km).category,
            ),
            approx_price=self._pricing.price(distance_km, hours),
            method=EstimateMethod.AI_FALLBACK_HEURISTIC,
        )
