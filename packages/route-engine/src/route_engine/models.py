from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


class TripCategory(str, Enum):
    LOCAL = "local"
    SHORT_OUTSTATION = "short-outstation"
    MEDIUM_OUTSTATION = "medium-outstation"
    LONG_OUTSTATION = "long-outstation"


class EstimateMethod(str, Enum):
    HAVERSINE = "haversine"
    HAVERSINE_WITH_LOOKUP = "haversine-with-lookup"
    AI_MODEL = "ai-model"
    AI_FALLBACK_HEURISTIC = "ai-fallback-heuristic"


@dataclass(frozen=True)
class TripClassification:
    is_local: bool
    is_outstation: bool
    category: TripCategory


@dataclass(frozen=True)
class RouteEstimate:
    distance_km: float
    hours: float
    classification: TripClassification
    approx_price: float
    method: EstimateMethod

    @property
    def category(self) -> TripCategory:
        return self.classification.category


@dataclass(frozen=True)
class LocationRecord:
    code: str
    display_name: str
    district: str
    state: str
    coordinate: Coordinate | None = None
    city: str | None = None

    @classmethod
    def from_fields(
        cls,
        code: str,
        city: str | None,
        district: str | None,
        state: str | None,
        latitude: float | None,
        longitude: float | None,
    ) -> "LocationRecord":
        coordinate = None
        if latitude is not None and longitude is not None:
            coordinate = Coordinate(latitude=float(latitude), longitude=float(longitude))
        return cls(
            code=code,
            display_name=city or district or "Unknown",
            district=district or "",
            state=state or "",
            coordinate=coordinate,
            city=city or None,
        )

    @property
    def display(self) -> str:
        return f"{self.code} - {self.display_name}"
