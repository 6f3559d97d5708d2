"""Travel-time strategies.

Two averaging models coexist and are chosen by the caller:

* :class:`PiecewiseSpeedTravelTime` picks an average speed per trip band.
* :class:`FlatSpeedTravelTime` assumes one cruising speed for every distance.
  The lookup-backed pincode route and search augmentation rely on it.
"""

from __future__ import annotations

from typing import Protocol

from route_engine.classification import (
    LOCAL_LIMIT_KM,
    MEDIUM_OUTSTATION_LIMIT_KM,
    SHORT_OUTSTATION_LIMIT_KM,
)
from route_engine.distance import round_half_away


class TravelTimeStrategy(Protocol):
    def average_speed_kmh(self, distance_km: float) -> float: ...

    def estimate_hours(self, distance_km: float) -> float: ...


class PiecewiseSpeedTravelTime:
    name = "piecewise"

    def average_speed_kmh(self, distance_km: float) -> float:
        if distance_km < LOCAL_LIMIT_KM:
            return 30.0
        if distance_km < SHORT_OUTSTATION_LIMIT_KM:
            return 45.0
        if distance_km < MEDIUM_OUTSTATION_LIMIT_KM:
            return 50.0
        return 55.0

    def estimate_hours(self, distance_km: float) -> float:
        return round_half_away(distance_km / self.average_speed_kmh(distance_km), 2)


class FlatSpeedTravelTime:
    name = "flat"

    def __init__(self, speed_kmh: float = 50.0) -> None:
        if speed_kmh <= 0:
            raise ValueError("speed_kmh must be > 0")
        self._speed_kmh = speed_kmh

    def average_speed_kmh(self, distance_km: float) -> float:
        del distance_km
        return self._speed_kmh

    def estimate_hours(self, distance_km: float) -> float:
        return round_half_away(distance_km / self._speed_kmh, 2)


PIECEWISE_TRAVEL_TIME = PiecewiseSpeedTravelTime()
FLAT_TRAVEL_TIME = FlatSpeedTravelTime()
