"""Fare strategies and the straight-line to road distance factor.

:class:`TieredFarePricing` is the general fare table. :class:`AugmentationFarePricing`
is the simpler two-band table used when search results are annotated with a
route relative to an origin. They are kept apart on purpose: callers select one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from route_engine.classification import (
    LOCAL_LIMIT_KM,
    MEDIUM_OUTSTATION_LIMIT_KM,
    SHORT_OUTSTATION_LIMIT_KM,
)
from route_engine.distance import round_half_away

TIME_CHARGE_PER_MINUTE = 2


@dataclass(frozen=True)
class FareTier:
    price_per_km: float
    base_fare: float


class FareStrategy(Protocol):
    def tier_for(self, distance_km: float) -> FareTier: ...

    def price(self, distance_km: float, hours: float) -> float: ...


class TieredFarePricing:
    name = "tiered"

    LOCAL = FareTier(price_per_km=12, base_fare=50)
    SHORT_OUTSTATION = FareTier(price_per_km=15, base_fare=80)
    MEDIUM_OUTSTATION = FareTier(price_per_km=12, base_fare=100)
    LONG_OUTSTATION = FareTier(price_per_km=10, base_fare=120)

    def tier_for(self, distance_km: float) -> FareTier:
        if distance_km < LOCAL_LIMIT_KM:
            return self.LOCAL
        if distance_km < SHORT_OUTSTATION_LIMIT_KM:
            return self.SHORT_OUTSTATION
        if distance_km < MEDIUM_OUTSTATION_LIMIT_KM:
            return self.MEDIUM_OUTSTATION
        return self.LONG_OUTSTATION

    def time_charge(self, hours: float) -> float:
        return round_half_away(hours * 60 * TIME_CHARGE_PER_MINUTE, 0)

    def price(self, distance_km: float, hours: float) -> float:
        tier = self.tier_for(distance_km)
        total = tier.base_fare + distance_km * tier.price_per_km + self.time_charge(hours)
        return round_half_away(total, 2)


class AugmentationFarePricing:
    """Two-band fare for search results: short hops and everything else."""

    name = "augmentation"

    SHORT_LIMIT_KM = 50
    SHORT = FareTier(price_per_km=15, base_fare=500)
    LONG = FareTier(price_per_km=12, base_fare=800)

    def tier_for(self, distance_km: float) -> FareTier:
        return self.SHORT if distance_km <= self.SHORT_LIMIT_KM else self.LONG

    def price(self, distance_km: float, hours: float) -> float:
        del hours
        tier = self.tier_for(distance_km)
        return round_half_away(tier.base_fare + distance_km * tier.price_per_km, 2)


def road_factor(straight_line_km: float) -> float:
    if straight_line_km > 150:
        return 1.30
    if straight_line_km > 50:
        return 1.35
    return 1.40


TIERED_PRICING = TieredFarePricing()
AUGMENTATION_PRICING = AugmentationFarePricing()
