from __future__ import annotations

from route_engine.models import TripCategory, TripClassification

LOCAL_LIMIT_KM = 50
SHORT_OUTSTATION_LIMIT_KM = 150
MEDIUM_OUTSTATION_LIMIT_KM = 400


def trip_category(distance_km: float) -> TripCategory:
    if distance_km < LOCAL_LIMIT_KM:
        return TripCategory.LOCAL
    if distance_km < SHORT_OUTSTATION_LIMIT_KM:
        return TripCategory.SHORT_OUTSTATION
    if distance_km < MEDIUM_OUTSTATION_LIMIT_KM:
        return TripCategory.MEDIUM_OUTSTATION
    return TripCategory.LONG_OUTSTATION


def classify_trip(distance_km: float) -> TripClassification:
    category = trip_category(distance_km)
    is_local = category is TripCategory.LOCAL
    return TripClassification(is_local=is_local, is_outstation=not is_local, category=category)
