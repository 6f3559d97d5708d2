import math
from decimal import ROUND_HALF_UP, Decimal

from route_engine.models import Coordinate

EARTH_RADIUS_KM = 6371


def round_half_away(value: float, places: int = 2) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def great_circle_km(start: Coordinate, end: Coordinate) -> float:
    start_lat = math.radians(start.latitude)
    end_lat = math.radians(end.latitude)
    delta_lat = math.radians(end.latitude - start.latitude)
    delta_lng = math.radians(end.longitude - start.longitude)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(start_lat) * math.cos(end_lat) * math.sin(delta_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def haversine_km(start: Coordinate, end: Coordinate) -> float:
    return round_half_away(great_circle_km(start, end), 2)
