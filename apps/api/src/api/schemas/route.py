from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from route_engine.models import Coordinate, RouteEstimate

PINCODE_PATTERN = r"^\d{6}$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class CoordinateRouteRequest(CamelModel):
    from_lat: float = Field(..., ge=-90, le=90)
    from_lon: float = Field(..., ge=-180, le=180)
    to_lat: float = Field(..., ge=-90, le=90)
    to_lon: float = Field(..., ge=-180, le=180)

    @property
    def origin(self) -> Coordinate:
        return Coordinate(latitude=self.from_lat, longitude=self.from_lon)

    @property
    def destination(self) -> Coordinate:
        return Coordinate(latitude=self.to_lat, longitude=self.to_lon)


class PincodeRouteRequest(CamelModel):
    from_pincode: str = Field(..., pattern=PINCODE_PATTERN)
    to_pincode: str = Field(..., pattern=PINCODE_PATTERN)


class AIRouteRequest(CamelModel):
    from_pin: str = Field(..., pattern=PINCODE_PATTERN)
    to_pin: str = Field(..., pattern=PINCODE_PATTERN)


class LatLon(CamelModel):
    lat: float
    lon: float

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> "LatLon":
        return cls(lat=coordinate.latitude, lon=coordinate.longitude)


class DistanceResult(CamelModel):
    from_coordinates: LatLon
    to_coordinates: LatLon
    distance_km: float
    method: str


class RouteFigures(CamelModel):
    distance: float
    hours: float
    is_local: bool
    is_out_station: bool
    category: str
    approx_price: float
    method: str


def estimate_fields(estimate: RouteEstimate) -> dict:
    return {
        "distance": estimate.distance_km,
        "hours": estimate.hours,
        "is_local": estimate.classification.is_local,
        "is_out_station": estimate.classification.is_outstation,
        "category": estimate.category.value,
        "approx_price": estimate.approx_price,
        "method": estimate.method.value,
    }


class CoordinateRouteResult(RouteFigures):
    from_coordinates: LatLon
    to_coordinates: LatLon


class PincodeRouteResult(RouteFigures):
    from_pincode: str
    from_location: str
    from_coordinates: LatLon
    to_pincode: str
    to_location: str
    to_coordinates: LatLon


class AIRouteResult(CamelModel):
    from_pin: str
    to_pin: str
    distance: float
    hours: float
    is_local: bool
    is_out_station: bool
    approx_price: float
