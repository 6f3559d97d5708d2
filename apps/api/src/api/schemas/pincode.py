from __future__ import annotations

import re

from pydantic import Field, field_validator

from api.schemas.route import PINCODE_PATTERN, CamelModel
from route_engine.models import LocationRecord, RouteEstimate

_LIKE_WILDCARDS = re.compile(r"[%_]")


class PincodeSearchRequest(CamelModel):
    query: str = Field(..., min_length=3, max_length=50)
    from_pincode: str | None = Field(default=None, pattern=PINCODE_PATTERN)

    @field_validator("query")
    @classmethod
    def _reject_wildcards(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Minimum 3 characters required")
        if _LIKE_WILDCARDS.search(value):
            raise ValueError("invalid search query")
        return value


class RouteEstimation(CamelModel):
    distance: float
    hours: float
    category: str
    approx_price: float

    @classmethod
    def from_estimate(cls, estimate: RouteEstimate) -> "RouteEstimation":
        return cls(
            distance=estimate.distance_km,
            hours=estimate.hours,
            category=estimate.category.value,
            approx_price=estimate.approx_price,
        )


class PincodeSearchItem(CamelModel):
    display: str
    pincode: str
    city: str | None
    district: str
    state: str
    latitude: float | None
    longitude: float | None
    route_estimation: RouteEstimation | None = None

    @classmethod
    def from_record(cls, record: LocationRecord, estimate: RouteEstimate | None = None) -> "PincodeSearchItem":
        coordinate = record.coordinate
        return cls(
            display=record.display,
            pincode=record.code,
            city=record.city,
            district=record.district,
            state=record.state,
            latitude=coordinate.latitude if coordinate else None,
            longitude=coordinate.longitude if coordinate else None,
            route_estimation=RouteEstimation.from_estimate(estimate) if estimate else None,
        )

    def to_payload(self) -> dict:
        payload = super().to_payload()
        if self.route_estimation is None:
            payload.pop("routeEstimation", None)
        return payload


class PincodeSearchResult(CamelModel):
    query: str
    count: int
    results: list[PincodeSearchItem]

    def to_payload(self) -> dict:
        return {
            "query": self.query,
            "count": self.count,
            "results": [item.to_payload() for item in self.results],
        }
