from __future__ import annotations

import pytest
from route_engine.errors import NotFoundError, RouteSide, UpstreamUnavailable, ValidationError

from api.repositories.pincode_repository import InMemoryPincodeRepository
from api.services.location_service import LocationService


class UnavailableRepository:
    async def get(self, code: str):
        raise UpstreamUnavailable("pincode store is unavailable")

    async def search_prefix(self, prefix: str, limit: int):
        raise UpstreamUnavailable("pincode store is unavailable")

    async def search_text(self, term: str):
        raise UpstreamUnavailable("pincode store is unavailable")


def build_service(**kwargs) -> LocationService:
    return LocationService(InMemoryPincodeRepository(), **kwargs)


@pytest.mark.asyncio
async def test_lookup_returns_record() -> None:
    record = await build_service().lookup("682001")

    assert record.display_name == "Kochi"
    assert record.district == "Ernakulam"
    assert record.coordinate is not None


@pytest.mark.asyncio
async def test_lookup_reports_side_of_missing_code() -> None:
    with pytest.raises(NotFoundError) as exc_info:
        await build_service().lookup("999999", RouteSide.DESTINATION)

    assert exc_info.value.code == "TO_PINCODE_NOT_FOUND"


@pytest.mark.asyncio
async def test_require_coordinate_rejects_record_without_coordinates() -> None:
    service = build_service()
    record = await service.lookup("560300")

    with pytest.raises(NotFoundError) as exc_info:
        service.require_coordinate(record, RouteSide.ORIGIN)

    assert exc_info.value.code == "FROM_PINCODE_NO_COORDINATES"


@pytest.mark.asyncio
async def test_search_requires_three_characters() -> None:
    with pytest.raises(ValidationError):
        await build_service().search("  ko ")


@pytest.mark.asyncio
async def test_search_prefix_validates_digits() -> None:
    with pytest.raises(ValidationError):
        await build_service().search_prefix("41a0")


@pytest.mark.asyncio
async def test_search_prefix_caps_results() -> None:
    result = await build_service(prefix_limit=1).search_prefix("5600")

    assert result.count == 1
    assert [item.pincode for item in result.results] == ["560001"]


@pytest.mark.asyncio
async def test_search_text_is_case_insensitive() -> None:
    result = await build_service().search("KOLKATA")

    assert [item.pincode for item in result.results] == ["700001"]
    assert result.query == "KOLKATA"


@pytest.mark.asyncio
async def test_store_outage_propagates() -> None:
    service = LocationService(UnavailableRepository())

    with pytest.raises(UpstreamUnavailable):
        await service.search("Pune")
