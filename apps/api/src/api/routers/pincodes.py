from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query

from api.dependencies import get_location_service
from api.response import success_response
from api.routers.guards import enforce_rate_limit
from api.schemas.pincode import PincodeSearchRequest
from api.schemas.route import PINCODE_PATTERN
from api.services.location_service import LocationService

router = APIRouter(prefix="/v1/pincodes", tags=["pincodes"], dependencies=[Depends(enforce_rate_limit)])


@router.post("/search")
async def search_pincodes(
    payload: PincodeSearchRequest,
    service: LocationService = Depends(get_location_service),
) -> dict:
    result = await service.search(payload.query, origin_code=payload.from_pincode)
    return success_response(result.to_payload(), meta={"limit": service.combined_mode.limit})


@router.get("/prefix/{prefix}")
async def search_by_prefix(
    prefix: str = Path(..., pattern=r"^\d{4,6}$"),
    from_pincode: str | None = Query(default=None, alias="fromPincode", pattern=PINCODE_PATTERN),
    service: LocationService = Depends(get_location_service),
) -> dict:
    result = await service.search_prefix(prefix, origin_code=from_pincode)
    return success_response(result.to_payload(), meta={"limit": service.prefix_mode.limit})


@router.get("/{pincode}")
async def get_pincode(
    pincode: str = Path(..., pattern=PINCODE_PATTERN),
    service: LocationService = Depends(get_location_service),
) -> dict:
    item = await service.get_pincode(pincode)
    return success_response(item.to_payload(), meta={})
