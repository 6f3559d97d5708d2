from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_ai_route_service, get_route_service
from api.response import success_response
from api.routers.guards import enforce_rate_limit, record_estimate_method
from api.schemas.route import AIRouteRequest, AIRouteResult, CoordinateRouteRequest, PincodeRouteRequest
from api.services.ai_route_service import AIRouteService
from api.services.route_service import RouteService

router = APIRouter(prefix="/v1/routes", tags=["routes"], dependencies=[Depends(enforce_rate_limit)])


@router.post("/distance")
async def distance(
    payload: CoordinateRouteRequest,
    service: RouteService = Depends(get_route_service),
) -> dict:
    result = await service.distance(payload)
    return success_response(result.to_payload(), meta={})


@router.post("/estimate/coordinates")
async def estimate_by_coordinates(
    payload: CoordinateRouteRequest,
    request: Request,
    service: RouteService = Depends(get_route_service),
) -> dict:
    result = await service.estimate_by_coordinates(payload)
    record_estimate_method(request, result.method)
    return success_response(result.to_payload(), meta={})


@router.post("/estimate/pincodes")
async def estimate_by_pincodes(
    payload: PincodeRouteRequest,
    request: Request,
    service: RouteService = Depends(get_route_service),
) -> dict:
    result = await service.estimate_by_pincodes(payload)
    record_estimate_method(request, result.method)
    return success_response(result.to_payload(), meta={})


@router.post("/estimate")
async def estimate_with_model(
    payload: AIRouteRequest,
    request: Request,
    service: AIRouteService = Depends(get_ai_route_service),
) -> dict:
    estimate = await service.estimate(payload.from_pin, payload.to_pin)
    record_estimate_method(request, estimate.method.value)
    result = AIRouteResult(
        from_pin=payload.from_pin,
        to_pin=payload.to_pin,
        distance=estimate.distance_km,
        hours=estimate.hours,
        is_local=estimate.classification.is_local,
        is_out_station=estimate.classification.is_outstation,
        approx_price=estimate.approx_price,
    )
    return success_response(result.to_payload(), meta={"method": estimate.method.value})
