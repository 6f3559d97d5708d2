from __future__ import annotations

from fastapi.testclient import TestClient
from route_engine.estimates import estimate_road_route
from route_engine.models import Coordinate

from api.app import create_app
from api.dependencies import get_location_service, get_rate_limiter
from api.rate_limit import InMemoryRateLimitStore, SlidingWindowRateLimiter
from api.repositories.pincode_repository import InMemoryPincodeRepository
from api.services.location_service import LocationService


def build_client(search_limit: int = 10, prefix_limit: int = 100) -> TestClient:
    app = create_app()
    service = LocationService(InMemoryPincodeRepository(), search_limit=search_limit, prefix_limit=prefix_limit)
    limiter = SlidingWindowRateLimiter(InMemoryRateLimitStore())
    app.dependency_overrides[get_location_service] = lambda: service
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    return TestClient(app)


def codes(body: dict) -> list[str]:
    return [item["pincode"] for item in body["data"]["results"]]


def test_search_ranks_exact_city_before_exact_district() -> None:
    client = build_client()

    response = client.post("/v1/pincodes/search", json={"query": "Pune"})
    body = response.json()

    assert response.status_code == 200
    assert body["data"]["query"] == "Pune"
    assert codes(body) == ["411001", "411045", "412105"]
    assert body["data"]["count"] == 3
    assert body["data"]["results"][1]["display"] == "411045 - Pune"
    assert "routeEstimation" not in body["data"]["results"][0]


def test_search_ranks_city_prefix_before_district_prefix() -> None:
    client = build_client()

    response = client.post("/v1/pincodes/search", json={"query": "beng"})

    assert codes(response.json()) == ["560001", "560050", "560300", "562110"]


def test_numeric_search_matches_code_prefix() -> None:
    client = build_client()

    response = client.post("/v1/pincodes/search", json={"query": "5600"})

    assert codes(response.json()) == ["560001", "560050"]


def test_search_is_capped_by_limit() -> None:
    client = build_client(search_limit=2)

    response = client.post("/v1/pincodes/search", json={"query": "beng"})
    body = response.json()

    assert codes(body) == ["560001", "560050"]
    assert body["meta"]["limit"] == 2


def test_search_with_origin_attaches_road_estimate() -> None:
    client = build_client()

    response = client.post("/v1/pincodes/search", json={"query": "Chennai", "fromPincode": "560001"})
    item = response.json()["data"]["results"][0]
    expected = estimate_road_route(
        Coordinate(latitude=12.9716, longitude=77.5946),
        Coordinate(latitude=13.0827, longitude=80.2707),
    )

    assert item["pincode"] == "600001"
    assert item["routeEstimation"] == {
        "distance": expected.distance_km,
        "hours": expected.hours,
        "category": expected.category.value,
        "approxPrice": expected.approx_price,
    }


def test_search_with_unknown_origin_skips_estimates() -> None:
    client = build_client()

    response = client.post("/v1/pincodes/search", json={"query": "Chennai", "fromPincode": "999999"})

    assert response.status_code == 200
    assert "routeEstimation" not in response.json()["data"]["results"][0]


def test_search_skips_estimate_for_result_without_coordinates() -> None:
    client = build_client()

    response = client.post("/v1/pincodes/search", json={"query": "5603", "fromPincode": "560001"})
    item = response.json()["data"]["results"][0]

    assert item["pincode"] == "560300"
    assert item["latitude"] is None
    assert "routeEstimation" not in item


def test_search_rejects_short_query() -> None:
    client = build_client()

    response = client.post("/v1/pincodes/search", json={"query": " ab "})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_search_rejects_wildcard_characters() -> None:
    client = build_client()

    response = client.post("/v1/pincodes/search", json={"query": "pu%ne"})

    assert response.status_code == 422


def test_search_rejects_underscore_wildcard() -> None:
    client = build_client()

    response = client.post("/v1/pincodes/search", json={"query": "pu_ne"})

    assert response.status_code == 422


def test_search_accepts_apostrophes_and_quotes() -> None:
    client = build_client()

    apostrophe = client.post("/v1/pincodes/search", json={"query": "Bishop's Garden"})
    quoted = client.post("/v1/pincodes/search", json={"query": "\"Pune\""})

    assert apostrophe.status_code == 200
    assert codes(apostrophe.json()) == []
    assert quoted.status_code == 200


def test_prefix_search_orders_by_code() -> None:
    client = build_client()

    response = client.get("/v1/pincodes/prefix/4110")

    assert codes(response.json()) == ["411001", "411045"]


def test_prefix_search_from_same_code_is_zero_distance_local() -> None:
    client = build_client()

    response = client.get("/v1/pincodes/prefix/411001?fromPincode=411001")
    estimation = response.json()["data"]["results"][0]["routeEstimation"]

    assert estimation == {"distance": 0.0, "hours": 0.0, "category": "local", "approxPrice": 500.0}


def test_prefix_search_requires_four_digits() -> None:
    client = build_client()

    response = client.get("/v1/pincodes/prefix/411")

    assert response.status_code == 422


def test_get_pincode_returns_record() -> None:
    client = build_client()

    response = client.get("/v1/pincodes/560001")
    data = response.json()["data"]

    assert response.status_code == 200
    assert data["display"] == "560001 - Bengaluru"
    assert data["state"] == "Karnataka"
    assert data["latitude"] == 12.9716


def test_get_unknown_pincode_is_not_found() -> None:
    client = build_client()

    response = client.get("/v1/pincodes/999999")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "PINCODE_NOT_FOUND"
