from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

import api.app as app_module
from api.app import create_app


class UnreachableDatabase:
    async def connect(self) -> None:
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))

    async def disconnect(self) -> None:
        return None


def test_health_endpoint_response_shape() -> None:
    client = TestClient(create_app())

    response = client.get("/healthz")
    body = response.json()

    assert response.status_code == 200
    assert body["success"] is True
    assert body["data"]["status"] == "ok"
    assert body["meta"] == {}


def test_ready_endpoint_without_database_is_ready(monkeypatch) -> None:
    monkeypatch.setattr(app_module, "get_database", lambda: None)
    client = TestClient(create_app())

    response = client.get("/readyz")
    body = response.json()

    assert response.status_code == 200
    assert body["data"]["status"] == "ready"


def test_ready_endpoint_reports_unreachable_database(monkeypatch) -> None:
    monkeypatch.setattr(app_module, "get_database", lambda: UnreachableDatabase())
    client = TestClient(create_app())

    response = client.get("/readyz")
    body = response.json()

    assert response.status_code == 503
    assert body["success"] is False
    assert body["error"]["code"] == "NOT_READY"


def test_unknown_route_keeps_framework_404() -> None:
    client = TestClient(create_app())

    response = client.get("/v1/unknown")

    assert response.status_code == 404
