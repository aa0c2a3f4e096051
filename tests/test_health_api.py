from fastapi.testclient import TestClient

import src.api.main as api_main


def test_health_returns_ok() -> None:
    client = TestClient(api_main.app)
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_version_endpoint() -> None:
    client = TestClient(api_main.app)
    response = client.get("/version")

    assert response.status_code == 200
    payload = response.json()
    assert payload["name"] == "votehook"
    assert payload["version"]


def test_request_id_is_echoed() -> None:
    client = TestClient(api_main.app)
    response = client.get("/health", headers={"x-request-id": "req-123"})

    assert response.headers["x-request-id"] == "req-123"
