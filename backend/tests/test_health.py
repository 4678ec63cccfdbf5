from fastapi.testclient import TestClient

from patent_dashboard.main import create_app


def test_healthcheck_returns_ok() -> None:
    client = TestClient(create_app())
    response = client.get("/v1/health/")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root_reports_service_metadata() -> None:
    client = TestClient(create_app())
    response = client.get("/")
    assert response.status_code == 200
    assert set(response.json()) == {"service", "version"}
