from fastapi.testclient import TestClient

from src.main import app


def test_health_check():
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["environment"] == "testing"
    assert "timestamp" in data
