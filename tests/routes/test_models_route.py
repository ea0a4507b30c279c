"""
Tests for GET /api/models
"""

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from src.config.llm_catalog import LLM_LIST
from src.config.overrides import ProviderOverrides, get_provider_overrides
from src.main import app

SERVICE_TOKEN = "S3CRET"


@pytest.fixture
def client():
    app.dependency_overrides[get_provider_overrides] = lambda: ProviderOverrides.from_env(
        {"CHAT_API_TOKEN": SERVICE_TOKEN}
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def custom_models(supabase_mock):
    supabase_mock.tables["models"].append(
        {"id": "local-llama", "name": "Local Llama", "model_id": "llama3:8b", "context_length": 8192}
    )
    return supabase_mock


def test_lists_custom_then_builtin(client, custom_models):
    response = client.get("/api/models", headers={"Authorization": f"Bearer {SERVICE_TOKEN}"})

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1 + len(LLM_LIST)
    assert data[0] == {
        "id": "local-llama",
        "name": "Local Llama",
        "provider": "custom",
        "model_id": "llama3:8b",
        "context_length": 8192,
    }
    assert [m["id"] for m in data[1:]] == [entry.model_id for entry in LLM_LIST]


def test_x_api_token_header(client, custom_models):
    response = client.get("/api/models", headers={"X-Api-Token": SERVICE_TOKEN})

    assert response.status_code == 200


def test_missing_token_is_401_without_store_access(client, custom_models):
    response = client.get("/api/models")

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}
    assert custom_models.executed == []


def test_wrong_token_is_401(client, custom_models):
    response = client.get("/api/models", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}


def test_session_cookie_is_not_accepted(client, custom_models):
    client.cookies.set("sb-xxxxxxxxxxxxx-auth-token", "session")

    response = client.get("/api/models")

    assert response.status_code == 401


def test_unset_service_token_rejects_empty_bearer(supabase_mock):
    app.dependency_overrides[get_provider_overrides] = lambda: ProviderOverrides.from_env({})
    try:
        response = TestClient(app).get("/api/models", headers={"Authorization": "Bearer "})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 401
    assert supabase_mock.executed == []


def test_store_failure_uses_store_status(client, supabase_mock):
    supabase_mock.errors["models"] = APIError(
        {"message": "Service Unavailable", "code": "503", "hint": None, "details": None}
    )

    response = client.get("/api/models", headers={"Authorization": f"Bearer {SERVICE_TOKEN}"})

    assert response.status_code == 503
    assert response.json() == {"message": "Service Unavailable"}


def test_store_failure_without_status_is_500(client, supabase_mock):
    supabase_mock.errors["models"] = ValueError("boom")

    response = client.get("/api/models", headers={"Authorization": f"Bearer {SERVICE_TOKEN}"})

    assert response.status_code == 500
    assert response.json() == {"message": "An unexpected error occurred"}


def test_response_carries_request_id(client, custom_models):
    response = client.get(
        "/api/models",
        headers={"Authorization": f"Bearer {SERVICE_TOKEN}", "X-Request-ID": "abc123"},
    )

    assert response.headers["X-Request-ID"] == "req_abc123"
