import os

# Test environment must be in place before src modules read it at import
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("SUPABASE_URL", "https://xxxxxxxxxxxxx.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "xxxxxxxxxx-service-role-key")
os.environ["SENTRY_ENABLED"] = "false"

import pytest

from src.config.overrides import ProviderOverrides, get_provider_overrides
from src.security.deps import get_session_service
from tests.helpers.mocks import MockSupabaseClient

SERVICE_TOKEN = "S3CRET"


@pytest.fixture(autouse=True)
def _reset_process_caches():
    """Process-wide caches are rebuilt per test so env patches take effect"""
    get_provider_overrides.cache_clear()
    get_session_service.cache_clear()
    yield
    get_provider_overrides.cache_clear()
    get_session_service.cache_clear()


@pytest.fixture
def supabase_mock(monkeypatch) -> MockSupabaseClient:
    """In-memory Supabase client wired into every module that talks to the store"""
    client = MockSupabaseClient()
    monkeypatch.setattr("src.db.profiles.get_supabase_client", lambda: client)
    monkeypatch.setattr("src.db.custom_models.get_supabase_client", lambda: client)
    monkeypatch.setattr("src.services.session_service.get_supabase_client", lambda: client)
    return client


@pytest.fixture
def service_overrides() -> ProviderOverrides:
    return ProviderOverrides.from_env({"CHAT_API_TOKEN": SERVICE_TOKEN})


@pytest.fixture
def empty_overrides() -> ProviderOverrides:
    return ProviderOverrides.from_env({})
