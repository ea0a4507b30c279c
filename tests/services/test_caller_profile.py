"""
Tests for caller profile resolution

Covers:
- Service token path (precedence over cookies, synthesized identity)
- Session path (no session / no profile failures)
- Fail-closed behavior when no shared secret is configured
- Credentials always merged exactly once
"""

from datetime import datetime, timezone

import pytest

from src.config.overrides import ProviderOverrides
from src.constants import SERVICE_CALLER_ID
from src.schemas.common import AzureDeploymentSlot, ProviderKeySlot
from src.services.caller_profile import (
    build_service_profile,
    resolve_caller_profile,
    resolve_session_profile,
)
from src.utils.exceptions import AuthenticationError, StoreError
from tests.helpers.mocks import StaticSessionService, make_profile_record


def _store(*records):
    rows = {record["user_id"]: record for record in records}
    calls = []

    def get_profile(user_id):
        calls.append(user_id)
        return rows.get(user_id)

    get_profile.calls = calls
    return get_profile


class TestServiceTokenPath:
    def test_scenario_env_key_with_service_token(self):
        overrides = ProviderOverrides.from_env(
            {"CHAT_API_TOKEN": "S3CRET", "OPENAI_API_KEY": "env-key"}
        )
        store = _store()

        profile = resolve_caller_profile(
            {"Authorization": "Bearer S3CRET"},
            {},
            overrides=overrides,
            session_service=StaticSessionService(None),
            get_profile=store,
        )

        assert profile.credential(ProviderKeySlot.OPENAI) == "env-key"
        assert profile.id == "api-user"
        assert profile.user_id == "api-user"
        assert profile.onboarded is True
        assert profile.is_service_caller is True
        assert store.calls == []

    def test_service_token_wins_over_session_cookies(self, service_overrides):
        session = StaticSessionService("user-123")
        store = _store(make_profile_record("user-123"))

        profile = resolve_caller_profile(
            {"X-Api-Token": "S3CRET"},
            {"sb-xxxxxxxxxxxxx-auth-token": "session"},
            overrides=service_overrides,
            session_service=session,
            get_profile=store,
        )

        assert profile.id == SERVICE_CALLER_ID
        assert session.calls == []
        assert store.calls == []

    def test_service_profile_has_no_stored_credentials(self, service_overrides):
        profile = resolve_caller_profile(
            {"Authorization": "Bearer S3CRET"},
            {},
            overrides=service_overrides,
            session_service=StaticSessionService(None),
            get_profile=_store(),
        )

        assert all(value is None for value in profile.credentials.values())
        assert profile.organization_id is None
        assert profile.updated_at is None
        assert profile.created_at is not None

    def test_wrong_token_falls_back_to_session(self, service_overrides):
        profile = resolve_caller_profile(
            {"Authorization": "Bearer nope"},
            {},
            overrides=service_overrides,
            session_service=StaticSessionService("user-123"),
            get_profile=_store(make_profile_record("user-123")),
        )

        assert profile.user_id == "user-123"
        assert profile.is_service_caller is False

    def test_wrong_token_without_session_fails(self, service_overrides):
        with pytest.raises(AuthenticationError) as exc_info:
            resolve_caller_profile(
                {"Authorization": "Bearer nope"},
                {},
                overrides=service_overrides,
                session_service=StaticSessionService(None),
                get_profile=_store(),
            )

        assert exc_info.value.reason == "no session"


class TestFailClosed:
    def test_no_secret_and_no_session(self, empty_overrides):
        with pytest.raises(AuthenticationError):
            resolve_caller_profile(
                {},
                {},
                overrides=empty_overrides,
                session_service=StaticSessionService(None),
                get_profile=_store(),
            )

    def test_empty_token_never_matches_unset_secret(self, empty_overrides):
        with pytest.raises(AuthenticationError):
            resolve_caller_profile(
                {"Authorization": ""},
                {},
                overrides=empty_overrides,
                session_service=StaticSessionService(None),
                get_profile=_store(),
            )

    def test_bearer_empty_token_never_matches_unset_secret(self):
        overrides = ProviderOverrides.from_env({"CHAT_API_TOKEN": ""})
        with pytest.raises(AuthenticationError):
            resolve_caller_profile(
                {"Authorization": "Bearer "},
                {},
                overrides=overrides,
                session_service=StaticSessionService(None),
                get_profile=_store(),
            )


class TestSessionPath:
    def test_session_user_gets_merged_profile(self):
        overrides = ProviderOverrides.from_env({"ANTHROPIC_API_KEY": "env-anthropic"})
        record = make_profile_record(
            "user-123",
            openai_api_key="stored-openai",
            anthropic_api_key="stored-anthropic",
        )

        profile = resolve_caller_profile(
            {},
            {"cookie": "value"},
            overrides=overrides,
            session_service=StaticSessionService("user-123"),
            get_profile=_store(record),
        )

        assert profile.id == "profile-user-123"
        assert profile.display_name == "Alice"
        assert profile.credential(ProviderKeySlot.OPENAI) == "stored-openai"
        assert profile.credential(ProviderKeySlot.ANTHROPIC) == "env-anthropic"

    def test_no_profile(self, empty_overrides):
        with pytest.raises(AuthenticationError) as exc_info:
            resolve_caller_profile(
                {},
                {},
                overrides=empty_overrides,
                session_service=StaticSessionService("user-404"),
                get_profile=_store(),
            )

        assert exc_info.value.reason == "no profile"

    def test_store_failure_propagates(self, empty_overrides):
        def failing_store(user_id):
            raise StoreError("boom", status_code=503)

        with pytest.raises(StoreError) as exc_info:
            resolve_caller_profile(
                {},
                {},
                overrides=empty_overrides,
                session_service=StaticSessionService("user-123"),
                get_profile=failing_store,
            )

        assert exc_info.value.status_code == 503

    def test_resolve_session_profile_returns_unmerged_record(self):
        record = make_profile_record("user-123", openai_api_key="stored-openai")

        profile = resolve_session_profile(
            {}, StaticSessionService("user-123"), _store(record)
        )

        assert profile.credential(ProviderKeySlot.OPENAI) == "stored-openai"
        assert profile.is_service_caller is False


class TestBuildServiceProfile:
    def test_sentinel_identity(self, empty_overrides):
        now = datetime(2024, 5, 1, tzinfo=timezone.utc)

        profile = build_service_profile(empty_overrides, now=now)

        assert profile.id == "api-user"
        assert profile.user_id == "api-user"
        assert profile.username == "api"
        assert profile.display_name == "API User"
        assert profile.bio == ""
        assert profile.image_url == ""
        assert profile.created_at == now
        assert profile.updated_at is None
        assert profile.onboarded is True
        assert profile.uses_managed_provider is False

    def test_managed_provider_flag_from_azure_key(self):
        overrides = ProviderOverrides.from_env({"AZURE_OPENAI_API_KEY": "az"})

        profile = build_service_profile(overrides)

        assert profile.uses_managed_provider is True
        # Secrets only arrive through the merger
        assert profile.credential(ProviderKeySlot.AZURE_OPENAI) is None
        assert profile.azure_deployment.deployments[AzureDeploymentSlot.CHAT_35] is None


class TestMalformedProfileRecord:
    @pytest.mark.parametrize(
        "bad_columns",
        [
            {"created_at": "not-a-date"},
            {"openai_api_key": 12345},
            {"id": None},
            {"user_id": None},
        ],
    )
    def test_bad_record_is_store_error(self, empty_overrides, bad_columns):
        record = make_profile_record("user-123", **bad_columns)

        def get_profile(user_id):
            return record

        with pytest.raises(StoreError) as exc_info:
            resolve_caller_profile(
                {},
                {},
                overrides=empty_overrides,
                session_service=StaticSessionService("user-123"),
                get_profile=get_profile,
            )

        assert exc_info.value.message == "Malformed profile record"
        assert exc_info.value.status_code == 500

    def test_record_without_id_column(self):
        record = make_profile_record("user-123")
        del record["id"]

        with pytest.raises(StoreError):
            resolve_session_profile(
                {}, StaticSessionService("user-123"), lambda user_id: record
            )
