from unittest.mock import patch

from fastapi.testclient import TestClient

from src.main import app


def test_lifespan_loads_overrides_and_cleans_up():
    with patch("src.services.startup.get_provider_overrides") as mock_overrides, patch(
        "src.services.startup.cleanup_supabase_client"
    ) as mock_cleanup:
        with TestClient(app) as client:
            assert client.get("/health").status_code == 200
            mock_overrides.assert_called_once()
            mock_cleanup.assert_not_called()

    mock_cleanup.assert_called_once()


def test_lifespan_tolerates_missing_supabase_config():
    with patch(
        "src.services.startup.Config.validate_critical_env_vars",
        return_value=(False, ["SUPABASE_URL"]),
    ), patch("src.services.startup.cleanup_supabase_client"):
        with TestClient(app) as client:
            assert client.get("/health").status_code == 200
