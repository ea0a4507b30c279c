import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _get_env_var(name: str, default: str | None = None, *, strip: bool = True) -> str | None:
    """
    Fetch an environment variable with optional whitespace trimming.

    Args:
        name: Environment variable to look up.
        default: Value to return when the env var is unset or empty.
        strip: Whether to strip leading/trailing whitespace (default: True).

    Returns:
        The normalized string value or the provided default when empty.
    """
    value = os.environ.get(name)
    if value is None:
        return default

    if strip:
        value = value.strip()

    return value or default


def _get_bool_env(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in {"1", "true", "yes"}


class Config:
    """Configuration class for the application"""

    # Environment Detection
    APP_ENV = os.environ.get("APP_ENV", "development")  # development, staging, production
    IS_DEVELOPMENT = APP_ENV == "development"

    # Supabase Configuration
    # SUPABASE_KEY is the service-role key; it reads profiles and custom models
    # and validates session access tokens.
    SUPABASE_URL = _get_env_var("SUPABASE_URL")
    SUPABASE_KEY = _get_env_var("SUPABASE_KEY") or _get_env_var("SUPABASE_SERVICE_ROLE_KEY")
    SUPABASE_PROFILES_TABLE = os.environ.get("SUPABASE_PROFILES_TABLE", "profiles")
    SUPABASE_MODELS_TABLE = os.environ.get("SUPABASE_MODELS_TABLE", "models")

    # Session cookie name override. When unset the Supabase SSR default
    # ("sb-<project-ref>-auth-token") is derived from SUPABASE_URL.
    SUPABASE_AUTH_COOKIE_NAME = _get_env_var("SUPABASE_AUTH_COOKIE_NAME")

    # CORS
    ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.environ.get("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ]

    # ==================== Monitoring & Observability Configuration ====================

    # Sentry Configuration
    SENTRY_DSN = os.environ.get("SENTRY_DSN")
    SENTRY_ENABLED = _get_bool_env("SENTRY_ENABLED", "true")
    SENTRY_ENVIRONMENT = os.environ.get("SENTRY_ENVIRONMENT", APP_ENV)
    SENTRY_TRACES_SAMPLE_RATE = float(os.environ.get("SENTRY_TRACES_SAMPLE_RATE", "0.1"))
    APP_VERSION = os.environ.get("APP_VERSION", "1.0.0")
    SENTRY_RELEASE = os.environ.get("SENTRY_RELEASE", APP_VERSION)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    @classmethod
    def validate(cls):
        """Validate that all required environment variables are set"""
        missing_vars = []

        if not cls.SUPABASE_URL:
            missing_vars.append("SUPABASE_URL")
        if not cls.SUPABASE_KEY:
            missing_vars.append("SUPABASE_KEY")

        if missing_vars:
            raise RuntimeError(
                f"Missing required environment variables: {', '.join(missing_vars)}\n"
                "Please create a .env file with the following variables:\n"
                "SUPABASE_URL=your_supabase_project_url\n"
                "SUPABASE_KEY=your_supabase_service_role_key\n"
                "CHAT_API_TOKEN=shared_secret_for_api_access (optional)"
            )

        return True

    @classmethod
    def validate_critical_env_vars(cls) -> tuple[bool, list[str]]:
        """
        Validate that all critical environment variables are set.

        Returns:
            tuple: (is_valid, missing_vars)
        """
        critical_vars = {
            "SUPABASE_URL": cls.SUPABASE_URL,
            "SUPABASE_KEY": cls.SUPABASE_KEY,
        }

        missing = [name for name, value in critical_vars.items() if not value]
        return len(missing) == 0, missing
