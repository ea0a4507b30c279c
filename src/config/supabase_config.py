import logging
import time

import httpx
from supabase import Client, create_client
from supabase.client import ClientOptions

from src.config.config import Config

logger = logging.getLogger(__name__)

_supabase_client: Client | None = None
_last_error: Exception | None = None  # Track last initialization error
_last_error_time: float = 0  # Timestamp of last error
ERROR_CACHE_TTL = 60.0  # Retry after 60 seconds


def get_supabase_client() -> Client:
    """
    Get the process-wide Supabase client, creating it on first use.

    A failed initialization is remembered for ERROR_CACHE_TTL seconds so that a
    misconfigured deployment does not retry on every request.

    Raises:
        RuntimeError: If the client cannot be created
    """
    global _supabase_client, _last_error, _last_error_time

    if _supabase_client is not None:
        return _supabase_client

    # Check if error is stale (>60s old), retry if so
    if _last_error is not None:
        time_since_error = time.time() - _last_error_time
        if time_since_error < ERROR_CACHE_TTL:
            retry_in = int(ERROR_CACHE_TTL - time_since_error)
            logger.debug(
                f"Supabase client unavailable (retry in {retry_in}s). Last error: {_last_error}"
            )
            raise RuntimeError(
                f"Supabase unavailable (retry in {retry_in}s): {_last_error}"
            ) from _last_error
        logger.info("Error cache expired, retrying Supabase initialization...")
        _last_error = None
        _last_error_time = 0

    try:
        Config.validate()

        if not Config.SUPABASE_URL:
            raise RuntimeError(
                "SUPABASE_URL environment variable is not set. "
                "Please configure it with your Supabase project URL (e.g., https://xxxxx.supabase.co)"
            )
        if not Config.SUPABASE_URL.startswith(("http://", "https://")):
            raise RuntimeError(
                f"SUPABASE_URL must start with 'http://' or 'https://'. "
                f"Current value: '{Config.SUPABASE_URL}'. "
                f"Expected: 'https://{Config.SUPABASE_URL}'"
            )

        masked_url = Config.SUPABASE_URL[:30] + "..." if len(Config.SUPABASE_URL) > 30 else Config.SUPABASE_URL
        logger.info(f"Initializing Supabase client with URL: {masked_url}")

        postgrest_base_url = f"{Config.SUPABASE_URL}/rest/v1"

        # base_url and auth headers must be set so postgrest relative paths resolve
        # and requests stay authenticated once the session is swapped in
        httpx_client = httpx.Client(
            base_url=postgrest_base_url,
            headers={
                "apikey": Config.SUPABASE_KEY,
                "Authorization": f"Bearer {Config.SUPABASE_KEY}",
            },
            timeout=httpx.Timeout(30.0, connect=10.0),
            limits=httpx.Limits(
                max_connections=50,
                max_keepalive_connections=20,
                keepalive_expiry=60.0,
            ),
        )

        _supabase_client = create_client(
            supabase_url=Config.SUPABASE_URL,
            supabase_key=Config.SUPABASE_KEY,
            options=ClientOptions(
                postgrest_client_timeout=30,
                schema="public",
                headers={"X-Client-Info": "caller-identity/1.0"},
                auto_refresh_token=False,
                persist_session=False,
            ),
        )

        if hasattr(_supabase_client, "postgrest") and hasattr(_supabase_client.postgrest, "session"):
            _supabase_client.postgrest.session = httpx_client
            logger.info(
                "Configured Supabase client with pooled HTTP client (base_url: %s)",
                postgrest_base_url,
            )

        return _supabase_client

    except Exception as e:
        _last_error = e
        _last_error_time = time.time()

        logger.error(
            f"Failed to initialize Supabase client: {type(e).__name__}: {e}",
            exc_info=True,
        )

        try:
            import sentry_sdk

            with sentry_sdk.push_scope() as scope:
                scope.set_context(
                    "supabase_config",
                    {
                        "supabase_url_set": bool(Config.SUPABASE_URL),
                        "supabase_key_set": bool(Config.SUPABASE_KEY),
                        "error_type": type(e).__name__,
                    },
                )
                scope.set_tag("component", "supabase_client")
                sentry_sdk.capture_exception(e)
        except ImportError:
            logger.warning("Sentry not available, error not tracked remotely")

        raise RuntimeError(f"Supabase client initialization failed: {e}") from e


def cleanup_supabase_client():
    """
    Close the pooled HTTP client and drop the cached Supabase client.

    Called during application shutdown.
    """
    global _supabase_client, _last_error, _last_error_time

    if _supabase_client is not None:
        session = getattr(getattr(_supabase_client, "postgrest", None), "session", None)
        if session is not None and hasattr(session, "close"):
            session.close()
            logger.info("Supabase HTTP client closed")

    _supabase_client = None
    _last_error = None
    _last_error_time = 0
