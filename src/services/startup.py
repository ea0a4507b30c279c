"""
Startup service: load process-wide configuration before serving and release
connections on shutdown.
"""

import logging
from contextlib import asynccontextmanager

from src.config.config import Config
from src.config.overrides import get_provider_overrides
from src.config.supabase_config import cleanup_supabase_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    """
    Application lifespan manager for startup and shutdown events
    """
    is_valid, missing_vars = Config.validate_critical_env_vars()
    if not is_valid:
        # Service-token callers still work without Supabase; session auth and
        # custom models fail per request with a store error
        logger.warning(f"Missing environment variables: {', '.join(missing_vars)}")

    # Override secrets are read once and stay immutable for the process lifetime
    get_provider_overrides()

    yield

    logger.info("Shutting down...")
    cleanup_supabase_client()
