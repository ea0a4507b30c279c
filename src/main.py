import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.config import Config
from src.config.logging_config import configure_logging
from src.constants import APP_NAME
from src.middleware.request_id_middleware import RequestIDMiddleware, get_request_id
from src.routes.health import router as health_router
from src.routes.models import router as models_router
from src.routes.profile import router as profile_router
from src.schemas.errors import ErrorMessage
from src.services.startup import lifespan
from src.utils.error_handlers import register_exception_handlers

configure_logging()
logger = logging.getLogger(__name__)

# Initialize Sentry for error monitoring
if Config.SENTRY_ENABLED and Config.SENTRY_DSN:
    import sentry_sdk

    sentry_sdk.init(
        dsn=Config.SENTRY_DSN,
        # Request headers carry service tokens and session cookies
        send_default_pii=False,
        environment=Config.SENTRY_ENVIRONMENT,
        release=Config.SENTRY_RELEASE,
        traces_sample_rate=Config.SENTRY_TRACES_SAMPLE_RATE,
    )
    logger.info(
        f"Sentry initialized (environment: {Config.SENTRY_ENVIRONMENT}, release: {Config.SENTRY_RELEASE})"
    )
else:
    logger.info("Sentry disabled (SENTRY_ENABLED=false or SENTRY_DSN not set)")


def create_app() -> FastAPI:
    app = FastAPI(
        title=APP_NAME,
        description="Caller identity, credential resolution and model registry for the chat backend",
        version=Config.APP_VERSION,
        lifespan=lifespan,
    )

    # Middleware order matters! Last added = first executed
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Api-Token", "X-Request-ID"],
    )
    logger.info(f"  CORS allowed origins: {Config.ALLOWED_ORIGINS}")

    app.include_router(health_router)
    app.include_router(models_router)
    app.include_router(profile_router)

    # ==================== Exception Handlers ====================

    register_exception_handlers(app)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Unexpected failures become a generic 500 with the request ID attached"""
        request_id = get_request_id(request)
        logger.error(f"Unhandled exception (request_id={request_id}): {exc}", exc_info=True)

        return JSONResponse(
            status_code=500,
            content=ErrorMessage(message="An unexpected error occurred").model_dump(),
            headers={"X-Request-ID": request_id} if request_id else None,
        )

    return app


app = create_app()
