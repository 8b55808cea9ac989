"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, and route registration.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from voicehook import __version__
from voicehook.api.dependencies import get_settings
from voicehook.api.exceptions import VoicehookAPIError
from voicehook.api.middleware.context import RequestContextMiddleware
from voicehook.api.models.errors import ErrorCode, ErrorDetail, ErrorResponse
from voicehook.api.routes import register_routes
from voicehook.config.settings import Settings
from voicehook.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to build the app from; loaded from config when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )

    app = FastAPI(
        title="Voicehook",
        description="Webhook bridge between a voice-agent platform and a streaming LLM",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    _register_exception_handlers(app)
    register_routes(app, settings)

    logger.info(
        "app_created",
        debug=settings.debug,
        model=settings.providers.llm.model,
        session_backend=settings.storage.session.backend,
    )

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(VoicehookAPIError)
    async def voicehook_api_error_handler(
        request: Request, exc: VoicehookAPIError
    ) -> JSONResponse:
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            path=request.url.path,
        )
        response = ErrorResponse(error=exc.message, code=exc.error_code)
        return JSONResponse(
            status_code=exc.status_code,
            content=response.model_dump(exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning(
            "validation_error",
            errors=exc.errors(),
            path=request.url.path,
        )

        details = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            details.append(ErrorDetail(field=field, message=error["msg"]))

        response = ErrorResponse(
            error="Request validation failed",
            code=ErrorCode.INVALID_REQUEST,
            details=details,
        )
        return JSONResponse(
            status_code=400,
            content=response.model_dump(exclude_none=True),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        response = ErrorResponse(
            error="An unexpected error occurred",
            code=ErrorCode.INTERNAL_ERROR,
        )
        return JSONResponse(
            status_code=500,
            content=response.model_dump(exclude_none=True),
        )


# Create the app instance for uvicorn
app = create_app()
