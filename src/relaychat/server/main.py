"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import GENERIC_ERROR_MESSAGE, PROMPT_REQUIRED_MESSAGE, Settings
from ..errors import ProviderError, ValidationError
from ..llm import CompletionProvider, create_completion_provider
from ..logs import configure_logging
from .routes import router

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    provider: CompletionProvider | None = None,
) -> FastAPI:
    """Build the relay application.

    Args:
        settings: Runtime settings; read from the environment when omitted
        provider: Completion provider to use; a Gemini provider is created
            on startup (and closed on shutdown) when omitted
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Set up and tear down the completion provider."""
        owned = None
        if getattr(app.state, "provider", None) is None:
            logger.info(
                "Config: model=%s key_set=%s",
                settings.gemini_model,
                bool(settings.gemini_api_key),
            )
            owned = create_completion_provider(
                "gemini",
                api_key=settings.gemini_api_key,
                model=settings.gemini_model,
            )
            app.state.provider = owned

        yield

        if owned is not None:
            await owned.close()
            app.state.provider = None

    app = FastAPI(
        title="relaychat",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.provider = provider

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": PROMPT_REQUIRED_MESSAGE},
        )

    @app.exception_handler(RequestValidationError)
    async def _malformed_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Bodies that are not a JSON object get the same answer as a missing prompt
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": PROMPT_REQUIRED_MESSAGE},
        )

    @app.exception_handler(ProviderError)
    async def _provider_error(request: Request, exc: ProviderError) -> JSONResponse:
        logger.error("Provider error: %s", exc, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": GENERIC_ERROR_MESSAGE},
        )

    app.include_router(router)
    return app


def serve(settings: Settings | None = None) -> None:
    """Start the uvicorn server using environment configuration."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Server running: http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    serve()
