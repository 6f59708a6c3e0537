"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from brochure.api.schemas import (
    BrochureOptions,
    GenerateBrochurePayload,
    GenerateBrochureResponse,
)
from brochure.config.settings import Settings, get_settings
from brochure.errors import InvalidRequestError, describe_failure
from brochure.imggen.generator_client import AITunnelImageClient
from brochure.imggen.models import BROCHURE_STYLES, FONT_COLORS, FONT_STYLES
from brochure.imggen.service import BrochureGenerationService

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def get_service(request: Request) -> BrochureGenerationService:
    return request.app.state.service


def create_app(
    settings: Settings | None = None,
    service: BrochureGenerationService | None = None,
) -> FastAPI:
    """Initialise the FastAPI application.

    Without an explicit ``service`` the provider client is built here, so a
    missing API key stops the server before it accepts any request.
    """

    settings = settings or get_settings()
    if service is None:
        service = BrochureGenerationService(AITunnelImageClient(settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.service.close()

    app = FastAPI(
        title="AI Brochure Studio API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )
    app.state.service = service
    app.state.settings = settings

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
        return _error(exc.status_code, message)

    @app.exception_handler(RequestValidationError)
    async def validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected malformed brochure request: %s", exc.errors())
        return _error(400, "Invalid request body.")

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.get("/api/options", tags=["brochure"], response_model=BrochureOptions)
    async def brochure_options() -> BrochureOptions:
        return BrochureOptions(
            font_styles=list(FONT_STYLES),
            font_colors=dict(FONT_COLORS),
            brochure_styles=list(BROCHURE_STYLES),
            download_filename=settings.output_filename,
        )

    @app.post("/api/generate", tags=["brochure"], response_model=GenerateBrochureResponse)
    async def generate_brochure(
        payload: GenerateBrochurePayload,
        service: BrochureGenerationService = Depends(get_service),
    ) -> GenerateBrochureResponse | JSONResponse:
        try:
            brochure_request = payload.to_request()
        except InvalidRequestError as exc:
            return _error(400, str(exc))

        try:
            result = await service.generate(brochure_request)
        except Exception as exc:
            logger.exception("Error in /api/generate")
            return _error(500, describe_failure(exc))

        return GenerateBrochureResponse(image_url=result.image_data_uri)

    return app
