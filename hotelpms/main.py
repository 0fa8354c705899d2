from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hotelpms import __version__
from hotelpms.api.v1.router import router as api_v1_router
from hotelpms.config.logging import setup_logging
from hotelpms.config.settings import settings
from hotelpms.core.exceptions import BaseAppException
from hotelpms.core.middleware import register_middlewares
from hotelpms.db.init_db import init_db
from hotelpms.db.session import engine

logger = logging.getLogger(__name__)


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    logger.warning(
        exc.message,
        extra={
            "error_code": exc.error_code.value,
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    origins = settings.get_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Credentials cannot be combined with a wildcard origin
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middlewares(app)
    app.add_exception_handler(BaseAppException, app_exception_handler)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    @app.get("/health", tags=["Health"])
    def health() -> dict:
        return {
            "status": "ok",
            "app": settings.APP_NAME,
            "version": __version__,
            "api_version": settings.API_VERSION,
            "environment": settings.ENVIRONMENT,
        }

    @app.on_event("startup")
    async def on_startup() -> None:
        if not settings.is_production():
            # Development and demo only; production schemas are migrated
            init_db(engine)

    return app


app = create_app()
