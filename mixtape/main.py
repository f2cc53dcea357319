# ============================================================================
# FILE: mixtape/main.py
# ============================================================================
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mixtape import __version__
from mixtape.api.v1.router import api_router
from mixtape.config import Settings
from mixtape.core.exceptions import MixtapeError
from mixtape.core.logging import setup_logging
from mixtape.db.session import build_engine, build_session_factory, init_db
import logging

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain errors into JSON responses carrying their kind"""

    @app.exception_handler(MixtapeError)
    async def mixtape_error_handler(request: Request, exc: MixtapeError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.kind}: {exc.message}")
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "error": exc.kind},
            headers=headers,
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around one Settings object (engine and sessions included)"""
    settings = settings or Settings()
    setup_logging(settings.LOG_LEVEL)

    # Create FastAPI app instance
    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Playlists with duration limits, DJ publishing and personalized suggestions",
        version=__version__,
        debug=settings.DEBUG,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API v1 router
    app.include_router(api_router, prefix="/api/v1")

    @app.on_event("startup")
    async def startup_event():
        """Create database tables on startup"""
        logger.info(f"Starting {settings.APP_NAME} API")
        init_db(engine)

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info(f"Shutting down {settings.APP_NAME} API")
        engine.dispose()

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    @app.get("/")
    async def root():
        return {"message": f"{settings.APP_NAME} API", "version": __version__, "docs": "/docs"}

    return app
