"""
Weight Tracker API - Main Application
FastAPI backend for weight and body measurement tracking with cookie sessions.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import logging

from .config import Settings, get_settings
from .database import create_db_engine, create_session_factory, init_db
from .auth import SessionManager
from .exceptions import register_exception_handlers
from .middleware import RouteGuardMiddleware
from .routers import auth, measurements, users, weights

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


# Create database tables on startup
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = app.state.settings
    logger.info("%s v%s (%s)", settings.app_name, settings.app_version, settings.environment)
    if settings.git_commit:
        logger.info("Git commit: %s", settings.git_commit[:8])
    if settings.build_date:
        logger.info("Build date: %s", settings.build_date)

    init_db(app.state.engine)

    yield

    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application with its own database engine and session manager."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Track your weight and body measurements and work towards a goal",
        lifespan=lifespan,
        debug=settings.debug,
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc
    )

    engine = create_db_engine(settings.database_url, echo=settings.debug)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.session_manager = SessionManager(settings)

    register_exception_handlers(app)

    app.add_middleware(RouteGuardMiddleware, cookie_name=settings.session_cookie_name)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(auth.router)
    app.include_router(weights.router)
    app.include_router(measurements.router)
    app.include_router(users.router)

    @app.get("/health")
    def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy"}

    @app.get("/api/version")
    def version():
        """Version information endpoint."""
        response = {
            "app_name": settings.app_name,
            "version": settings.app_version,
        }
        if settings.git_commit:
            response["git_commit"] = settings.git_commit
            response["git_commit_short"] = settings.git_commit[:8]
        if settings.build_date:
            response["build_date"] = settings.build_date
        return response

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("weight_tracker.main:create_app", factory=True, host="0.0.0.0", port=8000, reload=True)
