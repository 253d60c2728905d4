"""
Survey Admin Console - HTTP application
Session-gated browser for submitted surveys

Architecture:
- Session Gate: authentication state machine in front of the dashboard
- Query Controller: committed page/size/search state with sequenced fetches
- Page Window: bounded pagination markers
- Remote Data Source: httpx client for the survey backend
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from survey_admin.api import state
from survey_admin.config.settings import configure_logging, get_cors_config, settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await state.close_all()


def create_app() -> FastAPI:
    """Create and configure the survey admin console application."""

    configure_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Session-gated, searchable, paginated survey browser",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS
    cors_config = get_cors_config()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_config["allow_origins"],
        allow_credentials=cors_config["allow_credentials"],
        allow_methods=cors_config["allow_methods"],
        allow_headers=cors_config["allow_headers"],
    )

    # Import routes (deferred to avoid circular imports)
    from survey_admin.api.routes import auth, dashboard, survey

    app.include_router(auth.router)
    app.include_router(dashboard.router)
    app.include_router(survey.router)

    @app.get("/")
    async def root():
        """Root endpoint - service information"""
        return {
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "backend": settings.API_URL,
            "endpoints": {
                "login": settings.LOGIN_ROUTE,
                "dashboard": settings.DASHBOARD_ROUTE,
                "survey": "/survey",
                "health": "/health",
                "docs": "/docs"
            }
        }

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        return {
            "status": "ok",
            "service": "survey-admin",
            "version": settings.APP_VERSION
        }

    logger.info(f"Survey admin console initialized (backend: {settings.API_URL})")
    return app

# Create app instance
app = create_app()
