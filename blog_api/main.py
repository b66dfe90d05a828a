"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_api.api.v1 import router as v1_router
from blog_api.core.config import Settings, settings
from blog_api.core.errors import register_exception_handlers
from blog_api.core.logs import configure_logging

configure_logging(settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


def create_app(app_settings: Settings) -> FastAPI:
    """Build the application from already-validated settings."""
    application = FastAPI(
        title="Blog API",
        version=app_settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if app_settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)
    application.include_router(v1_router, prefix=app_settings.API_V1_PREFIX)

    @application.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Blog API"}

    return application


app = create_app(settings)
logger.info("Blog API configured (env=%s)", settings.APP_ENV)
