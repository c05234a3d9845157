import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, APIRouter
import uvicorn

from traffic_stitcher.core.config import settings
from traffic_stitcher.core.logging_config import configure_logging
from traffic_stitcher.core.middleware import RequestLoggingMiddleware
from traffic_stitcher.presentation.api.v1.routers import health
from traffic_stitcher.presentation.api.v1.routers import stitch

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info("Starting Radio Traffic Stitcher API...")
    yield
    logger.info("Shutting down Radio Traffic Stitcher API...")


def create_application() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Include API routers under versioned prefix
    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(stitch.router, tags=["stitch"])
    api_v1.include_router(health.router)
    app.include_router(api_v1)

    @app.get("/")
    async def root():
        return {"message": "Radio Traffic Stitcher API is running", "status": "healthy"}

    return app


# Create application instance
app = create_application()


def run_server(host: str | None = None, port: int | None = None) -> None:
    configure_logging()
    dev_mode = os.getenv("DEV_MODE", "false").lower() == "true"
    uvicorn.run(
        "traffic_stitcher.presentation.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=dev_mode,
    )


if __name__ == "__main__":
    run_server()
