"""
Main application entry point for the Power Price Check service.
Initializes FastAPI app, validates configuration and starts the service.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from src.api.routes import router as api_router
from src.config import settings
from src.logging_config import setup_logging
from src.services.price_service import price_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager for startup and shutdown procedures.
    """
    # Startup: a missing token is fatal here rather than on the first request
    setup_logging()
    price_service.check_configuration()

    yield

    # Shutdown
    price_service.cache.clear()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    app = FastAPI(
        title="Power Price Check",
        description="Day-ahead electricity prices and best-time recommendations - ENTSO-E Integration",
        version="1.0.0",
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        lifespan=lifespan,
    )

    # Include API routes
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
