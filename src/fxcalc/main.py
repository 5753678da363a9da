"""
fxcalc Main Application Entry Point
"""

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fxcalc import __version__
from fxcalc.api import register_exception_handlers, router
from fxcalc.api.dependencies import get_rate_provider
from fxcalc.config import get_settings

# Configure logging
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    settings = get_settings()

    logger.info(f"🚀 Starting fxcalc v.{__version__}")

    provider = get_rate_provider()
    logger.info(
        f"✅ Rate provider '{provider.PROVIDER_NAME}' ready: "
        f"{len(provider.supported_currencies())} currencies"
    )
    logger.info(
        f"Fee policy: standard={settings.fee_rate_standard} express={settings.fee_rate_express} "
        f"economy={settings.fee_rate_economy} min={settings.min_fee} max={settings.max_fee}"
    )

    yield

    logger.info("🛑 Shutting down fxcalc")


def create_app() -> FastAPI:
    """Create FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="fxcalc",
        description="Fee-aware currency conversion calculator",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/api/v1/openapi.json"
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(router)

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "fxcalc",
            "version": __version__,
            "description": "Fee-aware currency conversion calculator",
            "docs": "/docs",
            "api": {
                "calculate": "/api/v1/rates/calculate",
                "batch": "/api/v1/rates/calculate/batch",
                "reverse": "/api/v1/rates/calculate/reverse",
                "monitoring": "/api/v1/rates/calculate/monitoring",
                "rate": "/api/v1/rates/{from}/{to}",
                "currencies": "/api/v1/currencies",
                "health": "/api/v1/health"
            }
        }

    return app


# Create application instance
app = create_app()


def main():
    """Main entry point for running the server."""
    settings = get_settings()

    logger.info(f"Starting fxcalc server on {settings.api_host}:{settings.api_port}")

    uvicorn.run(
        "fxcalc.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
