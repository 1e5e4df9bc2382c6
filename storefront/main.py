"""
Storefront Application

Thin HTTP surface over the storefront core: catalog reads,
per-session carts and order checkout.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from . import __version__
from .core.config import settings
from .core.session import session_manager
from .routes import products_router, sessions_router, cart_router, checkout_router
from .routes import dependencies

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Storefront starting up...")
    logger.info(f"Catalog URL: {settings.catalog_base_url}")

    yield

    logger.info("Storefront shutting down...")
    if dependencies.catalog_client:
        await dependencies.catalog_client.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Storefront client: catalog, cart and checkout",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(products_router)
app.include_router(sessions_router)
app.include_router(cart_router)
app.include_router(checkout_router)


@app.get("/")
async def home():
    """API index"""
    return {
        "message": "Storefront API",
        "docs": "/docs",
        "endpoints": {
            "products": "/api/products",
            "sessions": "/api/sessions",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "storefront",
        "catalog_configured": bool(settings.catalog_base_url),
        "active_sessions": len(session_manager.sessions),
    }


def run() -> None:
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
