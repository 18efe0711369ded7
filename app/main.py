"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import clubs, courts, holidays, price_rules, pricing
from app.core.config import settings
from app.core.database import init_db

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Court Pricing Service")
    logger.info(f"Debug mode: {settings.DEBUG}")
    logger.info(f"Default club timezone: {settings.DEFAULT_CLUB_TIMEZONE}")

    await init_db()

    yield

    # Shutdown
    logger.info("Shutting down Court Pricing Service")


# Create FastAPI app
app = FastAPI(
    title="Court Pricing Service",
    description="Manage clubs, courts and time-aware court price rules",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify exact origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(clubs.router)
app.include_router(courts.router)
app.include_router(holidays.router)
app.include_router(price_rules.router)
app.include_router(pricing.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "default_timezone": settings.DEFAULT_CLUB_TIMEZONE,
    }
