"""
SignalDeck Backend - FastAPI Application

Main entry point for the backend API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from signaldeck.core.config import get_settings
from signaldeck.api.v1 import router as api_v1_router
from signaldeck.services.prediction_client import close_prediction_client

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Prediction service: {settings.prediction_service_url}")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await close_prediction_client()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    SignalDeck Presentation API

    ## Architecture
    - **Prediction Client**: Talks to the remote prediction service
    - **Classifier**: Maps indicator values to status levels
    - **Normalizer**: Clamps sentiment/confidence into display coordinates
    - **Series Reducer**: Price range, padded axis bounds, percent change
    - **Assembler**: Builds render-ready cards and views

    ## Core Principles
    - Deterministic output for deterministic input
    - Out-of-range values saturate, they never break a view
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware - allow both frontend ports
cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
# Add any additional origins from settings
if settings.allowed_origins:
    cors_origins.extend([o for o in settings.allowed_origins if o not in cors_origins])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "SignalDeck Backend API",
        "docs": "/docs",
        "health": "/health",
    }
