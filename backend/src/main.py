# pyright: reportMissingTypeStubs=false
"""
Salon Dashboard Backend API

A FastAPI application serving the salon management screens on top of the
salon REST API.

Features:
- Month dashboard, date-range analysis and collaborator reports
- Service record entry with prices frozen at creation time
- Collaborator, procedure and price catalog maintenance
- Access-code sessions with a theme preference
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import auth, catalog, dashboard, records
from core.constants import CORS_ORIGINS
from services.dashboard_engine import CalculationValidationError
from services.salon_api_client import SalonApiClient, SalonApiError
from services.session_service import AuthenticationError, SessionRegistry

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)

logger = logging.getLogger(__name__)
logger.info("💅 Salon Dashboard API starting...")

# Upstream statuses passed through as-is; anything else becomes 502
PASSTHROUGH_STATUS_CODES = {400, 404, 409, 422}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("🚀 Starting Salon Dashboard Backend API")

    app.state.session_registry = SessionRegistry()
    app.state.salon_client = SalonApiClient()
    logger.info(f"✅ Salon API client ready ({app.state.salon_client.base_url})")

    yield

    app.state.session_registry.clear()
    try:
        await app.state.salon_client.aclose()
    except Exception as e:
        logger.exception(f"❌ Error closing salon API client: {e}")

    logger.info("🛑 Shutting down Salon Dashboard Backend API")


# Create FastAPI application
app = FastAPI(
    title="Salon Dashboard Backend",
    description="Revenue dashboard and service records for beauty salons",
    version="1.0.0",
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc",  # ReDoc
    lifespan=lifespan,
)

# CORS middleware for frontend integration
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(
    auth.router,
    prefix="/api/auth",
    tags=["authentication"],
    responses={
        401: {"description": "Unauthorized"},
        500: {"description": "Internal server error"},
    },
)
app.include_router(
    dashboard.router,
    prefix="/api",
    tags=["dashboard"],
    responses={
        400: {"description": "Bad request"},
        401: {"description": "Unauthorized"},
        502: {"description": "Salon API error"},
        500: {"description": "Internal server error"},
    },
)
app.include_router(
    records.router,
    prefix="/api/records",
    tags=["records"],
    responses={
        400: {"description": "Bad request"},
        401: {"description": "Unauthorized"},
        404: {"description": "Resource not found"},
        502: {"description": "Salon API error"},
        500: {"description": "Internal server error"},
    },
)
app.include_router(
    catalog.router,
    prefix="/api",
    tags=["catalog"],
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "Resource not found"},
        502: {"description": "Salon API error"},
        500: {"description": "Internal server error"},
    },
)


@app.get(
    "/",
    summary="Root endpoint",
    description="Returns basic API information",
)
async def root() -> dict[str, str]:
    """Get API information."""
    return {
        "message": "Salon Dashboard Backend API",
        "version": "1.0.0",
        "status": "running"
    }


@app.get(
    "/health",
    summary="Health check",
    description="Returns the health status of the API",
)
async def health_check() -> dict[str, str]:
    """Check if the API is healthy and responding."""
    return {"status": "healthy"}


# Global exception handlers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions globally."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "type": "internal_error"},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions."""
    logger.warning(f"ValueError: {exc}")
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "type": "validation_error"},
    )


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    """Handle authentication failures raised outside the auth dependencies."""
    return JSONResponse(
        status_code=401,
        content={"detail": str(exc), "type": "authentication_error"},
    )


@app.exception_handler(SalonApiError)
async def salon_api_error_handler(request: Request, exc: SalonApiError):
    """Handle errors from the salon REST API."""
    if exc.status_code in PASSTHROUGH_STATUS_CODES:
        logger.warning(f"Salon API rejected request ({exc.status_code}): {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "type": "salon_api_error"},
        )

    logger.error(f"Salon API error ({exc.status_code}): {exc.message}")
    return JSONResponse(
        status_code=502,
        content={"detail": exc.message, "type": "external_service_error"},
    )


@app.exception_handler(CalculationValidationError)
async def calculation_error_handler(request: Request, exc: CalculationValidationError):
    """Handle inconsistent report totals (raised in development and test only)."""
    logger.exception(f"Calculation validation failed: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Report totals are inconsistent", "type": "calculation_error"},
    )
