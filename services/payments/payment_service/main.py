"""
Payment Microservice
Persists payments, checks reservations remotely and opens checkout preferences
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from pathlib import Path
import subprocess
import os

from shared.core import ServiceHealth, setup_logging, RequestLoggingMiddleware, get_logger
from payment_service.core_settings import get_settings
from payment_service.api.routes import router as payments_router, status_router
from payment_service.domain.errors import (
    GatewayError,
    PaymentNotFound,
    ReservationNotFound,
    StatusNotFound,
)
from payment_service.infrastructure.db import engine, init_models
from payment_service.infrastructure.reservation_client import ReservationClient
from payment_service.infrastructure.payment_gateway import PaymentGateway

# Service configuration
SERVICE_NAME = "payment-service"
SERVICE_DESCRIPTION = "Payment records and checkout preferences for event reservations"
SERVICE_ROOT = Path(__file__).resolve().parent.parent

settings = get_settings()
SERVICE_VERSION = settings.SERVICE_VERSION

setup_logging(service_name=SERVICE_NAME, level=settings.LOG_LEVEL, version=SERVICE_VERSION)

logger = get_logger(__name__)

def run_migrations() -> None:
    logger.info("Running database migrations")
    result = subprocess.run(
        ["alembic", "upgrade", "head"],
        cwd=SERVICE_ROOT,
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        logger.warning(f"Migration output: {result.stderr}")
    else:
        logger.info("Database migrations completed")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    logger.info(f"Starting {SERVICE_NAME} version {SERVICE_VERSION}")

    if settings.RUN_MIGRATIONS:
        try:
            run_migrations()
        except OSError as e:
            logger.error(f"Migration error: {e}")

    try:
        init_models()
        logger.info("Database models initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database models: {e}")
        raise

    app.state.reservation_client = ReservationClient(
        settings.RESERVATIONS_SERVICE_URL,
        timeout=settings.RESERVATIONS_TIMEOUT,
    )
    app.state.payment_gateway = PaymentGateway(
        api_key=settings.STRIPE_SECRET_KEY,
        success_url=settings.CHECKOUT_SUCCESS_URL,
        cancel_url=settings.CHECKOUT_CANCEL_URL,
    )
    logger.info(f"{SERVICE_NAME} started successfully")

    yield

    logger.info(f"Shutting down {SERVICE_NAME}")
    app.state.reservation_client.close()

app = FastAPI(
    title=SERVICE_NAME,
    description=SERVICE_DESCRIPTION,
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

@app.exception_handler(ReservationNotFound)
@app.exception_handler(StatusNotFound)
@app.exception_handler(PaymentNotFound)
async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.warning(str(exc))
    return JSONResponse(status_code=404, content={"detail": str(exc)})

@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    logger.error(str(exc), exc_info=exc.cause)
    return JSONResponse(status_code=502, content={"detail": str(exc)})

health_service = ServiceHealth(
    SERVICE_NAME,
    SERVICE_VERSION,
    engine=engine,
    required_settings={
        "STRIPE_SECRET_KEY": settings.STRIPE_SECRET_KEY,
        "RESERVATIONS_SERVICE_URL": settings.RESERVATIONS_SERVICE_URL,
    },
)
app.include_router(health_service.create_health_router())

app.include_router(payments_router)
app.include_router(status_router)

@app.get("/")
async def root():
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "docs": "/api/docs",
    }

@app.get("/info")
async def info():
    """Service information endpoint"""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": SERVICE_DESCRIPTION,
        "environment": os.getenv("ENVIRONMENT", "development"),
        "endpoints": {
            "payments": "/api/v1/payments",
            "statuses": "/api/v1/statuses",
            "health": "/health",
            "ready": "/health/ready",
            "live": "/health/live",
            "metrics": "/metrics",
            "docs": "/api/docs",
        },
    }
