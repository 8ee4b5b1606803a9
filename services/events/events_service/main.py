"""
Events Microservice
Creation and maintenance of the events tickets are sold for
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from pathlib import Path
import subprocess
import os

from shared.core import ServiceHealth, setup_logging, RequestLoggingMiddleware, get_logger
from events_service.core_settings import get_settings
from events_service.api.routes import router as events_router
from events_service.domain.errors import EventNotFound
from events_service.infrastructure.db import engine, init_models

# Service configuration
SERVICE_NAME = "events-service"
SERVICE_DESCRIPTION = "Event catalogue microservice"
SERVICE_ROOT = Path(__file__).resolve().parent.parent

settings = get_settings()
SERVICE_VERSION = settings.SERVICE_VERSION

setup_logging(service_name=SERVICE_NAME, level=settings.LOG_LEVEL, version=SERVICE_VERSION)

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    logger.info(f"Starting {SERVICE_NAME} version {SERVICE_VERSION}")

    if settings.RUN_MIGRATIONS:
        try:
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
        except OSError as e:
            logger.error(f"Migration error: {e}")

    try:
        init_models()
        logger.info("Database models initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database models: {e}")
        raise

    logger.info(f"{SERVICE_NAME} started successfully")

    yield

    logger.info(f"Shutting down {SERVICE_NAME}")

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

@app.exception_handler(EventNotFound)
async def event_not_found_handler(request: Request, exc: EventNotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})

health_service = ServiceHealth(SERVICE_NAME, SERVICE_VERSION, engine=engine)
app.include_router(health_service.create_health_router())

app.include_router(events_router)

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
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": SERVICE_DESCRIPTION,
        "environment": os.getenv("ENVIRONMENT", "development"),
        "endpoints": {
            "events": "/api/v1/events",
            "health": "/health",
            "ready": "/health/ready",
            "metrics": "/metrics",
            "docs": "/api/docs",
        },
    }
