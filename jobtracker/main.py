"""Job tracker - application lifecycle and analytics service."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobtracker.core.config import settings
from jobtracker.core.storage import init_models
from jobtracker.routers import applications_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Initializing application...")
    if settings.storage_backend == "sql":
        await init_models()
    logger.info("Application initialized")

    yield

    logger.info("Shutdown complete")


app = FastAPI(
    title="Job Tracker",
    description="Track job applications, their status history and progress analytics",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(applications_router)


@app.get("/api")
async def api_info():
    """API information endpoint."""
    return {
        "message": "Job Tracker API",
        "version": "1.0.0",
        "docs": "/docs",
        "status": "active",
        "storage_backend": settings.storage_backend,
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "jobtracker"}
