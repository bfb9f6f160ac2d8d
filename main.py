import logging
import time
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from job_tracker.core.cache import get_cache
from job_tracker.core.config import settings
from job_tracker.core.database import init_db
from job_tracker.core.exceptions import ServiceError
from job_tracker.core.logging_config import request_log_extra, setup_logging
from job_tracker.api.endpoints import applicants, health

setup_logging(settings.LOG_LEVEL, settings.JSON_LOGS, service_name=settings.SERVICE_NAME)
logger = logging.getLogger(__name__)


def check_cache_connection() -> None:
    """Log whether Redis is reachable. The service starts either way."""
    if get_cache().ping():
        logger.info("Redis connected successfully")
    else:
        logger.warning("Redis unavailable, applicant listings will be served from the database")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info(f"Starting up {settings.PROJECT_NAME}...")
    logger.info("Connecting to database...")
    init_db()
    logger.info("Connected to database successfully")
    check_cache_connection()

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Job applicant tracking API",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status, latency and client IP for every request."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    client_ip = request.client.host if request.client else "unknown"
    logger.info(
        f"{request.method} {request.url.path} - {response.status_code} - {duration_ms:.1f}ms - {client_ip}",
        extra=request_log_extra(request.method, request.url.path, response.status_code, duration_ms, client_ip)
    )
    return response


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Failed to parse request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Error occurred: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": str(exc), "path": request.url.path}
    )


app.include_router(health.router)
app.include_router(applicants.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )
