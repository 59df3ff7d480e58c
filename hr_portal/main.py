"""
HR Self-Service Portal - FastAPI Application

Employees log worked days, leave and medical expenses against their annual
quota; administrators manage quota plans, holidays and year-end rollovers.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Union

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

import hr_portal.models  # noqa: F401  Force model registration with SQLAlchemy
from hr_portal.core.config import settings
from hr_portal.core.exceptions import AppException
from hr_portal.core.init_system import init_system_data
from hr_portal.core.logging import setup_logging
from hr_portal.core.middleware import CorrelationIdMiddleware, LoggingMiddleware
from hr_portal.database import SessionLocal, init_db
from hr_portal.routers.api_router import api_router

# ============================================================================
# LOGGING SETUP
# ============================================================================
setup_logging()
logger = logging.getLogger(__name__)

# ============================================================================
# LIFESPAN MANAGEMENT
# ============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle manager.
    - Startup: Initialize database once
    - Shutdown: Cleanup resources
    """
    logger.info(f"Starting {settings.app_name} v{settings.version} ({settings.environment})")

    try:
        init_db()
        logger.info("✓ Database initialized successfully")

        init_system_data()
        logger.info("✓ System initialization check complete")
    except Exception as e:
        logger.error(f"✗ Database initialization failed: {e}")
        raise

    yield

    logger.info("Gracefully shutting down...")


# ============================================================================
# FASTAPI INSTANCE
# ============================================================================
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="HR self-service: worked days, leave, medical expenses and annual quotas",
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# ============================================================================
# MIDDLEWARE STACK
# Add in REVERSE order (last added runs first)
# ============================================================================
app.add_middleware(LoggingMiddleware)
app.add_middleware(CorrelationIdMiddleware)

# CORS (outermost - runs first on requests, last on responses)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[settings.request_id_header, "X-Process-Time"],
)

# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI validation errors (422) with structured format."""
    errors = []
    for error in exc.errors():
        # loc is usually ('body', 'field_name')
        field = error["loc"][-1] if len(error["loc"]) > 0 else "unknown"
        errors.append({
            "field": str(field),
            "msg": error["msg"]
        })

    logger.warning(f"Validation Error: {errors}")
    return JSONResponse(
        status_code=422,
        content={"success": False, "errors": errors}
    )


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Handle domain-specific application exceptions."""
    logger.warning(f"AppException: {exc.message}", extra={"code": exc.error_code})
    error = {"msg": exc.message, "code": exc.error_code}
    if exc.details:
        error["details"] = exc.details
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "errors": [error]}
    )


@app.exception_handler(StarletteHTTPException)
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: Union[HTTPException, StarletteHTTPException]):
    """Handle standard HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "errors": [{"msg": exc.detail if isinstance(exc.detail, str) else "Request failed"}]
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Fallback handler for unhandled server errors."""
    logger.exception("Unhandled server error", extra={"path": request.url.path})
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "errors": [{"msg": "An unexpected server error occurred."}]
        }
    )


# ============================================================================
# ROUTER INCLUSION
# ============================================================================
app.include_router(api_router, prefix=settings.api_prefix)

# ============================================================================
# OPERATIONAL ENDPOINTS (at root level)
# ============================================================================
@app.get("/", tags=["Health"])
def root():
    """API root endpoint."""
    return {
        "message": "HR Self-Service Portal API",
        "version": settings.version,
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
def health_check():
    """Liveness probe for load balancers and orchestrators."""
    return {
        "status": "up",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.version,
        "environment": settings.environment,
    }


@app.get("/readiness", tags=["Health"])
def readiness_check():
    """Readiness probe - verifies database connectivity."""
    try:
        with SessionLocal() as session:
            session.execute(text("SELECT 1"))
        return {
            "status": "ready",
            "components": {"database": "connected"},
        }
    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Service not ready")


@app.get("/liveness", tags=["Health"])
def liveness_check():
    """Alias for health check."""
    return health_check()
