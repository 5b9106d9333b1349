# app/main.py
import uvicorn
import os
import time
import logging
from datetime import datetime
from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from app.core.config import settings
from app.core.db_utils import create_db_and_tables, with_db_retry
from app.core.readiness import Readiness
from app.api.deps import get_readiness
from app.api.v1.api import api_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    openapi_tags=[
        {"name": "Authentication", "description": "Registration, login and logout"},
        {"name": "User Management", "description": "User profile and settings operations"},
        {"name": "Transactions", "description": "Income and expense records"},
        {"name": "Goals", "description": "Savings goals and deposits"},
        {"name": "Investments", "description": "Investment holdings"},
        {"name": "Reports", "description": "Derived summaries over transactions and investments"},
        {"name": "Notifications", "description": "In-app notifications"},
    ],
)

# Readiness is flipped by the startup hook and read by the require_ready dependency
app.state.readiness = Readiness()

origins = [
    settings.FRONTEND_URL,
    "http://localhost:3000",
    "http://localhost:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
    return response

# ------------------------------------------------------------
# EXCEPTION HANDLERS
# ------------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation Error", "errors": jsonable_encoder(exc.errors())},
    )

@app.exception_handler(IntegrityError)
async def integrity_exception_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=400,
        content={"detail": "A record with this value already exists"},
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for better error responses"""
    if isinstance(exc, HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail}
        )

    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )

# ------------------------------------------------------------
# ROUTES
# ------------------------------------------------------------
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": f"{settings.APP_NAME} is running",
        "version": settings.VERSION,
        "documentation": "/api/health",
        "endpoints": [
            f"{API_PREFIX}/auth",
            f"{API_PREFIX}/users",
            f"{API_PREFIX}/transactions",
            f"{API_PREFIX}/goals",
            f"{API_PREFIX}/investments",
            f"{API_PREFIX}/reports",
            f"{API_PREFIX}/notifications",
        ],
    }

@app.get("/api/health", tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint; answers even while the database is down"""
    readiness = get_readiness(request)
    return {
        "status": "ok",
        "message": f"{settings.APP_NAME} is running",
        "database": readiness.database_status,
        "database_checked_at": readiness.changed_at.isoformat() + "Z" if readiness.changed_at else None,
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }

app.include_router(api_router, prefix=API_PREFIX)

# ------------------------------------------------------------
# STARTUP EVENT
# ------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    """Create tables (retrying while the database is unreachable) and mark the app ready"""
    init_db = with_db_retry(
        max_retries=settings.DB_CONNECT_RETRIES,
        retry_delay=settings.DB_RETRY_DELAY,
    )(create_db_and_tables)
    try:
        await init_db()
    except Exception as e:
        app.state.readiness.mark_failed(str(e))
        return
    app.state.readiness.mark_ready()
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Frontend URL: {settings.FRONTEND_URL}")

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("app.main:app", host="0.0.0.0", port=port, reload=False)
