"""
FastAPI application entry point.

This module sets up:
- FastAPI application with middleware
- Exception handlers
- API routes
- CORS configuration
"""

from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import access_levels, accounts, auth, health
from src.core.config import settings
from src.core.handlers import (
    app_exception_handler,
    general_exception_handler,
    validation_exception_handler,
)
from src.core.lifespan import lifespan
from src.exceptions import AppException
from src.middleware import RequestIDMiddleware, RequestLoggingMiddleware

# ============================================================================
# FastAPI Application
# ============================================================================
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Account, credential and access level management API",
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)


# ============================================================================
# Exception Handlers
# ============================================================================
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)


# ============================================================================
# Middleware Setup (last added runs first)
# ============================================================================
# 1. CORS middleware (innermost)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 2. Request logging middleware (logs all requests with request_id)
app.add_middleware(RequestLoggingMiddleware)

# 3. Request ID middleware (outermost, so request_id is set before logging)
app.add_middleware(RequestIDMiddleware)


# ============================================================================
# API Routes
# ============================================================================
# Create V1 Router
v1_router = APIRouter(prefix="/v1")
v1_router.include_router(accounts.router)
v1_router.include_router(access_levels.router)
v1_router.include_router(auth.router)

# Create API Router
api_router = APIRouter(prefix="/api")
api_router.include_router(v1_router)

# Include Application Routers
app.include_router(health.router)
app.include_router(api_router)
