"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from school_rbac.config import get_settings
from school_rbac.database import init_db
from school_rbac.exceptions import SchoolRbacError
from school_rbac.middleware.error_handler import (
    domain_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from school_rbac.routers import permissions, roles
from school_rbac.security.rate_limit import limiter
from school_rbac.services.role_seed_service import seed_default_roles

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, max-age=0"
        response.headers.setdefault("Vary", "Accept, Authorization, Origin")
        # Strict Transport Security (HSTS) - only in production
        if get_settings().environment == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    await init_db()

    # Create built-in roles that have no persisted record yet
    if get_settings().seed_default_roles:
        await seed_default_roles()

    yield


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Custom rate limit handler returning RFC 7807 Problem Details.

    Includes Retry-After header per RFC 6585 Section 4.
    """
    return JSONResponse(
        status_code=429,
        content={
            "type": "https://datatracker.ietf.org/doc/html/rfc6585#section-4",
            "title": "Too many requests",
            "status": 429,
            "detail": "Rate limit exceeded",
            "instance": request.url.path,
        },
        headers={
            "Content-Type": "application/problem+json",
            "Retry-After": "60",
        },
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_settings()

    app = FastAPI(
        title=config.app_name,
        version="0.1.0",
        description="School roles and permissions API",
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Sanitized error handlers to prevent information disclosure
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SchoolRbacError, domain_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    allowed_origins = config.cors_origins_list
    if "*" in allowed_origins:
        raise ValueError(
            "CORS_ORIGINS cannot contain '*' wildcard when allow_credentials=True. "
            "Specify explicit origins."
        )

    # FastAPI processes middleware in reverse order of addition, so CORS
    # is added last to run first on incoming requests
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Requested-With"],
    )

    # Include routers
    app.include_router(roles.router, prefix="/api/v1/roles", tags=["Roles"])
    app.include_router(permissions.router, prefix="/api/v1/permissions", tags=["Permissions"])

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
