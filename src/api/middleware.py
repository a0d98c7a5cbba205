"""API middleware for rate limiting and security."""

import os
import logging

from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from core.config import HTTPConfig, AppConfig

logger = logging.getLogger(__name__)

# Create rate limiter instance with configurable default limit
_http_config = HTTPConfig.from_env()
limiter = Limiter(key_func=get_remote_address, default_limits=[_http_config.rate_limit_default])

GZIP_MIN_SIZE = 1000


def setup_rate_limiting(app: FastAPI):
    """Configure rate limiting for FastAPI application."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


def get_allowed_origins() -> list:
    """CORS origins from CORS_ALLOWED_ORIGINS, with localhost defaults in development."""
    cors_env = os.getenv("CORS_ALLOWED_ORIGINS", "")
    if cors_env:
        return [origin.strip() for origin in cors_env.split(",")]

    environment = os.getenv("ENVIRONMENT", "development")
    if environment == "development":
        return ["http://localhost:3000", "http://localhost:8000"]

    logger.warning("Production environment: CORS_ALLOWED_ORIGINS not set, CORS disabled")
    return []


def setup_middleware(app: FastAPI, app_config: AppConfig):
    """Configure all middleware for FastAPI application.

    Sets up CORS, GZip compression, and rate limiting.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=app_config.http_config.cors_preflight_max_age,
    )

    # GZip compression
    app.add_middleware(GZipMiddleware, minimum_size=GZIP_MIN_SIZE)

    # Rate limiting
    setup_rate_limiting(app)
