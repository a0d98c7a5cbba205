"""Dependency injection and singleton management for MCP MongoDB Server."""

from functools import lru_cache
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# Global singletons
_dispatcher: Optional["Dispatcher"] = None


@lru_cache()
def get_app_config() -> "AppConfig":
    """Get singleton AppConfig instance.

    This function is cached to ensure only one AppConfig instance exists.
    """
    from core.config import AppConfig
    config = AppConfig.from_env()
    logger.info("Initialized AppConfig singleton")
    return config


def get_dispatcher(app_config: Optional["AppConfig"] = None) -> "Dispatcher":
    """Get singleton Dispatcher instance.

    Args:
        app_config: Optional AppConfig. If None, uses get_app_config()

    Returns:
        Dispatcher instance (singleton) owning the shared connection
    """
    global _dispatcher

    if _dispatcher is None:
        from protocol.dispatcher import Dispatcher

        _dispatcher = Dispatcher.from_config(app_config if app_config is not None else get_app_config())
        logger.info("Initialized Dispatcher singleton")

    return _dispatcher


def set_dispatcher(dispatcher: Optional["Dispatcher"]):
    """Install a specific Dispatcher as the singleton."""
    global _dispatcher
    _dispatcher = dispatcher


def reset_singletons():
    """Reset all singletons (useful for testing)."""
    global _dispatcher
    _dispatcher = None
    get_app_config.cache_clear()
    logger.info("Reset all singletons")


# FastAPI Dependency Injection helpers
def get_dispatcher_dependency() -> "Dispatcher":
    """FastAPI dependency for the Dispatcher.

    Usage:
        @router.get("/endpoint")
        async def endpoint(dispatcher: Dispatcher = Depends(get_dispatcher_dependency)):
            ...
    """
    return get_dispatcher()
