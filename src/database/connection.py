"""Shared MongoDB connection with lazy, single-flight establishment."""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from pymongo import AsyncMongoClient

from core.config import MongoConfig, AppConfig
from core.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)


class MongoConnection:
    """
    Single shared MongoDB client for the whole process.

    The client is created on first use and reused afterwards. Establishment
    runs as one shared task, so callers that arrive while a connect attempt
    is in flight await that attempt instead of starting their own. A failed
    attempt leaves the handle unset and the next caller retries from scratch.
    """

    def __init__(
        self,
        config: MongoConfig,
        app_config: Optional[AppConfig] = None,
        client_factory: Optional[Callable[[], Any]] = None
    ):
        self.config = config
        self.app_config = app_config
        self._client_factory = client_factory or self._create_client
        self._client: Optional[Any] = None
        self._connecting: Optional[asyncio.Task] = None
        self.connect_attempts = 0

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def _create_client(self) -> AsyncMongoClient:
        return AsyncMongoClient(
            self.config.uri,
            appname=self.config.app_name,
            serverSelectionTimeoutMS=self.config.server_selection_timeout_ms
        )

    async def get_client(self) -> Any:
        """Return the established client, connecting on first use."""
        if self._client is not None:
            return self._client

        if self._connecting is None:
            attempt = asyncio.get_running_loop().create_task(self._connect())
            attempt.add_done_callback(self._attempt_finished)
            self._connecting = attempt

        return await asyncio.shield(self._connecting)

    def _attempt_finished(self, attempt: asyncio.Task):
        # Also runs when every waiter was cancelled before the attempt ended
        if self._connecting is attempt:
            self._connecting = None
        if not attempt.cancelled() and attempt.exception() is not None:
            logger.debug(f"Connect attempt finished with error: {attempt.exception()}")

    async def _connect(self) -> Any:
        self.connect_attempts += 1
        logger.info(f"Connecting to MongoDB at {self.config.redacted_uri()}...")

        client = self._client_factory()
        try:
            await client.admin.command("ping")
        except asyncio.CancelledError:
            await client.close()
            raise
        except Exception as e:
            logger.error(f"MongoDB connection error: {e}")
            await client.close()
            raise DatabaseConnectionError(
                f"Failed to connect to MongoDB: {e}",
                {"uri": self.config.redacted_uri()}
            ) from e

        self._client = client
        logger.info("✅ MongoDB connected successfully")
        return client

    async def test_connection(self, include_sensitive_info: Optional[bool] = None) -> Dict[str, Any]:
        """
        Test MongoDB connectivity.

        Args:
            include_sensitive_info: If True, include server details.
                                   If None, uses app_config.expose_sensitive_info.

        Returns:
            Connection test result with server info
        """
        try:
            client = await self.get_client()
            info = await client.server_info()
        except Exception as e:
            logger.error(f"MongoDB connection test failed: {e}")
            return {
                "success": False,
                "error": str(e),
                "message": f"Connection test failed: {e}",
                "connection_info": {
                    "uri": self.config.redacted_uri(),
                    "default_database": self.config.default_database
                }
            }

        expose = include_sensitive_info
        if expose is None:
            expose = bool(self.app_config and self.app_config.expose_sensitive_info)

        server_info = {
            "database": self.config.default_database,
            "connected": True
        }
        if expose:
            server_info.update({
                "server_version": info.get("version"),
                "uri": self.config.redacted_uri(),
                "git_version": info.get("gitVersion")
            })

        return {
            "success": True,
            "message": "Connection successful",
            "server_info": server_info
        }

    async def close(self):
        """Close the client, abandoning any connect attempt still in flight."""
        attempt = self._connecting
        if attempt is not None and not attempt.done():
            logger.info("Cancelling in-flight MongoDB connect attempt")
            attempt.cancel()
            await asyncio.wait([attempt])

        if self._client is not None:
            client = self._client
            self._client = None
            await client.close()
            logger.info("MongoDB connection closed")
