"""Storage connection using Motor (async driver) or the in-memory provider."""
from typing import Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorClient

from invoicedesk.config import settings
from invoicedesk.providers.base import DataProvider
from invoicedesk.providers.memory import InMemoryProvider
from invoicedesk.providers.mongo import MongoProvider


logger = structlog.get_logger(__name__)


class Database:
    """Owns the storage connection and the provider built on top of it."""

    client: Optional[AsyncIOMotorClient] = None
    provider: Optional[DataProvider] = None

    async def connect(self) -> None:
        """Connect to the configured storage backend."""
        if settings.storage_backend == "memory":
            self.provider = InMemoryProvider()
            logger.info("storage_connected", backend="memory")
            return

        # tz_aware keeps timestamps comparable with the UTC datetimes we write
        self.client = AsyncIOMotorClient(settings.mongodb_url, tz_aware=True)
        self.provider = MongoProvider(self.client[settings.mongodb_db_name])
        logger.info("storage_connected", backend="mongo", db=settings.mongodb_db_name)

    async def disconnect(self) -> None:
        """Disconnect from storage."""
        if self.client:
            self.client.close()
            self.client = None
            logger.info("storage_disconnected", backend="mongo")
        self.provider = None


# Global database instance
database = Database()


async def get_provider() -> DataProvider:
    """Dependency to get the data provider."""
    if database.provider is None:
        raise RuntimeError("Database not connected")
    return database.provider
