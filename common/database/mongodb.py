"""
Async MongoDB connection manager using Motor.

Services receive the raw Motor database and own their collections
(`db["users"]`, `db["strains"]`), so no schema lives at this layer.

Example:
    from common.database import MongoDB

    mongo = MongoDB()
    await mongo.connect(uri="mongodb://localhost:27017", database_name="medicine-cabinet")
    strains = mongo.db["strains"]
    ...
    await mongo.disconnect()
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


class MongoDB:
    """Owns one Motor client and the database the app works in."""

    def __init__(self):
        self._client: Optional[AsyncIOMotorClient] = None
        self._database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self, uri: str, database_name: str) -> None:
        """
        Open the client and ping the server so startup fails on a bad URI.

        Args:
            uri: MongoDB connection string
            database_name: Database the services read and write
        """
        # Never log credentials
        host = uri.split("@")[-1]
        logger.info(f"Connecting to MongoDB at {host} (database: {database_name})")

        client = AsyncIOMotorClient(uri)
        try:
            await client.admin.command("ping")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            client.close()
            raise

        self._client = client
        self._database = client[database_name]
        logger.info(f"Connected to MongoDB database: {database_name}")

    async def disconnect(self) -> None:
        """Close the client. Safe to call when not connected."""
        if self._client is None:
            return

        logger.info(f"Disconnecting from MongoDB database: {self._database.name}")
        self._client.close()
        self._client = None
        self._database = None

    @property
    def is_connected(self) -> bool:
        return self._database is not None

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """The connected database."""
        if self._database is None:
            raise RuntimeError("Database not connected")
        return self._database
