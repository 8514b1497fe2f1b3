import logging

import motor.motor_asyncio
from fastapi import Request
from pymongo.errors import ConfigurationError, PyMongoError

from core.errors import BadRequest

logger = logging.getLogger(__name__)

RECIPES_COLLECTION = "recipes"


class MongoDatabase:
    """
    ASYNC MongoDB client (Motor) owned by the application lifespan.
    Created once at startup, closed on shutdown.
    """

    def __init__(self, uri: str, db_name: str, tls: bool = False, timeout_ms: int = 30000):
        self.uri = uri
        self.db_name = db_name
        self.client = None
        self.db = None
        self.config_error = None
        try:
            self.client = motor.motor_asyncio.AsyncIOMotorClient(
                uri,
                tls=tls,
                serverSelectionTimeoutMS=timeout_ms,
            )
        except ConfigurationError as e:
            # Bad URI/options: keep serving, every store call reports this error
            logger.error("❌ Invalid MongoDB configuration: %s", e)
            self.config_error = e
            return
        self.db = self.client[db_name]

    @property
    def available(self) -> bool:
        return self.client is not None

    @property
    def recipes(self):
        if not self.available:
            raise self.config_error
        return self.db[RECIPES_COLLECTION]

    async def ping(self) -> bool:
        if not self.available:
            raise self.config_error
        await self.client.admin.command("ping")
        return True

    async def connect(self) -> bool:
        """
        Check connectivity. A failure is logged only: the HTTP listener
        starts anyway and requests surface store errors themselves.
        """
        try:
            await self.ping()
            logger.info("✅ Connected to MongoDB (%s)", self.db_name)
            return True
        except PyMongoError as e:
            logger.error("❌ Error connecting to MongoDB: %s", e)
            return False

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
        logger.info("MongoDB connection closed")


def get_database(request: Request) -> MongoDatabase:
    return request.app.state.mongo


def get_recipe_collection(request: Request):
    """FastAPI dependency - recipes collection of the lifespan-owned client"""
    try:
        return get_database(request).recipes
    except ConfigurationError as e:
        raise BadRequest(str(e))
