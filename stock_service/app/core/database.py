import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from shared.core.config import settings
from shared.helpers.exception_handler import StoreUnavailableError

logger = logging.getLogger(__name__)

STOCK_COLLECTION = "products"


class StockStoreUnavailable(StoreUnavailableError):
    pass


class StockDatabase:
    """Document store handle that must be connected before any handler uses it."""

    def __init__(self, uri: str, db_name: Optional[str] = None, timeout_ms: int = 5000):
        self.uri = uri
        self.db_name = db_name
        self.timeout_ms = timeout_ms
        self.client = None
        self.db = None

    @property
    def is_ready(self) -> bool:
        return self.db is not None

    def connect(self, client: Optional[MongoClient] = None):
        """Open the client and confirm the server answers a ping.

        An injected client is trusted as already reachable.
        """
        if client is None:
            client = MongoClient(
                self.uri, serverSelectionTimeoutMS=self.timeout_ms)
            try:
                client.admin.command("ping")
            except PyMongoError as e:
                client.close()
                logger.error(f"Error connecting to the database: {e}")
                raise StockStoreUnavailable(
                    f"Error connecting to the database: {e}") from e

        self.client = client
        self.db = (client[self.db_name] if self.db_name
                   else client.get_default_database(default="default"))
        logger.info(f"Inventory store ready (database '{self.db.name}')")

    def close(self):
        if self.client is not None:
            self.client.close()
        self.client = None
        self.db = None

    def collection(self, name: str = STOCK_COLLECTION) -> Collection:
        if self.db is None:
            raise StockStoreUnavailable("Inventory store is not initialized")
        return self.db[name]


stock_db = StockDatabase(
    settings.MONGO_URI,
    db_name=settings.MONGO_DB_NAME,
    timeout_ms=settings.MONGO_TIMEOUT_MS,
)


# Dependency


def get_stock_collection() -> Collection:
    return stock_db.collection()
