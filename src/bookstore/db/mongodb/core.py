"""
MongoDB core and index operations implementation.
Contains MongoCore, MongoIndexes and the driver error translation.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import ConfigurationError, ConnectionFailure, OperationFailure, PyMongoError

from ..core_manager import CoreManager
from ..index_manager import IndexManager
from bookstore.exceptions import DatabaseError, IndexConflict, StoreUnavailable

# AuthenticationFailed, Unauthorized
AUTH_ERROR_CODES = {13, 18}
# IndexOptionsConflict, IndexKeySpecsConflict
INDEX_CONFLICT_CODES = {85, 86}


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate pymongo failures into the toolkit's error kinds"""
    try:
        yield
    except ConnectionFailure as e:
        logging.error(f"MongoDB {operation} failed, store unavailable: {e}")
        raise StoreUnavailable(e, message=f"MongoDB unavailable during {operation}: {e}")
    except OperationFailure as e:
        if e.code in AUTH_ERROR_CODES:
            logging.error(f"MongoDB {operation} failed, not authorized: {e}")
            raise StoreUnavailable(e, message=f"MongoDB rejected credentials during {operation}: {e}")
        logging.error(f"MongoDB {operation} error: {e}")
        raise DatabaseError(e, message=f"MongoDB {operation} error: {e}")
    except PyMongoError as e:
        logging.error(f"MongoDB {operation} error: {e}")
        raise DatabaseError(e, message=f"MongoDB {operation} error: {e}")


class MongoCore(CoreManager):
    """MongoDB implementation of core operations"""

    def __init__(self, database):
        super().__init__(database)
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    @property
    def id_field(self) -> str:
        return "_id"

    async def init(self, connection_str: str, database_name: str) -> None:
        """Initialize MongoDB connection"""
        if self._client is not None:
            logging.info("MongoDatabase: Already initialized")
            return

        try:
            client = AsyncIOMotorClient(
                connection_str,
                serverSelectionTimeoutMS=self.database.server_selection_timeout_ms
            )
        except ConfigurationError as e:
            raise StoreUnavailable(e, message=f"Invalid MongoDB connection string: {e}")

        # Test connection
        try:
            with store_errors("connect"):
                await client.admin.command('ping')
        except (StoreUnavailable, DatabaseError):
            client.close()
            raise

        self._client = client
        self._db = client[database_name]
        self.database._initialized = True
        logging.info(f"MongoDatabase: Connected to {database_name}")

    async def close(self) -> None:
        """Close MongoDB connection"""
        if self._client:
            self._client.close()
            self._client = None
            self._db = None
            self.database._initialized = False
            logging.info("MongoDatabase: Connection closed")

    def get_connection(self) -> AsyncIOMotorDatabase:
        """Get MongoDB database instance"""
        self.database._ensure_initialized()
        if self._db is None:
            raise StoreUnavailable(message="MongoDB not initialized")
        return self._db

    def collection(self, name: Optional[str] = None) -> AsyncIOMotorCollection:
        return self.get_connection()[name or self.database.collection_name]


class MongoIndexes(IndexManager):
    """MongoDB implementation of index operations"""

    def __init__(self, database):
        super().__init__(database)

    async def _create_impl(self, keys: List[Tuple[str, int]], unique: bool, name: str) -> str:
        """Create index on collection"""
        collection = self.database.core.collection()
        kwargs: Dict[str, Any] = {"name": name}
        if unique:
            kwargs["unique"] = True

        try:
            with store_errors("create index"):
                return await collection.create_index(keys, **kwargs)
        except DatabaseError as e:
            if isinstance(e.error, OperationFailure) and e.error.code in INDEX_CONFLICT_CODES:
                raise IndexConflict(name, e.error)
            raise

    async def _list_impl(self) -> List[Dict[str, Any]]:
        collection = self.database.core.collection()
        indexes = []
        with store_errors("list indexes"):
            cursor = collection.list_indexes()
            async for index_info in cursor:
                indexes.append(dict(index_info))
        return indexes

    async def _delete_impl(self, name: str) -> None:
        """Delete index by name"""
        collection = self.database.core.collection()
        with store_errors("drop index"):
            await collection.drop_index(name)
