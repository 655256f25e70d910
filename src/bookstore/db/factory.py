"""
Database factory.
Creates explicitly owned database instances and scopes their connection lifetime.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from bookstore.config import Config

from .base import DatabaseInterface
from .mongodb import MongoDatabase


class DatabaseFactory:
    """
    Factory for creating database instances.

    Usage:
        db = await DatabaseFactory.initialize("mongodb", connection_str, db_name)
        try:
            book = await db.documents.get_by_title("1984")
            groups = await db.queries.average_price_by_genre()
            await db.indexes.create([("title", 1)])
        finally:
            await db.core.close()

    Every call returns a new instance; nothing is shared between callers.
    """

    @classmethod
    def create(
        cls,
        db_type: str = "mongodb",
        collection_name: str = "books",
        server_selection_timeout_ms: int = 5000
    ) -> DatabaseInterface:
        """Build an unconnected database instance"""
        if db_type.lower() == "mongodb":
            return MongoDatabase(
                collection_name=collection_name,
                server_selection_timeout_ms=server_selection_timeout_ms
            )
        raise ValueError(f"Unsupported database type: {db_type}")

    @classmethod
    async def initialize(
        cls,
        db_type: str,
        connection_str: str,
        database_name: str,
        collection_name: str = "books",
        server_selection_timeout_ms: int = 5000
    ) -> DatabaseInterface:
        """
        Build and connect a database instance.

        Args:
            db_type: Database type (only "mongodb" is supported)
            connection_str: Database connection string
            database_name: Database name
            collection_name: Collection holding the books

        Returns:
            DatabaseInterface instance with composed managers

        Raises:
            StoreUnavailable: the store refused the connection or credentials
        """
        db = cls.create(db_type, collection_name, server_selection_timeout_ms)
        try:
            await db.core.init(connection_str, database_name)
        except Exception as e:
            logging.error(f"Failed to initialize database: {str(e)}")
            raise

        logging.info(f"DatabaseFactory: Initialized {db_type} database")
        return db


@asynccontextmanager
async def open_database(
    db_type: Optional[str] = None,
    connection_str: Optional[str] = None,
    database_name: Optional[str] = None,
    collection_name: Optional[str] = None
) -> AsyncIterator[DatabaseInterface]:
    """
    Connect for the duration of an ``async with`` block and always close afterwards.

    Arguments left as None are taken from :class:`~bookstore.config.Config`.
    """
    cfg_type, cfg_uri, cfg_name, cfg_collection = Config.get_db_params()
    db = await DatabaseFactory.initialize(
        db_type or cfg_type,
        connection_str or cfg_uri,
        database_name or cfg_name,
        collection_name or cfg_collection,
        Config.get('server_selection_timeout_ms', 5000)
    )
    try:
        yield db
    finally:
        await db.core.close()
