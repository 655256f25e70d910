"""
Core database operations (connection management, collection handles).
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class CoreManager(ABC):
    """Core database operations - connection and ID management"""

    def __init__(self, database):
        """Initialize with database interface reference"""
        self.database = database

    @abstractmethod
    async def init(self, connection_str: str, database_name: str) -> None:
        """Initialize database connection"""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close database connection"""
        pass

    @property
    @abstractmethod
    def id_field(self) -> str:
        """Get the ID field name for this database"""
        pass

    @abstractmethod
    def get_connection(self) -> Any:
        """Get the database handle"""
        pass

    @abstractmethod
    def collection(self, name: Optional[str] = None) -> Any:
        """Get a collection handle; defaults to the configured books collection"""
        pass
