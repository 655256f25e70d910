"""
Main database interface that composes sub-managers.
Clean separation of concerns with explicit parameters.
"""

from abc import ABC, abstractmethod

from .core_manager import CoreManager
from .document_manager import DocumentManager
from .index_manager import IndexManager
from .query_manager import QueryManager
from bookstore.exceptions import StoreUnavailable


class DatabaseInterface(ABC):
    """
    Main database interface that composes specialized managers.

    Architecture:
    - core: Connection management, collection handles
    - documents: CRUD operations
    - queries: Filtered reads and aggregations
    - indexes: Index management

    Instances are explicitly owned by the caller; nothing is cached at module
    or class level. Use :func:`bookstore.db.factory.open_database` for scoped
    acquisition with guaranteed release.
    """

    def __init__(self, collection_name: str = "books", server_selection_timeout_ms: int = 5000):
        self.collection_name = collection_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self._initialized = False

        # Get manager classes from concrete implementation
        manager_classes = self._get_manager_classes()

        self.core: CoreManager = manager_classes['core'](self)
        self.documents: DocumentManager = manager_classes['documents'](self)
        self.queries: QueryManager = manager_classes['queries'](self)
        self.indexes: IndexManager = manager_classes['indexes'](self)

    @abstractmethod
    def _get_manager_classes(self) -> dict:
        """Return dictionary of manager class types for this database"""
        pass

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _ensure_initialized(self) -> None:
        """Ensure database is initialized"""
        if not self._initialized:
            raise StoreUnavailable(message=f"{self.__class__.__name__} not initialized")
