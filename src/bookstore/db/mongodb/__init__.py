"""
MongoDB database driver implementation.
"""

from ..base import DatabaseInterface
from .core import MongoCore, MongoIndexes, store_errors
from .documents import MongoDocuments, MongoQueries


class MongoDatabase(DatabaseInterface):
    """MongoDB implementation of DatabaseInterface"""

    def _get_manager_classes(self) -> dict:
        """Return MongoDB manager classes"""
        return {
            'core': MongoCore,
            'documents': MongoDocuments,
            'queries': MongoQueries,
            'indexes': MongoIndexes
        }


__all__ = ['MongoDatabase', 'MongoCore', 'MongoDocuments', 'MongoQueries', 'MongoIndexes', 'store_errors']
