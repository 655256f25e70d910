"""
Database layer with clean separation of concerns.

Architecture:
- DatabaseInterface: Main interface that composes sub-managers
- CoreManager: Connection lifecycle and collection handles
- DocumentManager: CRUD operations (create, get, update, delete)
- QueryManager: Filtered reads and aggregation pipelines
- IndexManager: Index management (create, list, drop)
"""

from .base import DatabaseInterface
from .factory import DatabaseFactory, open_database

__all__ = ['DatabaseInterface', 'DatabaseFactory', 'open_database']
