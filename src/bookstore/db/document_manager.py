"""
Document CRUD operations with explicit parameters.

Public methods validate their input and log the outcome; the database-specific
work lives in the abstract ``_*_impl`` methods.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from bookstore.exceptions import ValidationError
from bookstore.models.book import Book, validate_book, validate_field_value
from bookstore.utils import validate_id


class DocumentManager(ABC):
    """Document CRUD operations with clean, focused interface"""

    def __init__(self, database):
        """Initialize with database interface reference for cleaner access patterns"""
        self.database = database
        self.logger = logging.getLogger(__name__)

    # Create
    # ======

    async def create(self, record: Any) -> str:
        """
        Insert a new book.

        Args:
            record: Book instance or mapping of book fields

        Returns:
            The store-assigned id as a string

        Raises:
            ValidationError: record is malformed; nothing is written
        """
        book = validate_book(record)
        inserted_id = await self._create_impl(book.to_document())
        self.logger.info(f"DocumentManager: Inserted book '{book.title}' with id: {inserted_id}")
        return inserted_id

    async def create_many(self, records: Sequence[Any]) -> List[str]:
        """Validate every record first, then insert them in one call"""
        books = [validate_book(record) for record in records]
        if not books:
            return []
        inserted_ids = await self._create_many_impl([book.to_document() for book in books])
        self.logger.info(f"DocumentManager: Inserted {len(inserted_ids)} book(s)")
        return inserted_ids

    # Read
    # ====

    async def get_by_title(self, title: str) -> Optional[Book]:
        """Return the first book with this title, or None when there is none"""
        self._check_title(title)
        doc = await self._get_one_impl({'title': title})
        if doc is None:
            self.logger.info(f"DocumentManager: No book titled '{title}'")
            return None
        return Book.from_document(doc)

    async def find_by_title(self, title: str) -> List[Book]:
        """Every book sharing this title; titles are not unique"""
        self._check_title(title)
        docs = await self._find_impl({'title': title})
        return [Book.from_document(doc) for doc in docs]

    async def get_by_id(self, id: str) -> Optional[Book]:
        self._check_id(id)
        doc = await self._get_one_impl({self._id_field: self._store_id(id)})
        return Book.from_document(doc) if doc is not None else None

    async def count(self) -> int:
        return await self._count_impl({})

    # Update
    # ======

    async def update_field(self, title: str, field: str, value: Any) -> int:
        """
        Set one field on the first book with this title.

        Returns:
            Number of books modified (0 or 1). Zero matches is not an error.
        """
        self._check_title(title)
        clean_value = validate_field_value(field, value)
        modified = await self._update_one_impl({'title': title}, {field: clean_value})
        self.logger.info(f"DocumentManager: Updated {modified} book(s)")
        return modified

    async def update_price(self, title: str, price: float) -> int:
        return await self.update_field(title, 'price', price)

    async def update_field_by_id(self, id: str, field: str, value: Any) -> int:
        self._check_id(id)
        clean_value = validate_field_value(field, value)
        modified = await self._update_one_impl({self._id_field: self._store_id(id)}, {field: clean_value})
        self.logger.info(f"DocumentManager: Updated {modified} book(s)")
        return modified

    # Delete
    # ======

    async def delete_by_title(self, title: str) -> int:
        """Remove the first book with this title. Returns the deleted count (0 or 1)."""
        self._check_title(title)
        deleted = await self._delete_one_impl({'title': title})
        self.logger.info(f"DocumentManager: Deleted {deleted} book(s)")
        return deleted

    async def delete_by_id(self, id: str) -> int:
        self._check_id(id)
        deleted = await self._delete_one_impl({self._id_field: self._store_id(id)})
        self.logger.info(f"DocumentManager: Deleted {deleted} book(s)")
        return deleted

    async def delete_all(self) -> int:
        deleted = await self._delete_many_impl({})
        self.logger.info(f"DocumentManager: Cleared {deleted} book(s)")
        return deleted

    # Helpers
    # =======

    @property
    def _id_field(self) -> str:
        return self.database.core.id_field

    def _store_id(self, id: str) -> Any:
        """Convert a string id to the form the store keeps it in"""
        return id

    @staticmethod
    def _check_title(title: str) -> None:
        if not isinstance(title, str) or not title.strip():
            raise ValidationError(message="A non-empty title is required", field='title')

    @staticmethod
    def _check_id(id: str) -> None:
        if not validate_id(id):
            raise ValidationError(message="A non-empty id is required", field='id')

    # Abstract worker methods for database drivers to implement
    @abstractmethod
    async def _create_impl(self, data: Dict[str, Any]) -> str:
        pass

    @abstractmethod
    async def _create_many_impl(self, data: List[Dict[str, Any]]) -> List[str]:
        pass

    @abstractmethod
    async def _get_one_impl(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    async def _find_impl(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def _count_impl(self, query: Dict[str, Any]) -> int:
        pass

    @abstractmethod
    async def _update_one_impl(self, query: Dict[str, Any], changes: Dict[str, Any]) -> int:
        pass

    @abstractmethod
    async def _delete_one_impl(self, query: Dict[str, Any]) -> int:
        pass

    @abstractmethod
    async def _delete_many_impl(self, query: Dict[str, Any]) -> int:
        pass
