"""
Index management operations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from bookstore.exceptions import IndexConflict, ValidationError
from bookstore.models.results import IndexInfo
from .specs import ASCENDING, DESCENDING, DOCUMENT_FIELDS, parse_direction

PRIMARY_INDEX = '_id_'

KeySpec = Union[str, Mapping[str, Any], Sequence[Tuple[str, Any]]]


def normalize_keys(keys: KeySpec) -> List[Tuple[str, int]]:
    """Accept 'field', {'field': 1} or [('field', 'desc')] and return [(field, 1|-1)]"""
    if isinstance(keys, str):
        pairs: List[Tuple[str, Any]] = [(keys, ASCENDING)]
    elif isinstance(keys, Mapping):
        pairs = list(keys.items())
    else:
        pairs = [tuple(pair) for pair in keys]

    if not pairs:
        raise ValidationError(message="An index needs at least one field")

    normalized: List[Tuple[str, int]] = []
    seen = set()
    for field, direction in pairs:
        if field not in DOCUMENT_FIELDS:
            raise ValidationError(message=f"Unknown field '{field}'", field=field)
        if field in seen:
            raise ValidationError(message=f"Field '{field}' listed twice in index", field=field)
        seen.add(field)
        normalized.append((field, parse_direction(direction)))
    return normalized


def index_name(keys: Sequence[Tuple[str, int]]) -> str:
    """Canonical name: field1_dir1_field2_dir2..."""
    return "_".join(f"{field}_{direction}" for field, direction in keys)


class IndexManager(ABC):
    """Template Method Pattern - concrete orchestration, abstract worker methods"""

    def __init__(self, database):
        self.database = database
        self.logger = logging.getLogger(__name__)

    async def create(self, keys: KeySpec, unique: bool = False, name: Optional[str] = None) -> str:
        """
        Declare an index and return its name.

        Creating the same index twice is a no-op. A name already used by an
        index with different keys or uniqueness raises IndexConflict.
        """
        normalized = normalize_keys(keys)
        name = name or index_name(normalized)

        existing = {info.name: info for info in await self.get_all()}
        current = existing.get(name)
        if current is not None:
            if current.keys == normalized and current.unique == unique:
                self.logger.info(f"IndexManager: Index {name} already exists")
                return name
            raise IndexConflict(name)

        created = await self._create_impl(normalized, unique, name)
        self.logger.info(f"IndexManager: Created index {created}")
        return created

    async def create_title_index(self) -> str:
        return await self.create([('title', ASCENDING)])

    async def create_genre_year_index(self) -> str:
        return await self.create([('genre', ASCENDING), ('published_year', DESCENDING)])

    async def get_all(self) -> List[IndexInfo]:
        """All indexes on the collection, the primary key index included"""
        return [IndexInfo.from_document(doc) for doc in await self._list_impl()]

    async def delete(self, name: str) -> None:
        if name == PRIMARY_INDEX:
            raise ValidationError(message="The primary key index cannot be dropped")
        await self._delete_impl(name)
        self.logger.info(f"IndexManager: Dropped index {name}")

    # Abstract worker methods for database drivers to implement
    @abstractmethod
    async def _create_impl(self, keys: List[Tuple[str, int]], unique: bool, name: str) -> str:
        pass

    @abstractmethod
    async def _list_impl(self) -> List[Dict[str, Any]]:
        """Raw index documents: {'name': ..., 'key': {...}, 'unique': ...}"""
        pass

    @abstractmethod
    async def _delete_impl(self, name: str) -> None:
        pass
