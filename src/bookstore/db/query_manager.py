"""
Filtered reads and aggregation pipelines over the books collection.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from bookstore.exceptions import ValidationError
from bookstore.models.book import Book
from bookstore.models.results import DecadeCount, GenreAveragePrice, GenreTopBook
from bookstore.utils import normalize_id
from .specs import (
    ASCENDING,
    AVERAGE_PRICE_BY_GENRE,
    COUNT_BY_DECADE,
    MOST_EXPENSIVE_BY_GENRE,
    FieldFilter,
    Filter,
    FindQuery,
    Pipeline,
    Projection,
    SortKey,
)

DEFAULT_GENRE_PROJECTION = ('title', 'author', 'price')


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class QueryManager(ABC):
    """Template Method Pattern - descriptors built here, executed by the driver"""

    def __init__(self, database):
        self.database = database
        self.logger = logging.getLogger(__name__)

    # Queries
    # =======

    async def find_by_genre(
        self,
        genre: str,
        projection: Optional[Sequence[str]] = DEFAULT_GENRE_PROJECTION
    ) -> List[Dict[str, Any]]:
        """
        Books of one genre, restricted to the projected fields.

        Order is whatever the store returns. Pass ``projection=None`` for
        whole documents.
        """
        if not isinstance(genre, str) or not genre:
            raise ValidationError(message="A genre is required", field='genre')
        query = FindQuery(
            filter=Filter((FieldFilter('genre', 'eq', genre),)),
            projection=Projection(tuple(projection)) if projection is not None else None
        )
        docs = await self._find_impl(query.compile())
        for doc in docs:
            if '_id' in doc:
                doc['_id'] = normalize_id(doc['_id'])
        return docs

    async def find_by_year_range(self, start_year: int, end_year: int) -> List[Book]:
        """
        Books with ``start_year <= published_year <= end_year``, oldest first.

        Books from the same year come back in store order.
        """
        for name, value in (('start_year', start_year), ('end_year', end_year)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValidationError(message=f"{name} must be an integer", field=name)
        if start_year > end_year:
            raise ValidationError(message=f"Invalid year range: {start_year} > {end_year}", field='published_year')

        query = FindQuery(
            filter=Filter((
                FieldFilter('published_year', 'gte', start_year),
                FieldFilter('published_year', 'lte', end_year),
            )),
            sort=(SortKey('published_year', ASCENDING),)
        )
        docs = await self._find_impl(query.compile())
        return [Book.from_document(doc) for doc in docs]

    async def find_affordable_in_stock(self, max_price: float) -> List[Book]:
        """In-stock books strictly cheaper than ``max_price``"""
        if not _is_number(max_price):
            raise ValidationError(message="max_price must be a number", field='price')

        query = FindQuery(filter=Filter((
            FieldFilter('price', 'lt', max_price),
            FieldFilter('in_stock', 'eq', True),
        )))
        docs = await self._find_impl(query.compile())
        return [Book.from_document(doc) for doc in docs]

    # Aggregations
    # ============

    async def average_price_by_genre(self) -> List[GenreAveragePrice]:
        """Mean price per genre, most expensive genre first"""
        docs = await self.aggregate(AVERAGE_PRICE_BY_GENRE)
        return [GenreAveragePrice.from_document(doc) for doc in docs]

    async def count_by_decade(self) -> List[DecadeCount]:
        """Number of books per publication decade, earliest decade first"""
        docs = await self.aggregate(COUNT_BY_DECADE)
        return [DecadeCount.from_document(doc) for doc in docs]

    async def most_expensive_by_genre(self) -> List[GenreTopBook]:
        """
        The priciest book of each genre, genres in ascending order.

        When several books share a genre's top price, the one the store
        yields first after sorting wins.
        """
        docs = await self.aggregate(MOST_EXPENSIVE_BY_GENRE)
        return [GenreTopBook.from_document(doc) for doc in docs]

    async def aggregate(self, pipeline: Pipeline) -> List[Dict[str, Any]]:
        """Validate and run a typed pipeline"""
        compiled = pipeline.compile()
        self.logger.debug(f"QueryManager: Running pipeline {compiled}")
        return await self._aggregate_impl(compiled)

    # Abstract worker methods for database drivers to implement
    @abstractmethod
    async def _find_impl(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Run a compiled FindQuery (filter, projection, sort)"""
        pass

    @abstractmethod
    async def _aggregate_impl(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        pass
