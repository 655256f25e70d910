"""
Typed query and aggregation descriptors.

Queries and pipelines are assembled from this closed set of descriptors
instead of free-form dictionaries. Each descriptor validates its field names
and operators when the query is compiled, so a malformed request raises
:class:`~bookstore.exceptions.ValidationError` before anything reaches the
store.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from bookstore.exceptions import ValidationError
from bookstore.models.book import BOOK_FIELDS

ASCENDING = 1
DESCENDING = -1

ID_FIELD = '_id'
DOCUMENT_FIELDS: FrozenSet[str] = frozenset(BOOK_FIELDS) | {ID_FIELD}

FILTER_OPERATORS = {
    'eq': None,
    'gt': '$gt',
    'gte': '$gte',
    'lt': '$lt',
    'lte': '$lte',
}

REDUCER_OPERATORS = {
    'avg': '$avg',
    'sum': '$sum',
    'first': '$first',
}

_DIRECTION_NAMES = {
    'asc': ASCENDING,
    'ascending': ASCENDING,
    'desc': DESCENDING,
    'descending': DESCENDING,
}


def parse_direction(direction: Union[int, str]) -> int:
    """Normalise 1 / -1 / 'asc' / 'desc' to a sort direction"""
    if isinstance(direction, bool):
        raise ValidationError(message=f"Invalid sort direction: {direction!r}")
    if isinstance(direction, int) and direction in (ASCENDING, DESCENDING):
        return direction
    if isinstance(direction, str) and direction.lower() in _DIRECTION_NAMES:
        return _DIRECTION_NAMES[direction.lower()]
    raise ValidationError(message=f"Invalid sort direction: {direction!r}")


def _check_field(name: str, available: Iterable[str]) -> None:
    if name not in available:
        raise ValidationError(message=f"Unknown field '{name}'", field=name)


@dataclass(frozen=True)
class FieldFilter:
    """Single predicate: ``field <op> value``"""

    field: str
    op: str = 'eq'
    value: Any = None

    def validate(self, available: Iterable[str] = DOCUMENT_FIELDS) -> None:
        _check_field(self.field, available)
        if self.op not in FILTER_OPERATORS:
            raise ValidationError(message=f"Unsupported filter operator '{self.op}'", field=self.field)


@dataclass(frozen=True)
class Filter:
    """Conjunction of predicates"""

    conditions: Tuple[FieldFilter, ...] = ()

    def compile(self, available: Iterable[str] = DOCUMENT_FIELDS) -> Dict[str, Any]:
        query: Dict[str, Any] = {}
        for condition in self.conditions:
            condition.validate(available)
            operator = FILTER_OPERATORS[condition.op]
            existing = query.get(condition.field)

            if operator is None:
                if existing is not None:
                    raise ValidationError(
                        message=f"Conflicting conditions on '{condition.field}'", field=condition.field
                    )
                query[condition.field] = condition.value
                continue

            if existing is None:
                query[condition.field] = {operator: condition.value}
            elif isinstance(existing, dict) and operator not in existing:
                existing[operator] = condition.value
            else:
                raise ValidationError(
                    message=f"Conflicting conditions on '{condition.field}'", field=condition.field
                )
        return query


@dataclass(frozen=True)
class SortKey:
    field: str
    direction: int = ASCENDING

    def compile(self, available: Iterable[str] = DOCUMENT_FIELDS) -> Tuple[str, int]:
        _check_field(self.field, available)
        return self.field, parse_direction(self.direction)


@dataclass(frozen=True)
class Projection:
    """Fields to return; the id is excluded unless asked for"""

    fields: Tuple[str, ...]
    include_id: bool = False

    def compile(self) -> Dict[str, int]:
        if not self.fields:
            raise ValidationError(message="Projection needs at least one field")
        spec: Dict[str, int] = {}
        for name in self.fields:
            _check_field(name, BOOK_FIELDS)
            spec[name] = 1
        if not self.include_id:
            spec[ID_FIELD] = 0
        return spec


@dataclass(frozen=True)
class FindQuery:
    """Filtered, projected and sorted multi-record read"""

    filter: Filter = field(default_factory=Filter)
    projection: Optional[Projection] = None
    sort: Tuple[SortKey, ...] = ()

    def compile(self) -> Dict[str, Any]:
        return {
            'filter': self.filter.compile(),
            'projection': self.projection.compile() if self.projection else None,
            'sort': [key.compile() for key in self.sort],
        }


# Aggregation stages
# ==================

@dataclass(frozen=True)
class Reducer:
    """Accumulator inside a group stage. ``source`` None means the constant 1 (a count)."""

    output: str
    op: str
    source: Optional[str] = None

    def compile(self, available: Iterable[str]) -> Dict[str, Any]:
        if self.op not in REDUCER_OPERATORS:
            raise ValidationError(message=f"Unsupported reducer '{self.op}'")
        if self.source is None:
            if self.op != 'sum':
                raise ValidationError(message=f"Reducer '{self.op}' needs a source field")
            return {REDUCER_OPERATORS[self.op]: 1}
        _check_field(self.source, available)
        return {REDUCER_OPERATORS[self.op]: f"${self.source}"}


@dataclass(frozen=True)
class SortStage:
    keys: Tuple[SortKey, ...]

    def compile(self, available: FrozenSet[str]) -> Tuple[Dict[str, Any], FrozenSet[str]]:
        if not self.keys:
            raise ValidationError(message="Sort stage needs at least one key")
        return {'$sort': dict(key.compile(available) for key in self.keys)}, available


@dataclass(frozen=True)
class GroupStage:
    key: str
    reducers: Tuple[Reducer, ...]

    def compile(self, available: FrozenSet[str]) -> Tuple[Dict[str, Any], FrozenSet[str]]:
        _check_field(self.key, available)
        group: Dict[str, Any] = {ID_FIELD: f"${self.key}"}
        for reducer in self.reducers:
            if reducer.output in group:
                raise ValidationError(message=f"Duplicate group output '{reducer.output}'")
            group[reducer.output] = reducer.compile(available)
        outputs = frozenset(group)
        return {'$group': group}, outputs


@dataclass(frozen=True)
class DecadeStage:
    """Project ``output = year - (year mod 10)``"""

    source: str = 'published_year'
    output: str = 'decade'

    def compile(self, available: FrozenSet[str]) -> Tuple[Dict[str, Any], FrozenSet[str]]:
        _check_field(self.source, available)
        year = f"${self.source}"
        stage = {'$project': {self.output: {'$subtract': [year, {'$mod': [year, 10]}]}}}
        return stage, frozenset({ID_FIELD, self.output})


Stage = Union[SortStage, GroupStage, DecadeStage]


@dataclass(frozen=True)
class Pipeline:
    """Ordered aggregation stages, validated against the fields each stage leaves behind"""

    stages: Tuple[Stage, ...]

    def compile(self) -> List[Dict[str, Any]]:
        available = DOCUMENT_FIELDS
        compiled = []
        for stage in self.stages:
            document, available = stage.compile(available)
            compiled.append(document)
        return compiled


# Pipelines used by the aggregation operations
# ============================================

AVERAGE_PRICE_BY_GENRE = Pipeline((
    GroupStage('genre', (Reducer('averagePrice', 'avg', 'price'),)),
    SortStage((SortKey('averagePrice', DESCENDING),)),
))

COUNT_BY_DECADE = Pipeline((
    DecadeStage('published_year', 'decade'),
    GroupStage('decade', (Reducer('count', 'sum'),)),
    SortStage((SortKey(ID_FIELD, ASCENDING),)),
))

MOST_EXPENSIVE_BY_GENRE = Pipeline((
    SortStage((SortKey('genre', ASCENDING), SortKey('price', DESCENDING))),
    GroupStage('genre', (
        Reducer('title', 'first', 'title'),
        Reducer('author', 'first', 'author'),
        Reducer('price', 'first', 'price'),
    )),
    SortStage((SortKey(ID_FIELD, ASCENDING),)),
))
