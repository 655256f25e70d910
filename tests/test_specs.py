import pytest

from bookstore.db.specs import (
    AVERAGE_PRICE_BY_GENRE,
    COUNT_BY_DECADE,
    DESCENDING,
    MOST_EXPENSIVE_BY_GENRE,
    REDUCER_OPERATORS,
    DecadeStage,
    FieldFilter,
    Filter,
    FindQuery,
    GroupStage,
    Pipeline,
    Projection,
    Reducer,
    SortKey,
    SortStage,
    parse_direction,
)
from bookstore.exceptions import ValidationError


def test_range_filter_merges_operators():
    query = Filter((
        FieldFilter('published_year', 'gte', 1900),
        FieldFilter('published_year', 'lte', 1950),
    )).compile()
    assert query == {'published_year': {'$gte': 1900, '$lte': 1950}}


def test_conjunctive_filter():
    query = Filter((FieldFilter('price', 'lt', 10), FieldFilter('in_stock', 'eq', True))).compile()
    assert query == {'price': {'$lt': 10}, 'in_stock': True}


def test_filter_rejects_unknown_field():
    with pytest.raises(ValidationError):
        Filter((FieldFilter('isbn', 'eq', 'x'),)).compile()


def test_filter_rejects_unknown_operator():
    with pytest.raises(ValidationError):
        Filter((FieldFilter('price', 'regex', 'x'),)).compile()


def test_filter_rejects_conflicting_conditions():
    with pytest.raises(ValidationError):
        Filter((FieldFilter('genre', 'eq', 'a'), FieldFilter('genre', 'eq', 'b'))).compile()
    with pytest.raises(ValidationError):
        Filter((FieldFilter('price', 'lt', 1), FieldFilter('price', 'lt', 2))).compile()


def test_projection_excludes_id_by_default():
    assert Projection(('title', 'author')).compile() == {'title': 1, 'author': 1, '_id': 0}
    assert Projection(('title',), include_id=True).compile() == {'title': 1}


def test_projection_validation():
    with pytest.raises(ValidationError):
        Projection(()).compile()
    with pytest.raises(ValidationError):
        Projection(('_id',)).compile()


def test_find_query_compiles_sort():
    compiled = FindQuery(sort=(SortKey('published_year', 'asc'),)).compile()
    assert compiled == {'filter': {}, 'projection': None, 'sort': [('published_year', 1)]}


@pytest.mark.parametrize("value, expected", [(1, 1), (-1, -1), ('asc', 1), ('DESC', -1), ('descending', -1)])
def test_parse_direction(value, expected):
    assert parse_direction(value) == expected


@pytest.mark.parametrize("value", [0, 2, True, 'up', None])
def test_parse_direction_rejects(value):
    with pytest.raises(ValidationError):
        parse_direction(value)


def test_average_price_pipeline():
    assert AVERAGE_PRICE_BY_GENRE.compile() == [
        {'$group': {'_id': '$genre', 'averagePrice': {'$avg': '$price'}}},
        {'$sort': {'averagePrice': -1}},
    ]


def test_decade_pipeline():
    assert COUNT_BY_DECADE.compile() == [
        {'$project': {'decade': {'$subtract': ['$published_year', {'$mod': ['$published_year', 10]}]}}},
        {'$group': {'_id': '$decade', 'count': {'$sum': 1}}},
        {'$sort': {'_id': 1}},
    ]


def test_most_expensive_pipeline():
    assert MOST_EXPENSIVE_BY_GENRE.compile() == [
        {'$sort': {'genre': 1, 'price': -1}},
        {'$group': {
            '_id': '$genre',
            'title': {'$first': '$title'},
            'author': {'$first': '$author'},
            'price': {'$first': '$price'},
        }},
        {'$sort': {'_id': 1}},
    ]


def test_pipeline_tracks_fields_between_stages():
    # after grouping only the group key and reducer outputs remain
    pipeline = Pipeline((
        GroupStage('genre', (Reducer('averagePrice', 'avg', 'price'),)),
        SortStage((SortKey('price', DESCENDING),)),
    ))
    with pytest.raises(ValidationError):
        pipeline.compile()


def test_decade_stage_limits_fields():
    pipeline = Pipeline((DecadeStage(), GroupStage('genre', ())))
    with pytest.raises(ValidationError):
        pipeline.compile()


def test_reducer_validation():
    with pytest.raises(ValidationError):
        Pipeline((GroupStage('genre', (Reducer('x', 'median', 'price'),)),)).compile()
    with pytest.raises(ValidationError):
        Pipeline((GroupStage('genre', (Reducer('x', 'avg'),)),)).compile()
    with pytest.raises(ValidationError):
        Pipeline((GroupStage('genre', (Reducer('_id', 'sum'),)),)).compile()


def test_empty_sort_stage_rejected():
    with pytest.raises(ValidationError):
        Pipeline((SortStage(()),)).compile()


def test_reducers_are_limited_to_those_the_pipelines_use():
    assert set(REDUCER_OPERATORS) == {'avg', 'sum', 'first'}
    with pytest.raises(ValidationError):
        Pipeline((GroupStage('genre', (Reducer('top', 'max', 'price'),)),)).compile()
