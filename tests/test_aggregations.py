import asyncio
from collections import defaultdict

import pytest

from bookstore.sample_data import SAMPLE_BOOKS


@pytest.mark.asyncio
async def test_average_price_by_genre(seeded_db):
    groups = await seeded_db.queries.average_price_by_genre()

    prices = defaultdict(list)
    for book in SAMPLE_BOOKS:
        prices[book['genre']].append(book['price'])

    assert {g.genre for g in groups} == set(prices)
    for g in groups:
        assert g.average_price == pytest.approx(sum(prices[g.genre]) / len(prices[g.genre]))

    averages = [g.average_price for g in groups]
    assert averages == sorted(averages, reverse=True)
    assert groups[0].genre == 'Fantasy'


@pytest.mark.asyncio
async def test_average_price_empty_collection(db):
    assert await db.queries.average_price_by_genre() == []


@pytest.mark.asyncio
async def test_count_by_decade(seeded_db):
    groups = await seeded_db.queries.count_by_decade()
    decades = [g.decade for g in groups]
    assert decades == sorted(decades)
    assert sum(g.count for g in groups) == await seeded_db.documents.count()
    assert {g.decade: g.count for g in groups}[1930] == 2
    assert decades[0] == 1810


@pytest.mark.asyncio
async def test_count_by_decade_after_demo_changes(seeded_db):
    await seeded_db.documents.delete_by_title('Moby Dick')
    await seeded_db.documents.create({'title': 'The Silent Patient', 'published_year': 2019, 'price': 13.99})
    counts = {g.decade: g.count for g in await seeded_db.queries.count_by_decade()}
    assert 1850 not in counts
    assert counts[2010] == 1


@pytest.mark.asyncio
async def test_most_expensive_by_genre(seeded_db):
    rows = await seeded_db.queries.most_expensive_by_genre()
    by_genre = {r.genre: r for r in rows}

    assert by_genre['Fantasy'].title == 'The Lord of the Rings'
    assert by_genre['Fantasy'].price == 19.99
    assert by_genre['Dystopian'].title == 'Brave New World'
    assert by_genre['Fiction'].title == 'To Kill a Mockingbird'
    assert by_genre['Fiction'].author == 'Harper Lee'
    assert [r.genre for r in rows] == sorted(by_genre)

    for genre, row in by_genre.items():
        assert row.price == max(b['price'] for b in SAMPLE_BOOKS if b['genre'] == genre)


@pytest.mark.asyncio
async def test_operations_can_run_concurrently(seeded_db):
    averages, decades, affordable = await asyncio.gather(
        seeded_db.queries.average_price_by_genre(),
        seeded_db.queries.count_by_decade(),
        seeded_db.queries.find_affordable_in_stock(10),
    )
    assert averages and decades and affordable


@pytest.mark.asyncio
async def test_writes_and_aggregations_run_concurrently(seeded_db):
    updated, deleted, decades = await asyncio.gather(
        seeded_db.documents.update_price('The Hobbit', 15.99),
        seeded_db.documents.delete_by_title('Moby Dick'),
        seeded_db.queries.count_by_decade(),
    )
    assert updated == 1
    assert deleted == 1
    assert sum(g.count for g in decades) in (len(SAMPLE_BOOKS), len(SAMPLE_BOOKS) - 1)

    assert (await seeded_db.documents.get_by_title('The Hobbit')).price == 15.99
    assert await seeded_db.documents.get_by_title('Moby Dick') is None
    counts = {g.decade: g.count for g in await seeded_db.queries.count_by_decade()}
    assert 1850 not in counts
    assert sum(counts.values()) == len(SAMPLE_BOOKS) - 1
