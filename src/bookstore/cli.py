#!/usr/bin/env python3
"""
Command line entry point - seeds the sample dataset and runs the demonstration queries.

Usage: bookstore [--config config.json] {seed [--reset] | demo | indexes}
"""
import argparse
import asyncio
import logging
import sys
from pprint import pformat
from typing import Any, List, Optional

from bookstore.config import Config
from bookstore.db import DatabaseInterface, open_database
from bookstore.exceptions import StoreUnavailable
from bookstore.sample_data import NEW_BOOK, sample_books


def _show(label: str, value: Any) -> None:
    if isinstance(value, list):
        value = [item.model_dump() if hasattr(item, 'model_dump') else item for item in value]
    elif hasattr(value, 'model_dump'):
        value = value.model_dump()
    print(f"{label}: {pformat(value)}")


async def seed(db: DatabaseInterface, reset: bool = False) -> int:
    if reset:
        await db.documents.delete_all()
    inserted = await db.documents.create_many(sample_books())
    print(f"Inserted {len(inserted)} book(s)")
    return len(inserted)


async def run_demo(db: DatabaseInterface) -> None:
    # CRUD
    inserted_id = await db.documents.create(NEW_BOOK)
    print(f"Inserted book with id: {inserted_id}")
    _show("Found book", await db.documents.get_by_title('1984'))
    print(f"Updated {await db.documents.update_price('The Hobbit', 15.99)} book(s)")
    print(f"Deleted {await db.documents.delete_by_title('Moby Dick')} book(s)")

    # Queries
    _show("Books in Fiction genre", await db.queries.find_by_genre('Fiction'))
    _show("Books published between 1900 and 1950", await db.queries.find_by_year_range(1900, 1950))
    _show("Books under $10 in stock", await db.queries.find_affordable_in_stock(10))

    # Aggregations
    _show("Average price by genre", await db.queries.average_price_by_genre())
    _show("Books by decade", await db.queries.count_by_decade())
    _show("Most expensive books by genre", await db.queries.most_expensive_by_genre())

    # Indexes
    print(f"Created index on title: {await db.indexes.create_title_index()}")
    print(f"Created compound index on genre and published_year: {await db.indexes.create_genre_year_index()}")
    _show("Current indexes", await db.indexes.get_all())


async def list_indexes(db: DatabaseInterface) -> None:
    _show("Current indexes", await db.indexes.get_all())


async def run(args: argparse.Namespace) -> None:
    async with open_database() as db:
        if args.command == 'seed':
            await seed(db, reset=args.reset)
        elif args.command == 'demo':
            await run_demo(db)
        elif args.command == 'indexes':
            await list_indexes(db)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bookstore',
        description='CRUD, queries, aggregations and indexes over the books collection'
    )
    parser.add_argument(
        '--config',
        default='config.json',
        help='JSON configuration file (default: config.json)'
    )
    commands = parser.add_subparsers(dest='command', required=True)

    seed_parser = commands.add_parser('seed', help='insert the sample books')
    seed_parser.add_argument(
        '--reset',
        action='store_true',
        help='remove existing books first'
    )
    commands.add_parser('demo', help='run the demonstration sequence')
    commands.add_parser('indexes', help='list the collection indexes')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    Config.initialize(args.config)
    logging.basicConfig(level=Config.log_level(), format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        asyncio.run(run(args))
    except StoreUnavailable as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
