import pytest
import pytest_asyncio

from bookstore.config import Config, DEFAULTS
from bookstore.db import DatabaseFactory
from bookstore.sample_data import sample_books

from fake_store import FakeMotorClient


@pytest.fixture(autouse=True)
def fake_motor(monkeypatch):
    """Route every MongoCore connection to the in-memory fake"""
    FakeMotorClient.instances = []
    monkeypatch.setattr("bookstore.db.mongodb.core.AsyncIOMotorClient", FakeMotorClient)
    monkeypatch.setattr(Config, "_config", dict(DEFAULTS))
    return FakeMotorClient


@pytest_asyncio.fixture
async def db():
    database = await DatabaseFactory.initialize("mongodb", "mongodb://localhost:27017", "test_bookstore")
    yield database
    await database.core.close()


@pytest_asyncio.fixture
async def seeded_db(db):
    await db.documents.create_many(sample_books())
    return db


@pytest.fixture
def store(db):
    """The fake collection behind ``db``"""
    return db.core.collection()
