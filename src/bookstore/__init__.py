"""
Bookstore query toolkit.

Asynchronous CRUD, filtered queries, aggregation pipelines and index
management over a MongoDB ``books`` collection.
"""

__version__ = "0.1.0"

from . import models
from . import db
from . import exceptions

__all__ = ["models", "db", "exceptions"]
