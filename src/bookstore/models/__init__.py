from .book import Book, BOOK_FIELDS, validate_book, validate_field_value
from .results import DecadeCount, GenreAveragePrice, GenreTopBook, IndexInfo

__all__ = [
    'Book',
    'BOOK_FIELDS',
    'validate_book',
    'validate_field_value',
    'DecadeCount',
    'GenreAveragePrice',
    'GenreTopBook',
    'IndexInfo',
]
