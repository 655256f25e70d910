"""
Typed rows returned by aggregation and index listing.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel

from bookstore.utils import decimal_to_float


class GenreAveragePrice(BaseModel):
    genre: Optional[str]
    average_price: Optional[float]

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> 'GenreAveragePrice':
        return cls(genre=document.get('_id'), average_price=decimal_to_float(document.get('averagePrice')))


class DecadeCount(BaseModel):
    decade: Optional[int]
    count: int

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> 'DecadeCount':
        decade = document.get('_id')
        return cls(decade=int(decade) if decade is not None else None, count=document['count'])


class GenreTopBook(BaseModel):
    genre: Optional[str]
    title: str
    author: Optional[str] = None
    price: Optional[float] = None

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> 'GenreTopBook':
        return cls(
            genre=document.get('_id'),
            title=document['title'],
            author=document.get('author'),
            price=decimal_to_float(document.get('price'))
        )


class IndexInfo(BaseModel):
    name: str
    keys: List[Tuple[str, Union[int, str]]]
    unique: bool = False

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> 'IndexInfo':
        keys = [
            (field, direction if isinstance(direction, str) else int(direction))
            for field, direction in document.get('key', {}).items()
        ]
        return cls(name=document['name'], keys=keys, unique=bool(document.get('unique', False)))

    @property
    def is_primary(self) -> bool:
        return self.name == '_id_'
