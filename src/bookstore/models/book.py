"""
Book record model.

Documents in the ``books`` collection are validated through :class:`Book`
before they are written, and read back through it so the store-assigned
``_id`` always surfaces as a plain string ``id``.
"""

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from bookstore.exceptions import ValidationError
from bookstore.utils import decimal_to_float, normalize_id


class Book(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    id: Optional[str] = Field(default=None, alias='_id')
    title: str = Field(..., min_length=1)
    author: Optional[str] = None
    genre: Optional[str] = None
    published_year: Optional[int] = Field(default=None)
    price: Optional[float] = Field(default=None, ge=0)
    in_stock: Optional[bool] = Field(default=None)
    pages: Optional[int] = Field(default=None, ge=0)
    publisher: Optional[str] = None

    @field_validator('id', mode='before')
    @classmethod
    def _normalize_id(cls, value: Any) -> Optional[str]:
        return normalize_id(value)

    @field_validator('price', mode='before')
    @classmethod
    def _decimal_price(cls, value: Any) -> Any:
        return decimal_to_float(value)

    @field_validator('title')
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('title must not be blank')
        return value

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> 'Book':
        """Build a Book from a raw store document; store types are coerced leniently"""
        try:
            return cls.model_validate(document)
        except PydanticValidationError as e:
            raise ValidationError(e, message=f"Stored book {document.get('_id')} is malformed: {e.errors()[0]['msg']}")

    def to_document(self) -> Dict[str, Any]:
        """Document to insert: unset fields and the id are left to the store"""
        return self.model_dump(exclude={'id'}, exclude_none=True)


BOOK_FIELDS: Tuple[str, ...] = tuple(name for name in Book.model_fields if name != 'id')


def validate_book(data: Any) -> Book:
    """Validate a Book or mapping, raising the toolkit's ValidationError"""
    if isinstance(data, Book):
        data = data.model_dump(by_alias=True)
    if not isinstance(data, dict):
        raise ValidationError(message=f"Book record must be a mapping, got {type(data).__name__}")
    try:
        return Book.model_validate(data, strict=True)
    except PydanticValidationError as e:
        raise ValidationError(e, message=f"Invalid book record: {e.errors()[0]['msg']}")


def validate_field_value(field: str, value: Any) -> Any:
    """Validate a single field update against the Book model and return the clean value"""
    if field not in BOOK_FIELDS:
        raise ValidationError(message=f"Unknown book field: {field}", field=field)
    if value is None:
        raise ValidationError(message=f"A value is required to update {field}", field=field)

    candidate = {'title': 'placeholder', field: value}
    try:
        return getattr(Book.model_validate(candidate, strict=True), field)
    except PydanticValidationError as e:
        raise ValidationError(e, message=f"Invalid value for {field}: {e.errors()[0]['msg']}", field=field)
