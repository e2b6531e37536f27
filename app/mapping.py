"""
Entity <-> Schema Mapping

The Mapper converts between SQLAlchemy entities and Pydantic schemas.
Pairs are registered once at startup by configure_mapper(); routers get
the configured Mapper through dependency injection (see get_mapper()).

Default conversions, chosen from the pair's types:
- Entity -> schema: Schema.model_validate(entity), reading attributes
  (schemas set from_attributes=True)
- Schema -> entity: Entity(**fields), copying only schema fields whose
  names match one of the entity's mapped columns

A custom converter can be passed to register() for anything else.

Usage:
    mapper = get_mapper()
    book = mapper.map(book_create, Book)
    response = mapper.map(book, BookResponse)
    responses = mapper.map_many(books, BookResponse)
"""

from collections.abc import Callable, Iterable
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import BaseModel
from sqlalchemy import inspect

from app.database import Base
from app.models import Author, Book
from app.schemas import (
    AuthorCreate,
    AuthorResponse,
    AuthorUpdate,
    BookCreate,
    BookResponse,
    BookUpdate,
)

T = TypeVar("T")


class MappingError(Exception):
    """Raised when no conversion is registered for a source/destination pair."""


class Mapper:
    """Registry of conversions keyed by (source type, destination type)."""

    def __init__(self) -> None:
        self._converters: dict[tuple[type, type], Callable[[Any], Any]] = {}

    def register(
        self,
        source: type,
        destination: type,
        converter: Callable[[Any], Any] | None = None,
    ) -> "Mapper":
        """
        Register a conversion from `source` to `destination`.

        Returns the mapper so registrations can be chained.

        Raises:
            MappingError: If no converter is given and neither default applies
        """
        if converter is None:
            converter = self._default_converter(source, destination)
        self._converters[(source, destination)] = converter
        return self

    def map(self, obj: Any, destination: type[T]) -> T:
        """
        Convert a single object.

        Raises:
            MappingError: If the pair was never registered
        """
        converter = self._converters.get((type(obj), destination))
        if converter is None:
            raise MappingError(
                f"No mapping registered from {type(obj).__name__} "
                f"to {destination.__name__}"
            )
        return converter(obj)

    def map_many(self, objs: Iterable[Any], destination: type[T]) -> list[T]:
        """Convert every object in `objs`, preserving order."""
        return [self.map(obj, destination) for obj in objs]

    @staticmethod
    def _default_converter(source: type, destination: type) -> Callable[[Any], Any]:
        if issubclass(destination, BaseModel):
            return destination.model_validate

        if issubclass(source, BaseModel) and issubclass(destination, Base):
            columns = {attr.key for attr in inspect(destination).column_attrs}
            fields = set(source.model_fields) & columns

            def to_entity(obj: BaseModel) -> Any:
                return destination(**obj.model_dump(include=fields))

            return to_entity

        raise MappingError(
            f"No default mapping from {source.__name__} to {destination.__name__}"
        )


@lru_cache
def configure_mapper() -> Mapper:
    """
    Build the application's mapper.

    Cached, so the registrations run once per process.
    """
    return (
        Mapper()
        # Books
        .register(BookCreate, Book)
        .register(BookUpdate, Book)
        .register(Book, BookResponse)
        # Authors
        .register(AuthorCreate, Author)
        .register(AuthorUpdate, Author)
        .register(Author, AuthorResponse)
    )


def get_mapper() -> Mapper:
    """FastAPI dependency returning the configured mapper."""
    return configure_mapper()
