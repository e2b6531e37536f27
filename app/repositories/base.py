"""
Generic Repository

The repository is the only component that talks to the database for an
entity type. Each method is a single ORM call; mutating methods stage the
change and then call save(), which commits it.

Result Signal
=============
Mutating methods return a RepositoryResult instead of a bare boolean:

- SUCCESS:   staged changes were committed
- NO_OP:     the commit succeeded but nothing was pending
             (e.g. an update that sets every field to its current value)
- NOT_FOUND: update() was given an id that is not in the store
- CONFLICT:  the database rejected the change (integrity error)
- FAILED:    any other database error

SUCCESS and NO_OP both count as "ok". A no-op update is a valid request,
not a failure.
"""

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Generic, TypeVar

from sqlalchemy import exists as sql_exists, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# Largest value a 64-bit integer primary key can hold
MAX_ID = 2**63 - 1


class RepositoryResult(str, Enum):
    """Outcome of a mutating repository operation."""

    SUCCESS = "success"
    NO_OP = "no_op"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FAILED = "failed"

    @property
    def ok(self) -> bool:
        """True when the store is in the requested state."""
        return self in (RepositoryResult.SUCCESS, RepositoryResult.NO_OP)


class Repository(Generic[ModelT]):
    """
    Repository over one SQLAlchemy model.

    Subclasses set `model` and may override `_read_options()` to
    eager-load relationships for reads.

    Usage:
        class BookRepository(Repository[Book]):
            model = Book

        repo = BookRepository(db)
        result = repo.create(Book(title="1984"))
        if result.ok:
            ...
    """

    model: type[ModelT]

    def __init__(self, db: Session) -> None:
        self.db = db

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------
    def _read_options(self) -> Sequence:
        """Loader options applied to find_all() and find_by_id()."""
        return ()

    def find_all(self) -> list[ModelT]:
        """Return every entity, ordered by id. No pagination, no filtering."""
        stmt = (
            select(self.model)
            .options(*self._read_options())
            .order_by(self.model.id)
            .execution_options(populate_existing=True)
        )
        return list(self.db.execute(stmt).scalars().all())

    def find_by_id(self, entity_id: int) -> ModelT | None:
        """Return the entity with this id, or None. Ids outside the key range match nothing."""
        if not 0 < entity_id <= MAX_ID:
            return None
        stmt = (
            select(self.model)
            .options(*self._read_options())
            .where(self.model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def exists(self, entity_id: int) -> bool:
        """Presence check without loading the entity."""
        if not 0 < entity_id <= MAX_ID:
            return False
        stmt = select(sql_exists().where(self.model.id == entity_id))
        return bool(self.db.execute(stmt).scalar())

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------
    def create(self, entity: ModelT) -> RepositoryResult:
        """Stage an insert and commit it. The store assigns entity.id."""
        self.db.add(entity)
        return self.save()

    def update(self, entity: ModelT) -> RepositoryResult:
        """
        Replace the stored entity's fields with those set on `entity`.

        `entity` is usually a transient object built from an update schema,
        carrying the id of the row to replace. Its attribute values are
        copied onto the persistent instance by Session.merge().
        """
        entity_id = getattr(entity, "id", None)
        if entity_id is None or not self.exists(entity_id):
            return RepositoryResult.NOT_FOUND

        self.db.merge(entity)
        return self.save()

    def delete(self, entity: ModelT) -> RepositoryResult:
        """Stage a removal and commit it."""
        self.db.delete(entity)
        return self.save()

    def save(self) -> RepositoryResult:
        """
        Commit staged changes.

        The pending check runs before the commit, which clears the session's
        new/dirty/deleted sets. A dirty instance only counts when one of its
        attribute values actually differs from the loaded value.
        """
        pending = self._has_pending_changes()
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"{self.model.__name__} save rejected by database: {e.orig}")
            return RepositoryResult.CONFLICT
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{self.model.__name__} save failed: {e}")
            return RepositoryResult.FAILED

        return RepositoryResult.SUCCESS if pending else RepositoryResult.NO_OP

    def _has_pending_changes(self) -> bool:
        """Whether the session holds inserts, deletes or real column changes."""
        if self.db.new or self.db.deleted:
            return True
        return any(self.db.is_modified(obj) for obj in self.db.dirty)
