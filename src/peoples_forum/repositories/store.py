"""Store adapter over a SQLAlchemy session.

Exposes the primitives the forum core relies on: point lookups, predicate
scans, composed ``select()`` pipelines, atomic counter increments and a single
transaction capability. Driver failures surface as ``StoreUnavailable``.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from sqlalchemy import ColumnElement, Select, delete, func, inspect, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from peoples_forum.core.errors import Conflict, NotFound, StoreUnavailable

__all__ = ["StoreAdapter"]

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")
ModelT = TypeVar("ModelT")


def _translate_errors(method: Callable[P, R]) -> Callable[P, R]:
    """Map driver-level failures onto ``StoreUnavailable``."""

    @wraps(method)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return method(*args, **kwargs)
        except IntegrityError:
            raise
        except DBAPIError as err:
            raise StoreUnavailable() from err

    return wrapper


class StoreAdapter:
    """Thin wrapper around one request-scoped session."""

    def __init__(self, session: Session) -> None:
        """Initialize the adapter with a SQLAlchemy session."""
        self.session = session

    @staticmethod
    def _primary_key(model: type[Any]) -> Any:
        return inspect(model).primary_key[0]

    @_translate_errors
    def find_by_id(self, model: type[ModelT], entity_id: Any) -> ModelT | None:
        """Return the entity with primary key ``entity_id`` or None."""
        stmt = select(model).where(self._primary_key(model) == entity_id)
        return self.session.scalars(stmt).first()

    def get_or_404(self, model: type[ModelT], entity_id: Any) -> ModelT:
        """Return the entity or raise ``NotFound`` naming its type."""
        entity = self.find_by_id(model, entity_id)
        if entity is None:
            raise NotFound.for_entity(model.__name__)
        return entity

    @_translate_errors
    def find_one(self, model: type[ModelT], *predicates: ColumnElement[bool]) -> ModelT | None:
        """Return the first entity matching every predicate."""
        return self.session.scalars(select(model).where(*predicates)).first()

    @_translate_errors
    def find_many(
        self,
        model: type[ModelT],
        *predicates: ColumnElement[bool],
        order_by: Iterable[Any] = (),
        limit: int | None = None,
    ) -> list[ModelT]:
        """Return all entities matching the predicates."""
        stmt = select(model).where(*predicates).order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.scalars(stmt))

    @_translate_errors
    def count(self, model: type[Any], *predicates: ColumnElement[bool]) -> int:
        """Return the number of rows matching the predicates."""
        stmt = select(func.count()).select_from(model).where(*predicates)
        return int(self.session.scalar(stmt) or 0)

    @_translate_errors
    def insert(self, entity: Any) -> Any:
        """Stage ``entity`` and flush it, returning the generated identifier.

        Raises:
            Conflict: If a unique constraint rejects the row.
        """
        self.session.add(entity)
        try:
            self.session.flush()
        except IntegrityError as err:
            self.session.rollback()
            raise Conflict(f"{type(entity).__name__} already exists") from err
        return inspect(entity).identity[0]

    @_translate_errors
    def delete_by_id(self, model: type[Any], entity_id: Any) -> int:
        """Delete one row by primary key and return the deleted count (0 or 1)."""
        stmt = delete(model).where(self._primary_key(model) == entity_id)
        result = self.session.execute(stmt, execution_options={"synchronize_session": False})
        return int(result.rowcount or 0)

    @_translate_errors
    def delete_where(self, model: type[Any], *predicates: ColumnElement[bool]) -> int:
        """Delete every row matching the predicates and return the count."""
        stmt = delete(model).where(*predicates)
        result = self.session.execute(stmt, execution_options={"synchronize_session": False})
        return int(result.rowcount or 0)

    @_translate_errors
    def atomic_increment(self, model: type[Any], entity_id: Any, field: str, delta: int) -> None:
        """Add ``delta`` to ``field`` in a single UPDATE statement.

        The new value is computed by the database, so concurrent increments
        never overwrite one another.

        Raises:
            NotFound: If no row carries ``entity_id``.
        """
        column = getattr(model, field)
        stmt = (
            update(model)
            .where(self._primary_key(model) == entity_id)
            .values({column: column + delta})
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        if not result.rowcount:
            raise NotFound.for_entity(model.__name__)

    @_translate_errors
    def run_pipeline(self, statement: Select[Any]) -> Sequence[Row[Any]]:
        """Execute a composed ``select()`` and return its rows."""
        return self.session.execute(statement).all()

    @_translate_errors
    def scalars(self, statement: Select[Any]) -> list[Any]:
        """Execute a single-column ``select()`` and return its values."""
        return list(self.session.scalars(statement))

    def with_transaction(self, fn: Callable[[StoreAdapter], R]) -> R:
        """Run ``fn`` as one all-or-nothing unit of work.

        Every write ``fn`` performs commits together. If ``fn`` raises, or the
        commit fails, the session rolls back and none of the writes are
        visible to other readers.
        """
        try:
            result = fn(self)
            self.session.commit()
        except SQLAlchemyError as err:
            self.session.rollback()
            logger.warning("Transaction rolled back: %s", type(err).__name__)
            raise StoreUnavailable("Transaction could not be committed") from err
        except Exception:
            self.session.rollback()
            logger.warning("Transaction rolled back")
            raise
        return result

    @_translate_errors
    def commit(self) -> None:
        """Commit pending writes."""
        self.session.commit()

    @_translate_errors
    def refresh(self, entity: Any) -> None:
        """Reload ``entity`` from the database."""
        self.session.refresh(entity)
