"""
Repository Pattern for database access.

Provides a thin abstraction between services and SQLAlchemy queries.

Usage:
    from store_api.repositories import Repository

    repo = Repository(Ingredient, db)
    ingredient = repo.find_by_id("5f0c...")
    vegan = repo.find_all(Ingredient.is_vegan.is_(True), order_by=Ingredient.name)
    taken = repo.exists_where(Ingredient.slug == "basil")
"""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import exists as sql_exists, func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from store_api.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """
    Base repository providing common database operations.

    Writes are never committed here; services commit with safe_commit().
    """

    def __init__(self, model: type[ModelT], session: Session):
        self._model = model
        self._session = session

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class."""
        return self._model

    @property
    def session(self) -> Session:
        """The database session."""
        return self._session

    def _base_query(self) -> Select:
        """Create base select query. Override to add default ordering."""
        return select(self._model)

    def _apply_options(self, query: Select, options: list[Any] | None) -> Select:
        """Apply eager loading options."""
        if options:
            query = query.options(*options)
        return query

    def find_by_id(
        self,
        entity_id: str,
        *,
        options: list[Any] | None = None,
    ) -> ModelT | None:
        """
        Find entity by primary key.

        Args:
            entity_id: The primary key value.
            options: SQLAlchemy loader options (selectinload, joinedload).

        Returns:
            Entity or None if not found.
        """
        query = self._base_query().where(self._model.id == entity_id)
        query = self._apply_options(query, options)
        return self._session.scalar(query)

    def find_one(self, *criteria: Any, options: list[Any] | None = None) -> ModelT | None:
        """First entity matching all criteria."""
        query = self._apply_options(self._base_query().where(*criteria), options)
        return self._session.scalars(query.limit(1)).first()

    def find_all(
        self,
        *criteria: Any,
        options: list[Any] | None = None,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelT]:
        """
        Find all entities matching criteria.

        Args:
            criteria: SQLAlchemy where clauses (ANDed).
            options: SQLAlchemy loader options.
            limit: Maximum number of results.
            offset: Number of results to skip.
            order_by: Column or expression (or tuple of them) to order by.

        Returns:
            Sequence of entities.
        """
        query = self._base_query()
        if criteria:
            query = query.where(*criteria)
        query = self._apply_options(query, options)

        if order_by is not None:
            if isinstance(order_by, (list, tuple)):
                query = query.order_by(None).order_by(*order_by)
            else:
                query = query.order_by(None).order_by(order_by)
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        return self._session.scalars(query).all()

    def count(self, *criteria: Any) -> int:
        """Count entities matching criteria."""
        query = select(func.count()).select_from(self._model)
        if criteria:
            query = query.where(*criteria)
        return self._session.scalar(query) or 0

    def exists(self, entity_id: str) -> bool:
        """Check if entity exists by ID."""
        return self.exists_where(self._model.id == entity_id)

    def exists_where(self, *criteria: Any) -> bool:
        """Check if any entity matches criteria."""
        query = select(sql_exists().where(*criteria))
        return bool(self._session.scalar(query))

    def add(self, entity: ModelT) -> ModelT:
        """Add entity to session (not committed)."""
        self._session.add(entity)
        return entity

    def delete(self, entity: ModelT) -> None:
        """Delete entity from session (not committed)."""
        self._session.delete(entity)

    def refresh(self, entity: ModelT) -> ModelT:
        """Refresh entity from database."""
        self._session.refresh(entity)
        return entity
