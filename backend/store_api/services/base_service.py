"""
Base Service Classes.

Architecture:
    Router (thin) -> Service (business logic) -> Repository (data access) -> Model

Usage:
    from store_api.services.base_service import BaseCRUDService

    class IngredientService(BaseCRUDService[Ingredient, IngredientOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                repo=IngredientRepository(db),
                output_schema=IngredientOutput,
                entity_name="Ingredient",
            )

        def _validate_delete(self, entity: Ingredient) -> None:
            if self.repo.count_product_links(entity.id):
                raise ConflictError("Ingredient is used by products")
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, Type

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shared.config.constants import SINGLETON_KEY
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import DatabaseError, NotFoundError
from shared.utils.validators import slugify
from store_api.models import Base
from store_api.repositories import Repository
from store_api.services.catalog.pagination import PageRequest

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseService(Generic[ModelT]):
    """
    Base service for domain operations.

    Provides the session and repository to subclasses.
    """

    def __init__(self, db: Session, repo: Repository[ModelT]):
        self._db = db
        self._repo = repo

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    @property
    def repo(self) -> Repository[ModelT]:
        """Repository for data access."""
        return self._repo

    def _commit(self, operation: str, **log_context: Any) -> None:
        """Commit the unit of work, converting database failures to DatabaseError."""
        try:
            safe_commit(self._db)
        except SQLAlchemyError as e:
            logger.error(f"Failed to {operation}", error=str(e), **log_context)
            raise DatabaseError(operation)


class SingletonService(BaseService[ModelT], Generic[ModelT, OutputT]):
    """
    Get-or-create / save for a single-row table keyed by SINGLETON_KEY.

    Reads create the row with defaults on first access.
    """

    output_schema: type[OutputT]
    entity_name: str = "Settings"

    def __init__(self, db: Session, model: type[ModelT]):
        super().__init__(db, Repository(model, db))

    def get(self) -> OutputT:
        return self.output_schema.model_validate(self._get_or_create())

    def _save(self, entity: ModelT, user_id: str | None, user_email: str | None) -> OutputT:
        entity.set_updated_by(user_id, user_email)
        self._commit(f"update {self.entity_name.lower()}")
        self._repo.refresh(entity)
        return self.output_schema.model_validate(entity)

    def _get_or_create(self) -> ModelT:
        entity = self._repo.find_by_id(SINGLETON_KEY)
        if entity is not None:
            return entity

        entity = self._repo.model(id=SINGLETON_KEY)
        self._repo.add(entity)
        try:
            safe_commit(self._db)
        except IntegrityError:
            # Another request created the row first
            entity = self._repo.find_by_id(SINGLETON_KEY)
            if entity is None:
                raise DatabaseError(f"create {self.entity_name.lower()}")
            return entity

        logger.info(f"{self.entity_name} created with defaults")
        self._repo.refresh(entity)
        return entity


class BaseCRUDService(BaseService[ModelT], Generic[ModelT, OutputT]):
    """
    Base service for entities with CRUD operations.

    Subclasses override the _validate_* hooks for business rules.
    Entities with a ``slug`` column get a unique slug derived from
    ``name`` on create and rename.
    """

    def __init__(
        self,
        db: Session,
        repo: Repository[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
    ):
        super().__init__(db, repo)
        self._output_schema = output_schema
        self._entity_name = entity_name

    @property
    def entity_name(self) -> str:
        """Human-readable entity name for messages."""
        return self._entity_name

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_entity(self, entity_id: str) -> ModelT:
        """
        Get raw entity (for internal use).

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self._repo.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    def get_by_id(self, entity_id: str) -> OutputT:
        """Get entity by ID as output DTO."""
        return self.to_output(self.get_entity(entity_id))

    def list_all(self, *criteria: Any, order_by: Any | None = None) -> list[OutputT]:
        """List entities matching optional criteria."""
        entities = self._repo.find_all(*criteria, order_by=order_by)
        return [self.to_output(e) for e in entities]

    def list_page(
        self,
        *criteria: Any,
        page_request: PageRequest,
        order_by: Any | None = None,
    ) -> tuple[list[OutputT], int]:
        """One page of entities matching criteria, with the total match count."""
        total = self._repo.count(*criteria)
        entities = self._repo.find_all(
            *criteria,
            order_by=order_by,
            limit=page_request.limit,
            offset=page_request.offset,
        )
        return [self.to_output(e) for e in entities], total

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(
        self,
        data: dict[str, Any],
        user_id: str | None = None,
        user_email: str | None = None,
    ) -> OutputT:
        """
        Create new entity.

        Raises:
            ValidationError / ConflictError: From _validate_create.
            DatabaseError: If creation fails.
        """
        self._validate_create(data)

        if hasattr(self._repo.model, "slug") and "slug" not in data:
            data["slug"] = self._unique_slug(self._slug_source(data))

        entity = self._repo.model(**data)
        if hasattr(entity, "set_created_by"):
            entity.set_created_by(user_id, user_email)

        self._repo.add(entity)
        self._commit(f"create {self._entity_name.lower()}")
        self._repo.refresh(entity)

        logger.info(f"{self._entity_name} created", entity_id=entity.id, user_id=user_id)
        return self.to_output(entity)

    def update(
        self,
        entity_id: str,
        data: dict[str, Any],
        user_id: str | None = None,
        user_email: str | None = None,
    ) -> OutputT:
        """
        Update existing entity with the given fields.

        Raises:
            NotFoundError: If entity not found.
            DatabaseError: If update fails.
        """
        entity = self.get_entity(entity_id)

        data = self._drop_required_nulls(data)
        self._validate_update(entity, data)

        if (
            hasattr(entity, "slug")
            and "slug" not in data
            and "name" in data
            and data["name"] != entity.name
        ):
            data["slug"] = self._unique_slug(self._slug_source(data), exclude_id=entity.id)

        for field_name, value in data.items():
            if hasattr(entity, field_name):
                setattr(entity, field_name, value)

        if hasattr(entity, "set_updated_by"):
            entity.set_updated_by(user_id, user_email)

        self._commit(f"update {self._entity_name.lower()}", entity_id=entity_id)
        self._repo.refresh(entity)

        logger.info(f"{self._entity_name} updated", entity_id=entity_id, user_id=user_id)
        return self.to_output(entity)

    def delete(
        self,
        entity_id: str,
        user_id: str | None = None,
        user_email: str | None = None,
    ) -> None:
        """
        Hard delete entity.

        Raises:
            NotFoundError: If entity not found.
            ConflictError: From _validate_delete when dependents exist.
        """
        entity = self.get_entity(entity_id)

        self._validate_delete(entity)

        self._repo.delete(entity)
        self._commit(f"delete {self._entity_name.lower()}", entity_id=entity_id)

        logger.info(f"{self._entity_name} deleted", entity_id=entity_id, user_id=user_id)

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        """
        Convert entity to output DTO.

        Override this method for custom transformation logic.
        """
        return self._output_schema.model_validate(entity)

    # =========================================================================
    # Validation Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        """Validate data before create."""
        pass

    def _validate_update(self, entity: ModelT, data: dict[str, Any]) -> None:
        """Validate data before update."""
        pass

    def _validate_delete(self, entity: ModelT) -> None:
        """Validate before delete (dependent entities, etc.)."""
        pass

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _drop_required_nulls(self, data: dict[str, Any]) -> dict[str, Any]:
        """Partial updates: null on a NOT NULL column means "leave unchanged"."""
        columns = self._repo.model.__table__.columns
        return {
            key: value
            for key, value in data.items()
            if value is not None or key not in columns or columns[key].nullable
        }

    def _slug_source(self, data: dict[str, Any]) -> str:
        """Text the slug is derived from. Override for multilingual names."""
        return str(data.get("name") or "")

    def _unique_slug(self, text: str, exclude_id: str | None = None) -> str:
        """slugify(text), suffixed with -2, -3, ... until unused."""
        base = slugify(text)
        slug = base
        suffix = 2
        while self._slug_taken(slug, exclude_id):
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug

    def _slug_taken(self, slug: str, exclude_id: str | None) -> bool:
        model = self._repo.model
        criteria = [model.slug == slug]
        if exclude_id is not None:
            criteria.append(model.id != exclude_id)
        return self._repo.exists_where(*criteria)
