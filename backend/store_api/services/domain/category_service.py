"""
Category Service.

Handles category business logic: hierarchy, slugs and the rules that
keep products from pointing at deleted categories.

Usage:
    from store_api.services.domain import CategoryService

    service = CategoryService(db)
    tree = service.tree(active_only=True)
    categories, total = service.list_categories(PageRequest(page=1, limit=10))
    category = service.create(data, user_id, user_email)
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from sqlalchemy.orm import Session

from shared.config.constants import ErrorMessages
from shared.utils.exceptions import ConflictError, ValidationError
from store_api.models import Category
from store_api.repositories import CategoryRepository
from store_api.schemas import CategoryOutput, CategoryTreeOutput
from store_api.services.base_service import BaseCRUDService
from store_api.services.catalog.pagination import PageRequest


class CategoryService(BaseCRUDService[Category, CategoryOutput]):
    """
    Service for category management.

    Business rules:
    - Categories form a tree through parent_id
    - A category is never its own ancestor
    - Slug is derived from name and re-derived on rename
    - A category with products or subcategories cannot be deleted
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=CategoryRepository(db),
            output_schema=CategoryOutput,
            entity_name="Category",
        )

    @property
    def repo(self) -> CategoryRepository:
        return self._repo  # type: ignore[return-value]

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_categories(
        self, page_request: PageRequest, active_only: bool = False
    ) -> tuple[list[CategoryOutput], int]:
        """One page of categories, ordered by display_order then name, and the total."""
        criteria = [Category.is_active.is_(True)] if active_only else []
        return self.list_page(*criteria, page_request=page_request)

    def tree(self, active_only: bool = False) -> list[CategoryTreeOutput]:
        """
        Root categories with their descendants, at any depth.

        Siblings are ordered by display_order then name. With active_only,
        an inactive category hides its whole subtree.
        """
        criteria = [Category.is_active.is_(True)] if active_only else []
        by_parent: dict[str | None, list[Category]] = defaultdict(list)
        for category in self.repo.find_all(*criteria):
            by_parent[category.parent_id].append(category)

        def build(category: Category) -> CategoryTreeOutput:
            return CategoryTreeOutput(
                **CategoryOutput.model_validate(category).model_dump(),
                children=[build(c) for c in by_parent.get(category.id, [])],
            )

        # Parent changes reject cycles, so every node reachable from a root is visited once
        return [build(root) for root in by_parent.get(None, [])]

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        parent_id = data.get("parent_id")
        if parent_id is not None:
            self._require_parent(parent_id)

    def _validate_update(self, entity: Category, data: dict[str, Any]) -> None:
        if "parent_id" not in data or data["parent_id"] is None:
            return

        parent_id = data["parent_id"]
        if parent_id == entity.id:
            raise ValidationError(
                "A category cannot be its own parent",
                details=[{"field": "parentId", "message": "must differ from the category id"}],
            )

        parent = self._require_parent(parent_id)

        # Walk up from the new parent; reaching entity means a cycle
        seen: set[str] = set()
        node: Category | None = parent
        while node is not None and node.id not in seen:
            if node.id == entity.id:
                raise ValidationError(
                    "A category cannot be moved under one of its descendants",
                    details=[{"field": "parentId", "message": "would create a cycle"}],
                )
            seen.add(node.id)
            node = node.parent

    def _validate_delete(self, entity: Category) -> None:
        product_count = self.repo.count_products(entity.id)
        if product_count:
            raise ConflictError(
                ErrorMessages.CATEGORY_HAS_PRODUCTS,
                details={"productCount": product_count},
                category_id=entity.id,
            )

        child_count = self.repo.count_children(entity.id)
        if child_count:
            raise ConflictError(
                ErrorMessages.CATEGORY_HAS_CHILDREN,
                details={"childCount": child_count},
                category_id=entity.id,
            )

    def _require_parent(self, parent_id: str) -> Category:
        parent = self.repo.find_by_id(parent_id)
        if parent is None:
            raise ValidationError(
                "Parent category does not exist",
                details=[{"field": "parentId", "message": "unknown category", "value": parent_id}],
            )
        return parent
