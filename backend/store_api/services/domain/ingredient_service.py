"""
Ingredient Service.

Usage:
    from store_api.services.domain import IngredientService

    service = IngredientService(db)
    vegan, total = service.list_ingredients(PageRequest(page=1), is_vegan=True)
    found, total = service.list_ingredients(PageRequest(page=1), search="tom", descending=True)
"""

from __future__ import annotations

from sqlalchemy import or_
from sqlalchemy.orm import Session

from shared.config.constants import ErrorMessages
from shared.utils.exceptions import ConflictError, ValidationError
from shared.utils.validators import sanitize_search_term
from store_api.models import Ingredient
from store_api.repositories import IngredientRepository
from store_api.schemas import IngredientOutput
from store_api.services.base_service import BaseCRUDService
from store_api.services.catalog.pagination import PageRequest


class IngredientService(BaseCRUDService[Ingredient, IngredientOutput]):
    """
    Service for ingredient management.

    Business rules:
    - Allergens come from the fixed allergen vocabulary (validated by schema)
    - An ingredient attached to a product cannot be deleted
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=IngredientRepository(db),
            output_schema=IngredientOutput,
            entity_name="Ingredient",
        )

    @property
    def repo(self) -> IngredientRepository:
        return self._repo  # type: ignore[return-value]

    def list_ingredients(
        self,
        page_request: PageRequest,
        search: str | None = None,
        is_vegetarian: bool | None = None,
        is_vegan: bool | None = None,
        is_gluten_free: bool | None = None,
        descending: bool = False,
    ) -> tuple[list[IngredientOutput], int]:
        """
        One page of ingredients ordered by name, and the total.

        search matches name or description, case-insensitively.

        Raises:
            ValidationError: If the search term is too long.
        """
        criteria = []
        term = self._search_term(search)
        if term:
            criteria.append(
                or_(
                    Ingredient.name.icontains(term, autoescape=True),
                    Ingredient.description.icontains(term, autoescape=True),
                )
            )
        if is_vegetarian is not None:
            criteria.append(Ingredient.is_vegetarian.is_(is_vegetarian))
        if is_vegan is not None:
            criteria.append(Ingredient.is_vegan.is_(is_vegan))
        if is_gluten_free is not None:
            criteria.append(Ingredient.is_gluten_free.is_(is_gluten_free))
        order = Ingredient.name.desc() if descending else Ingredient.name.asc()
        return self.list_page(*criteria, page_request=page_request, order_by=order)

    @staticmethod
    def _search_term(search: str | None) -> str:
        try:
            return sanitize_search_term(search)
        except ValueError as e:
            raise ValidationError(
                ErrorMessages.INVALID_PARAMETERS,
                details=[{"field": "search", "message": str(e), "value": search}],
                fields=["search"],
            )

    def _validate_delete(self, entity: Ingredient) -> None:
        links = self.repo.count_product_links(entity.id)
        if links:
            raise ConflictError(
                "Cannot delete ingredient used by products. Remove it from those products first.",
                details={"productCount": links},
                ingredient_id=entity.id,
            )
