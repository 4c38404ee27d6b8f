"""
Ingredient endpoints.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from store_api.routers._common import (
    get_page_request,
    get_user_email,
    get_user_id,
    ok,
    require_admin,
    require_staff,
)
from store_api.schemas import IngredientCreate, IngredientUpdate
from store_api.services.catalog import PageRequest
from store_api.services.domain import IngredientService


router = APIRouter(tags=["ingredients"])


@router.get("/ingredients")
def list_ingredients(
    search: str | None = Query(default=None, description="Matches name or description"),
    sort_by: Literal["name"] = Query(default="name", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query(default="asc", alias="sortOrder"),
    is_vegetarian: bool | None = Query(default=None, alias="isVegetarian"),
    is_vegan: bool | None = Query(default=None, alias="isVegan"),
    is_gluten_free: bool | None = Query(default=None, alias="isGlutenFree"),
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
) -> dict:
    """Search and page through ingredients, sorted by name."""
    ingredients, total = IngredientService(db).list_ingredients(
        page_request,
        search=search,
        is_vegetarian=is_vegetarian,
        is_vegan=is_vegan,
        is_gluten_free=is_gluten_free,
        descending=sort_order == "desc",
    )
    return ok(ingredients, **page_request.window(total).to_dict(total))


@router.post("/ingredients", status_code=status.HTTP_201_CREATED)
def create_ingredient(
    body: IngredientCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(require_staff),
) -> dict:
    ingredient = IngredientService(db).create(body.model_dump(), get_user_id(user), get_user_email(user))
    return ok(ingredient, message="Ingredient created successfully")


@router.get("/ingredients/{ingredient_id}")
def get_ingredient(ingredient_id: str, db: Session = Depends(get_db)) -> dict:
    return ok(IngredientService(db).get_by_id(ingredient_id))


@router.put("/ingredients/{ingredient_id}")
def update_ingredient(
    ingredient_id: str,
    body: IngredientUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(require_staff),
) -> dict:
    ingredient = IngredientService(db).update(
        ingredient_id, body.model_dump(exclude_unset=True), get_user_id(user), get_user_email(user)
    )
    return ok(ingredient, message="Ingredient updated successfully")


@router.delete("/ingredients/{ingredient_id}")
def delete_ingredient(
    ingredient_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Delete an ingredient no product uses. Requires ADMIN role."""
    IngredientService(db).delete(ingredient_id, get_user_id(user), get_user_email(user))
    return ok(message="Ingredient deleted successfully")
