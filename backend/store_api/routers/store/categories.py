"""
Category endpoints.
"""

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
from store_api.schemas import CategoryCreate, CategoryUpdate
from store_api.services.catalog import PageRequest
from store_api.services.domain import CategoryService


router = APIRouter(tags=["categories"])


@router.get("/categories")
def list_categories(
    active_only: bool = Query(default=False, alias="activeOnly"),
    hierarchy: bool = Query(default=False, description="Return the category tree instead of a page"),
    page_request: PageRequest = Depends(get_page_request),
    db: Session = Depends(get_db),
) -> dict:
    """List categories ordered by display order, one page at a time."""
    service = CategoryService(db)
    if hierarchy:
        tree = service.tree(active_only=active_only)
        return ok(tree, total=len(tree))

    categories, total = service.list_categories(page_request, active_only=active_only)
    return ok(categories, **page_request.window(total).to_dict(total))


@router.get("/categories/tree")
def category_tree(
    active_only: bool = Query(default=False, alias="activeOnly"),
    db: Session = Depends(get_db),
) -> dict:
    """Root categories with their children."""
    return ok(CategoryService(db).tree(active_only=active_only))


@router.post("/categories", status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(require_staff),
) -> dict:
    """Create a category. Requires staff role."""
    category = CategoryService(db).create(body.model_dump(), get_user_id(user), get_user_email(user))
    return ok(category, message="Category created successfully")


@router.get("/categories/{category_id}")
def get_category(category_id: str, db: Session = Depends(get_db)) -> dict:
    return ok(CategoryService(db).get_by_id(category_id))


@router.put("/categories/{category_id}")
def update_category(
    category_id: str,
    body: CategoryUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(require_staff),
) -> dict:
    """Update a category. Requires staff role."""
    category = CategoryService(db).update(
        category_id, body.model_dump(exclude_unset=True), get_user_id(user), get_user_email(user)
    )
    return ok(category, message="Category updated successfully")


@router.delete("/categories/{category_id}")
def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Delete a category without products or subcategories. Requires ADMIN role."""
    CategoryService(db).delete(category_id, get_user_id(user), get_user_email(user))
    return ok(message="Category deleted successfully")
