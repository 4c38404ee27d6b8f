"""
Product endpoints: catalog listing, CRUD, bulk collection flags,
favorites and reviews of a product.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.security.auth import current_user_context
from store_api.routers._common import (
    get_locale,
    get_page_request,
    get_product_filters,
    get_user_email,
    get_user_id,
    ok,
    require_admin,
    require_staff,
)
from store_api.schemas import BulkUpdateRequest, ProductCreate, ProductUpdate, ReviewCreate
from store_api.services.catalog import (
    PageRequest,
    ProductFilters,
    build_sort_token,
    compile_sort,
    load_product_snapshot,
    query_catalog,
)
from store_api.services.domain import FavoriteService, ProductService, ReviewService
from store_api.services.product_view import product_summary


router = APIRouter(tags=["products"])


# =============================================================================
# Listing
# =============================================================================


@router.get("/products")
def list_products(
    filters: ProductFilters = Depends(get_product_filters),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: str | None = Query(default=None, alias="sortOrder"),
    sort: str | None = Query(default=None, description="Combined token, e.g. price_asc"),
    page_request: PageRequest = Depends(get_page_request),
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
) -> dict:
    """
    Filter, sort and paginate the catalog.

    Filters are validated as a whole (400 with one detail per bad
    parameter); page/limit are coerced, so they are taken as raw
    strings. ``sort`` takes precedence over sortBy/sortOrder.
    """
    token = sort if sort and sort.strip() else build_sort_token(sort_by, sort_order)
    instruction = compile_sort(token)
    result = query_catalog(load_product_snapshot(db), filters, instruction, page_request, locale)

    return ok(
        [product_summary(record, result.locale) for record in result.items],
        **result.window.to_dict(result.total),
    )


# =============================================================================
# CRUD
# =============================================================================


@router.post("/products", status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
    user: dict = Depends(require_staff),
) -> dict:
    """Create a product with its ingredient/extra links. Requires staff role."""
    product = ProductService(db, locale).create(
        body.model_dump(), get_user_id(user), get_user_email(user)
    )
    return ok(product, message="Product created successfully")


@router.patch("/products/bulk-update")
def bulk_update_products(
    body: BulkUpdateRequest,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Set collection flags on many products. Requires ADMIN role."""
    results, message = ProductService(db).bulk_update(
        [item.model_dump() for item in body.updates], get_user_id(user), get_user_email(user)
    )
    return ok(results, message=message)


@router.get("/products/slug/{slug}")
def get_product_by_slug(
    slug: str,
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
) -> dict:
    return ok(ProductService(db, locale).get_by_slug(slug))


@router.get("/products/{product_id}")
def get_product(
    product_id: str,
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
) -> dict:
    return ok(ProductService(db, locale).get_by_id(product_id))


@router.put("/products/{product_id}")
def update_product(
    product_id: str,
    body: ProductUpdate,
    locale: str = Depends(get_locale),
    db: Session = Depends(get_db),
    user: dict = Depends(require_staff),
) -> dict:
    """Partial update; ingredients/extras replace the links when given."""
    product = ProductService(db, locale).update(
        product_id, body.model_dump(exclude_unset=True), get_user_id(user), get_user_email(user)
    )
    return ok(product, message="Product updated successfully")


@router.delete("/products/{product_id}")
def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Delete a product with its links, reviews and favorites. Requires ADMIN role."""
    ProductService(db).delete(product_id, get_user_id(user), get_user_email(user))
    return ok(message="Product deleted successfully")


# =============================================================================
# Favorite
# =============================================================================


@router.get("/products/{product_id}/favorite")
def get_favorite_status(
    product_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> dict:
    return ok(FavoriteService(db).status(get_user_id(user), product_id))


@router.post("/products/{product_id}/favorite", status_code=status.HTTP_201_CREATED)
def add_favorite(
    product_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> dict:
    return ok(
        FavoriteService(db).add(get_user_id(user), product_id),
        message="Product added to favorites",
    )


@router.delete("/products/{product_id}/favorite")
def remove_favorite(
    product_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> dict:
    return ok(
        FavoriteService(db).remove(get_user_id(user), product_id),
        message="Product removed from favorites",
    )


# =============================================================================
# Reviews
# =============================================================================


@router.get("/products/{product_id}/reviews")
def list_reviews(
    product_id: str,
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> dict:
    """Newest reviews first, with average rating and total count."""
    return ok(ReviewService(db).list_reviews(product_id, page=page, limit=limit))


@router.post("/products/{product_id}/reviews", status_code=status.HTTP_201_CREATED)
def create_review(
    product_id: str,
    body: ReviewCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> dict:
    review = ReviewService(db).create(
        product_id,
        get_user_id(user),
        body.rating,
        body.comment,
        user_email=get_user_email(user),
    )
    return ok(review, message="Review added successfully")


@router.delete("/products/{product_id}/reviews/{review_id}")
def delete_review(
    product_id: str,
    review_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(current_user_context),
) -> dict:
    """Delete a review. Authors may delete their own; ADMIN may delete any."""
    ReviewService(db).delete(product_id, review_id, user)
    return ok(message="Review deleted successfully")
