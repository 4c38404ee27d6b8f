"""
Extra (add-on) endpoints.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from store_api.routers._common import get_user_email, get_user_id, ok, require_admin, require_staff
from store_api.schemas import ExtraCreate, ExtraTypeLiteral, ExtraUpdate
from store_api.services.domain import ExtraService


router = APIRouter(tags=["extras"])


@router.get("/extras")
def list_extras(
    extra_type: ExtraTypeLiteral | None = Query(default=None, alias="type"),
    is_available: bool | None = Query(default=None, alias="isAvailable"),
    db: Session = Depends(get_db),
) -> dict:
    return ok(ExtraService(db).list_extras(extra_type=extra_type, is_available=is_available))


@router.post("/extras", status_code=status.HTTP_201_CREATED)
def create_extra(
    body: ExtraCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(require_staff),
) -> dict:
    extra = ExtraService(db).create(body.model_dump(), get_user_id(user), get_user_email(user))
    return ok(extra, message="Extra created successfully")


@router.get("/extras/{extra_id}")
def get_extra(extra_id: str, db: Session = Depends(get_db)) -> dict:
    return ok(ExtraService(db).get_by_id(extra_id))


@router.put("/extras/{extra_id}")
def update_extra(
    extra_id: str,
    body: ExtraUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(require_staff),
) -> dict:
    extra = ExtraService(db).update(
        extra_id, body.model_dump(exclude_unset=True), get_user_id(user), get_user_email(user)
    )
    return ok(extra, message="Extra updated successfully")


@router.delete("/extras/{extra_id}")
def delete_extra(
    extra_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_admin),
) -> dict:
    """Delete an extra no product uses. Requires ADMIN role."""
    ExtraService(db).delete(extra_id, get_user_id(user), get_user_email(user))
    return ok(message="Extra deleted successfully")
