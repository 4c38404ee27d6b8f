"""
Extra (add-on) Service.

Usage:
    from store_api.services.domain import ExtraService

    service = ExtraService(db)
    sauces = service.list_extras(extra_type="sauce", is_available=True)
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from shared.utils.exceptions import ConflictError
from store_api.models import Extra
from store_api.repositories import ExtraRepository
from store_api.schemas import ExtraOutput
from store_api.services.base_service import BaseCRUDService


class ExtraService(BaseCRUDService[Extra, ExtraOutput]):
    """
    Service for extras management.

    Business rules:
    - Price is never negative (validated by schema and a CHECK constraint)
    - An extra attached to a product cannot be deleted
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            repo=ExtraRepository(db),
            output_schema=ExtraOutput,
            entity_name="Extra",
        )

    @property
    def repo(self) -> ExtraRepository:
        return self._repo  # type: ignore[return-value]

    def list_extras(
        self,
        extra_type: str | None = None,
        is_available: bool | None = None,
    ) -> list[ExtraOutput]:
        """Extras ordered by type then name."""
        criteria = []
        if extra_type:
            criteria.append(Extra.type == extra_type)
        if is_available is not None:
            criteria.append(Extra.is_available.is_(is_available))
        return self.list_all(*criteria)

    def _validate_delete(self, entity: Extra) -> None:
        links = self.repo.count_product_links(entity.id)
        if links:
            raise ConflictError(
                "Cannot delete extra used by products. Remove it from those products first.",
                details={"productCount": links},
                extra_id=entity.id,
            )
