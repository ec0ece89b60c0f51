"""Category operations: idempotent resolve, guarded delete, listing with counts."""

import logging

from trackplan.application.dtos.category import CategoryListItem, CategoryResult
from trackplan.application.interfaces.repositories import ICategoryRepository
from trackplan.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


class CategoryService:
    """Resolve categories by name and manage them."""

    def __init__(self, category_repo: ICategoryRepository) -> None:
        self.category_repo = category_repo

    async def get_or_create_category(self, name: str) -> CategoryResult:
        """Return the category with this name, creating it if needed.

        Calling twice with the same name yields the same id, including when
        two requests race on the insert.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationException("Category name must not be empty", field="category")
        return await self.category_repo.get_or_create(name)

    async def list_categories(self) -> list[CategoryListItem]:
        return await self.category_repo.list_with_counts()

    async def delete_category(self, category_id: str) -> None:
        """Delete an unused category.

        Raises:
            ResourceNotFoundException: category does not exist.
            ConflictException: events still reference it (details.event_count).
        """
        count = await self.category_repo.count_events(category_id)
        if count:
            raise ConflictException(
                f"Category is used by {count} event(s)",
                "category_in_use",
                {"category_id": category_id, "event_count": count},
            )
        if not await self.category_repo.delete_category(category_id):
            raise ResourceNotFoundException("category", category_id)
        logger.info("Deleted category %s", category_id)
