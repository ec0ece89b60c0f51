"""Category repository: race-safe get-or-create and reference-checked delete."""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from trackplan.application.dtos.category import CategoryListItem, CategoryResult
from trackplan.infrastructure.persistence.models.category import Category
from trackplan.infrastructure.persistence.models.event import Event
from trackplan.infrastructure.persistence.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _category_to_result(c: Category) -> CategoryResult:
    return CategoryResult(id=c.id, name=c.name, description=c.description)


class CategoryRepository(BaseRepository[Category]):
    """Category repository. Names are expected trimmed by the caller."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Category)

    async def _get_entity_by_name(self, name: str) -> Category | None:
        result = await self.db.execute(select(Category).where(Category.name == name))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> CategoryResult | None:
        row = await self._get_entity_by_name(name)
        return _category_to_result(row) if row else None

    async def get_or_create(self, name: str) -> CategoryResult:
        """Return category by name, inserting it if absent.

        The insert runs in its own SAVEPOINT; a unique violation from a
        concurrent insert rolls back only that savepoint and the winner's
        row is re-fetched.
        """
        existing = await self._get_entity_by_name(name)
        if existing is not None:
            return _category_to_result(existing)
        try:
            async with self.db.begin_nested():
                created = await self.create(Category(name=name))
                result = _category_to_result(created)
        except IntegrityError:
            logger.info("Category %r created concurrently; re-fetching", name)
            winner = await self._get_entity_by_name(name)
            if winner is None:
                raise
            return _category_to_result(winner)
        return result

    async def list_with_counts(self) -> list[CategoryListItem]:
        counts = (
            select(Event.category_id, func.count(Event.id).label("event_count"))
            .group_by(Event.category_id)
            .subquery()
        )
        result = await self.db.execute(
            select(Category, func.coalesce(counts.c.event_count, 0))
            .outerjoin(counts, counts.c.category_id == Category.id)
            .order_by(Category.name)
        )
        return [
            CategoryListItem(
                id=c.id, name=c.name, description=c.description, event_count=int(n)
            )
            for c, n in result.all()
        ]

    async def count_events(self, category_id: str) -> int:
        result = await self.db.execute(
            select(func.count(Event.id)).where(Event.category_id == category_id)
        )
        return int(result.scalar() or 0)

    async def delete_category(self, category_id: str) -> bool:
        row = await self.get_entity_by_id(category_id)
        if row is None:
            return False
        await self.delete(row)
        return True
