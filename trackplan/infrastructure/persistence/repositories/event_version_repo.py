"""EventVersion repository: read access to version snapshots."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trackplan.application.dtos.event import EventVersionResult
from trackplan.infrastructure.persistence.models.category import Category
from trackplan.infrastructure.persistence.models.event_version import EventVersion
from trackplan.infrastructure.persistence.repositories.base import BaseRepository
from trackplan.infrastructure.persistence.repositories.event_repo import (
    version_to_result,
)


class EventVersionRepository(BaseRepository[EventVersion]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, EventVersion)

    async def list_versions(self, event_id: str) -> list[EventVersionResult]:
        result = await self.db.execute(
            select(EventVersion, Category.name)
            .join(Category, Category.id == EventVersion.category_id)
            .where(EventVersion.event_id == event_id)
            .order_by(EventVersion.version.desc())
            .execution_options(populate_existing=True)
        )
        return [version_to_result(v, name) for v, name in result.all()]

    async def get_version(
        self, event_id: str, version: int
    ) -> EventVersionResult | None:
        result = await self.db.execute(
            select(EventVersion, Category.name)
            .join(Category, Category.id == EventVersion.category_id)
            .where(EventVersion.event_id == event_id, EventVersion.version == version)
            .execution_options(populate_existing=True)
        )
        row = result.first()
        return version_to_result(row[0], row[1]) if row else None
