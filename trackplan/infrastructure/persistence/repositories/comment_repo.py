"""Comment repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trackplan.application.dtos.comment import CommentResult
from trackplan.infrastructure.persistence.models.comment import Comment
from trackplan.infrastructure.persistence.repositories.base import BaseRepository
from trackplan.shared.utils.datetime import ensure_utc


def _comment_to_result(c: Comment) -> CommentResult:
    return CommentResult(
        id=c.id,
        event_id=c.event_id,
        content=c.content,
        author=c.author,
        created_at=ensure_utc(c.created_at),
    )


class CommentRepository(BaseRepository[Comment]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Comment)

    async def list_for_event(self, event_id: str) -> list[CommentResult]:
        result = await self.db.execute(
            select(Comment)
            .where(Comment.event_id == event_id)
            .order_by(Comment.created_at.desc())
        )
        return [_comment_to_result(c) for c in result.scalars().all()]

    async def create_comment(
        self, event_id: str, content: str, author: str
    ) -> CommentResult:
        created = await self.create(
            Comment(event_id=event_id, content=content, author=author)
        )
        return _comment_to_result(created)

    async def delete_comment(self, event_id: str, comment_id: str) -> bool:
        row = await self.get_entity_by_id(comment_id)
        if row is None or row.event_id != event_id:
            return False
        await self.delete(row)
        return True
