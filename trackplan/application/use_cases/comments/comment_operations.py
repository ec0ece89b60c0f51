"""Comments attached to events."""

from trackplan.application.dtos.comment import CommentResult
from trackplan.application.dtos.user import UserResult
from trackplan.application.interfaces.repositories import (
    ICommentRepository,
    IEventRepository,
)
from trackplan.core.constants import ANONYMOUS_AUTHOR
from trackplan.domain.exceptions import ResourceNotFoundException, ValidationException


def comment_author(user: UserResult | None) -> str:
    """Author label stored on a comment: name, else username, else Anonymous."""
    if user is None:
        return ANONYMOUS_AUTHOR
    return user.display_name or ANONYMOUS_AUTHOR


class CommentService:
    def __init__(
        self, comment_repo: ICommentRepository, event_repo: IEventRepository
    ) -> None:
        self.comment_repo = comment_repo
        self.event_repo = event_repo

    async def _require_event(self, event_id: str) -> None:
        if await self.event_repo.get_by_id(event_id) is None:
            raise ResourceNotFoundException("event", event_id)

    async def list_comments(self, event_id: str) -> list[CommentResult]:
        await self._require_event(event_id)
        return await self.comment_repo.list_for_event(event_id)

    async def add_comment(
        self, event_id: str, content: str, user: UserResult | None
    ) -> CommentResult:
        content = (content or "").strip()
        if not content:
            raise ValidationException("Comment must not be empty", field="content")
        await self._require_event(event_id)
        return await self.comment_repo.create_comment(
            event_id, content, comment_author(user)
        )

    async def delete_comment(self, event_id: str, comment_id: str) -> None:
        if not await self.comment_repo.delete_comment(event_id, comment_id):
            raise ResourceNotFoundException("comment", comment_id)
