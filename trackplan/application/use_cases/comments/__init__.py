"""Comment use cases."""

from trackplan.application.use_cases.comments.comment_operations import (
    CommentService,
)

__all__ = ["CommentService"]
