"""DTOs for comment use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CommentResult:
    id: str
    event_id: str
    content: str
    author: str
    created_at: datetime
