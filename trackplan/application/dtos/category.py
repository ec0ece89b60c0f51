"""DTOs for category use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CategoryResult:
    id: str
    name: str
    description: str | None


@dataclass(frozen=True)
class CategoryListItem:
    """Category with the number of events referencing it."""

    id: str
    name: str
    description: str | None
    event_count: int
