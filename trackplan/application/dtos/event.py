"""DTOs for event, version and read-projection use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime

from trackplan.domain.enums import ImplementationStatus, Platform, ValidationStatus
from trackplan.domain.value_objects import PropertySpec


@dataclass(frozen=True)
class EventDraft:
    """Full proposed definition of an event (create input or merged update).

    `category` is the category name; the writer resolves it to an id.
    """

    category: str
    action: str
    action_description: str = ""
    block: str | None = None
    name: str | None = None
    value_description: str | None = None
    owner_id: str | None = None
    platforms: tuple[Platform, ...] = ()
    properties: tuple[PropertySpec, ...] = ()
    notes: str | None = None


@dataclass(frozen=True)
class EventResult:
    """Live event read-model."""

    id: str
    category_id: str
    category: str
    block: str | None
    action: str
    action_description: str
    name: str | None
    value_description: str | None
    owner_id: str | None
    author_id: str | None
    platforms: tuple[Platform, ...]
    properties: tuple[PropertySpec, ...]
    notes: str | None
    current_version: int
    created_at: datetime
    updated_at: datetime

    def to_draft(self) -> EventDraft:
        return EventDraft(
            category=self.category,
            action=self.action,
            action_description=self.action_description,
            block=self.block,
            name=self.name,
            value_description=self.value_description,
            owner_id=self.owner_id,
            platforms=self.platforms,
            properties=self.properties,
            notes=self.notes,
        )


@dataclass(frozen=True)
class EventVersionResult:
    """Version snapshot read-model."""

    id: str
    event_id: str
    version: int
    category_id: str
    category: str
    block: str | None
    action: str
    action_description: str
    name: str | None
    value_description: str | None
    owner_id: str | None
    platforms: tuple[Platform, ...]
    properties: tuple[PropertySpec, ...]
    notes: str | None
    change_description: str
    author_id: str | None
    created_at: datetime


@dataclass(frozen=True)
class EventListFilters:
    """Filters for list_events. Status, platform and jira match current-version statuses."""

    search: str | None = None
    category: str | None = None
    platform: Platform | None = None
    owner_id: str | None = None
    author_id: str | None = None
    implementation_status: ImplementationStatus | None = None
    validation_status: ValidationStatus | None = None
    jira: str | None = None
    limit: int = 50
    offset: int = 0


@dataclass(frozen=True)
class EventPage:
    items: list[EventResult]
    total: int


@dataclass(frozen=True)
class EventStats:
    """Counts over events and their current-version platform statuses."""

    total_events: int
    by_implementation_status: dict[str, int] = field(default_factory=dict)
    by_validation_status: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class MonitoredEvent:
    """Event and the platforms on which it is implemented (input to drop checks)."""

    event_id: str
    category: str
    action: str
    platforms: tuple[Platform, ...]
