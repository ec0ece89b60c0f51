"""Event and event version API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from trackplan.application.dtos.event import EventDraft
from trackplan.domain.enums import Platform
from trackplan.domain.value_objects import PropertySpec


class PropertySchema(BaseModel):
    """One event property (name, type, required flag, description)."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    required: bool = False
    description: str = ""

    @field_validator("name", "type")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    def to_spec(self) -> PropertySpec:
        return PropertySpec(
            name=self.name,
            type=self.type,
            required=self.required,
            description=self.description,
        )


class EventCreateRequest(BaseModel):
    category: str = Field(..., min_length=1, description="Category name (created if new)")
    action: str = Field(..., min_length=1)
    action_description: str = ""
    block: str | None = None
    name: str | None = None
    value_description: str | None = None
    owner_id: str | None = None
    platforms: list[Platform] = Field(default_factory=list)
    properties: list[PropertySchema] = Field(default_factory=list)
    notes: str | None = None

    def to_draft(self) -> EventDraft:
        return EventDraft(
            category=self.category,
            action=self.action,
            action_description=self.action_description,
            block=self.block,
            name=self.name,
            value_description=self.value_description,
            owner_id=self.owner_id,
            platforms=tuple(self.platforms),
            properties=tuple(p.to_spec() for p in self.properties),
            notes=self.notes,
        )


class EventUpdateRequest(BaseModel):
    """Partial update. Omitted fields keep their current values.

    Changing category, action, name, value_description or properties creates
    a new version; other fields are updated in place.
    """

    category: str | None = None
    action: str | None = None
    action_description: str | None = None
    block: str | None = None
    name: str | None = None
    value_description: str | None = None
    owner_id: str | None = None
    platforms: list[Platform] | None = None
    properties: list[PropertySchema] | None = None
    notes: str | None = None
    change_description: str | None = Field(
        None, description="Description stored on the new version, if one is created"
    )
    expected_version: int | None = Field(
        None, ge=1, description="Reject with 409 if the event has moved past this version"
    )

    def to_changes(self) -> dict[str, Any]:
        """Provided event fields only, converted to draft types."""
        changes = self.model_dump(
            exclude_unset=True, exclude={"change_description", "expected_version"}
        )
        if "platforms" in changes:
            changes["platforms"] = tuple(self.platforms or ())
        if "properties" in changes:
            changes["properties"] = tuple(p.to_spec() for p in self.properties or ())
        if changes.get("action_description", "") is None:
            changes["action_description"] = ""
        return changes


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    category_id: str
    category: str
    block: str | None = None
    action: str
    action_description: str
    name: str | None = None
    value_description: str | None = None
    owner_id: str | None = None
    author_id: str | None = None
    platforms: list[Platform]
    properties: list[PropertySchema]
    notes: str | None = None
    current_version: int
    created_at: datetime
    updated_at: datetime


class EventListResponse(BaseModel):
    items: list[EventResponse]
    total: int
    limit: int
    offset: int


class EventStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_events: int
    by_implementation_status: dict[str, int]
    by_validation_status: dict[str, int]


class EventVersionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    event_id: str
    version: int
    category_id: str
    category: str
    block: str | None = None
    action: str
    action_description: str
    name: str | None = None
    value_description: str | None = None
    owner_id: str | None = None
    platforms: list[Platform]
    properties: list[PropertySchema]
    notes: str | None = None
    change_description: str
    author_id: str | None = None
    created_at: datetime
