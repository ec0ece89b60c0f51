"""Version decision: does a proposed event definition need a new version?

Identity-bearing fields (category, action, name, value_description,
properties) cut a new version when they change. Operational metadata
(block, action_description, owner, platforms, notes) is edited in place on
the current version and never cuts one.
"""

from dataclasses import dataclass

from trackplan.application.dtos.event import EventDraft, EventVersionResult

VERSIONED_FIELDS: tuple[str, ...] = (
    "category",
    "action",
    "name",
    "value_description",
    "properties",
)
NON_VERSIONED_FIELDS: tuple[str, ...] = (
    "block",
    "action_description",
    "owner_id",
    "platforms",
    "notes",
)


@dataclass(frozen=True)
class VersionDecision:
    requires_new_version: bool
    changed_fields: tuple[str, ...] = ()


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value if value.strip() else None


def _identity(snapshot: EventDraft | EventVersionResult) -> dict[str, object]:
    return {
        "category": snapshot.category.strip(),
        "action": snapshot.action.strip(),
        "name": _blank_to_none(snapshot.name),
        "value_description": _blank_to_none(snapshot.value_description),
        "properties": tuple(snapshot.properties),
    }


def decide_version(
    current: EventVersionResult | EventDraft, proposed: EventDraft
) -> VersionDecision:
    """Compare the current version snapshot with the proposed definition.

    Properties compare structurally and in order (PropertySpec equality).
    Empty and missing name/value_description are treated as equal.
    """
    before = _identity(current)
    after = _identity(proposed)
    changed = tuple(f for f in VERSIONED_FIELDS if before[f] != after[f])
    return VersionDecision(requires_new_version=bool(changed), changed_fields=changed)
