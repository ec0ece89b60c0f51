"""Domain value objects for the tracking plan.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class PropertySpec:
    """One property sent with an analytics event (e.g. 'plan', type 'string').

    Equality is structural, so two property lists compare equal when every
    entry matches field by field in the same order.
    """

    name: str
    type: str
    required: bool = False
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Property name must be a non-empty string")
        if not self.type or not self.type.strip():
            raise ValueError("Property type must be a non-empty string")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PropertySpec":
        """Build from a stored/JSON dict; missing optional keys get defaults."""
        return cls(
            name=data["name"],
            type=data["type"],
            required=bool(data.get("required", False)),
            description=data.get("description") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def properties_from_json(raw: list[dict[str, Any]] | None) -> tuple[PropertySpec, ...]:
    """Convert a JSON column value into an ordered tuple of PropertySpec."""
    return tuple(PropertySpec.from_dict(item) for item in raw or [])


def properties_to_json(props: tuple[PropertySpec, ...] | list[PropertySpec]) -> list[dict[str, Any]]:
    """Convert PropertySpec values into JSON-serializable dicts for storage."""
    return [p.to_dict() for p in props]
