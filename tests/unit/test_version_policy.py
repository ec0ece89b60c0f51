"""Version decision tests: which edits cut a new version."""

from dataclasses import replace

import pytest

from trackplan.application.dtos.event import EventDraft
from trackplan.application.services.version_policy import (
    NON_VERSIONED_FIELDS,
    VERSIONED_FIELDS,
    decide_version,
)
from trackplan.domain.enums import Platform
from trackplan.domain.value_objects import PropertySpec


def _draft(**overrides) -> EventDraft:
    base = EventDraft(
        category="Checkout",
        action="purchase",
        action_description="User completes a purchase",
        name="order_value",
        value_description="Order total in cents",
        platforms=(Platform.WEB, Platform.IOS),
        properties=(PropertySpec("currency", "string", required=True),),
    )
    return replace(base, **overrides)


def test_identical_definition_needs_no_version() -> None:
    decision = decide_version(_draft(), _draft())
    assert decision.requires_new_version is False
    assert decision.changed_fields == ()


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"category": "Cart"}, "category"),
        ({"action": "purchase_completed"}, "action"),
        ({"name": "revenue"}, "name"),
        ({"value_description": "Order total in euros"}, "value_description"),
        (
            {"properties": (PropertySpec("currency", "string", required=False),)},
            "properties",
        ),
    ],
)
def test_identity_change_requires_new_version(overrides, field) -> None:
    decision = decide_version(_draft(), _draft(**overrides))
    assert decision.requires_new_version is True
    assert decision.changed_fields == (field,)


@pytest.mark.parametrize(
    "overrides",
    [
        {"block": "header"},
        {"action_description": "Something else"},
        {"owner_id": "user-1"},
        {"platforms": (Platform.WEB,)},
        {"notes": "check with data team"},
    ],
)
def test_operational_change_keeps_version(overrides) -> None:
    assert decide_version(_draft(), _draft(**overrides)).requires_new_version is False


def test_property_order_is_significant() -> None:
    a = PropertySpec("currency", "string")
    b = PropertySpec("items", "number")
    decision = decide_version(_draft(properties=(a, b)), _draft(properties=(b, a)))
    assert decision.changed_fields == ("properties",)


def test_blank_and_missing_name_compare_equal() -> None:
    current = _draft(name=None, value_description="")
    proposed = _draft(name="  ", value_description=None)
    assert decide_version(current, proposed).requires_new_version is False


def test_changed_fields_reported_in_declared_order() -> None:
    decision = decide_version(_draft(), _draft(properties=(), action="buy", category="Shop"))
    assert decision.changed_fields == ("category", "action", "properties")


def test_field_partitions_do_not_overlap() -> None:
    assert not set(VERSIONED_FIELDS) & set(NON_VERSIONED_FIELDS)
