"""Event versioning and status ledger against a real (SQLite) database."""

from dataclasses import replace

import pytest
from sqlalchemy import func, select

from trackplan.api.v1.dependencies._composition import (
    build_event_service,
    build_platform_status_service,
)
from trackplan.application.dtos.alert import AlertToCreate
from trackplan.application.dtos.event import EventDraft
from trackplan.application.dtos.platform_status import StatusChange
from trackplan.application.use_cases.events import build_history_entries
from trackplan.core.config import get_settings
from trackplan.domain.enums import (
    ImplementationStatus,
    Platform,
    StatusType,
    UserRole,
    ValidationStatus,
)
from trackplan.domain.exceptions import ConflictException, VersionConflictException
from trackplan.domain.value_objects import PropertySpec
from trackplan.infrastructure.persistence.models import (
    Category,
    Comment,
    Event,
    EventPlatformStatus,
    EventVersion,
    StatusHistory,
)
from trackplan.infrastructure.persistence.repositories import (
    AlertRepository,
    CommentRepository,
    PlatformStatusRepository,
    VersionedEventRepository,
)


@pytest.fixture
def events(db_session):
    return build_event_service(db_session, get_settings())


@pytest.fixture
def ledger(db_session):
    return build_platform_status_service(db_session)


def _draft(**overrides) -> EventDraft:
    values = dict(
        category="Checkout",
        action="purchase",
        action_description="User completes a purchase",
        platforms=(Platform.WEB, Platform.IOS),
        properties=(PropertySpec("currency", "string", required=True),),
    )
    values.update(overrides)
    return EventDraft(**values)


async def _count(session, model, *where) -> int:
    result = await session.execute(select(func.count()).select_from(model).where(*where))
    return int(result.scalar() or 0)


async def test_create_event_starts_at_version_one(events, ledger) -> None:
    event = await events.create_event(_draft())

    assert event.current_version == 1
    assert event.category == "Checkout"
    versions = await events.list_versions(event.id)
    assert [v.version for v in versions] == [1]
    assert versions[0].change_description == "initial version"
    statuses = await ledger.list_platform_statuses(event.id)
    assert [s.status.platform for s in statuses] == [Platform.IOS, Platform.WEB]
    for item in statuses:
        assert item.status.implementation_status == ImplementationStatus.DRAFT
        assert item.status.validation_status == ValidationStatus.PENDING
        assert item.history == []


async def test_owner_change_updates_in_place(db_session, events, make_user) -> None:
    owner = await make_user("owner", UserRole.ANALYST)
    event = await events.create_event(_draft())

    updated = await events.update_event(event.id, {"owner_id": owner.id})

    assert updated.current_version == 1
    assert updated.owner_id == owner.id
    snapshot = await events.get_version(event.id, 1)
    assert snapshot.owner_id == owner.id
    assert await _count(db_session, EventVersion, EventVersion.event_id == event.id) == 1


async def test_action_change_cuts_new_version(db_session, events, ledger) -> None:
    event = await events.create_event(_draft())
    await ledger.set_platform_status(
        event.id,
        Platform.WEB,
        StatusChange(implementation_status=ImplementationStatus.IMPLEMENTED),
        None,
    )

    updated = await events.update_event(
        event.id, {"action": "purchase_completed"}, "rename action"
    )

    assert updated.current_version == 2
    assert updated.action == "purchase_completed"
    v1 = await events.get_version(event.id, 1)
    v2 = await events.get_version(event.id, 2)
    assert v1.action == "purchase"
    assert v2.action == "purchase_completed"
    assert v2.change_description == "rename action"

    fresh = await ledger.get_event_platform_status(event.id, Platform.WEB)
    assert fresh.status.version_number == 2
    assert fresh.status.implementation_status == ImplementationStatus.DRAFT
    assert fresh.history == []
    kept = await ledger.get_event_platform_status(event.id, Platform.WEB, version_number=1)
    assert kept.status.implementation_status == ImplementationStatus.IMPLEMENTED
    assert len(kept.history) == 1


async def test_default_description_for_new_version(events) -> None:
    event = await events.create_event(_draft())
    await events.update_event(event.id, {"name": "order_value"})
    assert (await events.get_version(event.id, 2)).change_description == "update to version 2"


async def test_status_change_is_idempotent(db_session, events, ledger, make_user) -> None:
    user = await make_user("dev", UserRole.DEVELOPER)
    event = await events.create_event(_draft())
    change = StatusChange(
        implementation_status=ImplementationStatus.IMPLEMENTED,
        comment="released in 4.2",
        status_jira_link="https://jira.example.com/T-1",
    )

    first = await ledger.set_platform_status(event.id, Platform.IOS, change, user.id)
    second = await ledger.set_platform_status(event.id, Platform.IOS, change, user.id)

    assert first.status.implementation_status == ImplementationStatus.IMPLEMENTED
    assert len(second.history) == 1
    entry = second.history[0]
    assert entry.status_type == StatusType.IMPLEMENTATION
    assert (entry.old_status, entry.new_status) == ("draft", "implemented")
    assert entry.changed_by_user_id == user.id
    assert entry.comment == "released in 4.2"
    assert entry.jira_link == "https://jira.example.com/T-1"
    assert await _count(db_session, StatusHistory) == 1


async def test_history_newest_first(events, ledger) -> None:
    event = await events.create_event(_draft())
    for status in (ValidationStatus.WARNING, ValidationStatus.VALID):
        await ledger.set_platform_status(
            event.id, Platform.WEB, StatusChange(validation_status=status), None
        )

    item = await ledger.get_event_platform_status(event.id, Platform.WEB)

    assert [h.new_status for h in item.history] == ["valid", "warning"]
    assert item.history[1].old_status == "pending"


async def test_platform_removed_by_in_place_update(db_session, events, ledger) -> None:
    event = await events.create_event(_draft())
    await ledger.set_platform_status(
        event.id,
        Platform.IOS,
        StatusChange(validation_status=ValidationStatus.ERROR),
        None,
    )

    updated = await events.update_event(
        event.id, {"platforms": (Platform.WEB, Platform.ANDROID)}
    )

    assert updated.current_version == 1
    assert updated.platforms == (Platform.WEB, Platform.ANDROID)
    statuses = await ledger.list_platform_statuses(event.id)
    assert [s.status.platform for s in statuses] == [Platform.ANDROID, Platform.WEB]
    assert await _count(db_session, StatusHistory) == 0


async def test_add_and_remove_platform(events, ledger) -> None:
    event = await events.create_event(_draft(platforms=(Platform.WEB,)))

    added = await ledger.add_platform(event.id, Platform.BACKEND)
    assert added.platform == Platform.BACKEND
    assert (await events.get_event(event.id)).platforms == (Platform.WEB, Platform.BACKEND)
    with pytest.raises(ConflictException):
        await ledger.add_platform(event.id, Platform.BACKEND)

    await ledger.remove_platform(event.id, Platform.WEB)
    assert (await events.get_event(event.id)).platforms == (Platform.BACKEND,)
    assert (await events.get_version(event.id, 1)).platforms == (Platform.BACKEND,)


async def test_delete_event_removes_dependents_and_keeps_alerts(
    db_session, events, ledger
) -> None:
    event = await events.create_event(_draft())
    await ledger.set_platform_status(
        event.id,
        Platform.WEB,
        StatusChange(implementation_status=ImplementationStatus.IN_DEVELOPMENT),
        None,
    )
    await events.update_event(event.id, {"action": "purchase_v2"})
    await CommentRepository(db_session).create_comment(event.id, "looks good", "Ada")
    alert_repo = AlertRepository(db_session)
    await alert_repo.create_alerts(
        [
            AlertToCreate(
                event_id=event.id,
                platform=Platform.WEB,
                event_category="Checkout",
                event_action="purchase_v2",
                yesterday_count=10,
                day_before_count=100,
                drop_percent=90,
            )
        ]
    )

    await events.delete_event(event.id)

    assert await _count(db_session, EventVersion) == 0
    assert await _count(db_session, EventPlatformStatus) == 0
    assert await _count(db_session, StatusHistory) == 0
    assert await _count(db_session, Comment) == 0
    page = await alert_repo.list_alerts(limit=10, offset=0)
    assert page.total == 1
    assert page.items[0].event_id is None
    assert page.items[0].event_action == "purchase_v2"


async def test_stale_version_write_conflicts(db_session, events) -> None:
    event = await events.create_event(_draft())
    await events.update_event(event.id, {"name": "n1"})
    writer = VersionedEventRepository(db_session)

    with pytest.raises(VersionConflictException):
        await writer.update_event_with_new_version(
            event.id, _draft(name="n2"), 1, None, None
        )

    current = await events.get_event(event.id)
    assert current.current_version == 2
    assert current.name == "n1"
    assert await _count(db_session, EventVersion, EventVersion.event_id == event.id) == 2


async def test_expected_version_mismatch_rejected(events) -> None:
    event = await events.create_event(_draft())
    await events.update_event(event.id, {"name": "n1"})
    with pytest.raises(VersionConflictException):
        await events.update_event(event.id, {"notes": "late"}, expected_version=1)


async def test_duplicate_identity_rejected(events) -> None:
    await events.create_event(_draft())
    with pytest.raises(ConflictException):
        await events.create_event(_draft(platforms=()))


async def _fail_status_insert(self, event_id, version_number, platforms):
    raise RuntimeError("status insert failed")


async def test_failed_new_version_write_leaves_nothing_behind(
    db_session, events, monkeypatch
) -> None:
    event = await events.create_event(_draft())
    monkeypatch.setattr(
        PlatformStatusRepository, "create_default_statuses", _fail_status_insert
    )

    with pytest.raises(RuntimeError, match="status insert failed"):
        await events.update_event(event.id, {"action": "purchase_v2"})

    current = await events.get_event(event.id)
    assert current.current_version == 1
    assert current.action == "purchase"
    assert await _count(db_session, EventVersion, EventVersion.event_id == event.id) == 1
    assert await _count(db_session, EventPlatformStatus) == 2


async def test_failed_create_leaves_nothing_behind(
    db_session, events, monkeypatch
) -> None:
    monkeypatch.setattr(
        PlatformStatusRepository, "create_default_statuses", _fail_status_insert
    )

    with pytest.raises(RuntimeError, match="status insert failed"):
        await events.create_event(_draft())

    assert await _count(db_session, Event) == 0
    assert await _count(db_session, EventVersion) == 0
    assert await _count(db_session, Category) == 0


async def test_history_of_one_change_has_stable_order(events, ledger) -> None:
    event = await events.create_event(_draft())
    change = StatusChange(
        implementation_status=ImplementationStatus.IMPLEMENTED,
        validation_status=ValidationStatus.VALID,
    )

    await ledger.set_platform_status(event.id, Platform.WEB, change, None)
    item = await ledger.get_event_platform_status(event.id, Platform.WEB)

    assert [h.status_type for h in item.history] == [
        StatusType.VALIDATION,
        StatusType.IMPLEMENTATION,
    ]
    assert item.history[0].created_at == item.history[1].created_at


async def test_status_write_against_stale_value_is_skipped(
    db_session, events, ledger
) -> None:
    """A change computed from an outdated read writes neither the row nor history."""
    event = await events.create_event(_draft())
    await ledger.set_platform_status(
        event.id,
        Platform.WEB,
        StatusChange(implementation_status=ImplementationStatus.IMPLEMENTED),
        None,
    )
    web = await ledger.get_event_platform_status(event.id, Platform.WEB)
    stale = replace(web.status, implementation_status=ImplementationStatus.DRAFT)
    entries = build_history_entries(
        stale,
        StatusChange(implementation_status=ImplementationStatus.IMPLEMENTED),
        None,
    )

    result = await PlatformStatusRepository(db_session).apply_status_change(
        web.status.id,
        entries,
        {"implementation_status": "implemented"},
        {"implementation_status": "draft"},
    )

    assert result is None
    assert await _count(db_session, StatusHistory) == 1
