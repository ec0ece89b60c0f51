"""Platform status ledger tests: history entries and idempotent status changes."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from trackplan.application.dtos.event import EventResult
from trackplan.application.dtos.platform_status import (
    PlatformStatusResult,
    StatusChange,
)
from trackplan.application.use_cases.events import (
    PlatformStatusService,
    build_history_entries,
)
from trackplan.domain.enums import (
    ImplementationStatus,
    Platform,
    StatusType,
    ValidationStatus,
)
from trackplan.domain.exceptions import ConflictException, ResourceNotFoundException

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)


def _status(**overrides) -> PlatformStatusResult:
    values = dict(
        id="st1",
        event_id="ev1",
        version_number=1,
        platform=Platform.WEB,
        jira_link=None,
        implementation_status=ImplementationStatus.DRAFT,
        validation_status=ValidationStatus.PENDING,
        created_at=NOW,
        updated_at=NOW,
    )
    values.update(overrides)
    return PlatformStatusResult(**values)


def _event(version: int = 1) -> EventResult:
    return EventResult(
        id="ev1",
        category_id="c1",
        category="Checkout",
        block=None,
        action="purchase",
        action_description="",
        name=None,
        value_description=None,
        owner_id=None,
        author_id=None,
        platforms=(Platform.WEB,),
        properties=(),
        notes=None,
        current_version=version,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def ledger():
    event_repo = AsyncMock()
    status_repo = AsyncMock()
    writer = AsyncMock()
    event_repo.get_by_id = AsyncMock(return_value=_event())
    status_repo.get_status = AsyncMock(return_value=_status())
    status_repo.list_history = AsyncMock(return_value=[])
    status_repo.apply_status_change = AsyncMock(
        return_value=_status(implementation_status=ImplementationStatus.IMPLEMENTED)
    )
    svc = PlatformStatusService(event_repo, status_repo, writer)
    return svc, event_repo, status_repo, writer


def test_history_entry_per_changed_field() -> None:
    change = StatusChange(
        implementation_status=ImplementationStatus.IMPLEMENTED,
        validation_status=ValidationStatus.VALID,
        comment="shipped",
        status_jira_link="https://jira/T-1",
    )
    entries = build_history_entries(_status(), change, "u1")
    assert [(e.status_type, e.old_status, e.new_status) for e in entries] == [
        (StatusType.IMPLEMENTATION, "draft", "implemented"),
        (StatusType.VALIDATION, "pending", "valid"),
    ]
    assert all(e.changed_by_user_id == "u1" for e in entries)
    assert entries[0].comment == "shipped"
    assert entries[0].jira_link == "https://jira/T-1"


def test_resending_stored_values_builds_no_history() -> None:
    change = StatusChange(
        implementation_status=ImplementationStatus.DRAFT,
        validation_status=ValidationStatus.PENDING,
    )
    assert build_history_entries(_status(), change, "u1") == []


async def test_set_status_appends_history_and_updates(ledger) -> None:
    svc, _, status_repo, _ = ledger

    result = await svc.set_platform_status(
        "ev1",
        Platform.WEB,
        StatusChange(implementation_status=ImplementationStatus.IMPLEMENTED),
        "u1",
    )

    status_id, entries, updates, expected = status_repo.apply_status_change.call_args[0]
    assert status_id == "st1"
    assert len(entries) == 1
    assert updates == {"implementation_status": "implemented"}
    assert expected == {"implementation_status": "draft"}
    assert result.status.implementation_status == ImplementationStatus.IMPLEMENTED
    status_repo.get_status.assert_awaited_once_with("ev1", Platform.WEB, 1)


async def test_set_status_without_changes_writes_nothing(ledger) -> None:
    svc, _, status_repo, _ = ledger

    result = await svc.set_platform_status(
        "ev1",
        Platform.WEB,
        StatusChange(implementation_status=ImplementationStatus.DRAFT, jira_link=""),
        "u1",
    )

    status_repo.apply_status_change.assert_not_awaited()
    assert result.status.id == "st1"


async def test_jira_link_updates_row_without_history(ledger) -> None:
    svc, _, status_repo, _ = ledger

    await svc.set_platform_status(
        "ev1", Platform.WEB, StatusChange(jira_link=" https://jira/T-2 "), "u1"
    )

    _, entries, updates, expected = status_repo.apply_status_change.call_args[0]
    assert entries == []
    assert updates == {"jira_link": "https://jira/T-2"}
    assert expected == {"jira_link": None}


async def test_empty_jira_link_clears_existing(ledger) -> None:
    svc, _, status_repo, _ = ledger
    status_repo.get_status = AsyncMock(return_value=_status(jira_link="https://jira/T-1"))

    await svc.set_platform_status("ev1", Platform.WEB, StatusChange(jira_link=""), None)

    assert status_repo.apply_status_change.call_args[0][2] == {"jira_link": None}


async def test_explicit_version_targets_that_version(ledger) -> None:
    svc, event_repo, status_repo, _ = ledger

    await svc.get_event_platform_status("ev1", Platform.WEB, version_number=3)

    status_repo.get_status.assert_awaited_once_with("ev1", Platform.WEB, 3)
    event_repo.get_by_id.assert_not_awaited()


async def test_missing_status_raises(ledger) -> None:
    svc, _, status_repo, _ = ledger
    status_repo.get_status = AsyncMock(return_value=None)
    with pytest.raises(ResourceNotFoundException):
        await svc.get_event_platform_status("ev1", Platform.ANDROID)


async def test_missing_event_raises(ledger) -> None:
    svc, event_repo, _, writer = ledger
    event_repo.get_by_id = AsyncMock(return_value=None)
    with pytest.raises(ResourceNotFoundException):
        await svc.add_platform("missing", Platform.IOS)
    writer.add_platform.assert_not_awaited()


async def test_list_statuses_batches_history(ledger) -> None:
    svc, event_repo, status_repo, _ = ledger
    event_repo.get_by_id = AsyncMock(return_value=_event(version=2))
    status_repo.list_statuses = AsyncMock(
        return_value=[_status(id="a"), _status(id="b", platform=Platform.IOS)]
    )
    status_repo.list_history_for_statuses = AsyncMock(return_value={"a": [], "b": []})

    items = await svc.list_platform_statuses("ev1")

    status_repo.list_statuses.assert_awaited_once_with("ev1", 2)
    status_repo.list_history_for_statuses.assert_awaited_once_with(["a", "b"])
    assert [i.status.id for i in items] == ["a", "b"]


async def test_remove_platform_uses_current_version(ledger) -> None:
    svc, event_repo, _, writer = ledger
    event_repo.get_by_id = AsyncMock(return_value=_event(version=4))

    await svc.remove_platform("ev1", Platform.WEB)

    writer.remove_platform.assert_awaited_once_with("ev1", Platform.WEB, 4)


async def test_lost_race_rereads_and_settles_idempotently(ledger) -> None:
    """A concurrent identical change wins; the re-read finds nothing left to write."""
    svc, _, status_repo, _ = ledger
    status_repo.get_status = AsyncMock(
        side_effect=[
            _status(),
            _status(implementation_status=ImplementationStatus.IMPLEMENTED),
        ]
    )
    status_repo.apply_status_change = AsyncMock(return_value=None)

    result = await svc.set_platform_status(
        "ev1",
        Platform.WEB,
        StatusChange(implementation_status=ImplementationStatus.IMPLEMENTED),
        "u1",
    )

    status_repo.apply_status_change.assert_awaited_once()
    assert result.status.implementation_status == ImplementationStatus.IMPLEMENTED


async def test_lost_race_retries_against_fresh_values(ledger) -> None:
    svc, _, status_repo, _ = ledger
    status_repo.get_status = AsyncMock(
        side_effect=[
            _status(),
            _status(implementation_status=ImplementationStatus.IN_DEVELOPMENT),
        ]
    )
    status_repo.apply_status_change = AsyncMock(
        side_effect=[None, _status(implementation_status=ImplementationStatus.IMPLEMENTED)]
    )

    await svc.set_platform_status(
        "ev1",
        Platform.WEB,
        StatusChange(implementation_status=ImplementationStatus.IMPLEMENTED),
        "u1",
    )

    _, entries, _, expected = status_repo.apply_status_change.call_args[0]
    assert entries[0].old_status == "in_development"
    assert expected == {"implementation_status": "in_development"}


async def test_status_keeps_changing_raises_conflict(ledger) -> None:
    svc, _, status_repo, _ = ledger
    status_repo.apply_status_change = AsyncMock(return_value=None)

    with pytest.raises(ConflictException) as exc_info:
        await svc.set_platform_status(
            "ev1",
            Platform.WEB,
            StatusChange(implementation_status=ImplementationStatus.IMPLEMENTED),
            "u1",
        )

    assert exc_info.value.details["reason"] == "status_changed"
    assert status_repo.apply_status_change.await_count == 3
