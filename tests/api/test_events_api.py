"""Event, version, platform status, category and comment endpoints."""

from httpx import AsyncClient

EVENT = {
    "category": "Checkout",
    "action": "purchase",
    "action_description": "Order placed",
    "platforms": ["web", "ios"],
    "properties": [{"name": "amount", "type": "number", "required": True}],
}


async def _create_event(client: AsyncClient, headers, **overrides) -> dict:
    response = await client.post(
        "/api/v1/events", json={**EVENT, **overrides}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_viewer_cannot_create_event(client: AsyncClient, viewer_headers) -> None:
    response = await client.post("/api/v1/events", json=EVENT, headers=viewer_headers)
    assert response.status_code == 403
    assert response.json()["details"]["capability"] == "can_create_events"


async def test_list_events_requires_auth(client: AsyncClient) -> None:
    assert (await client.get("/api/v1/events")).status_code == 401


async def test_event_lifecycle(
    client: AsyncClient, admin_headers, developer_headers
) -> None:
    """Create, version, change status, then delete an event end to end."""
    event = await _create_event(client, admin_headers)
    event_id = event["id"]
    assert event["current_version"] == 1
    assert event["category"] == "Checkout"
    assert event["platforms"] == ["web", "ios"]

    statuses = await client.get(
        f"/api/v1/events/{event_id}/platform-statuses", headers=developer_headers
    )
    assert statuses.status_code == 200
    assert {s["platform"] for s in statuses.json()} == {"web", "ios"}
    assert all(s["implementation_status"] == "draft" for s in statuses.json())

    change = {"implementation_status": "implemented", "comment": "shipped"}
    first = await client.patch(
        f"/api/v1/events/{event_id}/platform-statuses/web",
        json=change,
        headers=developer_headers,
    )
    assert first.status_code == 200
    assert first.json()["implementation_status"] == "implemented"
    assert len(first.json()["history"]) == 1
    entry = first.json()["history"][0]
    assert entry["old_status"] == "draft"
    assert entry["new_status"] == "implemented"
    assert entry["comment"] == "shipped"

    again = await client.patch(
        f"/api/v1/events/{event_id}/platform-statuses/web",
        json=change,
        headers=developer_headers,
    )
    assert again.status_code == 200
    assert len(again.json()["history"]) == 1

    renamed = await client.patch(
        f"/api/v1/events/{event_id}",
        json={"action": "order_completed", "change_description": "rename"},
        headers=admin_headers,
    )
    assert renamed.status_code == 200
    assert renamed.json()["current_version"] == 2

    versions = await client.get(
        f"/api/v1/events/{event_id}/versions", headers=admin_headers
    )
    assert [v["version"] for v in versions.json()] == [2, 1]
    assert versions.json()[0]["change_description"] == "rename"
    v1 = await client.get(f"/api/v1/events/{event_id}/versions/1", headers=admin_headers)
    assert v1.json()["action"] == "purchase"

    current_web = await client.get(
        f"/api/v1/events/{event_id}/platform-statuses/web", headers=admin_headers
    )
    assert current_web.json()["version_number"] == 2
    assert current_web.json()["implementation_status"] == "draft"
    old_web = await client.get(
        f"/api/v1/events/{event_id}/platform-statuses/web",
        params={"version": 1},
        headers=admin_headers,
    )
    assert old_web.json()["implementation_status"] == "implemented"

    deleted = await client.delete(f"/api/v1/events/{event_id}", headers=admin_headers)
    assert deleted.status_code == 204
    gone = await client.get(f"/api/v1/events/{event_id}", headers=admin_headers)
    assert gone.status_code == 404


async def test_developer_cannot_edit_event(
    client: AsyncClient, admin_headers, developer_headers
) -> None:
    event = await _create_event(client, admin_headers)
    response = await client.patch(
        f"/api/v1/events/{event['id']}",
        json={"notes": "n/a"},
        headers=developer_headers,
    )
    assert response.status_code == 403


async def test_unknown_event_returns_404_shape(client: AsyncClient, admin_headers) -> None:
    response = await client.get("/api/v1/events/does-not-exist", headers=admin_headers)
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "RESOURCE_NOT_FOUND"
    assert body["details"] == {"resource_type": "event", "resource_id": "does-not-exist"}


async def test_duplicate_event_conflicts(client: AsyncClient, admin_headers) -> None:
    await _create_event(client, admin_headers)
    response = await client.post(
        "/api/v1/events",
        json={**EVENT, "category": "  Checkout ", "action": "purchase "},
        headers=admin_headers,
    )
    assert response.status_code == 409
    assert response.json()["details"]["reason"] == "duplicate_event"


async def test_stale_expected_version_conflicts(
    client: AsyncClient, admin_headers
) -> None:
    event = await _create_event(client, admin_headers)
    await client.patch(
        f"/api/v1/events/{event['id']}",
        json={"action": "purchase_v2"},
        headers=admin_headers,
    )
    response = await client.patch(
        f"/api/v1/events/{event['id']}",
        json={"action": "purchase_v3", "expected_version": 1},
        headers=admin_headers,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "VERSION_CONFLICT"

    current = await client.get(f"/api/v1/events/{event['id']}", headers=admin_headers)
    assert current.json()["current_version"] == 2
    assert current.json()["action"] == "purchase_v2"


async def test_blank_property_name_is_rejected(client: AsyncClient, admin_headers) -> None:
    response = await client.post(
        "/api/v1/events",
        json={**EVENT, "properties": [{"name": "   ", "type": "string"}]},
        headers=admin_headers,
    )
    assert response.status_code == 422


async def test_add_and_remove_platform(client: AsyncClient, admin_headers) -> None:
    event = await _create_event(client, admin_headers, platforms=["web"])
    url = f"/api/v1/events/{event['id']}/platform-statuses"

    added = await client.post(url, json={"platform": "android"}, headers=admin_headers)
    assert added.status_code == 201
    assert added.json()["platform"] == "android"
    assert added.json()["validation_status"] == "pending"

    removed = await client.delete(f"{url}/web", headers=admin_headers)
    assert removed.status_code == 204
    remaining = await client.get(url, headers=admin_headers)
    assert [s["platform"] for s in remaining.json()] == ["android"]


async def test_list_and_stats(client: AsyncClient, admin_headers, viewer_headers) -> None:
    await _create_event(client, admin_headers)
    await _create_event(client, admin_headers, action="refund", platforms=["web"])

    listed = await client.get(
        "/api/v1/events", params={"platform": "ios"}, headers=viewer_headers
    )
    assert listed.status_code == 200
    assert listed.json()["total"] == 1
    assert listed.json()["items"][0]["action"] == "purchase"

    stats = await client.get("/api/v1/events/stats", headers=viewer_headers)
    assert stats.json()["total_events"] == 2
    assert stats.json()["by_implementation_status"]["draft"] == 3


async def test_category_get_or_create_and_guarded_delete(
    client: AsyncClient, admin_headers
) -> None:
    first = await client.post(
        "/api/v1/categories", json={"name": "Onboarding"}, headers=admin_headers
    )
    second = await client.post(
        "/api/v1/categories", json={"name": " Onboarding "}, headers=admin_headers
    )
    assert first.status_code == 200
    assert first.json()["id"] == second.json()["id"]

    event = await _create_event(client, admin_headers, category="Onboarding")
    blocked = await client.delete(
        f"/api/v1/categories/{first.json()['id']}", headers=admin_headers
    )
    assert blocked.status_code == 409
    assert blocked.json()["details"]["event_count"] == 1

    listed = await client.get("/api/v1/categories", headers=admin_headers)
    counts = {c["name"]: c["event_count"] for c in listed.json()}
    assert counts["Onboarding"] == 1

    await client.delete(f"/api/v1/events/{event['id']}", headers=admin_headers)
    freed = await client.delete(
        f"/api/v1/categories/{first.json()['id']}", headers=admin_headers
    )
    assert freed.status_code == 204


async def test_comments(client: AsyncClient, admin_headers, viewer_headers) -> None:
    event = await _create_event(client, admin_headers)
    url = f"/api/v1/events/{event['id']}/comments"

    created = await client.post(url, json={"content": "Looks good"}, headers=admin_headers)
    assert created.status_code == 201
    assert created.json()["author"] == "Ada Admin"

    by_viewer = await client.post(url, json={"content": "+1"}, headers=viewer_headers)
    assert by_viewer.status_code == 201
    assert by_viewer.json()["author"] == "viewer"

    blank = await client.post(url, json={"content": "   "}, headers=viewer_headers)
    assert blank.status_code == 400

    listed = await client.get(url, headers=viewer_headers)
    assert len(listed.json()) == 2

    forbidden = await client.delete(
        f"{url}/{created.json()['id']}", headers=viewer_headers
    )
    assert forbidden.status_code == 403
    deleted = await client.delete(f"{url}/{created.json()['id']}", headers=admin_headers)
    assert deleted.status_code == 204
