from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

import pytest

BASE = "/api/v1/notifications"


async def _create(client, **body) -> dict:
    body.setdefault("title", "Test")
    body.setdefault("message", "Hi")
    resp = await client.post(BASE, json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()["notification"]


@pytest.mark.asyncio
async def test_create_applies_defaults(client):
    resp = await client.post(BASE, json={"title": "Test", "message": "Hi"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Notification created successfully"
    created = body["notification"]
    assert created["priority"] == "normal"
    assert created["status"] == "unread"
    assert created["recipient_role"] == "admin"
    assert created["icon"] == "📢"
    assert created["notification_type"] == "manual"
    assert created["source_table_display_name"] == "Manual Notification"
    assert created["read_at"] is None


@pytest.mark.asyncio
async def test_create_requires_title_and_message(client):
    resp = await client.post(BASE, json={"title": "  ", "message": "Hi"})
    assert resp.status_code == 400
    body = resp.json()
    assert body == {
        "success": False,
        "error": "Title and message are required",
        "message": "Title and message are required",
        "code": "validation_error",
    }


@pytest.mark.asyncio
async def test_create_sanitizes_recipient_ids(client):
    uuid_target = await _create(
        client, recipient_role="staff", recipient_id="3f2a9c1e-1111-4a4a-9b9b-000000000001"
    )
    assert uuid_target["recipient_id"] is None

    client_target = await _create(
        client, recipient_role="client", recipient_id=7, data={"user_id": 7}
    )
    assert client_target["recipient_id"] is None
    assert client_target["data"] == {"user_id": 7}

    numeric = await _create(client, recipient_role="admin", recipient_id="12")
    assert numeric["recipient_id"] == 12

    garbage = await _create(client, recipient_role="admin", recipient_id="abc")
    assert garbage["recipient_id"] is None


@pytest.mark.asyncio
async def test_explicit_null_role_is_kept(client):
    created = await _create(client, recipient_role=None)
    assert created["recipient_role"] is None


@pytest.mark.asyncio
async def test_role_only_feed_excludes_null_roles(client):
    await _create(client, title="staff", recipient_role="staff")
    await _create(client, title="all", recipient_role="all")
    await _create(client, title="nobody", recipient_role=None)

    resp = await client.get(BASE, params={"role": "staff"})
    assert resp.status_code == 200
    body = resp.json()
    assert sorted(n["title"] for n in body["notifications"]) == ["all", "staff"]
    assert body["count"] == 2
    assert body["unreadCount"] == 2


@pytest.mark.asyncio
async def test_client_only_feed(client):
    await _create(client, title="mine", recipient_role="client", data={"user_id": 7})
    await _create(client, title="theirs", recipient_role="client", data={"user_id": 8})
    await _create(client, title="broadcast", recipient_role="all")

    resp = await client.get(BASE, params={"clientOnly": "true", "userId": "7"})
    titles = [n["title"] for n in resp.json()["notifications"]]
    assert titles == ["mine"]


@pytest.mark.asyncio
@pytest.mark.parametrize("flag", ["1", "yes", "True", "on"])
async def test_client_only_requires_literal_true(client, flag):
    await _create(client, title="client row", recipient_role="client", data={"user_id": 7})
    await _create(client, title="personal", recipient_role="admin", recipient_id=7)

    resp = await client.get(BASE, params={"clientOnly": flag, "userId": "7"})
    assert resp.status_code == 200
    # Anything but "true" leaves the personal feed for user 7
    assert [n["title"] for n in resp.json()["notifications"]] == ["personal"]


@pytest.mark.asyncio
async def test_staff_feed_includes_personal_role_and_broadcast(client):
    await _create(client, title="personal", recipient_role="admin", recipient_id=5)
    await _create(client, title="role", recipient_role="sales")
    await _create(client, title="broadcast", recipient_role="all")
    await _create(client, title="other", recipient_role="customer_service")

    resp = await client.get(BASE, params={"role": "sales", "userId": "5"})
    titles = {n["title"] for n in resp.json()["notifications"]}
    assert titles == {"personal", "role", "broadcast"}

    # A UUID user id never matches a numeric recipient
    resp = await client.get(
        BASE, params={"role": "sales", "userId": "3f2a9c1e-1111-4a4a-9b9b-000000000001"}
    )
    assert {n["title"] for n in resp.json()["notifications"]} == {"role", "broadcast"}


@pytest.mark.asyncio
async def test_feed_is_newest_first_and_limited(client):
    for i in range(3):
        await _create(client, title=f"n{i}")
    resp = await client.get(BASE, params={"limit": 2})
    body = resp.json()
    assert body["count"] == 2
    assert [n["title"] for n in body["notifications"]] == ["n2", "n1"]


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 501}, {"status": "bogus"}])
async def test_feed_rejects_bad_filters(client, params):
    resp = await client.get(BASE, params=params)
    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"


@pytest.mark.asyncio
async def test_mark_read_sets_read_at(client):
    created = await _create(client)
    before = datetime.now(timezone.utc)
    resp = await client.put(BASE, json={"id": created["id"], "status": "read"})
    assert resp.status_code == 200
    updated = resp.json()["notification"]
    assert updated["status"] == "read"
    read_at = datetime.fromisoformat(updated["read_at"])
    if read_at.tzinfo is None:
        read_at = read_at.replace(tzinfo=timezone.utc)
    assert read_at >= before

    feed = (await client.get(BASE)).json()
    assert feed["unreadCount"] == 0


@pytest.mark.asyncio
async def test_archived_rows_hidden_unless_requested(client):
    created = await _create(client, title="old")
    await _create(client, title="fresh")
    resp = await client.put(BASE, json={"id": created["id"], "status": "archived"})
    assert resp.status_code == 200

    titles = [n["title"] for n in (await client.get(BASE)).json()["notifications"]]
    assert titles == ["fresh"]
    archived = (await client.get(BASE, params={"status": "archived"})).json()
    assert [n["title"] for n in archived["notifications"]] == ["old"]


@pytest.mark.asyncio
async def test_status_cannot_move_backwards(client):
    created = await _create(client)
    await client.put(BASE, json={"id": created["id"], "status": "read"})
    resp = await client.put(BASE, json={"id": created["id"], "status": "unread"})
    assert resp.status_code == 409
    assert resp.json()["code"] == "invalid_transition"


@pytest.mark.asyncio
async def test_update_unknown_notification(client):
    resp = await client.put(BASE, json={"id": str(uuid4()), "status": "read"})
    assert resp.status_code == 404
    assert resp.json()["success"] is False

    resp = await client.put(BASE, json={"status": "read"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Notification ID is required"


@pytest.mark.asyncio
async def test_delete_one_and_clear_all(client):
    first = await _create(client, title="first")
    await _create(client, title="second")
    await _create(client, title="third")

    resp = await client.delete(BASE, params={"id": first["id"]})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Notification deleted successfully"}
    assert (await client.delete(BASE, params={"id": first["id"]})).status_code == 404
    assert (await client.delete(BASE, params={"id": "not-a-uuid"})).status_code == 400
    assert (await client.delete(BASE)).status_code == 400

    resp = await client.delete(BASE, params={"clearAll": "true"})
    assert resp.json()["message"] == "All notifications cleared successfully"
    assert (await client.get(BASE)).json()["count"] == 0
