from __future__ import annotations

from datetime import date


async def _mated_doe(client, farm_id, doe_tag: str = "D1", buck_tag: str = "B1") -> dict:
    doe = (
        await client.post(
            f"/api/v1/farms/{farm_id}/rabbits", json={"tag": doe_tag, "sex": "female"}
        )
    ).json()
    buck = (
        await client.post(
            f"/api/v1/farms/{farm_id}/rabbits", json={"tag": buck_tag, "sex": "male"}
        )
    ).json()
    resp = await client.post(
        f"/api/v1/farms/{farm_id}/breeding-events",
        json={
            "doe_id": doe["id"],
            "buck_id": buck["id"],
            "mating_date": date.today().isoformat(),
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def _acknowledgment(body: dict) -> dict:
    return next(r for r in body["reminders"] if r["name"].startswith("Breeding Success"))


async def test_farm_settings_roundtrip(client, farm_id):
    defaults = await client.get(f"/api/v1/farms/{farm_id}/settings")
    assert defaults.status_code == 200
    assert defaults.json()["timezone"] == "Africa/Nairobi"
    assert defaults.json()["contact_emails"] == []

    updated = await client.put(
        f"/api/v1/farms/{farm_id}/settings",
        json={"timezone": "Europe/Madrid", "contact_emails": ["keeper@example.com"]},
    )
    assert updated.status_code == 200
    assert updated.json()["contact_emails"] == ["keeper@example.com"]

    again = await client.get(f"/api/v1/farms/{farm_id}/settings")
    assert again.json()["timezone"] == "Europe/Madrid"

    bad = await client.put(
        f"/api/v1/farms/{farm_id}/settings", json={"timezone": "Nowhere/Land"}
    )
    assert bad.status_code == 422


async def test_dispatch_sends_email_once(client, app, farm_id):
    await client.put(
        f"/api/v1/farms/{farm_id}/settings", json={"contact_emails": ["keeper@example.com"]}
    )
    reminder = _acknowledgment(await _mated_doe(client, farm_id))
    url = f"/api/v1/farms/{farm_id}/reminders/{reminder['id']}"

    first = await client.post(f"{url}/dispatch")
    assert first.status_code == 200, first.text
    assert first.json() == {"reminder_id": reminder["id"], "outcome": "sent"}

    sent = app.state.email_service.inner.sent
    assert len(sent) == 1
    assert sent[0].subject == "[MEDIUM] Breeding Success for D1 and B1"
    assert list(sent[0].to) == ["keeper@example.com"]

    second = await client.post(f"{url}/dispatch")
    assert second.json()["outcome"] == "already_handled"
    assert len(sent) == 1

    listed = await client.get(f"/api/v1/farms/{farm_id}/reminders", params={"status": "sent"})
    assert [r["id"] for r in listed.json()["items"]] == [reminder["id"]]
    assert listed.json()["items"][0]["sent_at"] is not None

    complete = await client.post(f"{url}/complete")
    assert complete.status_code == 409


async def test_dispatch_over_quota_keeps_reminder_pending(client, app, farm_id):
    await client.put(
        f"/api/v1/farms/{farm_id}/settings", json={"contact_emails": ["keeper@example.com"]}
    )
    reminder = _acknowledgment(await _mated_doe(client, farm_id))
    app.state.email_service.daily_limit = 0

    resp = await client.post(f"/api/v1/farms/{farm_id}/reminders/{reminder['id']}/dispatch")

    assert resp.status_code == 503
    assert resp.json()["code"] == "dispatch_unavailable"
    assert resp.json()["retryable"] is True
    due = await client.get(f"/api/v1/farms/{farm_id}/reminders/due")
    assert reminder["id"] in [r["id"] for r in due.json()["items"]]


async def test_complete_reminder(client, farm_id):
    body = await _mated_doe(client, farm_id)
    reminder = body["reminders"][-1]

    resp = await client.post(f"/api/v1/farms/{farm_id}/reminders/{reminder['id']}/complete")

    assert resp.status_code == 200
    assert resp.json()["status"] == "completed"
    due = await client.get(f"/api/v1/farms/{farm_id}/reminders", params={"status": "pending"})
    assert reminder["id"] not in [r["id"] for r in due.json()["items"]]


async def test_reminder_filters_are_validated(client, farm_id):
    resp = await client.get(f"/api/v1/farms/{farm_id}/reminders", params={"severity": "urgent"})
    assert resp.status_code == 422

    missing = await client.post(
        f"/api/v1/farms/{farm_id}/reminders/00000000-0000-0000-0000-000000000000/dispatch"
    )
    assert missing.status_code == 404


async def test_notifications_mark_read(client, farm_id):
    await _mated_doe(client, farm_id)
    listed = await client.get(f"/api/v1/farms/{farm_id}/notifications")
    items = listed.json()["notifications"]
    assert items and items[0]["type"] == "mating_recorded"

    marked = await client.post(
        f"/api/v1/farms/{farm_id}/notifications/mark-read",
        json={"notification_ids": [items[0]["id"]]},
    )
    assert marked.json() == {"marked_count": 1}
    unread = await client.get(
        f"/api/v1/farms/{farm_id}/notifications", params={"unread_only": "true"}
    )
    assert unread.json()["total"] == 0


async def test_farm_settings_reject_malformed_contact_emails(client, farm_id):
    resp = await client.put(
        f"/api/v1/farms/{farm_id}/settings",
        json={"contact_emails": ["@", "not an email@", "a@b@c"]},
    )
    assert resp.status_code == 422
    body = resp.json()
    assert body["code"] == "validation_error"
    assert {tuple(e["loc"][:2]) for e in body["details"]["errors"]} == {("body", "contact_emails")}

    stored = await client.get(f"/api/v1/farms/{farm_id}/settings")
    assert stored.json()["contact_emails"] == []
