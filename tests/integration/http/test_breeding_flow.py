from __future__ import annotations

from datetime import date, timedelta


async def _create_rabbit(client, farm_id, tag: str, sex: str, **extra) -> dict:
    resp = await client.post(
        f"/api/v1/farms/{farm_id}/rabbits", json={"tag": tag, "sex": sex, **extra}
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


async def _propose(client, farm_id, doe: dict, buck: dict, mating_date: date):
    return await client.post(
        f"/api/v1/farms/{farm_id}/breeding-events",
        json={
            "doe_id": doe["id"],
            "buck_id": buck["id"],
            "mating_date": mating_date.isoformat(),
        },
    )


async def test_health(client):
    resp = await client.get("/api/v1/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


async def test_full_breeding_cycle(client, farm_id):
    doe = await _create_rabbit(client, farm_id, " D1 ", "female", hutch_id="H-4")
    buck = await _create_rabbit(client, farm_id, "B1", "male")
    assert doe["tag"] == "D1"
    mating_date = date.today() - timedelta(days=35)

    resp = await _propose(client, farm_id, doe, buck, mating_date)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    event = body["breeding_event"]
    assert event["expected_birth_date"] == (mating_date + timedelta(days=31)).isoformat()
    assert len(body["reminders"]) == 6
    assert {r["status"] for r in body["reminders"]} == {"pending"}

    due = await client.get(f"/api/v1/farms/{farm_id}/reminders/due")
    assert due.status_code == 200
    assert any(r["name"] == "Breeding Success for D1 and B1" for r in due.json()["items"])

    doe_resp = await client.get(f"/api/v1/farms/{farm_id}/rabbits/{doe['id']}")
    assert doe_resp.json()["is_pregnant"] is True

    birth_date = mating_date + timedelta(days=31)
    birth = await client.post(
        f"/api/v1/farms/{farm_id}/breeding-events/{event['id']}/birth",
        json={"actual_birth_date": birth_date.isoformat(), "litter_size": 3},
    )
    assert birth.status_code == 200, birth.text
    birth_body = birth.json()
    assert birth_body["breeding_event"]["litter_size"] == 3
    assert birth_body["breeding_event"]["weaning_date"] == (birth_date + timedelta(days=42)).isoformat()
    assert birth_body["completed_reminders"] == 2
    assert birth_body["culling"] == {
        "recommend": True,
        "reasons": ["out_of_range_litter_size"],
    }

    notifications = await client.get(f"/api/v1/farms/{farm_id}/notifications")
    assert notifications.status_code == 200
    titles = [n["title"] for n in notifications.json()["notifications"]]
    assert "Doe Culling Alert" in titles

    kits = await client.post(
        f"/api/v1/farms/{farm_id}/breeding-events/{event['id']}/kits",
        json={
            "kits": [
                {"kit_number": "K-1", "sex": "female", "birth_weight": "55.5"},
                {"kit_number": "K-2", "sex": "male"},
            ]
        },
    )
    assert kits.status_code == 201, kits.text
    kits_body = kits.json()
    assert len(kits_body["kits"]) == 2
    assert kits_body["reminder"]["name"] == "Relocate Kits for D1"

    detail = await client.get(f"/api/v1/farms/{farm_id}/breeding-events/{event['id']}")
    assert detail.status_code == 200
    assert sorted(k["kit_number"] for k in detail.json()["kits"]) == ["K-1", "K-2"]

    listing = await client.get(
        f"/api/v1/farms/{farm_id}/breeding-events", params={"doe_id": doe["id"]}
    )
    assert [e["id"] for e in listing.json()["items"]] == [event["id"]]


async def test_second_open_mating_conflicts(client, farm_id):
    doe = await _create_rabbit(client, farm_id, "D2", "female")
    buck_a = await _create_rabbit(client, farm_id, "B2", "male")
    buck_b = await _create_rabbit(client, farm_id, "B3", "male")
    today = date.today()

    first = await _propose(client, farm_id, doe, buck_a, today)
    assert first.status_code == 201
    second = await _propose(client, farm_id, doe, buck_b, today)
    assert second.status_code == 409
    assert second.json()["code"] == "conflict"


async def test_resting_buck_is_rejected(client, farm_id):
    buck = await _create_rabbit(client, farm_id, "B4", "male")
    doe_a = await _create_rabbit(client, farm_id, "D3", "female")
    doe_b = await _create_rabbit(client, farm_id, "D4", "female")
    today = date.today()

    assert (await _propose(client, farm_id, doe_a, buck, today)).status_code == 201
    resp = await _propose(client, farm_id, doe_b, buck, today - timedelta(days=1))
    assert resp.status_code == 422
    assert resp.json()["details"]["reason"] == "buck_resting"


async def test_unknown_doe_is_rejected(client, farm_id):
    buck = await _create_rabbit(client, farm_id, "B5", "male")
    resp = await _propose(
        client,
        farm_id,
        {"id": "00000000-0000-0000-0000-000000000001"},
        buck,
        date.today(),
    )
    assert resp.status_code == 422
    assert resp.json()["details"]["reason"] == "doe_invalid"


async def test_retract_mating_rejects_reminders(client, farm_id):
    doe = await _create_rabbit(client, farm_id, "D5", "female")
    buck = await _create_rabbit(client, farm_id, "B6", "male")
    created = await _propose(client, farm_id, doe, buck, date.today())
    event_id = created.json()["breeding_event"]["id"]

    resp = await client.delete(f"/api/v1/farms/{farm_id}/breeding-events/{event_id}")
    assert resp.status_code == 200
    assert resp.json() == {"breeding_event_id": event_id, "rejected_reminders": 6}

    reminders = await client.get(
        f"/api/v1/farms/{farm_id}/reminders", params={"rabbit_id": doe["id"]}
    )
    assert {r["status"] for r in reminders.json()["items"]} == {"rejected"}

    gone = await client.get(f"/api/v1/farms/{farm_id}/breeding-events/{event_id}")
    assert gone.status_code == 404

    again = await _propose(client, farm_id, doe, buck, date.today())
    assert again.status_code == 201


async def test_birth_validation_errors(client, farm_id):
    doe = await _create_rabbit(client, farm_id, "D6", "female")
    buck = await _create_rabbit(client, farm_id, "B7", "male")
    created = await _propose(client, farm_id, doe, buck, date.today())
    event_id = created.json()["breeding_event"]["id"]

    negative = await client.post(
        f"/api/v1/farms/{farm_id}/breeding-events/{event_id}/birth",
        json={"actual_birth_date": date.today().isoformat(), "litter_size": -1},
    )
    assert negative.status_code == 422
    assert negative.json()["code"] == "validation_error"

    early = await client.post(
        f"/api/v1/farms/{farm_id}/breeding-events/{event_id}/birth",
        json={
            "actual_birth_date": (date.today() - timedelta(days=1)).isoformat(),
            "litter_size": 6,
        },
    )
    assert early.status_code == 422
