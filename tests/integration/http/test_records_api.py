from __future__ import annotations


async def test_same_day_milk_entries_are_merged(client, owner_headers, register_animal):
    animal = await register_animal()
    first = await client.post(
        "/api/v1/milk-records",
        json={"animal_id": animal["id"], "production_date": "2024-07-10", "morning_liters": 3},
        headers=owner_headers,
    )
    assert first.status_code == 201
    assert first.json()["merged"] is False

    second = await client.post(
        "/api/v1/milk-records",
        json={
            "animal_id": animal["id"],
            "production_date": "2024-07-10",
            "afternoon_liters": 4,
            "evening_liters": 2,
        },
        headers=owner_headers,
    )
    assert second.status_code == 200
    body = second.json()
    assert body["merged"] is True
    assert body["animal_synced"] is True
    assert body["record"]["id"] == first.json()["record"]["id"]
    assert body["record"]["total_liters"] == 9

    history = await client.get("/api/v1/milk-records", headers=owner_headers)
    assert len(history.json()["items"]) == 1
    assert history.json()["statistics"]["total_liters"] == 9

    stored = await client.get(f"/api/v1/animals/{animal['id']}", headers=owner_headers)
    assert stored.json()["today_milk"] == 9


async def test_milk_shift_above_limit_is_rejected(client, owner_headers, register_animal):
    animal = await register_animal()
    response = await client.post(
        "/api/v1/milk-records",
        json={"animal_id": animal["id"], "production_date": "2024-07-10", "morning_liters": 60},
        headers=owner_headers,
    )
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"


async def test_milk_series_covers_requested_days(client, owner_headers, register_animal):
    animal = await register_animal()
    await client.post(
        "/api/v1/milk-records",
        json={"animal_id": animal["id"], "production_date": "2024-07-09", "morning_liters": 5},
        headers=owner_headers,
    )
    response = await client.get("/api/v1/milk-records/series?days=7", headers=owner_headers)
    assert response.status_code == 200
    points = response.json()["points"]
    assert len(points) == 7
    assert points[-1]["date"] == "2024-07-10"
    assert points[-2]["total_liters"] == 5


async def test_weight_record_updates_animal(client, owner_headers, register_animal):
    animal = await register_animal()
    response = await client.post(
        "/api/v1/weight-records",
        json={"animal_id": animal["id"], "weight_date": "2024-07-10", "weight_kg": 505},
        headers=owner_headers,
    )
    assert response.status_code == 201
    assert response.json()["animal_synced"] is True

    stored = await client.get(f"/api/v1/animals/{animal['id']}", headers=owner_headers)
    assert stored.json()["last_weight"] == 505

    evolution = await client.get(
        f"/api/v1/weight-records/evolution/{animal['id']}", headers=owner_headers
    )
    assert evolution.status_code == 200
    assert [p["weight_kg"] for p in evolution.json()["points"]] == [505]


async def test_medical_observations_and_total_cost(client, owner_headers, register_animal):
    animal = await register_animal()
    for kind, cost in (("illness", "80.25"), ("vaccination", "19.75")):
        response = await client.post(
            "/api/v1/medical-observations",
            json={
                "animal_id": animal["id"],
                "observed_at": "2024-07-10T08:00:00Z",
                "type": kind,
                "cost": cost,
            },
            headers=owner_headers,
        )
        assert response.status_code == 201, response.text

    history = await client.get(
        "/api/v1/medical-observations?type=illness", headers=owner_headers
    )
    body = history.json()
    assert len(body["items"]) == 1
    assert body["statistics"]["total"] == 2
    assert float(body["statistics"]["total_cost"]) == 100.0

    stored = await client.get(f"/api/v1/animals/{animal['id']}", headers=owner_headers)
    assert stored.json()["health_status"] == "treatment"


async def test_observation_update_clears_next_checkup(client, owner_headers, register_animal):
    animal = await register_animal()
    created = await client.post(
        "/api/v1/medical-observations",
        json={
            "animal_id": animal["id"],
            "observed_at": "2024-07-10T08:00:00Z",
            "type": "checkup",
            "next_checkup": "2024-07-14T08:00:00Z",
            "notes": "bring results",
        },
        headers=owner_headers,
    )
    observation_id = created.json()["observation"]["id"]

    response = await client.put(
        f"/api/v1/medical-observations/{observation_id}",
        json={"next_checkup": None, "notes": None},
        headers=owner_headers,
    )
    assert response.status_code == 200, response.text
    body = response.json()["observation"]
    assert body["next_checkup"] is None
    assert body["notes"] == ""
    assert body["type"] == "checkup"


async def test_dashboard_overview(client, owner_headers, register_animal):
    await register_animal(name="Bella", pregnancy_due_date="2024-07-20")
    second = await register_animal(name="Luna", initial_weight=521)
    await client.post(
        "/api/v1/milk-records",
        json={"animal_id": second["id"], "production_date": "2024-07-10", "morning_liters": 12},
        headers=owner_headers,
    )

    response = await client.get("/api/v1/dashboard/overview", headers=owner_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["summary"]["total"] == 2
    assert body["summary"]["pregnant"] == 1
    assert body["summary"]["total_milk_today"] == 12
    assert body["summary"]["average_weight"] == 501
    assert [card["animal"]["name"] for card in body["upcoming_births"]] == ["Bella"]


async def test_cleanup_orphans_after_delete(client, owner_headers, register_animal):
    animal = await register_animal()
    await client.post(
        "/api/v1/weight-records",
        json={"animal_id": animal["id"], "weight_date": "2024-07-01", "weight_kg": 470},
        headers=owner_headers,
    )
    await client.delete(f"/api/v1/animals/{animal['id']}", headers=owner_headers)

    preview = await client.post(
        "/api/v1/maintenance/cleanup-orphans?dry_run=true", headers=owner_headers
    )
    assert preview.json()["weight_records"] == 1
    assert preview.json()["dry_run"] is True

    report = await client.post("/api/v1/maintenance/cleanup-orphans", headers=owner_headers)
    assert report.json()["total"] == 1
    history = await client.get("/api/v1/weight-records", headers=owner_headers)
    assert history.json()["items"] == []
