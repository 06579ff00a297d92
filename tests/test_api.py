from __future__ import annotations

PROJECT_A, PROJECT_B = 10, 20
ANA, LUIS, PEDRO = 1, 2, 3


def _clock_in(client, worker_id=ANA, start="2024-01-10T08:00:00", **extra):
    body = {"projectId": PROJECT_A, "workerId": worker_id, "startTime": start, **extra}
    return client.post("/diary", json=body)


def test_clock_in_returns_created_entry(client):
    resp = _clock_in(client, notes="llegó temprano")

    assert resp.status_code == 201
    data = resp.get_json()
    assert data["status"] == "active"
    assert data["date"] == "2024-01-10"
    assert data["startTime"] == "2024-01-10T08:00:00"
    assert data["endTime"] is None
    assert data["totalHours"] == 0
    assert data["worker"] == {"id": ANA, "name": "Ana", "email": "ana@example.com"}
    assert data["project"] == {"id": PROJECT_A, "name": "Casa Norte"}
    assert data["roleSnapshot"] == {"name": "Albañil", "description": "Mason", "color": "#FF0000"}


def test_clock_in_duplicate_is_400(client):
    _clock_in(client)
    resp = _clock_in(client, start="2024-01-10T12:00:00")

    assert resp.status_code == 400
    assert "already" in resp.get_json()["error"]


def test_clock_in_requires_ids(client):
    resp = client.post("/diary", json={"workerId": ANA})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Project ID is required"


def test_clock_in_unknown_worker_is_404(client):
    resp = client.post("/diary", json={"projectId": PROJECT_A, "workerId": 999})

    assert resp.status_code == 404


def test_clock_in_bad_range_is_400(client):
    resp = _clock_in(client, endTime="2024-01-10T07:00:00")

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "End time must be after start time"


def test_clock_in_rejects_non_json_body(client):
    resp = client.post("/diary", data="projectId=10", content_type="application/x-www-form-urlencoded")

    assert resp.status_code == 400


def test_clock_out_flow(client):
    _clock_in(client)

    resp = client.put("/diary/clock-out", json={"projectId": PROJECT_A, "workerId": ANA, "endTime": "2024-01-10T17:00:00"})
    assert resp.status_code == 200
    assert resp.get_json()["totalHours"] == 9
    assert resp.get_json()["status"] == "completed"

    again = client.put("/diary/clock-out", json={"projectId": PROJECT_A, "workerId": ANA, "endTime": "2024-01-10T18:00:00"})
    assert again.status_code == 400


def test_clock_out_without_entry_is_404(client):
    resp = client.put("/diary/clock-out", json={"projectId": PROJECT_A, "workerId": ANA, "endTime": "2024-01-10T17:00:00"})

    assert resp.status_code == 404


def test_update_ignores_status_in_body(client):
    entry_id = _clock_in(client).get_json()["id"]

    resp = client.put(
        f"/diary/{entry_id}",
        json={"startTime": "2024-01-10T08:00:00", "endTime": "2024-01-10T12:00:00", "status": "active"},
    )

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "completed"
    assert resp.get_json()["totalHours"] == 4


def test_update_requires_start_time(client):
    entry_id = _clock_in(client).get_json()["id"]

    resp = client.put(f"/diary/{entry_id}", json={"endTime": "2024-01-10T12:00:00"})

    assert resp.status_code == 400


def test_get_and_delete_entry(client):
    entry_id = _clock_in(client).get_json()["id"]

    assert client.get(f"/diary/{entry_id}").status_code == 200
    assert client.delete(f"/diary/{entry_id}").status_code == 200
    assert client.get(f"/diary/{entry_id}").status_code == 404
    assert client.delete(f"/diary/{entry_id}").status_code == 404


def test_list_with_filters(client):
    _clock_in(client, worker_id=ANA, start="2024-01-10T08:00:00")
    _clock_in(client, worker_id=LUIS, start="2024-01-11T08:00:00")

    everything = client.get("/diary").get_json()
    by_date = client.get("/diary?date=2024-01-10&startDate=2024-01-11").get_json()
    by_worker = client.get(f"/diary?worker={LUIS}").get_json()

    assert [e["date"] for e in everything] == ["2024-01-11", "2024-01-10"]
    assert [e["worker"]["id"] for e in by_date] == [ANA]
    assert [e["worker"]["id"] for e in by_worker] == [LUIS]


def test_list_rejects_bad_date(client):
    assert client.get("/diary?date=yesterday").status_code == 400


def test_project_and_worker_views(client):
    _clock_in(client, worker_id=ANA, start="2024-01-10T08:00:00", endTime="2024-01-10T16:00:00")
    _clock_in(client, worker_id=LUIS, start="2024-01-10T09:00:00")

    project = client.get(f"/diary/project/{PROJECT_A}").get_json()
    assert project["stats"] == {"totalEntries": 2, "activeWorkers": 1, "totalHours": 8, "uniqueWorkers": 2}
    assert list(project["entries"]) == ["2024-01-10"]

    worker = client.get(f"/diary/worker/{ANA}").get_json()
    assert worker["stats"]["averageHoursPerDay"] == 8
    assert worker["stats"]["projectsWorked"] == 1

    assert client.get("/diary/project/999").status_code == 404
    assert client.get("/diary/worker/999").status_code == 404
    assert client.get(f"/diary/project/{PROJECT_A}?status=paused").status_code == 400


def test_work_history_endpoint(client):
    _clock_in(client, worker_id=LUIS, start="2024-01-09T07:00:00", endTime="2024-01-09T15:00:00", isMaestro=True)
    _clock_in(client, worker_id=ANA, start="2024-01-10T08:00:00", endTime="2024-01-10T17:00:00")

    data = client.get(f"/personal/{ANA}/work-history").get_json()

    assert data["summary"] == {"totalProjects": 1, "totalDaysWorked": 1, "totalHours": 9}
    row = data["workHistory"][0]
    assert row["wasMaestro"] is False
    assert row["maestros"] == [{"id": LUIS, "name": "Luis", "email": "luis@example.com"}]
    assert row["dateRange"] == {"start": "2024-01-10", "end": "2024-01-10"}


def test_finalize_endpoint(client):
    first = client.put(f"/proyectos/{PROJECT_A}/finalize", json={"finalizedDate": "2024-01-15"})
    second = client.put(f"/proyectos/{PROJECT_A}/finalize", json={"finalizedDate": "2024-01-20"})

    assert first.status_code == 200
    assert first.get_json()["project"]["finalized"] == "2024-01-15"
    assert first.get_json()["project"]["active"] is False
    assert second.status_code == 400
    assert client.get(f"/proyectos/{PROJECT_A}").get_json()["finalized"] == "2024-01-15"

    locked = _clock_in(client, start="2024-01-16T08:00:00")
    assert locked.status_code == 400


def test_finalize_requires_date(client):
    assert client.put(f"/proyectos/{PROJECT_A}/finalize", json={}).status_code == 400
    assert client.put(f"/proyectos/{PROJECT_A}/finalize", json={"finalizedDate": "nope"}).status_code == 400
    assert client.put("/proyectos/999/finalize", json={"finalizedDate": "2024-01-15"}).status_code == 404


def test_unknown_route_is_json_404(client):
    resp = client.get("/nothing-here")

    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_store_failure_is_generic_500(client, diary_repo, monkeypatch):
    from site_diary.core.exceptions import StoreUnavailableError

    def boom(criteria):
        raise StoreUnavailableError("Database error")

    monkeypatch.setattr(diary_repo, "find", boom)

    resp = client.get("/diary")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal server error"}


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}
