"""
API tests against an in-memory SQLite database (see the client fixture).
"""
import pytest
from datetime import date

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, inspect
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from cleanops.db import database
from cleanops.db.models import RecurringShifts, RecurrenceType
from cleanops.main import app


WEEKLY_PAYLOAD = {
    "building_name": "Maple Office Park",
    "client_name": "Maple Holdings",
    "cleaner_names": ["Ben"],
    "hours": 6,
    "start_time": "20:00",
    "pattern_type": "weekly",
    "interval": 2,
    "days_of_week": [2, 4],
    "start_date": "2024-01-02",
    "hourly_rate": 20.0,
}

DAILY_PAYLOAD = {
    "building_name": "Harbor Tower",
    "client_name": "Harbor Properties",
    "cleaner_names": ["Ana"],
    "hours": 10,
    "pattern_type": "daily",
    "start_date": "2024-01-01",
    "hourly_rate": 15.0,
}


def create_pattern(client, payload):
    response = client.post("/api/v1/recurring-shifts", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestRecurringShiftRoutes:
    def test_create(self, client):
        body = create_pattern(client, WEEKLY_PAYLOAD)

        assert body["id"]
        assert body["pattern_type"] == "weekly"
        assert body["occurrence_count"] == 0
        assert body["last_generated_date"] is None
        assert body["description"] == "Every 2 weeks on Tuesday, Thursday, starting 2024-01-02"

    def test_create_rejects_invalid_rule(self, client):
        response = client.post("/api/v1/recurring-shifts", json={**WEEKLY_PAYLOAD, "days_of_week": []})
        assert response.status_code == 422
        assert "days_of_week is required for weekly patterns" in response.json()["detail"]

    def test_create_rejects_missing_fields(self, client):
        payload = {k: v for k, v in WEEKLY_PAYLOAD.items() if k != "building_name"}
        assert client.post("/api/v1/recurring-shifts", json=payload).status_code == 422

    def test_get(self, client):
        created = create_pattern(client, WEEKLY_PAYLOAD)
        response = client.get(f"/api/v1/recurring-shifts/{created['id']}")
        assert response.status_code == 200
        assert response.json()["building_name"] == "Maple Office Park"

    def test_get_missing(self, client):
        assert client.get("/api/v1/recurring-shifts/does-not-exist").status_code == 404

    def test_list_active_only(self, client):
        create_pattern(client, WEEKLY_PAYLOAD)
        create_pattern(client, {**DAILY_PAYLOAD, "is_active": False})

        assert len(client.get("/api/v1/recurring-shifts").json()) == 2
        active = client.get("/api/v1/recurring-shifts", params={"active_only": True}).json()
        assert [p["pattern_type"] for p in active] == ["weekly"]

    def test_list_by_client(self, client):
        create_pattern(client, WEEKLY_PAYLOAD)
        create_pattern(client, DAILY_PAYLOAD)

        body = client.get("/api/v1/recurring-shifts", params={"client_name": "Harbor Properties"}).json()
        assert [p["building_name"] for p in body] == ["Harbor Tower"]

    def test_upcoming(self, client):
        created = create_pattern(client, WEEKLY_PAYLOAD)
        response = client.get(
            f"/api/v1/recurring-shifts/{created['id']}/upcoming",
            params={"count": 3, "as_of": "2024-01-01"},
        )
        assert response.status_code == 200
        assert [o["date"] for o in response.json()] == ["2024-01-02", "2024-01-04", "2024-01-16"]
        assert [o["occurrence_number"] for o in response.json()] == [1, 2, 3]

    def test_update(self, client):
        created = create_pattern(client, WEEKLY_PAYLOAD)
        response = client.patch(
            f"/api/v1/recurring-shifts/{created['id']}",
            json={"hours": 5, "max_occurrences": 12},
        )
        assert response.status_code == 200
        assert response.json()["hours"] == 5
        assert response.json()["description"].endswith("for 12 occurrences")

    def test_update_rejects_invalid_and_keeps_row(self, client):
        created = create_pattern(client, WEEKLY_PAYLOAD)
        response = client.patch(
            f"/api/v1/recurring-shifts/{created['id']}",
            json={"end_date": "2023-12-01"},
        )
        assert response.status_code == 422
        assert "end_date cannot be before start_date" in response.json()["detail"]

        assert client.get(f"/api/v1/recurring-shifts/{created['id']}").json()["end_date"] is None


class TestGenerationRoutes:
    def test_generate_then_list_entries(self, client):
        created = create_pattern(client, WEEKLY_PAYLOAD)

        report = client.post("/api/v1/recurring-shifts/generate", params={"as_of": "2024-01-02"}).json()
        assert report["generated"] == 5
        assert report["patterns_processed"] == 1
        assert report["skipped_invalid"] == {}

        entries = client.get("/api/v1/schedule-entries", params={"recurring_id": created["id"]}).json()
        assert [e["date"] for e in entries] == ["2024-01-02", "2024-01-04", "2024-01-16", "2024-01-18", "2024-01-30"]
        assert entries[0]["end_time"] == "02:00"
        assert entries[0]["week_id"] == "2024-01-01"
        assert entries[0]["status"] == "scheduled"

        pattern = client.get(f"/api/v1/recurring-shifts/{created['id']}").json()
        assert pattern["occurrence_count"] == 5
        assert pattern["last_generated_date"] == "2024-01-30"

    def test_generate_twice_is_idempotent(self, client):
        create_pattern(client, WEEKLY_PAYLOAD)

        client.post("/api/v1/recurring-shifts/generate", params={"as_of": "2024-01-02"})
        report = client.post("/api/v1/recurring-shifts/generate", params={"as_of": "2024-01-02"}).json()

        assert report["generated"] == 0
        assert len(client.get("/api/v1/schedule-entries").json()) == 5


class TestScheduleEntryRoutes:
    @pytest.fixture(autouse=True)
    def generated(self, client):
        create_pattern(client, WEEKLY_PAYLOAD)
        create_pattern(client, DAILY_PAYLOAD)
        client.post("/api/v1/recurring-shifts/generate", params={"as_of": "2024-01-02"})

    def test_filter_by_week(self, client):
        entries = client.get("/api/v1/schedule-entries", params={"week_id": "2024-01-01", "limit": 500}).json()
        # 7 daily + Tue/Thu
        assert len(entries) == 9
        assert all(e["week_id"] == "2024-01-01" for e in entries)

    def test_filter_by_cleaner(self, client):
        entries = client.get(
            "/api/v1/schedule-entries",
            params={"cleaner_name": "Ben", "start_date": "2024-01-01", "end_date": "2024-01-31"},
        ).json()
        assert len(entries) == 5
        assert {e["cleaner_name"] for e in entries} == {"Ben"}

    def test_sorted_by_date(self, client):
        entries = client.get("/api/v1/schedule-entries", params={"limit": 500}).json()
        dates = [e["date"] for e in entries]
        assert dates == sorted(dates)

    def test_end_before_start(self, client):
        response = client.get(
            "/api/v1/schedule-entries", params={"start_date": "2024-01-10", "end_date": "2024-01-01"},
        )
        assert response.status_code == 422


class TestPayrollRoutes:
    @pytest.fixture(autouse=True)
    def generated(self, client):
        create_pattern(client, DAILY_PAYLOAD)
        client.post("/api/v1/recurring-shifts/generate", params={"as_of": "2024-01-02"})

    def test_weekly_overtime(self, client):
        response = client.get("/api/v1/payroll", params={"start_date": "2024-01-01", "end_date": "2024-01-07"})
        assert response.status_code == 200

        ana = response.json()["cleaners"]["Ana"]
        assert ana["total_hours"] == 70
        assert ana["regular_hours"] == 40
        assert ana["overtime_hours"] == 30
        assert ana["regular_pay"] == pytest.approx(600.0)
        assert ana["overtime_pay"] == pytest.approx(675.0)
        assert ana["breakdown"]["scheduled_hours"] == 70

    def test_named_cleaner_without_work(self, client):
        response = client.get(
            "/api/v1/payroll",
            params={"start_date": "2024-01-01", "end_date": "2024-01-07", "cleaner_name": ["Zed"]},
        )
        assert response.json()["cleaners"] == {}

    def test_repeated_cleaner_filter(self, client):
        response = client.get(
            "/api/v1/payroll",
            params={"start_date": "2024-01-01", "end_date": "2024-01-07", "cleaner_name": ["Ana", "Zed"]},
        )
        assert response.status_code == 200
        assert list(response.json()["cleaners"]) == ["Ana"]

    def test_stats(self, client):
        stats = client.get(
            "/api/v1/payroll/stats", params={"start_date": "2024-01-01", "end_date": "2024-01-07"},
        ).json()
        assert stats["total_entries"] == 7
        assert stats["total_hours"] == 70
        assert stats["pending_entries"] == 7
        assert stats["utilization_rate"] == 0
        assert stats["estimated_overtime_hours"] == 14

    def test_end_before_start(self, client):
        response = client.get("/api/v1/payroll", params={"start_date": "2024-01-07", "end_date": "2024-01-01"})
        assert response.status_code == 422


class TestStartup:
    @pytest.fixture
    def empty_engine(self):
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        try:
            yield engine
        finally:
            engine.dispose()

    def test_startup_creates_tables(self, empty_engine, monkeypatch):
        monkeypatch.setattr(database, "engine", empty_engine)

        with TestClient(app) as client:
            assert client.get("/health").status_code == 200

        assert {"recurring_shifts", "schedule_entries"} <= set(inspect(empty_engine).get_table_names())

    def test_init_db_keeps_existing_rows(self, empty_engine):
        database.init_db(bind=empty_engine)
        with Session(empty_engine) as session:
            session.add(RecurringShifts(
                id="kept",
                building_name="Harbor Tower",
                client_name="Harbor Properties",
                cleaner_names=["Ana"],
                hours=4,
                pattern_type=RecurrenceType.DAILY,
                start_date=date(2024, 1, 1),
            ))
            session.commit()

        database.init_db(bind=empty_engine)

        with Session(empty_engine) as session:
            assert session.get(RecurringShifts, "kept") is not None
