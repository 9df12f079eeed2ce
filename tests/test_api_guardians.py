"""Integration tests for the guardian dashboard overview."""

import uuid
from datetime import date

from screentime.models.child import Child
from screentime.models.screen_time import ScreenTimeSettingsRecord
from screentime.models.usage import DailyUsage

TUESDAY = date(2026, 10, 13)
AT_AFTERNOON = {"at": "2026-10-13T15:00:00"}


async def _create_child(client, guardian_id: str, name: str) -> str:
    resp = await client.post("/api/v1/children/", json={"name": name, "guardian_id": guardian_id})
    assert resp.status_code == 201
    return resp.json()["id"]


async def _add_usage(db, child_id: str, total: int) -> None:
    db.add(DailyUsage(child_id=uuid.UUID(child_id), date=TUESDAY, total_minutes=total))
    await db.flush()


class TestGuardianOverview:
    async def test_counts_and_average(self, client, db_session, guardian_id):
        anna = await _create_child(client, guardian_id, "Anna")
        ben = await _create_child(client, guardian_id, "Ben")
        cleo = await _create_child(client, guardian_id, "Cleo")
        await _add_usage(db_session, anna, 30)
        await _add_usage(db_session, ben, 100)
        await _add_usage(db_session, cleo, 140)

        resp = await client.get(f"/api/v1/guardians/{guardian_id}/overview", params=AT_AFTERNOON)
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_children"] == 3
        assert data["average_usage_minutes"] == 90.0
        assert data["status_counts"] == {
            "within_limits": 1,
            "approaching_limit": 1,
            "limit_exceeded": 1,
            "bedtime": 0,
        }
        assert [c["child_name"] for c in data["children"]] == ["Anna", "Ben", "Cleo"]

    async def test_bedtime_counts(self, client, guardian_id):
        await _create_child(client, guardian_id, "Anna")
        await _create_child(client, guardian_id, "Ben")

        resp = await client.get(
            f"/api/v1/guardians/{guardian_id}/overview",
            params={"at": "2026-10-13T22:30:00"},
        )
        assert resp.json()["status_counts"]["bedtime"] == 2

    async def test_status_filter_narrows_list_only(self, client, db_session, guardian_id):
        anna = await _create_child(client, guardian_id, "Anna")
        ben = await _create_child(client, guardian_id, "Ben")
        await _add_usage(db_session, anna, 10)
        await _add_usage(db_session, ben, 130)

        resp = await client.get(
            f"/api/v1/guardians/{guardian_id}/overview",
            params={**AT_AFTERNOON, "status": "limit-exceeded"},
        )
        data = resp.json()
        assert data["total_children"] == 2
        assert data["status_counts"]["within_limits"] == 1
        assert [c["child_name"] for c in data["children"]] == ["Ben"]
        assert data["children"][0]["remaining_label"] == "0m"

    async def test_other_guardians_are_excluded(self, client, guardian_id):
        await _create_child(client, guardian_id, "Anna")
        await _create_child(client, str(uuid.uuid4()), "Stranger")

        resp = await client.get(f"/api/v1/guardians/{guardian_id}/overview", params=AT_AFTERNOON)
        assert [c["child_name"] for c in resp.json()["children"]] == ["Anna"]

    async def test_guardian_without_children(self, client):
        resp = await client.get(f"/api/v1/guardians/{uuid.uuid4()}/overview", params=AT_AFTERNOON)
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_children"] == 0
        assert data["average_usage_minutes"] == 0.0
        assert data["children"] == []

    async def test_invalid_status_filter(self, client, guardian_id):
        resp = await client.get(
            f"/api/v1/guardians/{guardian_id}/overview",
            params={"status": "sleeping"},
        )
        assert resp.status_code == 422

    async def test_invalid_settings_fall_back_to_within_limits(self, client, db_session, guardian_id):
        await _create_child(client, guardian_id, "Anna")
        broken = Child(guardian_id=uuid.UUID(guardian_id), name="Zoe")
        db_session.add(broken)
        await db_session.flush()
        db_session.add(ScreenTimeSettingsRecord(
            child_id=broken.id,
            daily_limit=-20,
            video_limit=60,
            book_limit=0,
            bedtime_start="21:00",
            bedtime_end="07:00",
            weekend_extension=30,
            enabled=True,
            content_filtering="moderate",
            allowed_categories=[],
            reward_system=False,
            reward_points=0,
        ))
        await db_session.flush()

        resp = await client.get(f"/api/v1/guardians/{guardian_id}/overview", params=AT_AFTERNOON)
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_children"] == 2
        assert data["status_counts"]["within_limits"] == 2

        zoe = next(c for c in data["children"] if c["child_name"] == "Zoe")
        assert zoe["settings_error"] is True
        assert zoe["evaluation"]["status"] == "within-limits"
        assert zoe["settings"]["enabled"] is False
