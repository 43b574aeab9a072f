"""Tests for the admin analytics and CSV export endpoints"""

import uuid
from datetime import date

from fastapi.testclient import TestClient

from fest_analytics.config import config
from fest_analytics.main import app
from fest_analytics.models.event_assignment import EventAssignment


def test_health(admin_client):
    response = admin_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

    detailed = admin_client.get("/health/detailed")
    assert detailed.status_code == 200
    assert detailed.json()["checks"] == {
        "database": "healthy",
        "registrations": 0,
        "exports": "healthy",
    }


def test_health_degrades_past_export_cap(admin_client, fest_data, monkeypatch):
    monkeypatch.setitem(config, "export_max_rows", 3)

    body = admin_client.get("/health/detailed").json()

    assert body["status"] == "degraded"
    assert body["checks"]["registrations"] == 4

    payments = admin_client.get("/admin/exports/payments")
    assert payments.headers["x-partial-data"] == "true"


class TestAdminKey:
    def test_missing_key_is_rejected(self, admin_client):
        client = TestClient(app)
        response = client.get("/admin/analytics/summary")
        assert response.status_code == 422

    def test_wrong_key_is_rejected(self, admin_client):
        client = TestClient(app, headers={"X-Admin-Key": "wrong-key"})

        for path in ("/admin/analytics/summary", "/admin/exports/payments"):
            response = client.get(path)
            assert response.status_code == 401
            assert "Invalid admin API key" in response.text

    def test_non_ascii_key_is_rejected(self, admin_client):
        client = TestClient(app, headers={"X-Admin-Key": "clé".encode("utf-8")})

        response = client.get("/admin/analytics/summary")

        assert response.status_code == 401


class TestAnalytics:
    def test_summary(self, admin_client, fest_data):
        response = admin_client.get("/admin/analytics/summary")

        assert response.status_code == 200
        body = response.json()
        assert body["partial"] is False
        assert body["summary"]["total_registrations"] == 4
        assert body["summary"]["confirmed"] == 3
        assert body["summary"]["confirmed_revenue"] == 500
        assert body["summary"]["pending_revenue"] == 100
        assert body["revenue_by_payment_mode"] == {"online": 500}
        assert body["revenue_by_event"] == {"Group Dance": 500}

    def test_summary_status_keeps_revenue_breakdowns(self, admin_client, fest_data):
        body = admin_client.get(
            "/admin/analytics/summary", params={"status": "pending"}
        ).json()

        assert body["summary"]["total_registrations"] == 1
        assert body["summary"]["pending_revenue"] == 100
        assert body["revenue_by_payment_mode"] == {"online": 500}
        assert body["revenue_by_event"] == {"Group Dance": 500}

    def test_summary_rejects_unknown_status(self, admin_client):
        response = admin_client.get("/admin/analytics/summary", params={"status": "approved"})
        assert response.status_code == 422

    def test_demographics_default_to_confirmed(self, admin_client, fest_data):
        response = admin_client.get("/admin/analytics/demographics")

        demographics = response.json()["demographics"]
        assert demographics["gender_breakdown"] == {"female": 2, "male": 1}
        assert demographics["category_metrics"]["Cultural"] == {
            "count": 3,
            "soet": 1,
            "sop": 1,
            "soa": 1,
        }

    def test_charts(self, admin_client, fest_data):
        body = admin_client.get("/admin/analytics/charts").json()

        assert body["registrations_per_event"] == {"Group Dance": 3}
        assert body["events_by_category"] == {"Cultural": 2}

    def test_event_stats(self, admin_client, fest_data):
        dance_id = fest_data["dance"].id

        body = admin_client.get(f"/admin/analytics/events/{dance_id}").json()

        assert body["event_name"] == "Group Dance"
        assert body["total"] == 3
        assert body["revenue"] == 500
        assert body["team_stats"]["total_teams"] == 1
        assert body["utilization_percent"] == 30.0

    def test_event_stats_unknown_event(self, admin_client, fest_data):
        response = admin_client.get(f"/admin/analytics/events/{uuid.uuid4()}")
        assert response.status_code == 404

    def test_payers_hide_team_members(self, admin_client, fest_data):
        dance_id = fest_data["dance"].id
        song_id = fest_data["song"].id

        confirmed = admin_client.get(
            f"/admin/analytics/events/{dance_id}/payers", params={"status": "confirmed"}
        ).json()
        pending_dance = admin_client.get(f"/admin/analytics/events/{dance_id}/payers").json()
        pending_song = admin_client.get(f"/admin/analytics/events/{song_id}/payers").json()

        assert [r["profile"]["full_name"] for r in confirmed] == ["Asha Verma"]
        assert pending_dance == []
        assert [r["profile"]["full_name"] for r in pending_song] == ["Ravi Kumar"]


class TestExports:
    def test_payment_csv(self, admin_client, fest_data):
        response = admin_client.get("/admin/exports/payments")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"] == (
            f"attachment; filename=payments_{date.today().isoformat()}.csv"
        )
        assert "x-partial-data" not in response.headers

        lines = response.text.split("\n")
        assert lines[0].startswith("Event No,Event Name,Registration Type")
        assert lines[1].startswith("1,Group Dance,Team,Asha Verma,TXN-1,online,500,")
        assert lines[-1] == "TOTAL REVENUE,,,,,,500,,"

    def test_participant_reports(self, admin_client, fest_data):
        team_csv = admin_client.get("/admin/exports/team_participants").text
        solo_csv = admin_client.get("/admin/exports/individual_participants").text

        # Two member rows rebuilt from the leader's list
        assert len(team_csv.split("\n")) == 4
        assert "Ravi Kumar" in team_csv
        # The only solo entry is still pending
        assert len(solo_csv.split("\n")) == 1

    def test_nba_report(self, admin_client, fest_data):
        response = admin_client.get("/admin/exports/nba_report")

        assert response.status_code == 200
        lines = response.text.split("\n")
        assert "1,CULTURAL,2,1,3,Registered" in lines
        assert lines[-1] == "4,TOTAL,2,1,3,3"

    def test_registrations_with_filters(self, admin_client, fest_data):
        response = admin_client.get(
            "/admin/exports/registrations", params={"search": "ravi", "status": "pending"}
        )

        lines = response.text.split("\n")
        assert len(lines) == 2
        assert ",Solo Singing," in lines[1]

    def test_unknown_report(self, admin_client):
        response = admin_client.get("/admin/exports/attendance")
        assert response.status_code == 404

    def test_event_participants(self, admin_client, fest_data):
        dance_id = fest_data["dance"].id

        response = admin_client.get(f"/admin/exports/events/{dance_id}/participants")

        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            "attachment; filename="
            f"Group_Dance_Participants_{date.today().isoformat()}.csv"
        )
        lines = response.text.split("\n")
        assert lines[0] == "Event Name:,Group Dance"
        assert "Total Participants:,3" in lines
        assert any(line.startswith("1,1,,Asha Verma,") for line in lines)

    def test_event_participants_not_found(self, admin_client, fest_data):
        unknown = admin_client.get(f"/admin/exports/events/{uuid.uuid4()}/participants")
        # The song event only has a pending registration
        no_confirmed = admin_client.get(
            f"/admin/exports/events/{fest_data['song'].id}/participants"
        )

        assert unknown.status_code == 404
        assert no_confirmed.status_code == 404

    def test_event_participants_lists_coordinators(self, admin_client, db_add, fest_data):
        db_add(
            EventAssignment(event_id=fest_data["dance"].id, coordinator_id=fest_data["neha"].id)
        )

        response = admin_client.get(
            f"/admin/exports/events/{fest_data['dance'].id}/participants"
        )

        assert "Coordinators:,Neha Singh" in response.text.split("\n")
