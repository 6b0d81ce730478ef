"""
Tests for the HTTP API

Exercises the routes through FastAPI's TestClient: the response
envelope, status code mapping, token enforcement on write routes and
the end-to-end claim/list/conflict/delete scenario.
"""

import sqlite3
from dataclasses import replace

from fastapi.testclient import TestClient

from hosting_scheduler_api.app.main import create_app
from tests.conftest import TODAY, TOMORROW, YESTERDAY

SLOTS_URL = "/api/v1/hosting-slots/"


def slot_body(hosting_date, host_name="Alice", **overrides) -> dict:
    body = {
        "host_name": host_name,
        "host_address": "1 Main St",
        "hosting_date": hosting_date.isoformat(),
        "start_time": "18:00",
    }
    body.update(overrides)
    return body


class TestHealthAndLogin:
    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Server is running"
        assert body["timestamp"]
        assert "data" not in body

    def test_login_with_wrong_password(self, client):
        response = client.post("/api/v1/auth/login", json={"password": "nope"})

        assert response.status_code == 401
        assert response.json() == {"success": False, "data": None, "message": None, "error": "Invalid password"}

    def test_login_success(self, client):
        response = client.post("/api/v1/auth/login", json={"password": "open-sesame"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["message"] == "Login successful"
        assert data["token"]

    def test_login_without_configured_password(self, settings, clock):
        app = create_app(replace(settings, site_password=""), clock)
        with TestClient(app) as client:
            response = client.post("/api/v1/auth/login", json={"password": "anything"})

        assert response.status_code == 500
        assert response.json()["error"] == "Server configuration error"


class TestAuthorization:
    def test_create_requires_token(self, client):
        response = client.post(SLOTS_URL, json=slot_body(TOMORROW))

        assert response.status_code == 401
        assert response.json()["error"] == "Access token required"

    def test_create_rejects_bad_token(self, client):
        response = client.post(
            SLOTS_URL, json=slot_body(TOMORROW), headers={"Authorization": "Bearer forged"}
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Invalid or expired token"

    def test_update_and_delete_require_token(self, client):
        assert client.put(f"{SLOTS_URL}1", json=slot_body(TOMORROW)).status_code == 401
        assert client.delete(f"{SLOTS_URL}1").status_code == 401

    def test_reads_are_public(self, client):
        assert client.get(SLOTS_URL).status_code == 200
        assert client.get(f"{SLOTS_URL}today").status_code == 200


class TestRoutingErrors:
    def test_unknown_route(self, client):
        response = client.get("/api/v1/nope")

        assert response.status_code == 404
        assert response.json() == {"success": False, "data": None, "message": None, "error": "Route not found"}

    def test_wrong_method(self, client):
        response = client.patch(f"{SLOTS_URL}1", json=slot_body(TOMORROW))

        assert response.status_code == 405
        body = response.json()
        assert body["success"] is False
        assert body["data"] is None
        assert body["error"] == "Method Not Allowed"
        assert "allow" in response.headers


class TestSlotLifecycle:
    def test_claim_list_conflict_delete(self, client, auth_headers):
        created = client.post(SLOTS_URL, json=slot_body(TOMORROW), headers=auth_headers)
        assert created.status_code == 201
        assert created.json()["data"] == {"id": 1}
        assert created.json()["message"] == "Hosting slot created successfully"

        listed = client.get(SLOTS_URL).json()["data"]
        assert len(listed) == 1
        assert listed[0]["host_name"] == "Alice"
        assert listed[0]["hosting_date"] == TOMORROW.isoformat()
        assert listed[0]["start_time"] == "18:00"

        conflict = client.post(SLOTS_URL, json=slot_body(TOMORROW, host_name="Bob"), headers=auth_headers)
        assert conflict.status_code == 400
        assert conflict.json()["error"] == "Tue 2025-03-11 is already taken"

        deleted = client.delete(f"{SLOTS_URL}1", headers=auth_headers)
        assert deleted.status_code == 200
        assert deleted.json()["message"] == "Hosting slot deleted successfully"

        again = client.delete(f"{SLOTS_URL}1", headers=auth_headers)
        assert again.status_code == 404
        assert again.json()["error"] == "Hosting slot not found"

    def test_create_in_past(self, client, auth_headers):
        response = client.post(SLOTS_URL, json=slot_body(YESTERDAY), headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Sun 2025-03-09 is in the past"

    def test_create_with_missing_field(self, client, auth_headers):
        body = slot_body(TOMORROW)
        del body["host_address"]

        response = client.post(SLOTS_URL, json=body, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Host name, address, date, and start time are required"

    def test_update(self, client, auth_headers):
        client.post(SLOTS_URL, json=slot_body(TOMORROW), headers=auth_headers)

        response = client.put(
            f"{SLOTS_URL}1",
            json=slot_body(TOMORROW, host_name="Alicia", additional_notes="Side door"),
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Hosting slot updated successfully"
        slot = client.get(f"{SLOTS_URL}1").json()["data"]
        assert slot["host_name"] == "Alicia"
        assert slot["additional_notes"] == "Side door"

    def test_update_unknown_slot(self, client, auth_headers):
        response = client.put(f"{SLOTS_URL}5", json=slot_body(TOMORROW), headers=auth_headers)

        assert response.status_code == 404

    def test_get_unknown_slot(self, client):
        response = client.get(f"{SLOTS_URL}5")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_non_numeric_id_is_a_bad_request(self, client, auth_headers):
        response = client.delete(f"{SLOTS_URL}abc", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"


class TestListingAndToday:
    def test_listing_skips_past_rows(self, client, auth_headers, db_path):
        # Past rows can only exist if they were stored on an earlier day.
        conn = sqlite3.connect(db_path)
        conn.execute(
            "INSERT INTO hosting_slots (host_name, host_address, hosting_date, start_time) VALUES (?, ?, ?, ?)",
            ("Old", "0 Past Rd", YESTERDAY.isoformat(), "18:00"),
        )
        conn.commit()
        conn.close()
        client.post(SLOTS_URL, json=slot_body(TOMORROW, host_name="Bob"), headers=auth_headers)
        client.post(SLOTS_URL, json=slot_body(TODAY, host_name="Dana"), headers=auth_headers)

        listed = client.get(SLOTS_URL).json()["data"]

        assert [slot["host_name"] for slot in listed] == ["Dana", "Bob"]

    def test_today_when_unclaimed(self, client):
        body = client.get(f"{SLOTS_URL}today").json()

        assert body["success"] is True
        assert body["data"] is None
        assert body["message"] == "Nobody is hosting today"

    def test_today_when_claimed(self, client, auth_headers):
        client.post(
            SLOTS_URL,
            json=slot_body(TODAY, host_name="Dana", additional_notes="Games at 7"),
            headers=auth_headers,
        )

        data = client.get(f"{SLOTS_URL}today").json()["data"]

        assert data["host_name"] == "Dana"
        assert data["hosting_date"] == TODAY.isoformat()
        assert data["additional_notes"] == "Games at 7"
