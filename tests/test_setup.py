"""Tests for setup, first-run bootstrap and bulk configuration"""

from app.models import AvailableTime
from app.seed import ADMIN_INITIAL_PASSWORD, ADMIN_USERNAME

BASE = "/api/v1/setup"


class TestServiceStatus:
    def test_health(self, client):
        data = client.get(f"{BASE}/health").json()
        assert data["status"] == "Healthy"
        assert data["service"] == "ElectroHuila API"
        assert data["version"] == "1.0.0"

    def test_ping(self, client):
        assert client.get(f"{BASE}/ping").json()["message"] == "pong"

    def test_info(self, client):
        data = client.get(f"{BASE}/info").json()
        assert data["application"] == "ElectroHuila - Sistema de Agendamiento de Citas"
        assert "Gestión de citas" in data["features"]


class TestInitData:
    def test_first_run_creates_a_working_admin(self, client):
        response = client.post(f"{BASE}/init-data")

        assert response.status_code == 200
        data = response.json()
        assert data["adminCredentials"]["username"] == ADMIN_USERNAME
        assert data["adminCredentials"]["note"] == "Change password after first login"
        assert "users (1 registros)" in data["tablesSeeded"]

        login = client.post(
            "/api/v1/auth/login", json={"username": ADMIN_USERNAME, "password": ADMIN_INITIAL_PASSWORD}
        )
        assert login.status_code == 200
        headers = {"Authorization": f"Bearer {login.json()['accessToken']}"}
        assert client.get("/api/v1/branches", headers=headers).status_code == 200

    def test_second_run_is_a_no_op(self, client):
        client.post(f"{BASE}/init-data")

        data = client.post(f"{BASE}/init-data").json()
        assert data["adminCredentials"] is None
        assert "users (0 registros)" in data["tablesSeeded"]
        assert "forms (0 registros)" in data["tablesSeeded"]


class TestConfigureSchedule:
    def test_creates_times_and_reports_bad_ones(self, client, auth_headers, branch, appointment_type, db_session):
        response = client.post(
            f"{BASE}/configure-schedule",
            json={"branchId": branch.id, "appointmentTypeId": appointment_type.id, "times": ["08:00", "25:00", "09:30"]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["createdTimes"] == 2
        assert data["totalTimes"] == 3
        assert data["errors"] == ["Invalid time format: 25:00"]
        assert db_session.query(AvailableTime).filter(AvailableTime.branch_id == branch.id).count() == 2

    def test_repeated_time_is_reported(self, client, auth_headers, branch, appointment_type):
        body = {"branchId": branch.id, "appointmentTypeId": appointment_type.id, "times": ["08:00"]}
        client.post(f"{BASE}/configure-schedule", json=body, headers=auth_headers)

        data = client.post(f"{BASE}/configure-schedule", json=body, headers=auth_headers).json()
        assert data["createdTimes"] == 0
        assert data["errors"] == [f"Time 08:00 already configured for branch {branch.id}"]

    def test_invalid_configuration(self, client, auth_headers, branch, appointment_type):
        response = client.post(
            f"{BASE}/configure-schedule",
            json={"branchId": branch.id, "appointmentTypeId": appointment_type.id, "times": []},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid configuration data"

    def test_unknown_branch(self, client, auth_headers, appointment_type):
        response = client.post(
            f"{BASE}/configure-schedule",
            json={"branchId": 999, "appointmentTypeId": appointment_type.id, "times": ["08:00"]},
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_requires_authentication(self, client):
        response = client.post(
            f"{BASE}/configure-schedule", json={"branchId": 1, "appointmentTypeId": 1, "times": ["08:00"]}
        )
        assert response.status_code == 401

    def test_bulk(self, client, auth_headers, branch, appointment_type):
        response = client.post(
            f"{BASE}/bulk-configure-schedule",
            json=[
                {"branchId": branch.id, "appointmentTypeId": appointment_type.id, "times": ["08:00", "08:30"]},
                {"branchId": 0, "appointmentTypeId": appointment_type.id, "times": ["08:00"]},
            ],
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["processedConfigurations"] == 2
        assert data["successfulConfigurations"] == 1
        assert data["totalCreatedTimes"] == 2
        assert data["errors"] == [f"Invalid configuration for branch 0, type {appointment_type.id}"]


class TestConfigureInitialData:
    def test_collects_per_item_errors(self, client, auth_headers, branch):
        response = client.post(
            f"{BASE}/configure-initial-data",
            json={
                "branches": [
                    {"name": "Sede Garzón", "code": "GARZON"},
                    {"name": "Sede duplicada", "code": branch.code},
                ]
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["results"] == ["Branch 'Sede Garzón' created successfully"]
        assert data["errors"] == ["Error creating branch 'Sede duplicada': A branch with this code already exists"]
        assert data["totalSuccess"] == 1
        assert data["totalErrors"] == 1
        codes = [item["code"] for item in client.get("/api/v1/branches", headers=auth_headers).json()]
        assert "GARZON" in codes
