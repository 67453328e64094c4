"""Tests for clients, branches, appointment types, available times and holidays"""

from datetime import date

from .conftest import next_bookable_date


class TestClients:
    BASE = "/api/v1/clients"

    def test_create_client(self, client, auth_headers):
        response = client.post(
            self.BASE,
            json={
                "documentType": "ce",
                "documentNumber": " 123456 ",
                "fullName": "Ana Torres",
                "email": "ANA@EXAMPLE.COM",
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["clientNumber"].startswith("CLI-")
        assert data["documentType"] == "CE"
        assert data["documentNumber"] == "123456"
        assert data["email"] == "ana@example.com"

    def test_unknown_document_type_defaults_to_cc(self, client, auth_headers):
        response = client.post(
            self.BASE,
            json={"documentType": "PASSPORT", "documentNumber": "777", "fullName": "Luis"},
            headers=auth_headers,
        )
        assert response.json()["documentType"] == "CC"

    def test_duplicate_document(self, client, auth_headers, customer):
        response = client.post(
            self.BASE,
            json={"documentNumber": customer.document_number, "fullName": "Copia"},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_lookups_and_exists(self, client, auth_headers, customer):
        assert client.get(f"{self.BASE}/number/{customer.client_number}", headers=auth_headers).json()["id"] == customer.id
        assert client.get(f"{self.BASE}/document/{customer.document_number}", headers=auth_headers).status_code == 200
        assert client.get(f"{self.BASE}/exists/email/maria@example.com", headers=auth_headers).json() == {"exists": True}
        assert client.get(f"{self.BASE}/exists/number/CLI-NONE", headers=auth_headers).json() == {"exists": False}

    def test_cannot_delete_client_with_appointments(self, client, auth_headers, customer, make_appointment):
        make_appointment()
        response = client.delete(f"{self.BASE}/{customer.id}", headers=auth_headers)
        assert response.status_code == 400

    def test_logical_delete(self, client, auth_headers, customer):
        assert client.patch(f"{self.BASE}/delete-logical/{customer.id}", headers=auth_headers).status_code == 200
        assert client.get(self.BASE, headers=auth_headers).json() == []


class TestBranches:
    BASE = "/api/v1/branches"

    def test_create_and_duplicate_code(self, client, auth_headers):
        body = {"name": "Sede Pitalito", "code": "pit", "colorPrimary": "#1797d5"}
        response = client.post(self.BASE, json=body, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["code"] == "PIT"
        assert response.json()["colorPrimary"] == "#1797D5"

        assert client.post(self.BASE, json=body, headers=auth_headers).status_code == 400

    def test_main_branch(self, client, auth_headers, branch):
        assert client.get(f"{self.BASE}/main", headers=auth_headers).json()["id"] == branch.id

    def test_invalid_color(self, client, auth_headers):
        response = client.post(
            self.BASE, json={"name": "Sede", "code": "X1", "colorPrimary": "red"}, headers=auth_headers
        )
        assert response.status_code == 400


class TestAppointmentTypes:
    BASE = "/api/v1/appointment-types"

    def test_create_and_deactivate(self, client, auth_headers):
        response = client.post(
            self.BASE, json={"name": "Nueva conexión", "estimatedTimeMinutes": 60}, headers=auth_headers
        )
        assert response.status_code == 201
        type_id = response.json()["id"]

        assert client.patch(f"{self.BASE}/{type_id}/deactivate", headers=auth_headers).json()["isActive"] is False
        assert client.get(f"{self.BASE}/active", headers=auth_headers).json() == []

    def test_estimated_time_must_be_positive(self, client, auth_headers):
        response = client.post(
            self.BASE, json={"name": "Inválido", "estimatedTimeMinutes": 0}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_duplicate_name(self, client, auth_headers, appointment_type):
        response = client.post(self.BASE, json={"name": appointment_type.name}, headers=auth_headers)
        assert response.status_code == 400


class TestAvailableTimes:
    BASE = "/api/v1/available-times"

    def test_create_and_duplicate(self, client, auth_headers, branch):
        body = {"branchId": branch.id, "time": "08:00"}
        assert client.post(self.BASE, json=body, headers=auth_headers).status_code == 201
        assert client.post(self.BASE, json=body, headers=auth_headers).status_code == 400

    def test_bulk_create(self, client, auth_headers, branch):
        response = client.post(
            f"{self.BASE}/bulk",
            json={"branchId": branch.id, "times": ["08:00", "08:30", "09:00"]},
            headers=auth_headers,
        )
        assert response.status_code == 201
        times = client.get(f"{self.BASE}/branch/{branch.id}", headers=auth_headers).json()
        assert [item["time"] for item in times] == ["08:00", "08:30", "09:00"]

    def test_unknown_branch(self, client, auth_headers):
        response = client.post(self.BASE, json={"branchId": 999, "time": "08:00"}, headers=auth_headers)
        assert response.status_code == 404


class TestHolidays:
    BASE = "/api/v1/holidays"

    def test_national_holiday_applies_everywhere(self, client, auth_headers, branch):
        day = next_bookable_date(5)
        response = client.post(
            f"{self.BASE}/national",
            json={"holidayDate": day.isoformat(), "holidayName": "Día del Trabajo"},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["holidayType"] == "NATIONAL"
        assert response.json()["branchId"] is None

        check = client.get(
            f"{self.BASE}/check", params={"date": day.isoformat(), "branchId": branch.id}, headers=auth_headers
        ).json()
        assert check["isHoliday"] is True
        assert check["holiday"]["holidayName"] == "Día del Trabajo"

    def test_local_holiday_requires_existing_branch(self, client, auth_headers):
        response = client.post(
            f"{self.BASE}/local",
            json={"holidayDate": "2030-08-15", "holidayName": "Fiesta", "branchId": 999},
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_duplicate_in_same_scope(self, client, auth_headers):
        body = {"holidayDate": "2030-12-08", "holidayName": "Inmaculada"}
        assert client.post(f"{self.BASE}/national", json=body, headers=auth_headers).status_code == 201
        response = client.post(f"{self.BASE}/company", json=body, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "A business rule violation occurred"

    def test_range_validation(self, client, auth_headers):
        response = client.get(
            f"{self.BASE}/range", params={"start": "2030-02-01", "end": "2030-01-01"}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_deactivate_and_year_filter(self, client, auth_headers):
        created = client.post(
            f"{self.BASE}/national",
            json={"holidayDate": date(2031, 1, 1).isoformat(), "holidayName": "Año Nuevo"},
            headers=auth_headers,
        ).json()
        response = client.patch(f"{self.BASE}/{created['id']}/deactivate", headers=auth_headers)
        assert response.json()["isActive"] is False
