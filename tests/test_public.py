"""Tests for the unauthenticated public booking endpoints"""

from unittest.mock import AsyncMock, patch

import pytest

from app.models import AppointmentStatus, AvailableTime, Branch, Client, Holiday

from .conftest import next_bookable_date, next_sunday, past_weekday

BASE = "/api/v1/public"


@pytest.fixture(autouse=True)
def silence_notifications():
    with patch(
        "app.domain.appointments.service.send_confirmation_in_background", new=AsyncMock()
    ), patch("app.domain.appointments.service.send_cancellation_in_background", new=AsyncMock()) as cancellation:
        yield cancellation


@pytest.fixture
def configured_times(db_session, branch):
    for slot in ("09:00", "08:00", "10:00"):
        db_session.add(AvailableTime(branch_id=branch.id, time=slot))
    inactive = AvailableTime(branch_id=branch.id, time="11:00")
    inactive.is_active = False
    db_session.add(inactive)
    db_session.commit()


def simple_payload(branch, appointment_type, **overrides):
    data = {
        "documentType": "CC",
        "documentNumber": "1075999888",
        "fullName": "Carlos Gómez",
        "mobile": "3157654321",
        "email": "carlos@example.com",
        "branchId": branch.id,
        "appointmentTypeId": appointment_type.id,
        "appointmentDate": next_bookable_date().isoformat(),
        "appointmentTime": "09:00",
        "observations": "Medidor dañado",
    }
    data.update(overrides)
    return data


class TestCatalogue:
    def test_branches_and_types_are_public(self, client, branch, appointment_type):
        branches = client.get(f"{BASE}/branches").json()
        assert [item["code"] for item in branches] == ["NEIVA"]

        types = client.get(f"{BASE}/appointment-types").json()
        assert [item["name"] for item in types] == ["Revisión de medidor"]

    def test_health(self, client):
        data = client.get(f"{BASE}/health").json()
        assert data["status"] == "Healthy"
        assert data["version"] == "1.0.0"


class TestClientValidation:
    def test_known_client(self, client, customer):
        response = client.get(f"{BASE}/client/validate/{customer.client_number}")
        assert response.status_code == 200
        assert response.json()["fullName"] == "María Pérez"

    def test_unknown_client(self, client):
        response = client.get(f"{BASE}/client/validate/CLI-NOPE")
        assert response.status_code == 404
        assert response.json()["detail"] == "Cliente no encontrado"


class TestAvailableTimes:
    def test_configured_minus_occupied(self, client, branch, configured_times, make_appointment):
        day = next_bookable_date()
        make_appointment(appointment_date=day, appointment_time="09:00")

        response = client.get(f"{BASE}/available-times", params={"date": day.isoformat(), "branchId": branch.id})
        assert response.status_code == 200
        assert response.json() == ["08:00", "10:00"]

    def test_no_configuration_means_no_times(self, client, branch):
        response = client.get(
            f"{BASE}/available-times", params={"date": next_bookable_date().isoformat(), "branchId": branch.id}
        )
        assert response.json() == []

    def test_branch_required(self, client):
        response = client.get(f"{BASE}/available-times", params={"date": next_bookable_date().isoformat()})
        assert response.status_code == 400
        assert response.json()["detail"] == "ID de sede requerido"

    def test_sunday_coded_message(self, client, branch, configured_times):
        response = client.get(
            f"{BASE}/available-times", params={"date": next_sunday().isoformat(), "branchId": branch.id}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "SUNDAY_NOT_AVAILABLE|Los domingos no se atienden citas"

    def test_holiday_coded_message(self, client, db_session, branch, configured_times):
        day = next_bookable_date(4)
        db_session.add(Holiday.create(day, "Día de la Raza", "NATIONAL"))
        db_session.commit()

        response = client.get(f"{BASE}/available-times", params={"date": day.isoformat(), "branchId": branch.id})
        assert response.json()["detail"] == "HOLIDAY_NOT_AVAILABLE|No se puede agendar porque es Día de la Raza"

    def test_past_coded_message(self, client, branch, configured_times):
        response = client.get(
            f"{BASE}/available-times", params={"date": past_weekday().isoformat(), "branchId": branch.id}
        )
        assert response.json()["detail"] == "PAST_DATE_NOT_AVAILABLE|No se pueden agendar citas en fechas pasadas"


class TestSimpleSchedule:
    def test_registers_new_client(self, client, db_session, branch, appointment_type):
        response = client.post(f"{BASE}/schedule-simple-appointment", json=simple_payload(branch, appointment_type))

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Cliente creado y cita agendada exitosamente"
        assert data["clientNumber"].startswith("CLI-")
        assert data["appointmentNumber"].startswith("APT-")
        assert data["branchName"] == "Sede Principal"

        db_session.expire_all()
        created = db_session.query(Client).filter(Client.document_number == "1075999888").one()
        assert created.full_name == "Carlos Gómez"

    def test_reuses_existing_client(self, client, customer, branch, appointment_type):
        response = client.post(
            f"{BASE}/schedule-simple-appointment",
            json=simple_payload(branch, appointment_type, documentNumber=customer.document_number),
        )
        data = response.json()
        assert data["message"] == "Cita agendada exitosamente"
        assert data["clientNumber"] == customer.client_number

    def test_inactive_branch(self, client, db_session, branch, appointment_type):
        closed = Branch(name="Sede Cerrada", code="CERRADA")
        closed.is_active = False
        db_session.add(closed)
        db_session.commit()

        response = client.post(
            f"{BASE}/schedule-simple-appointment", json=simple_payload(branch, appointment_type, branchId=closed.id)
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "La sucursal especificada no existe o no está activa"

    def test_sunday_rejected_before_client_is_created(self, client, db_session, branch, appointment_type):
        response = client.post(
            f"{BASE}/schedule-simple-appointment",
            json=simple_payload(branch, appointment_type, appointmentDate=next_sunday().isoformat()),
        )
        assert response.status_code == 400
        db_session.expire_all()
        assert db_session.query(Client).count() == 0

    def test_unknown_type_rejected_before_client_is_created(self, client, db_session, branch, appointment_type):
        response = client.post(
            f"{BASE}/schedule-simple-appointment", json=simple_payload(branch, appointment_type, appointmentTypeId=9999)
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "El tipo de cita especificado no existe o no está activo"
        db_session.expire_all()
        assert db_session.query(Client).count() == 0

    def test_inactive_type_rejected_before_client_is_created(self, client, db_session, branch, appointment_type):
        appointment_type.is_active = False
        db_session.commit()

        response = client.post(f"{BASE}/schedule-simple-appointment", json=simple_payload(branch, appointment_type))
        assert response.status_code == 400
        db_session.expire_all()
        assert db_session.query(Client).count() == 0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"documentType": "XX"},
            {"documentNumber": "123-456"},
            {"documentNumber": "1" * 21},
            {"fullName": "   "},
            {"email": "bad-email"},
        ],
    )
    def test_validation_errors(self, client, branch, appointment_type, overrides):
        response = client.post(
            f"{BASE}/schedule-simple-appointment", json=simple_payload(branch, appointment_type, **overrides)
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"


class TestScheduleExistingClient:
    def test_schedule(self, client, customer, branch, appointment_type):
        response = client.post(
            f"{BASE}/schedule-appointment",
            json={
                "clientNumber": customer.client_number,
                "branchId": branch.id,
                "appointmentTypeId": appointment_type.id,
                "appointmentDate": next_bookable_date().isoformat(),
                "appointmentTime": "08:00",
                "observations": "Primera visita",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["statusId"] == AppointmentStatus.PENDING
        assert data["notes"] == "Primera visita"

    def test_unknown_client(self, client, branch, appointment_type):
        response = client.post(
            f"{BASE}/schedule-appointment",
            json={
                "clientNumber": "CLI-NOPE",
                "branchId": branch.id,
                "appointmentTypeId": appointment_type.id,
                "appointmentDate": next_bookable_date().isoformat(),
                "appointmentTime": "08:00",
            },
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Cliente no encontrado"


class TestLookupAndCancel:
    def test_get_appointment_requires_matching_client(self, client, customer, make_appointment):
        appointment = make_appointment()
        url = f"{BASE}/appointment/{appointment.appointment_number}"

        assert client.get(url, params={"clientNumber": customer.client_number}).status_code == 200
        assert client.get(url, params={"clientNumber": "CLI-OTHER"}).status_code == 404
        assert client.get(url).status_code == 400

    def test_client_appointments(self, client, customer, make_appointment):
        make_appointment()
        make_appointment(appointment_time="11:00")
        response = client.get(f"{BASE}/client/{customer.client_number}/appointments")
        assert len(response.json()) == 2

    def test_cancel_own_appointment(self, client, customer, make_appointment, silence_notifications):
        appointment = make_appointment()

        response = client.patch(
            f"{BASE}/client/{customer.client_number}/appointment/{appointment.id}/cancel",
            json={"reason": "No puedo asistir"},
        )
        assert response.status_code == 200
        assert response.json() == {"message": "Cita cancelada exitosamente"}
        silence_notifications.assert_awaited_once()

    def test_cancel_requires_reason(self, client, customer, make_appointment):
        appointment = make_appointment()
        response = client.patch(
            f"{BASE}/client/{customer.client_number}/appointment/{appointment.id}/cancel", json={"reason": " "}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "El motivo de cancelación es requerido"

    def test_cannot_cancel_someone_elses_appointment(self, client, db_session, make_appointment):
        other = Client(
            client_number="CLI-20250101-BBBB2222", document_number="99887766", full_name="Otro Cliente"
        )
        db_session.add(other)
        db_session.commit()
        appointment = make_appointment()

        response = client.patch(
            f"{BASE}/client/{other.client_number}/appointment/{appointment.id}/cancel", json={"reason": "x"}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "La cita no pertenece a este cliente"


class TestVerify:
    def test_valid_appointment(self, client, customer, branch, make_appointment):
        appointment = make_appointment()

        response = client.get(
            f"{BASE}/verify-appointment",
            params={"number": appointment.appointment_number, "clientNumber": customer.client_number},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["isValid"] is True
        assert data["status"] == "PENDING"
        assert data["statusDescription"] == "Cita programada, pendiente de asistir"
        assert data["client"]["fullName"] == "María Pérez"
        assert data["branch"]["name"] == branch.name
        assert data["message"] == "Cita verificada correctamente"

    def test_cancelled_appointment_is_not_valid(self, client, customer, make_appointment):
        appointment = make_appointment(status_id=AppointmentStatus.CANCELLED)

        data = client.get(
            f"{BASE}/verify-appointment",
            params={"number": appointment.appointment_number, "clientNumber": customer.client_number},
        ).json()
        assert data["isValid"] is False
        assert data["message"] == "Cita encontrada pero no está activa"

    def test_wrong_client(self, client, make_appointment):
        appointment = make_appointment()
        response = client.get(
            f"{BASE}/verify-appointment",
            params={"number": appointment.appointment_number, "clientNumber": "CLI-OTHER"},
        )
        assert response.status_code == 404
