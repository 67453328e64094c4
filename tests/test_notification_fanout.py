"""Tests for appointment notification fan-out across channels"""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from app.models import Notification, UserAssignment
from app.services.email_service import EmailService
from app.services.notification_service import AppointmentNotificationService
from app.services.whatsapp_service import WhatsAppService


async def no_sleep(_delay):
    return None


@pytest.fixture
def gateway_requests():
    return []


@pytest.fixture
def services(gateway_requests):
    def handler(request):
        gateway_requests.append(request)
        return httpx.Response(200, json={"success": True})

    transport = httpx.MockTransport(handler)
    whatsapp = WhatsAppService(base_url="http://whatsapp.test", enabled=True, transport=transport, sleep=no_sleep)
    email = EmailService(base_url="http://email.test", enabled=True, transport=transport, sleep=no_sleep)
    return whatsapp, email


def notifications(db, **filters):
    db.expire_all()
    return db.query(Notification).filter_by(**filters).all()


async def test_confirmation_sent_on_every_channel(db_session, make_appointment, services, gateway_requests):
    appointment = make_appointment(notes="Traer factura")
    whatsapp, email = services

    await AppointmentNotificationService(db_session, whatsapp=whatsapp, email=email).send_appointment_confirmation(
        appointment.id
    )

    paths = sorted(request.url.path for request in gateway_requests)
    assert paths == ["/email/appointment-confirmation", "/whatsapp/appointment-confirmation"]

    whatsapp_payload = json.loads(
        next(r for r in gateway_requests if r.url.path.startswith("/whatsapp")).content
    )
    assert whatsapp_payload["phoneNumber"] == "+573001234567"
    assert whatsapp_payload["data"]["numeroCita"] == appointment.appointment_number
    assert whatsapp_payload["data"]["observaciones"] == "Traer factura"

    records = notifications(db_session, appointment_id=appointment.id)
    assert {record.type for record in records} == {"EMAIL", "WHATSAPP"}
    assert all(record.status == "SENT" and record.sent_at for record in records)


async def test_failed_delivery_recorded(db_session, make_appointment):
    def handler(request):
        return httpx.Response(503, json={"error": "unavailable"})

    transport = httpx.MockTransport(handler)
    whatsapp = WhatsAppService(base_url="http://whatsapp.test", enabled=True, transport=transport, sleep=no_sleep)
    email = EmailService(base_url="http://email.test", enabled=False)
    appointment = make_appointment()

    await AppointmentNotificationService(db_session, whatsapp=whatsapp, email=email).send_appointment_reminder(
        appointment.id
    )

    [record] = notifications(db_session, appointment_id=appointment.id)
    assert record.type == "WHATSAPP"
    assert record.status == "FAILED"
    assert record.error_message == "No se pudo enviar el mensaje de WhatsApp"


async def test_gateway_exception_does_not_propagate(db_session, make_appointment):
    whatsapp = WhatsAppService(base_url="http://whatsapp.test", enabled=True)
    whatsapp.send_appointment_cancellation = AsyncMock(side_effect=RuntimeError("socket closed"))
    email = EmailService(base_url="http://email.test", enabled=False)
    appointment = make_appointment()

    await AppointmentNotificationService(db_session, whatsapp=whatsapp, email=email).send_appointment_cancellation(
        appointment.id, "Viaje"
    )

    [record] = notifications(db_session, appointment_id=appointment.id)
    assert record.status == "FAILED"
    assert record.error_message == "socket closed"


async def test_client_without_contact_data_is_skipped(db_session, make_appointment, customer, services, gateway_requests):
    customer.email = None
    customer.mobile = None
    customer.phone = None
    db_session.commit()
    appointment = make_appointment()
    whatsapp, email = services

    await AppointmentNotificationService(db_session, whatsapp=whatsapp, email=email).send_appointment_confirmation(
        appointment.id
    )

    assert gateway_requests == []
    assert notifications(db_session, appointment_id=appointment.id) == []


async def test_missing_appointment_is_a_noop(db_session, services, gateway_requests):
    whatsapp, email = services
    await AppointmentNotificationService(db_session, whatsapp=whatsapp, email=email).send_appointment_confirmation(999)
    assert gateway_requests == []


async def test_assigned_users_get_in_app_notification(
    db_session, make_appointment, admin_user, appointment_type, plain_user
):
    db_session.add(UserAssignment(user_id=admin_user.id, appointment_type_id=appointment_type.id))
    plain_user.is_active = False
    db_session.add(UserAssignment(user_id=plain_user.id, appointment_type_id=appointment_type.id))
    db_session.commit()
    appointment = make_appointment()

    whatsapp = WhatsAppService(base_url="http://whatsapp.test", enabled=False)
    email = EmailService(base_url="http://email.test", enabled=False)
    with patch("app.services.notification_service.send_notification_to_user", new=AsyncMock()) as push:
        await AppointmentNotificationService(db_session, whatsapp=whatsapp, email=email).send_appointment_confirmation(
            appointment.id
        )

    [record] = notifications(db_session, type="IN_APP")
    assert record.user_id == admin_user.id
    assert record.status == "SENT"
    assert record.title == "Nueva Cita Creada"
    push.assert_awaited_once()
    assert push.await_args.args[0] == admin_user.id


async def test_completed_only_uses_whatsapp(db_session, make_appointment, services, gateway_requests):
    whatsapp, email = services
    appointment = make_appointment()

    await AppointmentNotificationService(db_session, whatsapp=whatsapp, email=email).send_appointment_completed(
        appointment.id
    )

    assert [request.url.path for request in gateway_requests] == ["/whatsapp/appointment-completed"]
