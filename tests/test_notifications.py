"""Tests for in-app notifications and notification templates"""

from unittest.mock import AsyncMock, patch

import pytest

from app.models import Notification, NotificationTemplate

from .conftest import token_for

NOTIFICATIONS = "/api/v1/notifications"
TEMPLATES = "/api/v1/notification-templates"


@pytest.fixture
def user_notifications(db_session, admin_user, plain_user):
    rows = [
        Notification.create("IN_APP", "Primera", "Mensaje 1", user_id=admin_user.id),
        Notification.create("IN_APP", "Segunda", "Mensaje 2", user_id=admin_user.id),
        Notification.create("IN_APP", "Ajena", "Mensaje 3", user_id=plain_user.id),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


class TestNotificationModel:
    def test_requires_exactly_one_recipient(self):
        with pytest.raises(ValueError):
            Notification.create("EMAIL", "t", "m")
        with pytest.raises(ValueError):
            Notification.create("EMAIL", "t", "m", user_id=1, client_id=1)

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            Notification.create("FAX", "t", "m", user_id=1)

    def test_failed_requires_message(self):
        notification = Notification.create("EMAIL", "t", "m", client_id=1)
        with pytest.raises(ValueError):
            notification.mark_as_failed(" ")
        notification.mark_as_failed("timeout")
        assert notification.status == "FAILED"

    def test_mark_as_read_is_idempotent(self):
        notification = Notification.create("IN_APP", "t", "m", user_id=1)
        notification.mark_as_read()
        first_read_at = notification.read_at
        notification.mark_as_read()
        assert notification.read_at == first_read_at


class TestMyNotifications:
    def test_list_and_unread_count(self, client, auth_headers, user_notifications):
        titles = {item["title"] for item in client.get(f"{NOTIFICATIONS}/my-notifications", headers=auth_headers).json()}
        assert titles == {"Primera", "Segunda"}
        assert client.get(f"{NOTIFICATIONS}/unread-count", headers=auth_headers).json() == {"count": 2}

    def test_mark_read(self, client, auth_headers, user_notifications):
        target = user_notifications[0]
        response = client.patch(f"{NOTIFICATIONS}/{target.id}/mark-read", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["isRead"] is True
        assert client.get(f"{NOTIFICATIONS}/unread-count", headers=auth_headers).json() == {"count": 1}

    def test_cannot_mark_someone_elses(self, client, auth_headers, user_notifications):
        foreign = user_notifications[2]
        assert client.patch(f"{NOTIFICATIONS}/{foreign.id}/mark-read", headers=auth_headers).status_code == 404

    def test_admin_reads_other_user(self, client, auth_headers, plain_user, user_notifications):
        response = client.get(f"{NOTIFICATIONS}/user/{plain_user.id}/unread-count", headers=auth_headers)
        assert response.json() == {"count": 1}

    def test_other_user_lacks_permission(self, client, admin_user, plain_user, user_notifications):
        headers = {"Authorization": f"Bearer {token_for(plain_user)}"}
        assert client.get(f"{NOTIFICATIONS}/user/{admin_user.id}", headers=headers).status_code == 403
        assert client.get(f"{NOTIFICATIONS}/unread-count", headers=headers).json() == {"count": 1}


class TestCreateNotification:
    def test_created_as_sent_and_pushed(self, client, auth_headers, plain_user):
        with patch("app.domain.notifications.service.send_notification_to_user", new=AsyncMock()) as push:
            response = client.post(
                NOTIFICATIONS,
                json={"userId": plain_user.id, "title": "Aviso", "message": "Reunión a las 3"},
                headers=auth_headers,
            )

        assert response.status_code == 201
        data = response.json()
        assert data["type"] == "IN_APP"
        assert data["status"] == "SENT"
        push.assert_awaited_once()
        assert push.await_args.args[0] == plain_user.id
        assert push.await_args.args[1]["title"] == "Aviso"

    def test_unknown_user(self, client, auth_headers):
        response = client.post(
            NOTIFICATIONS, json={"userId": 999, "title": "Aviso", "message": "x"}, headers=auth_headers
        )
        assert response.status_code == 404


class TestTemplates:
    def test_render_leaves_unknown_placeholders(self):
        template = NotificationTemplate.create(
            "cita_ok", "Cita", "email", "Hola {{NOMBRE}}, cita {{ NUMERO }} en {{SEDE}}", subject="Cita {{NUMERO}}"
        )
        assert template.template_code == "CITA_OK"
        assert template.render({"NOMBRE": "Ana", "NUMERO": "APT-1"}) == "Hola Ana, cita APT-1 en {{SEDE}}"
        assert template.render_subject({"NUMERO": "APT-1"}) == "Cita APT-1"
        assert template.placeholder_list == ["NOMBRE", "NUMERO", "SEDE"]

    def test_invalid_type(self):
        with pytest.raises(ValueError):
            NotificationTemplate.create("X", "X", "FAX", "body")

    def test_crud_and_preview(self, client, auth_headers):
        body = {
            "templateCode": "recordatorio",
            "templateName": "Recordatorio",
            "templateType": "EMAIL",
            "subject": "Tu cita {{NUMERO}}",
            "bodyTemplate": "Hola {{NOMBRE}}",
        }
        created = client.post(TEMPLATES, json=body, headers=auth_headers)
        assert created.status_code == 201
        template = created.json()
        assert template["templateCode"] == "RECORDATORIO"
        assert template["placeholders"] == ["NOMBRE"]

        assert client.post(TEMPLATES, json=body, headers=auth_headers).status_code == 400

        preview = client.post(
            f"{TEMPLATES}/RECORDATORIO/preview",
            json={"values": {"NOMBRE": "Ana", "NUMERO": "APT-9"}},
            headers=auth_headers,
        ).json()
        assert preview == {"templateCode": "RECORDATORIO", "subject": "Tu cita APT-9", "body": "Hola Ana"}

        updated = client.put(
            f"{TEMPLATES}/{template['id']}", json={"placeholders": ["NOMBRE", "FECHA"]}, headers=auth_headers
        )
        assert updated.json()["placeholders"] == ["NOMBRE", "FECHA"]

        assert client.put(f"{TEMPLATES}/{template['id']}", json={"bodyTemplate": " "}, headers=auth_headers).status_code == 400

        assert client.delete(f"{TEMPLATES}/{template['id']}", headers=auth_headers).status_code == 200
        assert client.get(f"{TEMPLATES}/{template['id']}", headers=auth_headers).status_code == 404
