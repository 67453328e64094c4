"""Tests for system settings and the portal theme"""

from app.domain.settings.service import get_bool_setting, get_int_setting, get_setting_value
from app.models import SystemSetting, ThemeSettings

SETTINGS = "/api/v1/system-settings"
THEME = "/api/v1/theme"


class TestSystemSettings:
    def test_create_and_duplicate(self, client, auth_headers):
        body = {"settingKey": "max_appointments_per_day", "settingValue": "30", "settingType": "number"}
        response = client.post(SETTINGS, json=body, headers=auth_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["settingKey"] == "MAX_APPOINTMENTS_PER_DAY"
        assert data["settingType"] == "NUMBER"

        assert client.post(SETTINGS, json=body, headers=auth_headers).status_code == 400

    def test_encrypted_value_is_masked(self, client, db_session, auth_headers):
        body = {"settingKey": "WHATSAPP_API_KEY", "settingValue": "s3cr3t", "isEncrypted": True}
        response = client.post(SETTINGS, json=body, headers=auth_headers)
        assert response.json()["settingValue"] == "********"

        stored = db_session.query(SystemSetting).filter(SystemSetting.setting_key == "WHATSAPP_API_KEY").one()
        assert stored.setting_value != "s3cr3t"
        assert get_setting_value(db_session, "whatsapp_api_key") == "s3cr3t"

    def test_update_value(self, client, db_session, auth_headers):
        client.post(SETTINGS, json={"settingKey": "EMAIL_NOTIFICATIONS_ENABLED", "settingValue": "true"}, headers=auth_headers)
        response = client.patch(
            f"{SETTINGS}/value",
            json={"settingKey": "EMAIL_NOTIFICATIONS_ENABLED", "settingValue": "false"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert get_bool_setting(db_session, "EMAIL_NOTIFICATIONS_ENABLED", True) is False

    def test_missing_setting(self, client, auth_headers):
        response = client.get(f"{SETTINGS}/NOPE", headers=auth_headers)
        assert response.status_code == 404

    def test_inactive_setting_falls_back_to_default(self, client, db_session, auth_headers):
        client.post(SETTINGS, json={"settingKey": "REMINDER_HOURS", "settingValue": "12"}, headers=auth_headers)
        assert get_int_setting(db_session, "REMINDER_HOURS", 24) == 12

        client.put(f"{SETTINGS}/REMINDER_HOURS", json={"isActive": False}, headers=auth_headers)
        assert get_int_setting(db_session, "REMINDER_HOURS", 24) == 24

    def test_typed_readers(self):
        assert SystemSetting(setting_value=" 7 ").get_int(0) == 7
        assert SystemSetting(setting_value="abc").get_int(5) == 5
        assert SystemSetting(setting_value="Sí").get_bool(False) is True
        assert SystemSetting(setting_value="maybe").get_bool(True) is True
        assert SystemSetting(setting_value='{"a": 1}').get_json() == {"a": 1}


class TestTheme:
    def test_active_theme_is_public(self, client, db_session):
        response = client.get(f"{THEME}/active")
        assert response.status_code == 200
        assert response.json()["primaryColor"] == "#203461"

    def test_partial_update_uppercases_colors(self, client, db_session, auth_headers):
        theme = db_session.query(ThemeSettings).first()
        response = client.patch(
            f"{THEME}/{theme.id}", json={"primaryColor": "#abcdef", "errorColor": ""}, headers=auth_headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["primaryColor"] == "#ABCDEF"
        assert data["errorColor"] == "#EF4444"

        assert client.get(f"{THEME}/active").json()["primaryColor"] == "#ABCDEF"

    def test_invalid_color(self, client, db_session, auth_headers):
        theme = db_session.query(ThemeSettings).first()
        response = client.patch(f"{THEME}/{theme.id}", json={"primaryColor": "blue"}, headers=auth_headers)
        assert response.status_code == 400

    def test_unknown_theme(self, client, db_session, auth_headers):
        response = client.patch(f"{THEME}/999", json={"primaryColor": "#000000"}, headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Theme not found"
