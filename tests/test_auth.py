"""Tests for login, refresh token rotation, logout and account status checks"""

from app.models import RefreshToken
from app.security_utils import decode_access_token

from .conftest import ADMIN_PASSWORD, token_for

BASE = "/api/v1/auth"


def login(client, username="admin", password=ADMIN_PASSWORD):
    return client.post(f"{BASE}/login", json={"username": username, "password": password})


class TestLogin:
    def test_success(self, client, admin_user):
        response = login(client)

        assert response.status_code == 200
        data = response.json()
        assert data["tokenType"] == "Bearer"
        assert data["user"]["username"] == "admin"
        assert data["user"]["allowedTabs"] == ["appointments", "clients"]
        assert data["roles"] == ["ADMIN"]
        assert "appointments.read" in data["permissions"]

        claims = decode_access_token(data["accessToken"])
        assert claims["nameid"] == str(admin_user.id)
        assert claims["iss"] == "ElectroHuila.Api"

    def test_username_is_case_insensitive(self, client, admin_user):
        assert login(client, username="ADMIN").status_code == 200

    def test_wrong_password(self, client, admin_user):
        response = login(client, password="wrong")
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_unknown_user(self, client):
        assert login(client, username="ghost").status_code == 401

    def test_inactive_user(self, client, db_session, admin_user):
        admin_user.is_active = False
        db_session.commit()

        response = login(client)
        assert response.status_code == 401
        assert response.json()["detail"] == "User account is inactive"


class TestRefresh:
    def test_rotation_revokes_old_token(self, client, db_session, admin_user):
        first = login(client).json()

        response = client.post(f"{BASE}/refresh-token", json={"refreshToken": first["refreshToken"]})
        assert response.status_code == 200
        second = response.json()
        assert second["refreshToken"] != first["refreshToken"]

        reused = client.post(f"{BASE}/refresh-token", json={"refreshToken": first["refreshToken"]})
        assert reused.status_code == 401
        assert reused.json()["detail"] == "Invalid refresh token"

    def test_unknown_token(self, client):
        response = client.post(f"{BASE}/refresh-token", json={"refreshToken": "not-a-token"})
        assert response.status_code == 401

    def test_logout_revokes_all_tokens(self, client, db_session, admin_user, auth_headers):
        tokens = login(client).json()

        response = client.post(f"{BASE}/logout", headers=auth_headers)
        assert response.status_code == 200

        db_session.expire_all()
        assert all(token.revoked_at is not None for token in db_session.query(RefreshToken).all())
        assert client.post(f"{BASE}/refresh-token", json={"refreshToken": tokens["refreshToken"]}).status_code == 401


class TestTokenEndpoints:
    def test_validate_token(self, client, admin_user, auth_headers):
        response = client.get(f"{BASE}/validate-token", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["userId"] == admin_user.id

    def test_user_info(self, client, auth_headers):
        response = client.get(f"{BASE}/user-info", headers=auth_headers)
        assert response.json()["username"] == "admin"

    def test_permissions(self, client, auth_headers):
        data = client.get(f"{BASE}/permissions", headers=auth_headers).json()
        assert data["roles"] == ["ADMIN"]
        assert "settings.update" in data["permissions"]

    def test_missing_token(self, client):
        assert client.get(f"{BASE}/user-info").status_code == 401

    def test_tampered_token(self, client, auth_headers):
        headers = {"Authorization": auth_headers["Authorization"] + "x"}
        assert client.get(f"{BASE}/user-info", headers=headers).status_code == 401


class TestInactiveUserGuard:
    def test_deactivated_account_is_refused(self, client, db_session, admin_user):
        headers = {"Authorization": f"Bearer {token_for(admin_user)}"}
        admin_user.is_active = False
        db_session.commit()

        response = client.get("/api/v1/branches", headers=headers)
        assert response.status_code == 403
        assert response.json() == {"error": "User account is inactive"}

    def test_public_routes_unaffected_without_token(self, client, db_session):
        assert client.get("/api/v1/public/branches").status_code == 200
