"""Tests for application wiring: health checks, provider selection and error bodies"""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from app import config
from app.database import DEFAULT_PROVIDER
from app.error_handlers import register_exception_handlers
from app.main import PROVIDER_HEADER
from app.shared.exceptions import NotFoundException, UnauthorizedException, ValidationException


class TestHealth:
    def test_root(self, client):
        assert client.get("/").json() == {"message": "ElectroHuila PQR Scheduling API is running"}

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_database_health(self, client, db_session):
        response = client.get("/health/database")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "provider": DEFAULT_PROVIDER.value}


class TestDatabaseProviderResolver:
    def test_default_provider_echoed(self, client):
        assert client.get("/health").headers[PROVIDER_HEADER] == DEFAULT_PROVIDER.value

    def test_switch_ignored_outside_production(self, client):
        response = client.get("/health", headers={PROVIDER_HEADER: "MySQL"})
        assert response.headers[PROVIDER_HEADER] == DEFAULT_PROVIDER.value

    def test_switch_honoured_in_production(self, client, monkeypatch):
        monkeypatch.setattr(config, "ENVIRONMENT", "Production")
        assert client.get("/health", headers={PROVIDER_HEADER: "MySQL"}).headers[PROVIDER_HEADER] == "mysql"
        assert client.get("/health?database=PostgreSQL").headers[PROVIDER_HEADER] == "postgresql"

    def test_unknown_provider_falls_back(self, client, monkeypatch):
        monkeypatch.setattr(config, "ENVIRONMENT", "main")
        response = client.get("/health", headers={PROVIDER_HEADER: "mongodb"})
        assert response.headers[PROVIDER_HEADER] == DEFAULT_PROVIDER.value


class TestErrorBodies:
    def test_request_validation_is_400(self, client, db_session):
        response = client.post("/api/v1/auth/login", json={"username": "admin"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert "password" in body["errors"]

    def test_exception_mapping(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/validation")
        def raise_validation():
            raise ValidationException({"email": ["Invalid email"]})

        @app.get("/missing")
        def raise_missing():
            raise NotFoundException("Branch not found")

        @app.get("/forbidden")
        def raise_unauthorized():
            raise UnauthorizedException("Nope")

        @app.get("/value")
        def raise_value():
            raise ValueError("Bad date")

        @app.get("/boom")
        def raise_unexpected():
            raise RuntimeError("kaboom")

        test_client = TestClient(app, raise_server_exceptions=False)

        assert test_client.get("/validation").json() == {"error": "Validation failed", "errors": {"email": ["Invalid email"]}}
        assert test_client.get("/missing").status_code == 404
        assert test_client.get("/forbidden").status_code == 401
        assert test_client.get("/value").json() == {"error": "Invalid input provided", "details": "Bad date"}

        boom = test_client.get("/boom")
        assert boom.status_code == 500
        assert boom.json()["error"] == "An internal server error occurred"
