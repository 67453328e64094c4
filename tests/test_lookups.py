"""Tests for the appointment status catalogue and the lookup catalogues"""

import pytest

from app.models import AppointmentStatus, PropertyType

from .conftest import token_for

STATUSES = "/api/v1/appointment-statuses"


class TestAppointmentStatuses:
    def test_list_in_display_order(self, client):
        response = client.get(STATUSES)

        assert response.status_code == 200
        data = response.json()
        assert [item["code"] for item in data] == ["PENDING", "CONFIRMED", "NO_SHOW", "COMPLETED", "CANCELLED"]
        assert data[0]["colorPrimary"] == "#F59E0B"
        assert data[0]["allowCancellation"] is True
        assert data[3]["isFinalState"] is True

    def test_get_and_not_found(self, client):
        assert client.get(f"{STATUSES}/{AppointmentStatus.COMPLETED}").json()["name"] == "Completada"

        response = client.get(f"{STATUSES}/99")
        assert response.status_code == 404
        assert response.json()["detail"] == "Estado con ID 99 no encontrado"

    def test_admin_updates_design(self, client, auth_headers):
        response = client.patch(
            f"{STATUSES}/{AppointmentStatus.PENDING}/design",
            json={"id": AppointmentStatus.PENDING, "colorPrimary": "#112233", "colorText": "#ffffff", "iconName": " "},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["colorPrimary"] == "#112233"
        assert data["colorText"] == "#FFFFFF"
        assert data["colorSecondary"] is None
        assert data["iconName"] == "clock"

    def test_design_route_id_must_match_body(self, client, auth_headers):
        response = client.patch(
            f"{STATUSES}/1/design", json={"id": 2, "colorPrimary": "#112233"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "El ID de la ruta no coincide con el ID del comando"

    def test_design_rejects_bad_colors(self, client, auth_headers):
        response = client.patch(f"{STATUSES}/1/design", json={"id": 1, "colorPrimary": "red"}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_design_requires_admin_role(self, client, plain_user):
        body = {"id": 1, "colorPrimary": "#112233"}
        assert client.patch(f"{STATUSES}/1/design", json=body).status_code == 401

        headers = {"Authorization": f"Bearer {token_for(plain_user)}"}
        assert client.patch(f"{STATUSES}/1/design", json=body, headers=headers).status_code == 403


class TestCatalogs:
    def test_property_types_are_public_and_ordered(self, client):
        response = client.get("/api/v1/property-types")

        assert response.status_code == 200
        codes = [item["code"] for item in response.json()]
        assert codes[:2] == ["CASA", "APARTAMENTO"]

    def test_inactive_rows_are_hidden(self, client, db_session):
        row = db_session.query(PropertyType).filter(PropertyType.code == "BODEGA").first()
        row.is_active = False
        db_session.commit()

        codes = [item["code"] for item in client.get("/api/v1/property-types").json()]
        assert "BODEGA" not in codes

    def test_lookup_by_code_ignores_case(self, client):
        response = client.get("/api/v1/service-use-types/code/comercial")
        assert response.status_code == 200
        assert response.json()["name"] == "Comercial"

    def test_project_type_carries_design(self, client):
        data = client.get("/api/v1/project-types/code/URBANIZACION").json()
        assert data["colorPrimary"] == "#203461"
        assert client.get(f"/api/v1/project-types/{data['id']}").json()["code"] == "URBANIZACION"

    @pytest.mark.parametrize(
        "path, detail",
        [
            ("/api/v1/property-types/999", "Tipo de propiedad con ID 999 no encontrado"),
            ("/api/v1/property-types/code/IGLU", "Tipo de propiedad con código IGLU no encontrado"),
            ("/api/v1/project-types/999", "Tipo de proyecto con ID 999 no encontrado"),
            ("/api/v1/service-use-types/code/NADA", "Tipo de uso de servicio con código NADA no encontrado"),
        ],
    )
    def test_not_found_messages(self, client, path, detail):
        response = client.get(path)
        assert response.status_code == 404
        assert response.json()["detail"] == detail

    def test_model_rules(self):
        assert PropertyType.create(" casa_campo ", "Casa campestre").code == "CASA_CAMPO"
        with pytest.raises(ValueError):
            PropertyType.create("", "Sin código")


class TestDocumentTypes:
    BASE = "/api/v1/document-types"

    def test_list(self, client):
        data = client.get(self.BASE).json()
        assert [item["code"] for item in data] == ["CC", "TI", "RC", "CE"]
        assert data[0]["name"] == "Cédula de Ciudadanía"

    def test_by_id_and_code(self, client):
        assert client.get(f"{self.BASE}/4").json()["code"] == "CE"
        assert client.get(f"{self.BASE}/code/ti").json()["id"] == 2

    def test_unknown(self, client):
        assert client.get(f"{self.BASE}/9").json()["detail"] == "Tipo de documento con ID 9 no encontrado"
        assert client.get(f"{self.BASE}/code/NIT").status_code == 404
