"""Tests for appointment document metadata"""

import pytest

from app.models import AppointmentDocument, format_file_size

from .conftest import token_for

BASE = "/api/v1/appointment-documents"


@pytest.fixture
def appointment(make_appointment):
    return make_appointment()


def attach(client, headers, appointment, **overrides):
    data = {
        "appointmentId": appointment.id,
        "documentName": "Factura de energía",
        "documentType": "factura",
        "filePath": "citas/1/factura.PDF",
        "fileSize": 1536,
    }
    data.update(overrides)
    return client.post(BASE, json=data, headers=headers)


class TestDocumentModel:
    @pytest.mark.parametrize(
        "size, expected",
        [(None, "Desconocido"), (512, "512.00 B"), (1536, "1.50 KB"), (1048576, "1.00 MB"), (3 * 1024**3, "3.00 GB")],
    )
    def test_file_size_formatting(self, size, expected):
        assert format_file_size(size) == expected

    def test_kind_from_extension(self):
        photo = AppointmentDocument.create(1, "Foto medidor", "fotos/medidor.JPEG")
        assert photo.is_image and not photo.is_pdf

    def test_required_fields(self):
        with pytest.raises(ValueError):
            AppointmentDocument.create(0, "Sin cita", "a.pdf")
        with pytest.raises(ValueError):
            AppointmentDocument.create(1, "Sin ruta", " ")


class TestDocumentEndpoints:
    def test_attach(self, client, auth_headers, admin_user, appointment):
        response = attach(client, auth_headers, appointment)

        assert response.status_code == 201
        data = response.json()
        assert data["documentType"] == "FACTURA"
        assert data["uploadedBy"] == admin_user.id
        assert data["fileSizeFormatted"] == "1.50 KB"
        assert data["isPdf"] is True
        assert client.get(f"{BASE}/{data['id']}", headers=auth_headers).json()["documentName"] == "Factura de energía"

    def test_unknown_appointment(self, client, auth_headers, appointment):
        response = attach(client, auth_headers, appointment, appointmentId=999)
        assert response.status_code == 404

    def test_blank_name_is_a_validation_error(self, client, auth_headers, appointment):
        response = attach(client, auth_headers, appointment, documentName="  ")
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_list_and_stats(self, client, auth_headers, appointment):
        attach(client, auth_headers, appointment)
        attach(client, auth_headers, appointment, documentName="Foto", filePath="fotos/1.png", fileSize=2048)
        attach(client, auth_headers, appointment, documentName="Acta", filePath="actas/1.docx", fileSize=None)

        documents = client.get(f"{BASE}/appointment/{appointment.id}", headers=auth_headers).json()
        assert len(documents) == 3

        stats = client.get(f"{BASE}/appointment/{appointment.id}/stats", headers=auth_headers).json()
        assert stats == {
            "appointmentId": appointment.id,
            "totalDocuments": 3,
            "totalSizeBytes": 3584,
            "totalSizeFormatted": "3.50 KB",
            "imageCount": 1,
            "pdfCount": 1,
            "otherCount": 1,
        }

    def test_update_description(self, client, auth_headers, appointment):
        document_id = attach(client, auth_headers, appointment).json()["id"]

        response = client.patch(
            f"{BASE}/{document_id}", json={"id": document_id, "description": "Copia legible"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["description"] == "Copia legible"

        mismatch = client.patch(f"{BASE}/{document_id}", json={"id": document_id + 1}, headers=auth_headers)
        assert mismatch.status_code == 400
        assert mismatch.json()["detail"] == "ID mismatch"

    def test_delete_hides_document(self, client, auth_headers, appointment):
        document_id = attach(client, auth_headers, appointment).json()["id"]

        assert client.delete(f"{BASE}/{document_id}", headers=auth_headers).status_code == 200
        assert client.get(f"{BASE}/{document_id}", headers=auth_headers).status_code == 404
        assert client.get(f"{BASE}/appointment/{appointment.id}", headers=auth_headers).json() == []

    def test_requires_appointment_permissions(self, client, plain_user, appointment):
        headers = {"Authorization": f"Bearer {token_for(plain_user)}"}
        assert client.get(f"{BASE}/appointment/{appointment.id}", headers=headers).status_code == 403
        assert attach(client, headers, appointment).status_code == 403
