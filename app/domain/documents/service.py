"""Appointment document service - Metadata for files attached to appointments"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Appointment, AppointmentDocument, User, format_file_size
from .repository import AppointmentDocumentRepository
from .schemas import AppointmentDocumentCreate, AppointmentDocumentStats, AppointmentDocumentUpdate

logger = logging.getLogger(__name__)


class AppointmentDocumentService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentDocumentRepository()

    def get_document(self, document_id: int) -> AppointmentDocument:
        document = self.repo.get_document_by_id(self.db, document_id)
        if not document:
            raise HTTPException(status_code=404, detail="Document not found")
        return document

    def get_by_appointment(self, appointment_id: int) -> list[AppointmentDocument]:
        return self.repo.get_by_appointment(self.db, appointment_id)

    def get_stats(self, appointment_id: int) -> AppointmentDocumentStats:
        documents = self.repo.get_by_appointment(self.db, appointment_id)
        total_size = sum(document.file_size or 0 for document in documents)
        images = sum(1 for document in documents if document.is_image)
        pdfs = sum(1 for document in documents if document.is_pdf)
        return AppointmentDocumentStats(
            appointment_id=appointment_id,
            total_documents=len(documents),
            total_size_bytes=total_size,
            total_size_formatted=format_file_size(total_size),
            image_count=images,
            pdf_count=pdfs,
            other_count=len(documents) - images - pdfs,
        )

    def create_document(self, data: AppointmentDocumentCreate, user: User) -> AppointmentDocument:
        if not self.db.query(Appointment).filter(Appointment.id == data.appointment_id).first():
            raise HTTPException(status_code=404, detail="Appointment not found")

        document = AppointmentDocument.create(
            appointment_id=data.appointment_id,
            document_name=data.document_name,
            file_path=data.file_path,
            document_type=data.document_type,
            file_size=data.file_size,
            uploaded_by=user.id,
            description=data.description,
        )
        created = self.repo.create_document(self.db, document)
        logger.info(f"📎 Document '{created.document_name}' attached to appointment {created.appointment_id}")
        return created

    def update_document(self, document_id: int, data: AppointmentDocumentUpdate) -> AppointmentDocument:
        if document_id != data.id:
            raise HTTPException(status_code=400, detail="ID mismatch")
        document = self.get_document(document_id)
        document.update_description(data.description)
        return self.repo.save(self.db, document)

    def delete_document(self, document_id: int) -> dict:
        """Soft delete; the stored file is left to the storage service"""
        document = self.get_document(document_id)
        document.is_active = False
        self.repo.save(self.db, document)
        logger.info(f"🗑️ Document {document_id} removed from appointment {document.appointment_id}")
        return {"message": "Document deleted successfully"}
