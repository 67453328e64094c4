"""Appointment document repository - Database operations for document metadata"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import AppointmentDocument


class AppointmentDocumentRepository:
    @staticmethod
    def get_document_by_id(db: Session, document_id: int) -> Optional[AppointmentDocument]:
        return (
            db.query(AppointmentDocument)
            .filter(AppointmentDocument.id == document_id, AppointmentDocument.is_active == True)  # noqa: E712
            .first()
        )

    @staticmethod
    def get_by_appointment(db: Session, appointment_id: int) -> list[AppointmentDocument]:
        return (
            db.query(AppointmentDocument)
            .filter(
                AppointmentDocument.appointment_id == appointment_id,
                AppointmentDocument.is_active == True,  # noqa: E712
            )
            .order_by(AppointmentDocument.created_at.desc(), AppointmentDocument.id.desc())
            .all()
        )

    @staticmethod
    def create_document(db: Session, document: AppointmentDocument) -> AppointmentDocument:
        db.add(document)
        db.commit()
        db.refresh(document)
        return document

    @staticmethod
    def save(db: Session, document: AppointmentDocument) -> AppointmentDocument:
        db.commit()
        db.refresh(document)
        return document
