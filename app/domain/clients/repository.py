"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Client


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_clients(db: Session, include_inactive: bool = False) -> list[Client]:
        """Get clients, newest first"""
        query = db.query(Client)
        if not include_inactive:
            query = query.filter(Client.is_active == True)  # noqa: E712
        return query.order_by(Client.created_at.desc()).all()

    @staticmethod
    def get_client_by_id(db: Session, client_id: int) -> Optional[Client]:
        return db.query(Client).filter(Client.id == client_id).first()

    @staticmethod
    def get_client_by_number(db: Session, client_number: str) -> Optional[Client]:
        return db.query(Client).filter(Client.client_number == client_number.strip()).first()

    @staticmethod
    def get_client_by_document(db: Session, document_number: str) -> Optional[Client]:
        return db.query(Client).filter(Client.document_number == document_number.strip()).first()

    @staticmethod
    def get_client_by_email(db: Session, email: str) -> Optional[Client]:
        return db.query(Client).filter(func.lower(Client.email) == email.strip().lower()).first()

    @staticmethod
    def create_client(db: Session, **client_data) -> Client:
        """Create a new client"""
        client = Client(**client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def delete_client(db: Session, client: Client) -> None:
        db.delete(client)
        db.commit()
