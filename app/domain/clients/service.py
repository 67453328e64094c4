"""Client service - Business logic for client operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Client
from ...shared.numbers import generate_client_number
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)

DUPLICATE_DOCUMENT = "A client with this document number already exists"


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_clients(self, include_inactive: bool = False) -> list[Client]:
        return self.repo.get_clients(self.db, include_inactive)

    def get_client(self, client_id: int) -> Client:
        client = self.repo.get_client_by_id(self.db, client_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def get_client_by_number(self, client_number: str) -> Client:
        client = self.repo.get_client_by_number(self.db, client_number)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def get_client_by_document(self, document_number: str) -> Client:
        client = self.repo.get_client_by_document(self.db, document_number)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def exists_by_number(self, client_number: str) -> bool:
        return self.repo.get_client_by_number(self.db, client_number) is not None

    def exists_by_document(self, document_number: str) -> bool:
        return self.repo.get_client_by_document(self.db, document_number) is not None

    def exists_by_email(self, email: str) -> bool:
        return self.repo.get_client_by_email(self.db, email) is not None

    def create_client(self, data: ClientCreate) -> Client:
        """Create a new client with a generated client number"""
        if self.exists_by_document(data.document_number):
            logger.warning(f"⚠️ Duplicate client document {data.document_number}")
            raise HTTPException(status_code=400, detail=DUPLICATE_DOCUMENT)

        client = self.repo.create_client(
            self.db,
            client_number=generate_client_number(),
            document_type=data.document_type,
            document_number=data.document_number,
            full_name=data.full_name,
            email=data.email,
            phone=data.phone,
            mobile=data.mobile,
            address=data.address,
        )
        logger.info(f"✅ Client created: {client.client_number}")
        return client

    def update_client(self, client_id: int, data: ClientUpdate) -> Client:
        client = self.get_client(client_id)
        updates = data.model_dump(exclude_unset=True)

        document_number = updates.get("document_number")
        if document_number and document_number.strip() != client.document_number:
            existing = self.repo.get_client_by_document(self.db, document_number)
            if existing and existing.id != client.id:
                raise HTTPException(status_code=400, detail=DUPLICATE_DOCUMENT)
            updates["document_number"] = document_number.strip()

        return self.repo.update_client(self.db, client, **updates)

    def delete_client(self, client_id: int) -> dict:
        client = self.get_client(client_id)
        if client.appointments:
            raise HTTPException(
                status_code=400, detail="Cannot delete a client with appointments. Deactivate it instead"
            )
        self.repo.delete_client(self.db, client)
        logger.info(f"🗑️ Client {client_id} deleted")
        return {"message": "Client deleted successfully"}

    def delete_logical(self, client_id: int) -> dict:
        client = self.get_client(client_id)
        self.repo.update_client(self.db, client, is_active=False)
        return {"message": "Client deactivated successfully"}
