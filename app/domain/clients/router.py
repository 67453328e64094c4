"""Client router - FastAPI endpoints for client operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_permission
from ...database import get_db
from .schemas import ClientCreate, ClientResponse, ClientUpdate, ExistsResponse
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


# ============================================================================
# QUERIES
# ============================================================================


@router.get("", response_model=list[ClientResponse], dependencies=[Depends(require_permission("clients.read"))])
async def get_clients(service: ClientService = Depends(get_client_service)):
    """Active clients"""
    return service.get_clients()


@router.get("/all-including-inactive", response_model=list[ClientResponse], dependencies=[Depends(require_permission("clients.read"))])
async def get_all_clients(service: ClientService = Depends(get_client_service)):
    return service.get_clients(include_inactive=True)


@router.get("/number/{client_number}", response_model=ClientResponse, dependencies=[Depends(require_permission("clients.read"))])
async def get_client_by_number(client_number: str, service: ClientService = Depends(get_client_service)):
    return service.get_client_by_number(client_number)


@router.get("/document/{document_number}", response_model=ClientResponse, dependencies=[Depends(require_permission("clients.read"))])
async def get_client_by_document(document_number: str, service: ClientService = Depends(get_client_service)):
    return service.get_client_by_document(document_number)


@router.get("/exists/number/{client_number}", response_model=ExistsResponse, dependencies=[Depends(require_permission("clients.read"))])
async def client_number_exists(client_number: str, service: ClientService = Depends(get_client_service)):
    return ExistsResponse(exists=service.exists_by_number(client_number))


@router.get("/exists/document/{document_number}", response_model=ExistsResponse, dependencies=[Depends(require_permission("clients.read"))])
async def client_document_exists(document_number: str, service: ClientService = Depends(get_client_service)):
    return ExistsResponse(exists=service.exists_by_document(document_number))


@router.get("/exists/email/{email}", response_model=ExistsResponse, dependencies=[Depends(require_permission("clients.read"))])
async def client_email_exists(email: str, service: ClientService = Depends(get_client_service)):
    return ExistsResponse(exists=service.exists_by_email(email))


@router.get("/{client_id}", response_model=ClientResponse, dependencies=[Depends(require_permission("clients.read"))])
async def get_client(client_id: int, service: ClientService = Depends(get_client_service)):
    return service.get_client(client_id)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.post("", response_model=ClientResponse, status_code=201, dependencies=[Depends(require_permission("clients.create"))])
async def create_client(data: ClientCreate, service: ClientService = Depends(get_client_service)):
    return service.create_client(data)


@router.put("/{client_id}", response_model=ClientResponse, dependencies=[Depends(require_permission("clients.update"))])
async def update_client(client_id: int, data: ClientUpdate, service: ClientService = Depends(get_client_service)):
    return service.update_client(client_id, data)


@router.patch("/delete-logical/{client_id}", dependencies=[Depends(require_permission("clients.delete"))])
async def delete_client_logical(client_id: int, service: ClientService = Depends(get_client_service)):
    return service.delete_logical(client_id)


@router.delete("/{client_id}", dependencies=[Depends(require_permission("clients.delete"))])
async def delete_client(client_id: int, service: ClientService = Depends(get_client_service)):
    return service.delete_client(client_id)
