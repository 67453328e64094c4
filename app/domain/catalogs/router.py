"""Catalog routers - Anonymous lookups used by the portal and the public forms"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import (
    DocumentTypeResponse,
    ProjectTypeResponse,
    PropertyTypeResponse,
    ServiceUseTypeResponse,
)
from .service import (
    CatalogService,
    get_document_type,
    get_document_type_by_code,
    get_document_types,
    project_types,
    property_types,
    service_use_types,
)

property_types_router = APIRouter(prefix="/api/v1/property-types", tags=["Catalogs"])
service_use_types_router = APIRouter(prefix="/api/v1/service-use-types", tags=["Catalogs"])
project_types_router = APIRouter(prefix="/api/v1/project-types", tags=["Catalogs"])
document_types_router = APIRouter(prefix="/api/v1/document-types", tags=["Catalogs"])


def get_property_type_service(db: Session = Depends(get_db)) -> CatalogService:
    return property_types(db)


def get_service_use_type_service(db: Session = Depends(get_db)) -> CatalogService:
    return service_use_types(db)


def get_project_type_service(db: Session = Depends(get_db)) -> CatalogService:
    return project_types(db)


# ============================================================================
# PROPERTY TYPES
# ============================================================================


@property_types_router.get("", response_model=list[PropertyTypeResponse])
async def get_property_types(service: CatalogService = Depends(get_property_type_service)):
    return service.get_all()


@property_types_router.get("/code/{code}", response_model=PropertyTypeResponse)
async def get_property_type_by_code(code: str, service: CatalogService = Depends(get_property_type_service)):
    return service.get_by_code(code)


@property_types_router.get("/{item_id}", response_model=PropertyTypeResponse)
async def get_property_type(item_id: int, service: CatalogService = Depends(get_property_type_service)):
    return service.get_by_id(item_id)


# ============================================================================
# SERVICE USE TYPES
# ============================================================================


@service_use_types_router.get("", response_model=list[ServiceUseTypeResponse])
async def get_service_use_types(service: CatalogService = Depends(get_service_use_type_service)):
    return service.get_all()


@service_use_types_router.get("/code/{code}", response_model=ServiceUseTypeResponse)
async def get_service_use_type_by_code(code: str, service: CatalogService = Depends(get_service_use_type_service)):
    return service.get_by_code(code)


@service_use_types_router.get("/{item_id}", response_model=ServiceUseTypeResponse)
async def get_service_use_type(item_id: int, service: CatalogService = Depends(get_service_use_type_service)):
    return service.get_by_id(item_id)


# ============================================================================
# PROJECT TYPES
# ============================================================================


@project_types_router.get("", response_model=list[ProjectTypeResponse])
async def get_project_types(service: CatalogService = Depends(get_project_type_service)):
    return service.get_all()


@project_types_router.get("/code/{code}", response_model=ProjectTypeResponse)
async def get_project_type_by_code(code: str, service: CatalogService = Depends(get_project_type_service)):
    return service.get_by_code(code)


@project_types_router.get("/{item_id}", response_model=ProjectTypeResponse)
async def get_project_type(item_id: int, service: CatalogService = Depends(get_project_type_service)):
    return service.get_by_id(item_id)


# ============================================================================
# DOCUMENT TYPES
# ============================================================================


@document_types_router.get("", response_model=list[DocumentTypeResponse])
async def list_document_types():
    return get_document_types()


@document_types_router.get("/code/{code}", response_model=DocumentTypeResponse)
async def document_type_by_code(code: str):
    return get_document_type_by_code(code)


@document_types_router.get("/{type_id}", response_model=DocumentTypeResponse)
async def document_type(type_id: int):
    return get_document_type(type_id)
