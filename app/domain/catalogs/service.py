"""Catalog service - Read-only lookups with Spanish not-found messages"""

from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import DOCUMENT_TYPE_CATALOG, ProjectType, PropertyType, ServiceUseType
from .repository import CatalogRepository
from .schemas import DocumentTypeResponse


class CatalogService:
    """Lookups over one catalogue table; label names the entity in error messages"""

    def __init__(self, db: Session, model, label: str):
        self.db = db
        self.model = model
        self.label = label
        self.repo = CatalogRepository()

    def get_all(self) -> list:
        return self.repo.get_all(self.db, self.model)

    def get_by_id(self, item_id: int):
        item = self.repo.get_by_id(self.db, self.model, item_id)
        if not item:
            raise HTTPException(status_code=404, detail=f"{self.label} con ID {item_id} no encontrado")
        return item

    def get_by_code(self, code: str):
        item = self.repo.get_by_code(self.db, self.model, code)
        if not item:
            raise HTTPException(status_code=404, detail=f"{self.label} con código {code} no encontrado")
        return item


def property_types(db: Session) -> CatalogService:
    return CatalogService(db, PropertyType, "Tipo de propiedad")


def service_use_types(db: Session) -> CatalogService:
    return CatalogService(db, ServiceUseType, "Tipo de uso de servicio")


def project_types(db: Session) -> CatalogService:
    return CatalogService(db, ProjectType, "Tipo de proyecto")


# Document types are a fixed list, not a table


def get_document_types() -> list[DocumentTypeResponse]:
    return [DocumentTypeResponse(id=i, code=code, name=name) for i, code, name in DOCUMENT_TYPE_CATALOG]


def _find_document_type(predicate) -> Optional[DocumentTypeResponse]:
    return next((item for item in get_document_types() if predicate(item)), None)


def get_document_type(type_id: int) -> DocumentTypeResponse:
    item = _find_document_type(lambda dt: dt.id == type_id)
    if not item:
        raise HTTPException(status_code=404, detail=f"Tipo de documento con ID {type_id} no encontrado")
    return item


def get_document_type_by_code(code: str) -> DocumentTypeResponse:
    item = _find_document_type(lambda dt: dt.code == code.strip().upper())
    if not item:
        raise HTTPException(status_code=404, detail=f"Tipo de documento con código {code} no encontrado")
    return item
