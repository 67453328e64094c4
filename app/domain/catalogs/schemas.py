"""Catalog domain schemas"""

from typing import Optional

from ...shared.schemas import CamelModel


class CatalogItemResponse(CamelModel):
    id: int
    code: str
    name: str
    display_order: int
    is_active: bool


class PropertyTypeResponse(CatalogItemResponse):
    icon_name: Optional[str] = None


class ServiceUseTypeResponse(CatalogItemResponse):
    pass


class ProjectTypeResponse(CatalogItemResponse):
    description: Optional[str] = None
    icon_name: Optional[str] = None
    color_primary: Optional[str] = None


class DocumentTypeResponse(CamelModel):
    id: int
    code: str
    name: str
