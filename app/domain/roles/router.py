"""Role router - Roles, forms and permission matrix"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import require_permission
from ...database import get_db
from .schemas import (
    AllowedTabsUpdate,
    FormPermissionRequest,
    FormPermissionResponse,
    FormResponse,
    RolCreate,
    RolPermissionSummary,
    RolResponse,
    RolUpdate,
)
from .service import PermissionService, RolService

router = APIRouter(prefix="/api/v1/roles", tags=["Roles"])
permissions_router = APIRouter(prefix="/api/v1/permissions", tags=["Permissions"])

can_read = require_permission("roles.read")
can_create = require_permission("roles.create")
can_update = require_permission("roles.update")
can_delete = require_permission("roles.delete")


def get_rol_service(db: Session = Depends(get_db)) -> RolService:
    """Dependency injection for RolService"""
    return RolService(db)


def get_permission_service(db: Session = Depends(get_db)) -> PermissionService:
    """Dependency injection for PermissionService"""
    return PermissionService(db)


@router.get("", response_model=list[RolResponse], dependencies=[Depends(can_read)])
async def get_roles(service: RolService = Depends(get_rol_service)):
    return service.get_roles()


@router.get("/all-including-inactive", response_model=list[RolResponse], dependencies=[Depends(can_read)])
async def get_all_roles(service: RolService = Depends(get_rol_service)):
    return service.get_roles(include_inactive=True)


@router.get("/code/{code}", response_model=RolResponse, dependencies=[Depends(can_read)])
async def get_rol_by_code(code: str, service: RolService = Depends(get_rol_service)):
    return service.get_rol_by_code(code)


@router.get("/user/{user_id}", response_model=list[RolResponse], dependencies=[Depends(can_read)])
async def get_roles_by_user(user_id: int, service: RolService = Depends(get_rol_service)):
    return service.get_roles_by_user(user_id)


@router.get("/{rol_id}", response_model=RolResponse, dependencies=[Depends(can_read)])
async def get_rol(rol_id: int, service: RolService = Depends(get_rol_service)):
    return service.get_rol(rol_id)


@router.post("", response_model=RolResponse, status_code=201, dependencies=[Depends(can_create)])
async def create_rol(data: RolCreate, service: RolService = Depends(get_rol_service)):
    return service.create_rol(data)


@router.put("/{rol_id}", response_model=RolResponse, dependencies=[Depends(can_update)])
async def update_rol(rol_id: int, data: RolUpdate, service: RolService = Depends(get_rol_service)):
    return service.update_rol(rol_id, data)


@router.patch("/delete-logical/{rol_id}", dependencies=[Depends(can_delete)])
async def delete_rol_logical(rol_id: int, service: RolService = Depends(get_rol_service)):
    return service.delete_logical(rol_id)


@router.delete("/{rol_id}", dependencies=[Depends(can_delete)])
async def delete_rol(rol_id: int, service: RolService = Depends(get_rol_service)):
    return service.delete_rol(rol_id)


# ============================================================================
# PERMISSIONS
# ============================================================================


@permissions_router.get("/forms", response_model=list[FormResponse], dependencies=[Depends(can_read)])
async def get_forms(service: PermissionService = Depends(get_permission_service)):
    return service.get_forms()


@permissions_router.get("", response_model=list[FormPermissionResponse], dependencies=[Depends(can_read)])
async def get_permissions(
    rol_id: Optional[int] = Query(None, alias="rolId"),
    service: PermissionService = Depends(get_permission_service),
):
    return service.get_permissions(rol_id)


@permissions_router.get("/roles-summary", response_model=list[RolPermissionSummary], dependencies=[Depends(can_read)])
async def get_role_summaries(service: PermissionService = Depends(get_permission_service)):
    return service.get_role_summaries()


@permissions_router.post("", response_model=FormPermissionResponse, status_code=201, dependencies=[Depends(can_update)])
async def assign_permission(data: FormPermissionRequest, service: PermissionService = Depends(get_permission_service)):
    return service.assign_permission(data)


@permissions_router.put("", response_model=FormPermissionResponse, dependencies=[Depends(can_update)])
async def update_permission(data: FormPermissionRequest, service: PermissionService = Depends(get_permission_service)):
    return service.update_permission(data)


@permissions_router.delete("/rol/{rol_id}/form/{form_id}", dependencies=[Depends(can_update)])
async def remove_permission(rol_id: int, form_id: int, service: PermissionService = Depends(get_permission_service)):
    return service.remove_permission(rol_id, form_id)


@permissions_router.patch("/users/{user_id}/tabs", dependencies=[Depends(require_permission("users.update"))])
async def update_user_tabs(
    user_id: int,
    data: AllowedTabsUpdate,
    service: PermissionService = Depends(get_permission_service),
):
    return service.update_user_tabs(user_id, data.allowed_tabs)
