"""User router - Users and appointment-type assignments"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import require_permission
from ...database import get_db
from ..roles.schemas import RolResponse
from .schemas import (
    AssignmentCreate,
    AssignmentResponse,
    AssignRolesRequest,
    BulkAssignmentCreate,
    HasPermissionResponse,
    UserCreate,
    UserCreateWithRoles,
    UserResponse,
    UserUpdate,
    UserUpdateWithRoles,
)
from .service import AssignmentService, UserService

router = APIRouter(prefix="/api/v1/users", tags=["Users"])
assignments_router = APIRouter(prefix="/api/v1/user-assignments", tags=["User Assignments"])

can_read = require_permission("users.read")
can_create = require_permission("users.create")
can_update = require_permission("users.update")
can_delete = require_permission("users.delete")


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


def get_assignment_service(db: Session = Depends(get_db)) -> AssignmentService:
    """Dependency injection for AssignmentService"""
    return AssignmentService(db)


@router.get("", response_model=list[UserResponse], dependencies=[Depends(can_read)])
async def get_users(service: UserService = Depends(get_user_service)):
    return service.get_users()


@router.get("/all-including-inactive", response_model=list[UserResponse], dependencies=[Depends(can_read)])
async def get_all_users(service: UserService = Depends(get_user_service)):
    return service.get_users(include_inactive=True)


@router.get("/username/{username}", response_model=UserResponse, dependencies=[Depends(can_read)])
async def get_user_by_username(username: str, service: UserService = Depends(get_user_service)):
    return service.get_user_by_username(username)


@router.get("/{user_id}", response_model=UserResponse, dependencies=[Depends(can_read)])
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return service.get_user(user_id)


@router.get("/{user_id}/roles", response_model=list[RolResponse], dependencies=[Depends(can_read)])
async def get_user_roles(user_id: int, service: UserService = Depends(get_user_service)):
    return service.get_user_roles(user_id)


@router.get("/{user_id}/permissions", response_model=list[str], dependencies=[Depends(can_read)])
async def get_user_permissions(user_id: int, service: UserService = Depends(get_user_service)):
    return service.get_user_permissions(user_id)


@router.get("/{user_id}/has-permission", response_model=HasPermissionResponse, dependencies=[Depends(can_read)])
async def has_permission(
    user_id: int,
    permission: str = Query(...),
    service: UserService = Depends(get_user_service),
):
    return HasPermissionResponse(has_permission=service.has_permission(user_id, permission))


@router.post("", response_model=UserResponse, status_code=201, dependencies=[Depends(can_create)])
async def create_user(data: UserCreate, service: UserService = Depends(get_user_service)):
    return service.create_user(data)


@router.post("/with-roles", response_model=UserResponse, status_code=201, dependencies=[Depends(can_create)])
async def create_user_with_roles(data: UserCreateWithRoles, service: UserService = Depends(get_user_service)):
    return service.create_user_with_roles(data)


@router.put("/{user_id}", response_model=UserResponse, dependencies=[Depends(can_update)])
async def update_user(user_id: int, data: UserUpdate, service: UserService = Depends(get_user_service)):
    return service.update_user(user_id, data)


@router.put("/{user_id}/with-roles", response_model=UserResponse, dependencies=[Depends(can_update)])
async def update_user_with_roles(
    user_id: int, data: UserUpdateWithRoles, service: UserService = Depends(get_user_service)
):
    return service.update_user_with_roles(user_id, data)


@router.post("/{user_id}/roles", response_model=UserResponse, dependencies=[Depends(can_update)])
async def assign_roles(user_id: int, data: AssignRolesRequest, service: UserService = Depends(get_user_service)):
    return service.assign_roles(user_id, data.role_ids)


@router.patch("/delete-logical/{user_id}", dependencies=[Depends(can_delete)])
async def delete_user_logical(user_id: int, service: UserService = Depends(get_user_service)):
    return service.delete_logical(user_id)


@router.delete("/{user_id}", dependencies=[Depends(can_delete)])
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    return service.delete_user(user_id)


# ============================================================================
# ASSIGNMENTS
# ============================================================================


@assignments_router.get("", response_model=list[AssignmentResponse], dependencies=[Depends(can_read)])
async def get_assignments(service: AssignmentService = Depends(get_assignment_service)):
    return service.get_assignments()


@assignments_router.get("/user/{user_id}", response_model=list[AssignmentResponse], dependencies=[Depends(can_read)])
async def get_user_assignments(user_id: int, service: AssignmentService = Depends(get_assignment_service)):
    return service.get_user_assignments(user_id)


@assignments_router.post("", response_model=AssignmentResponse, status_code=201, dependencies=[Depends(can_update)])
async def assign_appointment_type(data: AssignmentCreate, service: AssignmentService = Depends(get_assignment_service)):
    return service.assign(data.user_id, data.appointment_type_id)


@assignments_router.post("/bulk", response_model=list[AssignmentResponse], status_code=201, dependencies=[Depends(can_update)])
async def bulk_assign(data: BulkAssignmentCreate, service: AssignmentService = Depends(get_assignment_service)):
    return service.bulk_assign(data.user_id, data.appointment_type_ids)


@assignments_router.delete("/{assignment_id}", dependencies=[Depends(can_update)])
async def remove_assignment(assignment_id: int, service: AssignmentService = Depends(get_assignment_service)):
    return service.remove(assignment_id)
