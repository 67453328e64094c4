"""Role service - Roles and the permissions they grant per form"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Rol, RolFormPermission, User
from .repository import PermissionRepository, RolRepository
from .schemas import FormPermissionRequest, RolCreate, RolUpdate

logger = logging.getLogger(__name__)


class RolService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = RolRepository()

    def get_roles(self, include_inactive: bool = False) -> list[Rol]:
        return self.repo.get_roles(self.db, include_inactive)

    def get_rol(self, rol_id: int) -> Rol:
        rol = self.repo.get_rol_by_id(self.db, rol_id)
        if not rol:
            raise HTTPException(status_code=404, detail="Role not found")
        return rol

    def get_rol_by_code(self, code: str) -> Rol:
        rol = self.repo.get_rol_by_code(self.db, code)
        if not rol:
            raise HTTPException(status_code=404, detail="Role not found")
        return rol

    def get_roles_by_user(self, user_id: int) -> list[Rol]:
        return self.repo.get_roles_by_user(self.db, user_id)

    def create_rol(self, data: RolCreate) -> Rol:
        if self.repo.get_rol_by_code(self.db, data.code):
            raise HTTPException(status_code=400, detail="A role with this code already exists")
        rol = self.repo.add(self.db, Rol(name=data.name, code=data.code.upper()))
        logger.info(f"✅ Role {rol.code} created")
        return rol

    def update_rol(self, rol_id: int, data: RolUpdate) -> Rol:
        rol = self.get_rol(rol_id)
        if data.code and data.code.strip().upper() != rol.code:
            if self.repo.get_rol_by_code(self.db, data.code):
                raise HTTPException(status_code=400, detail="A role with this code already exists")
            rol.code = data.code.strip().upper()
        if data.name and data.name.strip():
            rol.name = data.name.strip()
        if data.is_active is not None:
            rol.is_active = data.is_active
        return self.repo.save(self.db, rol)

    def delete_rol(self, rol_id: int) -> dict:
        self.repo.delete_rol(self.db, self.get_rol(rol_id))
        return {"message": "Role deleted successfully"}

    def delete_logical(self, rol_id: int) -> dict:
        rol = self.get_rol(rol_id)
        rol.is_active = False
        self.repo.save(self.db, rol)
        return {"message": "Role deactivated successfully"}


def permission_to_dict(permission: RolFormPermission) -> dict:
    return {
        "id": permission.id,
        "rol_id": permission.rol_id,
        "rol_name": permission.rol.name if permission.rol else None,
        "form_id": permission.form_id,
        "form_code": permission.form.code if permission.form else None,
        "form_name": permission.form.name if permission.form else None,
        "can_read": permission.can_read,
        "can_create": permission.can_create,
        "can_update": permission.can_update,
        "can_delete": permission.can_delete,
    }


class PermissionService:
    """Role/form permission matrix"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PermissionRepository()

    def get_forms(self):
        return self.repo.get_forms(self.db)

    def get_permissions(self, rol_id=None) -> list[dict]:
        return [permission_to_dict(p) for p in self.repo.get_permissions(self.db, rol_id)]

    def get_role_summaries(self) -> list[dict]:
        summaries = []
        for rol in RolRepository.get_roles(self.db):
            codes: set[str] = set()
            for permission in self.repo.get_permissions(self.db, rol.id):
                if permission.form is not None:
                    codes.update(permission.permission_codes())
            summaries.append(
                {"rol_id": rol.id, "rol_name": rol.name, "rol_code": rol.code, "permissions": sorted(codes)}
            )
        return summaries

    def _check_refs(self, rol_id: int, form_id: int) -> None:
        if not RolRepository.get_rol_by_id(self.db, rol_id):
            raise HTTPException(status_code=404, detail="Role not found")
        if not self.repo.get_form_by_id(self.db, form_id):
            raise HTTPException(status_code=404, detail="Form not found")

    def _apply(self, permission: RolFormPermission, data: FormPermissionRequest) -> dict:
        permission.can_read = data.can_read
        permission.can_create = data.can_create
        permission.can_update = data.can_update
        permission.can_delete = data.can_delete
        permission.is_active = True
        self.db.commit()
        self.db.refresh(permission)
        return permission_to_dict(permission)

    def assign_permission(self, data: FormPermissionRequest) -> dict:
        """Grant a form permission to a role; an existing row is overwritten"""
        self._check_refs(data.rol_id, data.form_id)
        permission = self.repo.get_permission(self.db, data.rol_id, data.form_id)
        if not permission:
            permission = RolFormPermission(rol_id=data.rol_id, form_id=data.form_id)
            self.db.add(permission)
        logger.info(f"🔑 Permissions on form {data.form_id} set for role {data.rol_id}")
        return self._apply(permission, data)

    def update_permission(self, data: FormPermissionRequest) -> dict:
        permission = self.repo.get_permission(self.db, data.rol_id, data.form_id)
        if not permission or not permission.is_active:
            raise HTTPException(status_code=404, detail="Permission not found")
        return self._apply(permission, data)

    def remove_permission(self, rol_id: int, form_id: int) -> dict:
        permission = self.repo.get_permission(self.db, rol_id, form_id)
        if not permission:
            raise HTTPException(status_code=404, detail="Permission not found")
        self.db.delete(permission)
        self.db.commit()
        return {"message": "Permission removed successfully"}

    def update_user_tabs(self, user_id: int, tabs: list[str]) -> dict:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        cleaned = [tab.strip() for tab in tabs if tab and tab.strip()]
        user.allowed_tabs = ",".join(cleaned) if cleaned else None
        self.db.commit()
        return {"userId": user.id, "allowedTabs": user.allowed_tabs_list}
