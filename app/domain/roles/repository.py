"""Role repository - Roles, forms and role/form permissions"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Form, Rol, RolFormPermission, User


class RolRepository:
    @staticmethod
    def get_roles(db: Session, include_inactive: bool = False) -> list[Rol]:
        query = db.query(Rol)
        if not include_inactive:
            query = query.filter(Rol.is_active == True)  # noqa: E712
        return query.order_by(Rol.name).all()

    @staticmethod
    def get_rol_by_id(db: Session, rol_id: int) -> Optional[Rol]:
        return db.query(Rol).filter(Rol.id == rol_id).first()

    @staticmethod
    def get_rol_by_code(db: Session, code: str) -> Optional[Rol]:
        return db.query(Rol).filter(Rol.code == code.strip().upper()).first()

    @staticmethod
    def get_roles_by_user(db: Session, user_id: int) -> list[Rol]:
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            return []
        return [rol for rol in user.roles if rol.is_active]

    @staticmethod
    def add(db: Session, rol: Rol) -> Rol:
        db.add(rol)
        db.commit()
        db.refresh(rol)
        return rol

    @staticmethod
    def save(db: Session, rol: Rol) -> Rol:
        db.commit()
        db.refresh(rol)
        return rol

    @staticmethod
    def delete_rol(db: Session, rol: Rol) -> None:
        db.delete(rol)
        db.commit()


class PermissionRepository:
    @staticmethod
    def get_forms(db: Session) -> list[Form]:
        return db.query(Form).filter(Form.is_active == True).order_by(Form.name).all()  # noqa: E712

    @staticmethod
    def get_form_by_id(db: Session, form_id: int) -> Optional[Form]:
        return db.query(Form).filter(Form.id == form_id).first()

    @staticmethod
    def get_permissions(db: Session, rol_id: Optional[int] = None) -> list[RolFormPermission]:
        query = db.query(RolFormPermission).options(
            joinedload(RolFormPermission.rol), joinedload(RolFormPermission.form)
        )
        query = query.filter(RolFormPermission.is_active == True)  # noqa: E712
        if rol_id is not None:
            query = query.filter(RolFormPermission.rol_id == rol_id)
        return query.order_by(RolFormPermission.rol_id, RolFormPermission.form_id).all()

    @staticmethod
    def get_permission(db: Session, rol_id: int, form_id: int) -> Optional[RolFormPermission]:
        return (
            db.query(RolFormPermission)
            .filter(RolFormPermission.rol_id == rol_id, RolFormPermission.form_id == form_id)
            .first()
        )
