"""User service - Business logic for users, roles and type assignments"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import get_user_permissions
from ...models import AppointmentType, User, UserAssignment
from ...security_utils import hash_password
from .repository import AssignmentRepository, UserRepository
from .schemas import UserCreate, UserCreateWithRoles, UserUpdate, UserUpdateWithRoles

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def get_users(self, include_inactive: bool = False) -> list[User]:
        return self.repo.get_users(self.db, include_inactive)

    def get_user(self, user_id: int) -> User:
        user = self.repo.get_user_by_id(self.db, user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    def get_user_by_username(self, username: str) -> User:
        user = self.repo.get_user_by_username(self.db, username)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    def get_user_roles(self, user_id: int):
        return [rol for rol in self.get_user(user_id).roles if rol.is_active]

    def get_user_permissions(self, user_id: int) -> list[str]:
        return get_user_permissions(self.db, self.get_user(user_id))

    def has_permission(self, user_id: int, permission: str) -> bool:
        return permission.strip().lower() in self.get_user_permissions(user_id)

    def _check_unique(self, username: Optional[str], email: Optional[str], user_id: Optional[int] = None) -> None:
        if username:
            existing = self.repo.get_user_by_username(self.db, username)
            if existing and existing.id != user_id:
                raise HTTPException(status_code=400, detail="Username already exists")
        if email:
            existing = self.repo.get_user_by_email(self.db, email)
            if existing and existing.id != user_id:
                raise HTTPException(status_code=400, detail="Email already exists")

    def _set_roles(self, user: User, role_ids: list[int]) -> None:
        roles = self.repo.get_roles_by_ids(self.db, role_ids)
        missing = set(role_ids) - {rol.id for rol in roles}
        if missing:
            raise HTTPException(status_code=404, detail=f"Roles not found: {sorted(missing)}")
        user.roles = roles

    def create_user(self, data: UserCreate, role_ids: Optional[list[int]] = None) -> User:
        self._check_unique(data.username, data.email)

        user = User(
            username=data.username,
            email=data.email,
            password=hash_password(data.password),
            full_name=data.full_name,
            identification_type=data.identification_type,
            identification_number=data.identification_number,
            phone=data.phone,
            address=data.address,
            allowed_tabs=",".join(data.allowed_tabs) if data.allowed_tabs else None,
        )
        if role_ids:
            self._set_roles(user, role_ids)

        created = self.repo.add(self.db, user)
        logger.info(f"✅ User {created.username} created with {len(created.roles)} roles")
        return created

    def create_user_with_roles(self, data: UserCreateWithRoles) -> User:
        return self.create_user(data, data.role_ids)

    def update_user(self, user_id: int, data: UserUpdate) -> User:
        user = self.get_user(user_id)
        updates = data.model_dump(exclude_unset=True, exclude={"role_ids"})
        self._check_unique(updates.get("username"), updates.get("email"), user_id=user.id)

        password = updates.pop("password", None)
        if password:
            user.password = hash_password(password)
        for key, value in updates.items():
            if value is not None:
                setattr(user, key, value)
        return self.repo.save(self.db, user)

    def update_user_with_roles(self, user_id: int, data: UserUpdateWithRoles) -> User:
        user = self.update_user(user_id, data)
        if data.role_ids is not None:
            self._set_roles(user, data.role_ids)
            user = self.repo.save(self.db, user)
        return user

    def assign_roles(self, user_id: int, role_ids: list[int]) -> User:
        user = self.get_user(user_id)
        self._set_roles(user, role_ids)
        logger.info(f"🔑 Roles {role_ids} assigned to user {user.username}")
        return self.repo.save(self.db, user)

    def delete_user(self, user_id: int) -> dict:
        user = self.get_user(user_id)
        self.repo.delete_user(self.db, user)
        return {"message": "User deleted successfully"}

    def delete_logical(self, user_id: int) -> dict:
        user = self.get_user(user_id)
        user.is_active = False
        self.repo.save(self.db, user)
        return {"message": "User deactivated successfully"}


class AssignmentService:
    """Which appointment types each user attends"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AssignmentRepository()

    def get_assignments(self) -> list[UserAssignment]:
        return self.repo.get_assignments(self.db)

    def get_user_assignments(self, user_id: int) -> list[UserAssignment]:
        return self.repo.get_by_user(self.db, user_id)

    def assign(self, user_id: int, appointment_type_id: int) -> UserAssignment:
        if not UserRepository.get_user_by_id(self.db, user_id):
            raise HTTPException(status_code=404, detail="User not found")
        if not self.db.query(AppointmentType).filter(AppointmentType.id == appointment_type_id).first():
            raise HTTPException(status_code=404, detail="Appointment type not found")

        assignment = self.repo.get_assignment(self.db, user_id, appointment_type_id)
        if assignment and assignment.is_active:
            raise HTTPException(status_code=400, detail="Appointment type already assigned to this user")

        if assignment:
            assignment.is_active = True
        else:
            assignment = UserAssignment(user_id=user_id, appointment_type_id=appointment_type_id)
            self.db.add(assignment)
        self.db.commit()
        self.db.refresh(assignment)
        logger.info(f"📌 Appointment type {appointment_type_id} assigned to user {user_id}")
        return assignment

    def bulk_assign(self, user_id: int, appointment_type_ids: list[int]) -> list[UserAssignment]:
        """Assign several types; pairs already assigned are skipped"""
        assigned = []
        for type_id in dict.fromkeys(appointment_type_ids):
            existing = self.repo.get_assignment(self.db, user_id, type_id)
            if existing and existing.is_active:
                continue
            assigned.append(self.assign(user_id, type_id))
        return assigned

    def remove(self, assignment_id: int) -> dict:
        assignment = self.repo.get_assignment_by_id(self.db, assignment_id)
        if not assignment or not assignment.is_active:
            raise HTTPException(status_code=404, detail="Assignment not found")
        assignment.is_active = False
        self.db.commit()
        return {"message": "Assignment removed successfully"}
