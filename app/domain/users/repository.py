"""User repository - Users, role links and appointment-type assignments"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import Rol, User, UserAssignment


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_users(db: Session, include_inactive: bool = False) -> list[User]:
        query = db.query(User).options(joinedload(User.roles))
        if not include_inactive:
            query = query.filter(User.is_active == True)  # noqa: E712
        return query.order_by(User.username).all()

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_username(db: Session, username: str) -> Optional[User]:
        return db.query(User).filter(func.lower(User.username) == username.strip().lower()).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

    @staticmethod
    def get_roles_by_ids(db: Session, role_ids: list[int]) -> list[Rol]:
        if not role_ids:
            return []
        return db.query(Rol).filter(Rol.id.in_(role_ids), Rol.is_active == True).all()  # noqa: E712

    @staticmethod
    def add(db: Session, user: User) -> User:
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def save(db: Session, user: User) -> User:
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def delete_user(db: Session, user: User) -> None:
        db.delete(user)
        db.commit()


class AssignmentRepository:
    @staticmethod
    def get_assignments(db: Session) -> list[UserAssignment]:
        return (
            db.query(UserAssignment)
            .options(joinedload(UserAssignment.appointment_type))
            .filter(UserAssignment.is_active == True)  # noqa: E712
            .order_by(UserAssignment.user_id)
            .all()
        )

    @staticmethod
    def get_by_user(db: Session, user_id: int) -> list[UserAssignment]:
        return (
            db.query(UserAssignment)
            .options(joinedload(UserAssignment.appointment_type))
            .filter(UserAssignment.user_id == user_id, UserAssignment.is_active == True)  # noqa: E712
            .all()
        )

    @staticmethod
    def get_assignment(db: Session, user_id: int, appointment_type_id: int) -> Optional[UserAssignment]:
        """Existing link for the pair, active or not"""
        return (
            db.query(UserAssignment)
            .filter(
                UserAssignment.user_id == user_id,
                UserAssignment.appointment_type_id == appointment_type_id,
            )
            .first()
        )

    @staticmethod
    def get_assignment_by_id(db: Session, assignment_id: int) -> Optional[UserAssignment]:
        return db.query(UserAssignment).filter(UserAssignment.id == assignment_id).first()
