"""Branch repository - Database operations for branches"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Branch


class BranchRepository:
    """Repository for branch database operations"""

    @staticmethod
    def get_branches(db: Session, include_inactive: bool = False) -> list[Branch]:
        query = db.query(Branch)
        if not include_inactive:
            query = query.filter(Branch.is_active == True)  # noqa: E712
        return query.order_by(Branch.name).all()

    @staticmethod
    def get_branch_by_id(db: Session, branch_id: int) -> Optional[Branch]:
        return db.query(Branch).filter(Branch.id == branch_id).first()

    @staticmethod
    def get_active_branch(db: Session, branch_id: int) -> Optional[Branch]:
        return (
            db.query(Branch)
            .filter(Branch.id == branch_id, Branch.is_active == True)  # noqa: E712
            .first()
        )

    @staticmethod
    def get_branch_by_code(db: Session, code: str) -> Optional[Branch]:
        return db.query(Branch).filter(Branch.code == code.strip().upper()).first()

    @staticmethod
    def get_main_branch(db: Session) -> Optional[Branch]:
        return (
            db.query(Branch)
            .filter(Branch.is_main == True, Branch.is_active == True)  # noqa: E712
            .first()
        )

    @staticmethod
    def create_branch(db: Session, **branch_data) -> Branch:
        branch = Branch(**branch_data)
        db.add(branch)
        db.commit()
        db.refresh(branch)
        return branch

    @staticmethod
    def update_branch(db: Session, branch: Branch, **updates) -> Branch:
        for key, value in updates.items():
            if value is not None and hasattr(branch, key):
                setattr(branch, key, value)
        db.commit()
        db.refresh(branch)
        return branch

    @staticmethod
    def delete_branch(db: Session, branch: Branch) -> None:
        db.delete(branch)
        db.commit()
