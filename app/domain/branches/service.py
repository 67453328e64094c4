"""Branch service - Business logic for branch operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Branch
from .repository import BranchRepository
from .schemas import BranchCreate, BranchUpdate

logger = logging.getLogger(__name__)


class BranchService:
    """Service layer for branch business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BranchRepository()

    def get_branches(self, include_inactive: bool = False) -> list[Branch]:
        return self.repo.get_branches(self.db, include_inactive)

    def get_branch(self, branch_id: int) -> Branch:
        branch = self.repo.get_branch_by_id(self.db, branch_id)
        if not branch:
            raise HTTPException(status_code=404, detail="Branch not found")
        return branch

    def get_branch_by_code(self, code: str) -> Branch:
        branch = self.repo.get_branch_by_code(self.db, code)
        if not branch:
            raise HTTPException(status_code=404, detail="Branch not found")
        return branch

    def get_main_branch(self) -> Branch:
        branch = self.repo.get_main_branch(self.db)
        if not branch:
            raise HTTPException(status_code=404, detail="Main branch not configured")
        return branch

    def create_branch(self, data: BranchCreate) -> Branch:
        code = data.code.upper()
        if self.repo.get_branch_by_code(self.db, code):
            raise HTTPException(status_code=400, detail="A branch with this code already exists")

        branch = self.repo.create_branch(
            self.db,
            name=data.name,
            code=code,
            address=data.address,
            phone=data.phone,
            city=data.city,
            state=data.state,
            is_main=data.is_main,
            color_primary=data.color_primary,
        )
        logger.info(f"✅ Branch created: {branch.code}")
        return branch

    def update_branch(self, branch_id: int, data: BranchUpdate) -> Branch:
        branch = self.get_branch(branch_id)
        updates = data.model_dump(exclude_unset=True)
        if updates.get("code"):
            updates["code"] = updates["code"].strip().upper()
            existing = self.repo.get_branch_by_code(self.db, updates["code"])
            if existing and existing.id != branch.id:
                raise HTTPException(status_code=400, detail="A branch with this code already exists")
        return self.repo.update_branch(self.db, branch, **updates)

    def delete_branch(self, branch_id: int) -> dict:
        branch = self.get_branch(branch_id)
        if branch.appointments:
            raise HTTPException(
                status_code=400, detail="Cannot delete a branch with appointments. Deactivate it instead"
            )
        self.repo.delete_branch(self.db, branch)
        return {"message": "Branch deleted successfully"}

    def delete_logical(self, branch_id: int) -> dict:
        branch = self.get_branch(branch_id)
        self.repo.update_branch(self.db, branch, is_active=False)
        logger.info(f"🗑️ Branch {branch_id} deactivated")
        return {"message": "Branch deactivated successfully"}
