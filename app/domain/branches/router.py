"""Branch router - FastAPI endpoints for branch operations"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_permission
from ...database import get_db
from .schemas import BranchCreate, BranchResponse, BranchUpdate
from .service import BranchService

router = APIRouter(prefix="/api/v1/branches", tags=["Branches"])


def get_branch_service(db: Session = Depends(get_db)) -> BranchService:
    """Dependency injection for BranchService"""
    return BranchService(db)


@router.get("", response_model=list[BranchResponse], dependencies=[Depends(require_permission("branches.read"))])
async def get_branches(service: BranchService = Depends(get_branch_service)):
    """Active branches"""
    return service.get_branches()


@router.get("/all-including-inactive", response_model=list[BranchResponse], dependencies=[Depends(require_permission("branches.read"))])
async def get_all_branches(service: BranchService = Depends(get_branch_service)):
    return service.get_branches(include_inactive=True)


@router.get("/main", response_model=BranchResponse, dependencies=[Depends(require_permission("branches.read"))])
async def get_main_branch(service: BranchService = Depends(get_branch_service)):
    return service.get_main_branch()


@router.get("/code/{code}", response_model=BranchResponse, dependencies=[Depends(require_permission("branches.read"))])
async def get_branch_by_code(code: str, service: BranchService = Depends(get_branch_service)):
    return service.get_branch_by_code(code)


@router.get("/{branch_id}", response_model=BranchResponse, dependencies=[Depends(require_permission("branches.read"))])
async def get_branch(branch_id: int, service: BranchService = Depends(get_branch_service)):
    return service.get_branch(branch_id)


@router.post("", response_model=BranchResponse, status_code=201, dependencies=[Depends(require_permission("branches.create"))])
async def create_branch(data: BranchCreate, service: BranchService = Depends(get_branch_service)):
    return service.create_branch(data)


@router.put("/{branch_id}", response_model=BranchResponse, dependencies=[Depends(require_permission("branches.update"))])
async def update_branch(branch_id: int, data: BranchUpdate, service: BranchService = Depends(get_branch_service)):
    return service.update_branch(branch_id, data)


@router.patch("/delete-logical/{branch_id}", dependencies=[Depends(require_permission("branches.delete"))])
async def delete_branch_logical(branch_id: int, service: BranchService = Depends(get_branch_service)):
    return service.delete_logical(branch_id)


@router.delete("/{branch_id}", dependencies=[Depends(require_permission("branches.delete"))])
async def delete_branch(branch_id: int, service: BranchService = Depends(get_branch_service)):
    return service.delete_branch(branch_id)
