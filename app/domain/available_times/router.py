"""Available time router - FastAPI endpoints for configured time slots"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_permission
from ...database import get_db
from .schemas import (
    AvailableTimeBulkCreate,
    AvailableTimeCreate,
    AvailableTimeResponse,
    AvailableTimeUpdate,
)
from .service import AvailableTimeService

router = APIRouter(prefix="/api/v1/available-times", tags=["Available Times"])


def get_available_time_service(db: Session = Depends(get_db)) -> AvailableTimeService:
    """Dependency injection for AvailableTimeService"""
    return AvailableTimeService(db)


@router.get("", response_model=list[AvailableTimeResponse], dependencies=[Depends(require_permission("available_times.read"))])
async def get_times(service: AvailableTimeService = Depends(get_available_time_service)):
    return service.get_times()


@router.get("/branch/{branch_id}", response_model=list[AvailableTimeResponse], dependencies=[Depends(require_permission("available_times.read"))])
async def get_times_by_branch(branch_id: int, service: AvailableTimeService = Depends(get_available_time_service)):
    return service.get_times_by_branch(branch_id)


@router.get("/appointment-type/{type_id}", response_model=list[AvailableTimeResponse], dependencies=[Depends(require_permission("available_times.read"))])
async def get_times_by_type(type_id: int, service: AvailableTimeService = Depends(get_available_time_service)):
    return service.get_times_by_type(type_id)


@router.get("/{time_id}", response_model=AvailableTimeResponse, dependencies=[Depends(require_permission("available_times.read"))])
async def get_time(time_id: int, service: AvailableTimeService = Depends(get_available_time_service)):
    return service.get_time(time_id)


@router.post("", response_model=AvailableTimeResponse, status_code=201, dependencies=[Depends(require_permission("available_times.create"))])
async def create_time(data: AvailableTimeCreate, service: AvailableTimeService = Depends(get_available_time_service)):
    return service.create_time(data)


@router.post("/bulk", response_model=list[AvailableTimeResponse], status_code=201, dependencies=[Depends(require_permission("available_times.create"))])
async def create_times_bulk(
    data: AvailableTimeBulkCreate,
    service: AvailableTimeService = Depends(get_available_time_service),
):
    return service.create_times_bulk(data)


@router.put("/{time_id}", response_model=AvailableTimeResponse, dependencies=[Depends(require_permission("available_times.update"))])
async def update_time(
    time_id: int,
    data: AvailableTimeUpdate,
    service: AvailableTimeService = Depends(get_available_time_service),
):
    return service.update_time(time_id, data)


@router.patch("/delete-logical/{time_id}", dependencies=[Depends(require_permission("available_times.delete"))])
async def delete_time_logical(time_id: int, service: AvailableTimeService = Depends(get_available_time_service)):
    return service.delete_logical(time_id)
