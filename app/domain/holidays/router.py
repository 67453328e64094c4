"""Holiday router - FastAPI endpoints for holiday operations"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import require_permission
from ...database import get_db
from .schemas import (
    HolidayCheckResponse,
    HolidayCreate,
    HolidayResponse,
    HolidayUpdate,
    LocalHolidayCreate,
)
from .service import HolidayService

router = APIRouter(prefix="/api/v1/holidays", tags=["Holidays"])


def get_holiday_service(db: Session = Depends(get_db)) -> HolidayService:
    """Dependency injection for HolidayService"""
    return HolidayService(db)


@router.get("", response_model=list[HolidayResponse], dependencies=[Depends(require_permission("holidays.read"))])
async def get_holidays(
    year: Optional[int] = Query(None),
    service: HolidayService = Depends(get_holiday_service),
):
    return service.get_holidays(year)


@router.get("/range", response_model=list[HolidayResponse], dependencies=[Depends(require_permission("holidays.read"))])
async def get_holidays_in_range(
    start: date = Query(...),
    end: date = Query(...),
    service: HolidayService = Depends(get_holiday_service),
):
    return service.get_holidays_in_range(start, end)


@router.get("/check", response_model=HolidayCheckResponse, dependencies=[Depends(require_permission("holidays.read"))])
async def check_holiday(
    date: date = Query(...),
    branch_id: Optional[int] = Query(None, alias="branchId"),
    service: HolidayService = Depends(get_holiday_service),
):
    """Whether the date is a holiday for the branch (national and company holidays apply everywhere)"""
    holiday = service.check_date(date, branch_id)
    return HolidayCheckResponse(
        is_holiday=holiday is not None,
        holiday=HolidayResponse.model_validate(holiday) if holiday else None,
    )


@router.get("/{holiday_id}", response_model=HolidayResponse, dependencies=[Depends(require_permission("holidays.read"))])
async def get_holiday(holiday_id: int, service: HolidayService = Depends(get_holiday_service)):
    return service.get_holiday(holiday_id)


# ============================================================================
# CREATE / UPDATE
# ============================================================================


@router.post("/national", response_model=HolidayResponse, status_code=201, dependencies=[Depends(require_permission("holidays.create"))])
async def create_national_holiday(data: HolidayCreate, service: HolidayService = Depends(get_holiday_service)):
    return service.create_national_holiday(data)


@router.post("/local", response_model=HolidayResponse, status_code=201, dependencies=[Depends(require_permission("holidays.create"))])
async def create_local_holiday(data: LocalHolidayCreate, service: HolidayService = Depends(get_holiday_service)):
    return service.create_local_holiday(data)


@router.post("/company", response_model=HolidayResponse, status_code=201, dependencies=[Depends(require_permission("holidays.create"))])
async def create_company_holiday(data: HolidayCreate, service: HolidayService = Depends(get_holiday_service)):
    return service.create_company_holiday(data)


@router.put("/{holiday_id}", response_model=HolidayResponse, dependencies=[Depends(require_permission("holidays.update"))])
async def update_holiday(
    holiday_id: int,
    data: HolidayUpdate,
    service: HolidayService = Depends(get_holiday_service),
):
    return service.update_holiday(holiday_id, data)


@router.patch("/{holiday_id}/activate", response_model=HolidayResponse, dependencies=[Depends(require_permission("holidays.update"))])
async def activate_holiday(holiday_id: int, service: HolidayService = Depends(get_holiday_service)):
    return service.set_active(holiday_id, True)


@router.patch("/{holiday_id}/deactivate", response_model=HolidayResponse, dependencies=[Depends(require_permission("holidays.update"))])
async def deactivate_holiday(holiday_id: int, service: HolidayService = Depends(get_holiday_service)):
    return service.set_active(holiday_id, False)


@router.delete("/{holiday_id}", dependencies=[Depends(require_permission("holidays.delete"))])
async def delete_holiday(holiday_id: int, service: HolidayService = Depends(get_holiday_service)):
    return service.delete_holiday(holiday_id)
