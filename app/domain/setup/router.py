"""Setup router - Service status, first-run bootstrap and bulk configuration"""

from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import config
from ...auth import require_permission
from ...database import get_db
from .schemas import (
    BulkScheduleConfigurationResult,
    InitialDataConfiguration,
    InitialDataResult,
    InitializeDataResult,
    ScheduleConfiguration,
    ScheduleConfigurationResult,
    SetupHealthResponse,
)
from .service import API_VERSION, APPLICATION_NAME, FEATURES, SERVICE_NAME, SetupService

router = APIRouter(prefix="/api/v1/setup", tags=["Setup"])

can_configure = require_permission("settings.update")


def get_setup_service(db: Session = Depends(get_db)) -> SetupService:
    return SetupService(db)


@router.get("/health", response_model=SetupHealthResponse)
async def setup_health():
    return SetupHealthResponse(
        status="Healthy", timestamp=datetime.utcnow(), service=SERVICE_NAME, version=API_VERSION
    )


@router.get("/ping")
async def ping():
    return {"message": "pong", "timestamp": datetime.utcnow().isoformat()}


@router.get("/info")
async def info():
    return {
        "application": APPLICATION_NAME,
        "version": API_VERSION,
        "environment": config.ENVIRONMENT,
        "timestamp": datetime.utcnow().isoformat(),
        "features": FEATURES,
    }


@router.post("/init-data", response_model=InitializeDataResult)
async def init_data(service: SetupService = Depends(get_setup_service)):
    """Idempotent bootstrap; credentials are only returned when the admin user is created"""
    return service.initialize_data()


@router.post("/configure-schedule", response_model=ScheduleConfigurationResult, dependencies=[Depends(can_configure)])
async def configure_schedule(data: ScheduleConfiguration, service: SetupService = Depends(get_setup_service)):
    return service.configure_schedule(data)


@router.post(
    "/bulk-configure-schedule",
    response_model=BulkScheduleConfigurationResult,
    dependencies=[Depends(can_configure)],
)
async def bulk_configure_schedule(
    data: list[ScheduleConfiguration], service: SetupService = Depends(get_setup_service)
):
    return service.bulk_configure_schedule(data)


@router.post("/configure-initial-data", response_model=InitialDataResult, dependencies=[Depends(can_configure)])
async def configure_initial_data(data: InitialDataConfiguration, service: SetupService = Depends(get_setup_service)):
    return service.configure_initial_data(data)
