"""Setup domain schemas"""

from datetime import datetime
from typing import Optional

from ...shared.schemas import CamelModel
from ..appointment_types.schemas import AppointmentTypeCreate
from ..branches.schemas import BranchCreate
from ..clients.schemas import ClientCreate


class ScheduleConfiguration(CamelModel):
    branch_id: int
    appointment_type_id: int
    times: list[str] = []


class InitialDataConfiguration(CamelModel):
    branches: list[BranchCreate] = []
    appointment_types: list[AppointmentTypeCreate] = []
    clients: list[ClientCreate] = []


class ScheduleConfigurationResult(CamelModel):
    message: str
    created_times: int
    total_times: int
    errors: list[str]


class BulkScheduleConfigurationResult(CamelModel):
    message: str
    processed_configurations: int
    successful_configurations: int
    total_created_times: int
    errors: list[str]


class InitialDataResult(CamelModel):
    message: str
    results: list[str]
    errors: list[str]
    total_success: int
    total_errors: int


class AdminCredentials(CamelModel):
    username: str
    password: str
    note: str


class InitializeDataResult(CamelModel):
    message: str
    tables_seeded: list[str]
    admin_credentials: Optional[AdminCredentials] = None


class SetupHealthResponse(CamelModel):
    status: str
    timestamp: datetime
    service: str
    version: str
