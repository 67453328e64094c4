"""
Setup service - First-run bootstrap and bulk configuration

init-data seeds forms, roles, the ADMIN grants and the first admin user.
The configure-* operations create branches, appointment types, clients and
available times in bulk, collecting per-item errors instead of failing the
whole request.
"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import AppointmentType, AvailableTime, Branch
from ...seed import ADMIN_INITIAL_PASSWORD, ADMIN_USERNAME, initialize_database
from ...shared.validators import validate_time_slot
from ..appointment_types.service import AppointmentTypeService
from ..available_times.repository import AvailableTimeRepository
from ..branches.service import BranchService
from ..clients.service import ClientService
from .schemas import (
    AdminCredentials,
    BulkScheduleConfigurationResult,
    InitialDataConfiguration,
    InitialDataResult,
    InitializeDataResult,
    ScheduleConfiguration,
    ScheduleConfigurationResult,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "ElectroHuila API"
APPLICATION_NAME = "ElectroHuila - Sistema de Agendamiento de Citas"
API_VERSION = "1.0.0"

FEATURES = [
    "Gestión de citas",
    "Agendamiento público",
    "Gestión de clientes",
    "Sucursales y horarios",
    "Días festivos",
    "Notificaciones por email y WhatsApp",
    "Notificaciones en tiempo real",
    "Roles y permisos",
]


def _error_text(error: Exception) -> str:
    if isinstance(error, HTTPException):
        return str(error.detail)
    return str(error)


class SetupService:
    def __init__(self, db: Session):
        self.db = db
        self.times = AvailableTimeRepository()

    def initialize_data(self) -> InitializeDataResult:
        counts = initialize_database(self.db)
        logger.info(f"🌱 Database initialization finished: {counts}")
        credentials = None
        if counts["users"]:
            credentials = AdminCredentials(
                username=ADMIN_USERNAME,
                password=ADMIN_INITIAL_PASSWORD,
                note="Change password after first login",
            )
        return InitializeDataResult(
            message="Database initialization completed successfully",
            tables_seeded=[f"{table} ({added} registros)" for table, added in counts.items()],
            admin_credentials=credentials,
        )

    # ==========================================
    # Schedules
    # ==========================================

    def _is_valid(self, config: ScheduleConfiguration) -> bool:
        return config.branch_id > 0 and config.appointment_type_id > 0 and bool(config.times)

    def _references_exist(self, config: ScheduleConfiguration) -> bool:
        branch = self.db.query(Branch).filter(Branch.id == config.branch_id).first()
        appointment_type = self.db.query(AppointmentType).filter(AppointmentType.id == config.appointment_type_id).first()
        return branch is not None and appointment_type is not None

    def _create_times(self, config: ScheduleConfiguration, errors: list[str]) -> int:
        """Create the configuration's valid, not yet configured times; problems go to errors"""
        new_slots = []
        for raw in config.times:
            try:
                value = validate_time_slot(raw.strip())
            except ValueError:
                errors.append(f"Invalid time format: {raw}")
                continue
            if self.times.exists(self.db, config.branch_id, value, config.appointment_type_id) or any(
                slot.time == value for slot in new_slots
            ):
                errors.append(f"Time {value} already configured for branch {config.branch_id}")
                continue
            new_slots.append(
                AvailableTime(
                    branch_id=config.branch_id,
                    appointment_type_id=config.appointment_type_id,
                    time=value,
                )
            )
        if new_slots:
            self.times.add_all(self.db, new_slots)
        return len(new_slots)

    def configure_schedule(self, config: ScheduleConfiguration) -> ScheduleConfigurationResult:
        if not self._is_valid(config):
            raise HTTPException(status_code=400, detail="Invalid configuration data")
        if not self._references_exist(config):
            raise HTTPException(status_code=404, detail="Branch or appointment type not found")

        errors: list[str] = []
        created = self._create_times(config, errors)
        logger.info(f"🕘 {created} times configured for branch {config.branch_id}, type {config.appointment_type_id}")
        return ScheduleConfigurationResult(
            message="Schedule configuration completed",
            created_times=created,
            total_times=len(config.times),
            errors=errors,
        )

    def bulk_configure_schedule(self, configs: list[ScheduleConfiguration]) -> BulkScheduleConfigurationResult:
        errors: list[str] = []
        total_created = 0
        successful = 0
        for config in configs:
            if not self._is_valid(config) or not self._references_exist(config):
                errors.append(
                    f"Invalid configuration for branch {config.branch_id}, type {config.appointment_type_id}"
                )
                continue
            created = self._create_times(config, errors)
            total_created += created
            if created:
                successful += 1
        logger.info(f"🕘 Bulk schedule: {successful}/{len(configs)} configurations, {total_created} times")
        return BulkScheduleConfigurationResult(
            message="Bulk schedule configuration completed",
            processed_configurations=len(configs),
            successful_configurations=successful,
            total_created_times=total_created,
            errors=errors,
        )

    # ==========================================
    # Initial data
    # ==========================================

    def _create_each(self, items: list, create, label: str, name_of, results: list[str], errors: list[str]) -> None:
        for item in items:
            name: Optional[str] = name_of(item)
            try:
                create(item)
                results.append(f"{label} '{name}' created successfully")
            except (HTTPException, ValueError) as e:
                self.db.rollback()
                errors.append(f"Error creating {label.lower()} '{name}': {_error_text(e)}")

    def configure_initial_data(self, data: InitialDataConfiguration) -> InitialDataResult:
        results: list[str] = []
        errors: list[str] = []

        self._create_each(
            data.branches, BranchService(self.db).create_branch, "Branch", lambda b: b.name, results, errors
        )
        self._create_each(
            data.appointment_types,
            AppointmentTypeService(self.db).create_type,
            "Appointment type",
            lambda t: t.name,
            results,
            errors,
        )
        self._create_each(
            data.clients, ClientService(self.db).create_client, "Client", lambda c: c.full_name, results, errors
        )

        logger.info(f"🌱 Initial data configured: {len(results)} created, {len(errors)} errors")
        return InitialDataResult(
            message="Initial data configuration completed",
            results=results,
            errors=errors,
            total_success=len(results),
            total_errors=len(errors),
        )
