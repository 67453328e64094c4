"""Tests for the reminder and no-show background jobs"""

from datetime import date, datetime, time, timedelta
from unittest.mock import AsyncMock, patch

import pytest

from app.models import AppointmentStatus, SystemSetting
from app.services.notification_service import AppointmentNotificationService
from app.worker import WorkerSettings, appointment_reminder_task, expired_appointment_cleanup_task
from app.workers.appointment_jobs import mark_no_show_appointments, send_appointment_reminders

APPOINTMENT_DAY = date(2030, 3, 5)
LONG_AGO = datetime(2020, 1, 1)


@pytest.fixture
def reminder_mock():
    with patch.object(AppointmentNotificationService, "send_appointment_reminder", new=AsyncMock()) as mocked:
        yield mocked


class TestReminders:
    NOW = datetime.combine(APPOINTMENT_DAY - timedelta(days=1), time(10, 0))

    async def test_sends_for_appointments_in_window(self, db_session, make_appointment, reminder_mock):
        due = make_appointment(appointment_date=APPOINTMENT_DAY, appointment_time="09:00", updated_at=LONG_AGO)
        make_appointment(appointment_date=APPOINTMENT_DAY + timedelta(days=3), updated_at=LONG_AGO)
        make_appointment(
            appointment_date=APPOINTMENT_DAY,
            appointment_time="10:00",
            status_id=AppointmentStatus.CANCELLED,
            updated_at=LONG_AGO,
        )

        sent = await send_appointment_reminders(db_session, now=self.NOW)

        assert sent == 1
        reminder_mock.assert_awaited_once_with(due.id, 24)
        db_session.refresh(due)
        assert due.updated_at == self.NOW

    async def test_recently_touched_is_skipped(self, db_session, make_appointment, reminder_mock):
        make_appointment(
            appointment_date=APPOINTMENT_DAY, appointment_time="09:00", updated_at=self.NOW - timedelta(hours=1)
        )

        assert await send_appointment_reminders(db_session, now=self.NOW) == 0
        reminder_mock.assert_not_awaited()

    async def test_second_run_does_not_resend(self, db_session, make_appointment, reminder_mock):
        make_appointment(appointment_date=APPOINTMENT_DAY, appointment_time="09:00", updated_at=LONG_AGO)

        assert await send_appointment_reminders(db_session, now=self.NOW) == 1
        assert await send_appointment_reminders(db_session, now=self.NOW + timedelta(hours=1)) == 0

    async def test_disabled_by_setting(self, db_session, make_appointment, reminder_mock):
        db_session.add(SystemSetting.create("EMAIL_NOTIFICATIONS_ENABLED", "false", "BOOLEAN"))
        db_session.commit()
        make_appointment(appointment_date=APPOINTMENT_DAY, appointment_time="09:00", updated_at=LONG_AGO)

        assert await send_appointment_reminders(db_session, now=self.NOW) == 0
        reminder_mock.assert_not_awaited()

    async def test_failure_does_not_stop_the_batch(self, db_session, make_appointment, reminder_mock):
        make_appointment(appointment_date=APPOINTMENT_DAY, appointment_time="09:00", updated_at=LONG_AGO)
        make_appointment(appointment_date=APPOINTMENT_DAY, appointment_time="09:30", updated_at=LONG_AGO)
        reminder_mock.side_effect = [RuntimeError("smtp down"), None]

        assert await send_appointment_reminders(db_session, now=self.NOW) == 1
        assert reminder_mock.await_count == 2


class TestNoShow:
    async def test_marks_old_confirmed_appointments(self, db_session, make_appointment):
        now = datetime.combine(APPOINTMENT_DAY, time(12, 0))
        missed = make_appointment(
            appointment_date=APPOINTMENT_DAY, appointment_time="09:00", status_id=AppointmentStatus.CONFIRMED
        )
        too_recent = make_appointment(
            appointment_date=APPOINTMENT_DAY, appointment_time="10:30", status_id=AppointmentStatus.CONFIRMED
        )
        pending = make_appointment(
            appointment_date=APPOINTMENT_DAY, appointment_time="08:00", status_id=AppointmentStatus.PENDING
        )

        assert await mark_no_show_appointments(db_session, now=now) == 1

        for appointment in (missed, too_recent, pending):
            db_session.refresh(appointment)
        assert missed.status_id == AppointmentStatus.NO_SHOW
        assert too_recent.status_id == AppointmentStatus.CONFIRMED
        assert pending.status_id == AppointmentStatus.PENDING

    async def test_nothing_to_do(self, db_session):
        assert await mark_no_show_appointments(db_session, now=datetime(2030, 1, 1)) == 0


class TestWorkerSettings:
    def test_registers_cron_jobs(self):
        coroutines = {job.coroutine for job in WorkerSettings.cron_jobs}
        assert coroutines == {appointment_reminder_task, expired_appointment_cleanup_task}

    async def test_tasks_report_counts(self):
        with patch("app.worker.send_appointment_reminders", new=AsyncMock(return_value=3)), patch(
            "app.worker.mark_no_show_appointments", new=AsyncMock(return_value=2)
        ):
            assert await appointment_reminder_task({}) == {"sent": 3}
            assert await expired_appointment_cleanup_task({}) == {"processed": 2}
