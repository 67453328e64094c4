"""
Appointment background jobs
Sends upcoming-appointment reminders and marks missed appointments as no-show
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ..database import SessionLocal
from ..domain.settings.service import get_bool_setting, get_int_setting
from ..models import Appointment, AppointmentStatus
from ..services.notification_service import AppointmentNotificationService

logger = logging.getLogger(__name__)

REMINDER_INTERVAL_SECONDS = 60 * 60
CLEANUP_INTERVAL_SECONDS = 6 * 60 * 60
CLEANUP_FIRST_RUN_DELAY_SECONDS = 60

# Confirmed appointments this long past their time become no-shows
NO_SHOW_THRESHOLD = timedelta(hours=2)

REMINDER_STATUSES = (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)


def _active_appointments(db: Session, statuses, first_day, last_day) -> list[Appointment]:
    return (
        db.query(Appointment)
        .filter(
            Appointment.status_id.in_(statuses),
            Appointment.is_active == True,  # noqa: E712
            Appointment.appointment_date >= first_day,
            Appointment.appointment_date <= last_day,
        )
        .all()
    )


async def send_appointment_reminders(db: Optional[Session] = None, now: Optional[datetime] = None) -> int:
    """
    Send reminders for PENDING/CONFIRMED appointments starting within the
    configured window. Returns the number of reminders sent.

    An appointment whose updated_at falls inside the last (hours - 1) hours is
    treated as already reminded.
    """
    logger.info("🔄 Checking for appointments requiring reminders...")

    owns_session = db is None
    db = db or SessionLocal()
    sent = 0
    try:
        if not get_bool_setting(db, "EMAIL_NOTIFICATIONS_ENABLED", True):
            logger.info("⏭️ Email notifications are disabled, skipping reminder job")
            return 0

        reminder_hours = get_int_setting(db, "APPOINTMENT_REMINDER_HOURS", 24)
        now = now or datetime.utcnow()
        window_end = now + timedelta(hours=reminder_hours + 1)
        recently_touched = now - timedelta(hours=reminder_hours - 1)

        upcoming = [
            appointment
            for appointment in _active_appointments(db, REMINDER_STATUSES, now.date(), window_end.date())
            if now < appointment.scheduled_at <= window_end
        ]
        if not upcoming:
            logger.info("✅ No appointments require reminders")
            return 0

        logger.info(f"📧 Found {len(upcoming)} appointments in the reminder window")
        notifier = AppointmentNotificationService(db)

        for appointment in upcoming:
            try:
                if appointment.updated_at and appointment.updated_at > recently_touched:
                    continue

                await notifier.send_appointment_reminder(appointment.id, reminder_hours)

                appointment.updated_at = now
                db.commit()
                sent += 1
                logger.info(f"✅ Reminder sent for appointment {appointment.id}")
            except Exception as e:
                db.rollback()
                logger.error(f"❌ Error sending reminder for appointment {appointment.id}: {e}")

        return sent
    finally:
        if owns_session:
            db.close()


async def mark_no_show_appointments(db: Optional[Session] = None, now: Optional[datetime] = None) -> int:
    """Mark CONFIRMED appointments more than two hours in the past as NO_SHOW"""
    logger.info("🔄 Checking for expired appointments...")

    owns_session = db is None
    db = db or SessionLocal()
    processed = 0
    try:
        now = now or datetime.utcnow()
        cutoff = now - NO_SHOW_THRESHOLD

        expired = [
            appointment
            for appointment in (
                db.query(Appointment)
                .filter(
                    Appointment.status_id == AppointmentStatus.CONFIRMED,
                    Appointment.is_active == True,  # noqa: E712
                    Appointment.appointment_date <= cutoff.date(),
                )
                .all()
            )
            if appointment.scheduled_at < cutoff
        ]
        if not expired:
            logger.info("✅ No expired appointments found")
            return 0

        logger.info(f"⏰ Found {len(expired)} expired appointments to mark as no-show")
        for appointment in expired:
            try:
                appointment.status_id = AppointmentStatus.NO_SHOW
                appointment.updated_at = now
                db.commit()
                processed += 1
                logger.info(f"✅ Appointment {appointment.appointment_number} marked as no-show")
            except Exception as e:
                db.rollback()
                logger.error(f"❌ Error marking appointment {appointment.id} as no-show: {e}")

        return processed
    finally:
        if owns_session:
            db.close()


async def _reminder_loop():
    while True:
        try:
            await send_appointment_reminders()
        except Exception as e:
            logger.error(f"❌ Error processing appointment reminders: {e}")
        await asyncio.sleep(REMINDER_INTERVAL_SECONDS)


async def _cleanup_loop():
    await asyncio.sleep(CLEANUP_FIRST_RUN_DELAY_SECONDS)
    while True:
        try:
            await mark_no_show_appointments()
        except Exception as e:
            logger.error(f"❌ Error cleaning up expired appointments: {e}")
        await asyncio.sleep(CLEANUP_INTERVAL_SECONDS)


async def run_appointment_jobs():
    """Polling loop for a single instance: reminders hourly, cleanup every 6 hours"""
    logger.info("🚀 Starting appointment jobs...")
    await asyncio.gather(_reminder_loop(), _cleanup_loop())
