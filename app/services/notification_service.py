"""
Appointment Notification Service
Fans appointment events out to email, WhatsApp and in-app channels.
Every delivery is recorded as a Notification row; no channel failure
propagates to the caller.
"""

import logging
from typing import Awaitable, Callable, Optional

from sqlalchemy.orm import Session

from .. import config
from ..database import get_session_factory
from ..hub import send_notification_to_user
from ..models import Appointment, AppointmentType, Branch, Client, Notification, User, UserAssignment
from ..shared.validators import to_e164_phone
from .email_service import EmailService
from .whatsapp_service import WhatsAppService

logger = logging.getLogger(__name__)

DEFAULT_PROFESSIONAL = "Técnico ElectroHuila"
EMAIL_FAILED = "No se pudo enviar el email"
WHATSAPP_FAILED = "No se pudo enviar el mensaje de WhatsApp"


def format_display_date(appointment: Appointment) -> str:
    return appointment.appointment_date.strftime("%d/%m/%Y")


class AppointmentNotificationService:
    def __init__(
        self,
        db: Session,
        whatsapp: Optional[WhatsAppService] = None,
        email: Optional[EmailService] = None,
    ):
        self.db = db
        self.whatsapp = whatsapp or WhatsAppService()
        self.email = email or EmailService()

    # ==========================================
    # Loading
    # ==========================================

    def _load(self, appointment_id: int):
        appointment = self.db.query(Appointment).filter(Appointment.id == appointment_id).first()
        if not appointment:
            logger.warning(f"⚠️ Appointment {appointment_id} not found, no notifications sent")
            return None

        client = self.db.query(Client).filter(Client.id == appointment.client_id).first()
        if not client:
            logger.warning(
                f"⚠️ Client {appointment.client_id} for appointment {appointment_id} not found, "
                "no notifications sent"
            )
            return None

        branch = self.db.query(Branch).filter(Branch.id == appointment.branch_id).first()
        appointment_type = (
            self.db.query(AppointmentType)
            .filter(AppointmentType.id == appointment.appointment_type_id)
            .first()
        )
        return appointment, client, branch, appointment_type

    # ==========================================
    # Channel delivery
    # ==========================================

    async def _deliver(
        self,
        channel: str,
        client: Client,
        appointment: Appointment,
        title: str,
        message: str,
        send: Callable[[], Awaitable[bool]],
        failure_text: str,
    ) -> bool:
        """Create a PENDING record, call the gateway, then mark it SENT or FAILED"""
        notification = Notification.create(
            type=channel,
            title=title,
            message=message,
            client_id=client.id,
            appointment_id=appointment.id,
        )
        self.db.add(notification)
        self.db.commit()

        sent = False
        try:
            sent = await send()
            if sent:
                notification.mark_as_sent()
                logger.info(f"✅ {channel} '{title}' sent for appointment {appointment.appointment_number}")
            else:
                notification.mark_as_failed(failure_text)
                logger.warning(
                    f"⚠️ {channel} '{title}' failed for appointment {appointment.appointment_number}"
                )
        except Exception as e:
            notification.mark_as_failed(str(e) or failure_text)
            logger.error(f"❌ {channel} '{title}' error for appointment {appointment.appointment_number}: {e}")
        finally:
            self.db.commit()
        return sent

    async def _email(self, client, appointment, title, message, send) -> None:
        if not client.email:
            logger.debug(f"No email address for client {client.client_number}")
            return
        if not self.email.enabled:
            logger.debug("Email notifications disabled")
            return
        try:
            await self._deliver("EMAIL", client, appointment, title, message, send, EMAIL_FAILED)
        except Exception as e:
            logger.error(f"❌ Email notification error for appointment {appointment.id}: {e}")

    async def _whatsapp(self, client, appointment, title, message, send_to) -> None:
        if not self.whatsapp.enabled:
            logger.debug("WhatsApp notifications disabled")
            return
        phone_number = to_e164_phone(client.mobile, client.phone)
        if not phone_number:
            logger.debug(f"No phone number for client {client.client_number}")
            return
        try:
            await self._deliver(
                "WHATSAPP",
                client,
                appointment,
                title,
                message,
                lambda: send_to(phone_number),
                WHATSAPP_FAILED,
            )
        except Exception as e:
            logger.error(f"❌ WhatsApp notification error for appointment {appointment.id}: {e}")

    # ==========================================
    # Events
    # ==========================================

    def _base_data(self, appointment, client, branch) -> dict:
        return {
            "nombreCliente": client.full_name,
            "fecha": appointment.appointment_date.isoformat(),
            "hora": appointment.appointment_time or "",
            "ubicacion": branch.name if branch else "No especificada",
            "direccion": branch.address if branch else None,
            "numeroCita": appointment.appointment_number,
        }

    async def send_appointment_confirmation(self, appointment_id: int) -> None:
        loaded = self._load(appointment_id)
        if not loaded:
            return
        appointment, client, branch, appointment_type = loaded

        data = self._base_data(appointment, client, branch)
        data.update(
            {
                "profesional": DEFAULT_PROFESSIONAL,
                "tipoCita": appointment_type.name if appointment_type else None,
                "clienteId": client.client_number,
                "telefono": client.mobile or client.phone,
                "direccionCliente": client.address,
                "observaciones": appointment.notes,
            }
        )
        display_date = format_display_date(appointment)
        title = "Cita Confirmada"
        message = f"Tu cita para el {display_date} a las {appointment.appointment_time} ha sido confirmada"

        await self._email(
            client,
            appointment,
            title,
            message,
            lambda: self.email.send_appointment_confirmation(client.email, data),
        )
        await self._whatsapp(
            client,
            appointment,
            title,
            message,
            lambda phone: self.whatsapp.send_appointment_confirmation(phone, data),
        )
        await self._notify_assigned_users(appointment, client, display_date)

    async def send_appointment_reminder(self, appointment_id: int, hours_before: int = 24) -> None:
        loaded = self._load(appointment_id)
        if not loaded:
            return
        appointment, client, branch, _ = loaded

        data = self._base_data(appointment, client, branch)
        data["horasAntes"] = hours_before
        title = "Recordatorio de Cita"
        message = (
            f"Recuerda tu cita programada para el {format_display_date(appointment)} "
            f"a las {appointment.appointment_time}"
        )

        await self._email(
            client,
            appointment,
            title,
            message,
            lambda: self.email.send_appointment_reminder(client.email, data),
        )
        await self._whatsapp(
            client,
            appointment,
            title,
            message,
            lambda phone: self.whatsapp.send_appointment_reminder(phone, data),
        )

    async def send_appointment_cancellation(self, appointment_id: int, reason: Optional[str] = None) -> None:
        loaded = self._load(appointment_id)
        if not loaded:
            return
        appointment, client, branch, _ = loaded

        reason = reason if reason and reason.strip() else "No especificado"
        data = self._base_data(appointment, client, branch)
        data.update({"motivo": reason, "urlReagendar": config.RESCHEDULE_URL})
        title = "Cita Cancelada"
        message = (
            f"Tu cita del {format_display_date(appointment)} a las {appointment.appointment_time} "
            f"ha sido cancelada. Motivo: {reason}"
        )

        await self._email(
            client,
            appointment,
            title,
            message,
            lambda: self.email.send_appointment_cancellation(client.email, data),
        )
        await self._whatsapp(
            client,
            appointment,
            title,
            message,
            lambda phone: self.whatsapp.send_appointment_cancellation(phone, data),
        )

    async def send_appointment_completed(self, appointment_id: int) -> None:
        loaded = self._load(appointment_id)
        if not loaded:
            return
        appointment, client, branch, appointment_type = loaded

        data = self._base_data(appointment, client, branch)
        data.update(
            {
                "ubicacion": branch.name if branch else "Sede no especificada",
                "tipoCita": appointment_type.name if appointment_type else None,
                "observaciones": appointment.notes,
            }
        )
        message = (
            f"Gracias por asistir a tu cita del {format_display_date(appointment)} "
            f"a las {appointment.appointment_time}"
        )

        await self._whatsapp(
            client,
            appointment,
            "Cita Completada",
            message,
            lambda phone: self.whatsapp.send_appointment_completed(phone, data),
        )

    # ==========================================
    # In-app
    # ==========================================

    async def _notify_assigned_users(self, appointment: Appointment, client: Client, display_date: str) -> None:
        """One SENT in-app record (and hub push) per active user attending this appointment type"""
        try:
            assignments = (
                self.db.query(UserAssignment)
                .join(User, User.id == UserAssignment.user_id)
                .filter(
                    UserAssignment.appointment_type_id == appointment.appointment_type_id,
                    UserAssignment.is_active == True,  # noqa: E712
                    User.is_active == True,  # noqa: E712
                )
                .all()
            )
        except Exception as e:
            logger.error(f"❌ Failed to load assigned users for appointment {appointment.id}: {e}")
            return

        if not assignments:
            logger.debug(f"No users assigned to appointment type {appointment.appointment_type_id}")
            return

        title = "Nueva Cita Creada"
        message = (
            f"Nueva cita #{appointment.appointment_number} para {client.full_name} "
            f"el {display_date} a las {appointment.appointment_time}"
        )
        for assignment in assignments:
            try:
                notification = Notification.create(
                    type="IN_APP",
                    title=title,
                    message=message,
                    user_id=assignment.user_id,
                    appointment_id=appointment.id,
                )
                notification.mark_as_sent()
                self.db.add(notification)
                self.db.commit()

                await send_notification_to_user(
                    assignment.user_id,
                    {
                        "id": notification.id,
                        "type": "IN_APP",
                        "title": title,
                        "message": message,
                        "appointmentId": appointment.id,
                        "createdAt": notification.created_at.isoformat() if notification.created_at else None,
                    },
                )
                logger.info(f"🔔 In-app notification sent to user {assignment.user_id}")
            except Exception as e:
                self.db.rollback()
                logger.error(f"❌ In-app notification error for user {assignment.user_id}: {e}")


def _with_session(handler_name: str):
    """Build a task that opens its own session, for use after the response is sent"""

    async def task(*args, provider=None, **kwargs) -> None:
        db = get_session_factory(provider)()
        try:
            service = AppointmentNotificationService(db)
            await getattr(service, handler_name)(*args, **kwargs)
        except Exception as e:
            logger.error(f"❌ Background {handler_name} failed: {e}")
        finally:
            db.close()

    task.__name__ = f"{handler_name}_task"
    return task


send_confirmation_in_background = _with_session("send_appointment_confirmation")
send_cancellation_in_background = _with_session("send_appointment_cancellation")
send_completed_in_background = _with_session("send_appointment_completed")
