import json
import re
from datetime import date, datetime, time
from enum import IntEnum
from typing import Any, Optional

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base
from .shared.validators import validate_hex_color


class AppointmentStatus(IntEnum):
    """Appointment status ids as stored in appointment_statuses"""

    PENDING = 1
    CONFIRMED = 2
    NO_SHOW = 3
    COMPLETED = 4
    CANCELLED = 5


# id, code, name, description, color, icon, allows cancellation, final state
APPOINTMENT_STATUS_SEED = [
    (AppointmentStatus.PENDING, "PENDING", "Pendiente", "Cita programada, pendiente de asistir", "#F59E0B", "clock", True, False),
    (AppointmentStatus.CONFIRMED, "CONFIRMED", "Confirmada", "Cita confirmada", "#3B82F6", "check-circle", True, False),
    (AppointmentStatus.NO_SHOW, "NO_SHOW", "No asistió", "El cliente no asistió a la cita", "#6B7280", "user-x", False, True),
    (AppointmentStatus.COMPLETED, "COMPLETED", "Completada", "Cita completada exitosamente", "#10B981", "check", False, True),
    (AppointmentStatus.CANCELLED, "CANCELLED", "Cancelada", "Cita cancelada", "#EF4444", "x-circle", False, True),
]

# Identity documents offered to clients, with their catalogue ids
DOCUMENT_TYPE_CATALOG = [
    (1, "CC", "Cédula de Ciudadanía"),
    (2, "TI", "Tarjeta de Identidad"),
    (3, "RC", "Registro Civil"),
    (4, "CE", "Cédula de Extranjería"),
]

PROPERTY_TYPE_SEED = [
    ("CASA", "Casa", "home"),
    ("APARTAMENTO", "Apartamento", "building"),
    ("LOCAL_COMERCIAL", "Local Comercial", "store"),
    ("BODEGA", "Bodega", "warehouse"),
    ("LOTE", "Lote", "map"),
    ("FINCA", "Finca", "trees"),
]

SERVICE_USE_TYPE_SEED = [
    ("RESIDENCIAL", "Residencial"),
    ("COMERCIAL", "Comercial"),
    ("INDUSTRIAL", "Industrial"),
    ("OFICIAL", "Oficial"),
    ("PROVISIONAL", "Provisional"),
]

PROJECT_TYPE_SEED = [
    ("URBANIZACION", "Urbanización", "Conjuntos residenciales y loteos", "home", "#203461"),
    ("CENTRO_COMERCIAL", "Centro Comercial", "Locales y centros comerciales", "store", "#1797D5"),
    ("EDIFICIO", "Edificio", "Edificios de vivienda u oficinas", "building", "#56C2E1"),
    ("INDUSTRIAL", "Proyecto Industrial", "Plantas y parques industriales", "factory", "#97D4E3"),
]

DOCUMENT_TYPES = ("CC", "TI", "CE", "RC")
HOLIDAY_TYPES = ("NATIONAL", "LOCAL", "COMPANY")
NOTIFICATION_TYPES = ("EMAIL", "SMS", "WHATSAPP", "IN_APP")
NOTIFICATION_STATUSES = ("PENDING", "SENT", "FAILED")
TEMPLATE_TYPES = ("EMAIL", "SMS", "PUSH")
SETTING_TYPES = ("STRING", "NUMBER", "BOOLEAN", "JSON")

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z0-9_]+)\s*\}\}")


def parse_document_type(value: Optional[str]) -> str:
    """Unknown or empty document types fall back to CC"""
    value = (value or "").strip().upper()
    return value if value in DOCUMENT_TYPES else "CC"


class AuditMixin:
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("rol_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Branch(AuditMixin, Base):
    __tablename__ = "branches"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    code = Column(String(50), unique=True, index=True, nullable=False)
    address = Column(String(500), nullable=True)
    phone = Column(String(50), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    is_main = Column(Boolean, default=False, nullable=False)
    color_primary = Column(String(7), nullable=True)  # e.g., #RRGGBB

    appointments = relationship("Appointment", back_populates="branch")
    available_times = relationship("AvailableTime", back_populates="branch")


class Client(AuditMixin, Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    client_number = Column(String(50), unique=True, index=True, nullable=False)
    document_type = Column(String(10), default="CC", nullable=False)  # CC, TI, CE, RC
    document_number = Column(String(50), unique=True, index=True, nullable=False)
    full_name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(50), nullable=True)
    mobile = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)

    appointments = relationship("Appointment", back_populates="client")


class AppointmentType(AuditMixin, Base):
    __tablename__ = "appointment_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    code = Column(String(50), nullable=True, index=True)
    description = Column(Text, nullable=True)
    icon = Column(String(100), nullable=True)
    color_primary = Column(String(7), nullable=True)
    color_secondary = Column(String(7), nullable=True)
    estimated_time_minutes = Column(Integer, default=120, nullable=False)
    requires_documentation = Column(Boolean, default=False, nullable=False)
    display_order = Column(Integer, default=0, nullable=False)

    @classmethod
    def create(
        cls,
        name: str,
        code: Optional[str] = None,
        estimated_time_minutes: int = 120,
        **fields,
    ) -> "AppointmentType":
        if not name or not name.strip():
            raise ValueError("Appointment type name is required")
        if estimated_time_minutes is None or estimated_time_minutes <= 0:
            raise ValueError("Estimated time must be greater than 0 minutes")
        return cls(
            name=name.strip(),
            code=code.strip().upper() if code else None,
            estimated_time_minutes=estimated_time_minutes,
            **fields,
        )


class AppointmentStatusRecord(AuditMixin, Base):
    """Display catalogue for AppointmentStatus ids (colours, icon, ordering)"""

    __tablename__ = "appointment_statuses"

    id = Column(Integer, primary_key=True)
    code = Column(String(50), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    color_primary = Column(String(20), nullable=True)
    color_secondary = Column(String(20), nullable=True)
    color_text = Column(String(20), nullable=True)
    icon_name = Column(String(100), nullable=True)
    display_order = Column(Integer, default=0, nullable=False)
    allow_cancellation = Column(Boolean, default=True, nullable=False)
    is_final_state = Column(Boolean, default=False, nullable=False)

    @classmethod
    def create(cls, code: str, name: str, **fields) -> "AppointmentStatusRecord":
        if not code or not code.strip():
            raise ValueError("Status code is required")
        if not name or not name.strip():
            raise ValueError("Status name is required")
        return cls(code=code.strip().upper(), name=name.strip(), **fields)

    def update_design(
        self,
        color_primary: Optional[str] = None,
        color_secondary: Optional[str] = None,
        color_text: Optional[str] = None,
        icon_name: Optional[str] = None,
    ) -> None:
        """Secondary and text colours are replaced as given; a blank icon keeps the current one"""
        self.color_primary = color_primary or self.color_primary
        self.color_secondary = color_secondary
        self.color_text = color_text
        if icon_name and icon_name.strip():
            self.icon_name = icon_name.strip()
        self.updated_at = datetime.utcnow()


class CatalogMixin(AuditMixin):
    """Code/name lookup tables shown as drop-downs in the portal"""

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    display_order = Column(Integer, default=0, nullable=False)

    @classmethod
    def create(cls, code: str, name: str, display_order: int = 0, **fields):
        if not code or not code.strip():
            raise ValueError("Code cannot be empty")
        if not name or not name.strip():
            raise ValueError("Name cannot be empty")
        return cls(code=code.strip().upper(), name=name.strip(), display_order=display_order, **fields)


class PropertyType(CatalogMixin, Base):
    __tablename__ = "property_types"

    icon_name = Column(String(100), nullable=True)


class ServiceUseType(CatalogMixin, Base):
    __tablename__ = "service_use_types"


class ProjectType(CatalogMixin, Base):
    __tablename__ = "project_types"

    description = Column(String(500), nullable=True)
    icon_name = Column(String(100), nullable=True)
    color_primary = Column(String(20), nullable=True)


class AvailableTime(AuditMixin, Base):
    """Time slots configured per branch (optionally per appointment type)"""

    __tablename__ = "available_times"

    id = Column(Integer, primary_key=True, index=True)
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=False, index=True)
    appointment_type_id = Column(Integer, ForeignKey("appointment_types.id"), nullable=True)
    time = Column(String(5), nullable=False)  # HH:MM

    branch = relationship("Branch", back_populates="available_times")
    appointment_type = relationship("AppointmentType")


class Appointment(AuditMixin, Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    appointment_number = Column(String(50), unique=True, index=True, nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=False, index=True)
    appointment_type_id = Column(Integer, ForeignKey("appointment_types.id"), nullable=False)
    status_id = Column(
        Integer, ForeignKey("appointment_statuses.id"), default=AppointmentStatus.PENDING, nullable=False
    )
    appointment_date = Column(Date, nullable=False, index=True)
    appointment_time = Column(String(5), nullable=True)  # HH:MM
    notes = Column(Text, nullable=True)
    cancellation_reason = Column(Text, nullable=True)
    completed_date = Column(DateTime, nullable=True)
    technician_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    is_enabled = Column(Boolean, default=True, nullable=False)

    client = relationship("Client", back_populates="appointments")
    branch = relationship("Branch", back_populates="appointments")
    appointment_type = relationship("AppointmentType")
    status = relationship("AppointmentStatusRecord")

    @property
    def client_name(self) -> Optional[str]:
        return self.client.full_name if self.client else None

    @property
    def client_number(self) -> Optional[str]:
        return self.client.client_number if self.client else None

    @property
    def branch_name(self) -> Optional[str]:
        return self.branch.name if self.branch else None

    @property
    def appointment_type_name(self) -> Optional[str]:
        return self.appointment_type.name if self.appointment_type else None

    @property
    def status_name(self) -> Optional[str]:
        return self.status.name if self.status else None

    @property
    def scheduled_at(self) -> datetime:
        """Date and time of the appointment combined; midnight when no time is set"""
        slot = time(0, 0)
        if self.appointment_time:
            hours, minutes = self.appointment_time.split(":")[:2]
            slot = time(int(hours), int(minutes))
        return datetime.combine(self.appointment_date, slot)


IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp")


def format_file_size(size: Optional[int]) -> str:
    """Human readable size with two decimals (B, KB, MB, GB)"""
    if size is None:
        return "Desconocido"
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} GB"


class AppointmentDocument(AuditMixin, Base):
    """Metadata of a file attached to an appointment; the file itself lives in external storage"""

    __tablename__ = "appointment_documents"

    id = Column(Integer, primary_key=True, index=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=False, index=True)
    document_name = Column(String(255), nullable=False)
    document_type = Column(String(50), nullable=True)
    file_path = Column(String(500), nullable=False)
    file_size = Column(Integer, nullable=True)  # bytes
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    description = Column(String(1000), nullable=True)

    appointment = relationship("Appointment")

    @classmethod
    def create(
        cls,
        appointment_id: int,
        document_name: str,
        file_path: str,
        document_type: Optional[str] = None,
        file_size: Optional[int] = None,
        uploaded_by: Optional[int] = None,
        description: Optional[str] = None,
    ) -> "AppointmentDocument":
        if not appointment_id or appointment_id <= 0:
            raise ValueError("Appointment id must be greater than 0")
        if not document_name or not document_name.strip():
            raise ValueError("Document name is required")
        if not file_path or not file_path.strip():
            raise ValueError("File path is required")
        if file_size is not None and file_size < 0:
            raise ValueError("File size cannot be negative")
        return cls(
            appointment_id=appointment_id,
            document_name=document_name.strip(),
            document_type=document_type.strip().upper() if document_type else None,
            file_path=file_path.strip(),
            file_size=file_size,
            uploaded_by=uploaded_by,
            description=description,
        )

    def update_description(self, description: Optional[str]) -> None:
        self.description = description
        self.updated_at = datetime.utcnow()

    @property
    def is_image(self) -> bool:
        return self.file_path.lower().endswith(IMAGE_EXTENSIONS)

    @property
    def is_pdf(self) -> bool:
        return self.file_path.lower().endswith(".pdf")

    @property
    def file_size_formatted(self) -> str:
        return format_file_size(self.file_size)


class User(AuditMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    full_name = Column(String(200), nullable=True)
    identification_type = Column(String(10), nullable=True)
    identification_number = Column(String(50), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    allowed_tabs = Column(Text, nullable=True)  # comma-separated tab codes

    roles = relationship("Rol", secondary=user_roles, back_populates="users")
    assignments = relationship("UserAssignment", back_populates="user", cascade="all, delete-orphan")
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan")

    @property
    def allowed_tabs_list(self) -> list[str]:
        if not self.allowed_tabs:
            return []
        return [tab.strip() for tab in self.allowed_tabs.split(",") if tab.strip()]


class Rol(AuditMixin, Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    code = Column(String(50), unique=True, index=True, nullable=False)

    users = relationship("User", secondary=user_roles, back_populates="roles")
    form_permissions = relationship(
        "RolFormPermission", back_populates="rol", cascade="all, delete-orphan"
    )


class Form(AuditMixin, Base):
    """A screen/feature of the admin portal that permissions are granted on"""

    __tablename__ = "forms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    code = Column(String(50), unique=True, index=True, nullable=False)
    description = Column(String(255), nullable=True)


class RolFormPermission(AuditMixin, Base):
    __tablename__ = "rol_form_permissions"
    __table_args__ = (UniqueConstraint("rol_id", "form_id", name="uq_rol_form"),)

    id = Column(Integer, primary_key=True, index=True)
    rol_id = Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False)
    form_id = Column(Integer, ForeignKey("forms.id", ondelete="CASCADE"), nullable=False)
    can_read = Column(Boolean, default=False, nullable=False)
    can_create = Column(Boolean, default=False, nullable=False)
    can_update = Column(Boolean, default=False, nullable=False)
    can_delete = Column(Boolean, default=False, nullable=False)

    rol = relationship("Rol", back_populates="form_permissions")
    form = relationship("Form")

    def permission_codes(self) -> list[str]:
        """Permission strings granted by this row, e.g. appointments.read"""
        prefix = self.form.code.lower()
        granted = [
            ("read", self.can_read),
            ("create", self.can_create),
            ("update", self.can_update),
            ("delete", self.can_delete),
        ]
        return [f"{prefix}.{action}" for action, allowed in granted if allowed]


class UserAssignment(AuditMixin, Base):
    """Links a user to the appointment types they attend"""

    __tablename__ = "user_assignments"
    __table_args__ = (UniqueConstraint("user_id", "appointment_type_id", name="uq_user_type"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    appointment_type_id = Column(
        Integer, ForeignKey("appointment_types.id"), nullable=False, index=True
    )

    user = relationship("User", back_populates="assignments")
    appointment_type = relationship("AppointmentType")

    @property
    def appointment_type_name(self) -> Optional[str]:
        return self.appointment_type.name if self.appointment_type else None


class RefreshToken(Base):
    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token_hash = Column(String(64), unique=True, index=True, nullable=False)  # sha256 hex
    expires_at = Column(DateTime, nullable=False)
    revoked_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="refresh_tokens")

    @property
    def is_usable(self) -> bool:
        return self.revoked_at is None and self.expires_at > datetime.utcnow()


class Holiday(AuditMixin, Base):
    __tablename__ = "holidays"

    id = Column(Integer, primary_key=True, index=True)
    holiday_date = Column(Date, nullable=False, index=True)
    holiday_name = Column(String(200), nullable=False)
    holiday_type = Column(String(20), nullable=False)  # NATIONAL, LOCAL, COMPANY
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=True)

    branch = relationship("Branch")

    @classmethod
    def create(
        cls,
        holiday_date: date,
        holiday_name: str,
        holiday_type: str,
        branch_id: Optional[int] = None,
    ) -> "Holiday":
        holiday_type = (holiday_type or "").upper()
        if holiday_type not in HOLIDAY_TYPES:
            raise ValueError(f"Invalid holiday type '{holiday_type}'")
        if not holiday_name or not holiday_name.strip():
            raise ValueError("Holiday name is required")
        if holiday_type == "LOCAL":
            if not branch_id or branch_id <= 0:
                raise ValueError("Local holidays require a valid branch")
        else:
            branch_id = None
        if isinstance(holiday_date, datetime):
            holiday_date = holiday_date.date()
        return cls(
            holiday_date=holiday_date,
            holiday_name=holiday_name.strip(),
            holiday_type=holiday_type,
            branch_id=branch_id,
        )

    def applies_to_branch(self, branch_id: Optional[int]) -> bool:
        return self.branch_id is None or self.branch_id == branch_id


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True, index=True)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=True)
    type = Column(String(20), nullable=False)  # EMAIL, SMS, WHATSAPP, IN_APP
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(20), default="PENDING", nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    sent_at = Column(DateTime, nullable=True)
    read_at = Column(DateTime, nullable=True)
    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @classmethod
    def create(
        cls,
        type: str,
        title: str,
        message: str,
        user_id: Optional[int] = None,
        client_id: Optional[int] = None,
        appointment_id: Optional[int] = None,
    ) -> "Notification":
        if (user_id is None) == (client_id is None):
            raise ValueError("A notification must target exactly one of user or client")
        recipient = user_id if user_id is not None else client_id
        if recipient <= 0:
            raise ValueError("Notification recipient id must be greater than 0")
        type = (type or "").upper()
        if type not in NOTIFICATION_TYPES:
            raise ValueError(f"Invalid notification type '{type}'")
        if not title or not title.strip():
            raise ValueError("Notification title is required")
        if not message or not message.strip():
            raise ValueError("Notification message is required")
        return cls(
            type=type,
            title=title,
            message=message,
            user_id=user_id,
            client_id=client_id,
            appointment_id=appointment_id,
            status="PENDING",
            is_read=False,
        )

    def mark_as_sent(self) -> None:
        self.status = "SENT"
        self.sent_at = datetime.utcnow()
        self.error_message = None

    def mark_as_failed(self, error_message: str) -> None:
        if not error_message or not error_message.strip():
            raise ValueError("An error message is required to mark a notification as failed")
        self.status = "FAILED"
        self.error_message = error_message

    def mark_as_read(self) -> None:
        if self.is_read:
            return
        self.is_read = True
        self.read_at = datetime.utcnow()


class NotificationTemplate(AuditMixin, Base):
    __tablename__ = "notification_templates"

    id = Column(Integer, primary_key=True, index=True)
    template_code = Column(String(100), unique=True, index=True, nullable=False)
    template_name = Column(String(200), nullable=False)
    template_type = Column(String(20), nullable=False)  # EMAIL, SMS, PUSH
    subject = Column(String(300), nullable=True)
    body_template = Column(Text, nullable=False)
    placeholders = Column(Text, nullable=True)  # JSON list of placeholder names

    @classmethod
    def create(
        cls,
        template_code: str,
        template_name: str,
        template_type: str,
        body_template: str,
        subject: Optional[str] = None,
        placeholders: Optional[list[str]] = None,
    ) -> "NotificationTemplate":
        if not template_code or not template_code.strip():
            raise ValueError("Template code is required")
        template_type = (template_type or "").upper()
        if template_type not in TEMPLATE_TYPES:
            raise ValueError(f"Invalid template type '{template_type}'")
        if not body_template or not body_template.strip():
            raise ValueError("Template body is required")
        return cls(
            template_code=template_code.strip().upper(),
            template_name=template_name,
            template_type=template_type,
            subject=subject,
            body_template=body_template,
            placeholders=json.dumps(placeholders) if placeholders else None,
        )

    @staticmethod
    def _substitute(text: Optional[str], values: dict[str, Any]) -> str:
        if not text:
            return ""

        def replace(match: re.Match) -> str:
            key = match.group(1)
            return str(values[key]) if key in values and values[key] is not None else match.group(0)

        return PLACEHOLDER_PATTERN.sub(replace, text)

    def render(self, values: dict[str, Any]) -> str:
        """Replace {{KEY}} placeholders; unknown keys are left untouched"""
        return self._substitute(self.body_template, values)

    def render_subject(self, values: dict[str, Any]) -> str:
        return self._substitute(self.subject, values)

    @property
    def placeholder_list(self) -> list[str]:
        if self.placeholders:
            return json.loads(self.placeholders)
        return sorted(set(PLACEHOLDER_PATTERN.findall(self.body_template or "")))


class SystemSetting(AuditMixin, Base):
    __tablename__ = "system_settings"

    id = Column(Integer, primary_key=True, index=True)
    setting_key = Column(String(100), unique=True, index=True, nullable=False)
    setting_value = Column(Text, nullable=True)
    setting_type = Column(String(20), default="STRING", nullable=False)
    description = Column(String(500), nullable=True)
    is_encrypted = Column(Boolean, default=False, nullable=False)

    @classmethod
    def create(
        cls,
        setting_key: str,
        setting_value: Optional[str],
        setting_type: str = "STRING",
        description: Optional[str] = None,
        is_encrypted: bool = False,
    ) -> "SystemSetting":
        if not setting_key or not setting_key.strip():
            raise ValueError("Setting key is required")
        setting_type = (setting_type or "STRING").upper()
        if setting_type not in SETTING_TYPES:
            raise ValueError(f"Invalid setting type '{setting_type}'")
        return cls(
            setting_key=setting_key.strip().upper(),
            setting_value=setting_value,
            setting_type=setting_type,
            description=description,
            is_encrypted=is_encrypted,
        )

    def get_int(self, default: int = 0) -> int:
        try:
            return int(str(self.setting_value).strip())
        except (TypeError, ValueError):
            return default

    def get_bool(self, default: bool = False) -> bool:
        if self.setting_value is None:
            return default
        value = str(self.setting_value).strip().lower()
        if value in ("true", "1", "yes", "si", "sí"):
            return True
        if value in ("false", "0", "no"):
            return False
        return default

    def get_json(self) -> Any:
        if not self.setting_value:
            return None
        return json.loads(self.setting_value)


THEME_DEFAULTS = {
    "primary_color": "#203461",
    "secondary_color": "#1797D5",
    "accent_color": "#56C2E1",
    "intermediate_color": "#1A6192",
    "success_color": "#22C55E",
    "error_color": "#EF4444",
    "warning_color": "#F59E0B",
    "info_color": "#3B82F6",
    "background_color": "#FFFFFF",
    "background_secondary_color": "#F9FAFB",
    "text_color": "#111827",
    "text_secondary_color": "#6B7280",
    "scrollbar_track_color": "#F3F4F6",
    "scrollbar_thumb_color": "#203461",
    "scrollbar_thumb_hover_color": "#1A6192",
}

BRAND_COLOR_FIELDS = ("primary_color", "secondary_color", "accent_color", "intermediate_color")
STATUS_COLOR_FIELDS = ("success_color", "error_color", "warning_color", "info_color")
SURFACE_COLOR_FIELDS = (
    "background_color",
    "background_secondary_color",
    "text_color",
    "text_secondary_color",
    "scrollbar_track_color",
    "scrollbar_thumb_color",
    "scrollbar_thumb_hover_color",
)


class ThemeSettings(AuditMixin, Base):
    __tablename__ = "theme_settings"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), default="Default", nullable=False)
    description = Column(String(500), nullable=True)
    is_default_theme = Column(Boolean, default=False, nullable=False)
    primary_color = Column(String(7), default=THEME_DEFAULTS["primary_color"], nullable=False)
    secondary_color = Column(String(7), default=THEME_DEFAULTS["secondary_color"], nullable=False)
    accent_color = Column(String(7), default=THEME_DEFAULTS["accent_color"], nullable=False)
    intermediate_color = Column(String(7), default=THEME_DEFAULTS["intermediate_color"], nullable=False)
    success_color = Column(String(7), default=THEME_DEFAULTS["success_color"], nullable=False)
    error_color = Column(String(7), default=THEME_DEFAULTS["error_color"], nullable=False)
    warning_color = Column(String(7), default=THEME_DEFAULTS["warning_color"], nullable=False)
    info_color = Column(String(7), default=THEME_DEFAULTS["info_color"], nullable=False)
    background_color = Column(String(7), default=THEME_DEFAULTS["background_color"], nullable=False)
    background_secondary_color = Column(
        String(7), default=THEME_DEFAULTS["background_secondary_color"], nullable=False
    )
    text_color = Column(String(7), default=THEME_DEFAULTS["text_color"], nullable=False)
    text_secondary_color = Column(
        String(7), default=THEME_DEFAULTS["text_secondary_color"], nullable=False
    )
    scrollbar_track_color = Column(
        String(7), default=THEME_DEFAULTS["scrollbar_track_color"], nullable=False
    )
    scrollbar_thumb_color = Column(
        String(7), default=THEME_DEFAULTS["scrollbar_thumb_color"], nullable=False
    )
    scrollbar_thumb_hover_color = Column(
        String(7), default=THEME_DEFAULTS["scrollbar_thumb_hover_color"], nullable=False
    )

    @classmethod
    def create_default(cls) -> "ThemeSettings":
        return cls(name="ElectroHuila", is_default_theme=True, **THEME_DEFAULTS)

    def _apply(self, fields: tuple[str, ...], values: dict[str, Optional[str]]) -> None:
        for field in fields:
            value = values.get(field)
            if value is not None and value.strip():
                setattr(self, field, validate_hex_color(value.strip()))

    def update_brand_colors(self, **values: Optional[str]) -> None:
        self._apply(BRAND_COLOR_FIELDS, values)

    def update_status_colors(self, **values: Optional[str]) -> None:
        self._apply(STATUS_COLOR_FIELDS, values)

    def update_surface_colors(self, **values: Optional[str]) -> None:
        self._apply(SURFACE_COLOR_FIELDS, values)

    def update_info(self, name: Optional[str] = None, description: Optional[str] = None) -> None:
        if name is not None and name.strip():
            self.name = name.strip()
        if description is not None and description.strip():
            self.description = description.strip()

    def to_dict(self) -> dict:
        data = {field: getattr(self, field) for field in THEME_DEFAULTS}
        data.update(
            {
                "id": self.id,
                "name": self.name,
                "description": self.description,
                "is_default_theme": self.is_default_theme,
                "is_active": self.is_active,
            }
        )
        return data
