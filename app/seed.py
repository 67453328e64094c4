"""Reference data every deployment needs before the first request"""

import logging

from sqlalchemy.orm import Session

from .models import (
    APPOINTMENT_STATUS_SEED,
    PROJECT_TYPE_SEED,
    PROPERTY_TYPE_SEED,
    SERVICE_USE_TYPE_SEED,
    AppointmentStatusRecord,
    Form,
    ProjectType,
    PropertyType,
    Rol,
    RolFormPermission,
    ServiceUseType,
    ThemeSettings,
    User,
)
from .security_utils import hash_password

logger = logging.getLogger(__name__)

# Admin portal screens; permission strings are "<code lower>.<action>"
PORTAL_FORMS = [
    ("APPOINTMENTS", "Citas"),
    ("APPOINTMENT_TYPES", "Tipos de Citas"),
    ("AVAILABLE_TIMES", "Horarios Disponibles"),
    ("BRANCHES", "Sucursales"),
    ("CLIENTS", "Clientes"),
    ("HOLIDAYS", "Días Festivos"),
    ("USERS", "Usuarios"),
    ("ROLES", "Roles"),
    ("NOTIFICATIONS", "Notificaciones"),
    ("SETTINGS", "Configuración"),
]

DEFAULT_ROLES = [
    ("ADMIN", "Administrador"),
    ("SUPERVISOR", "Supervisor"),
    ("OPERATOR", "Operador"),
    ("CLIENT", "Cliente"),
]

ADMIN_USERNAME = "admin"
ADMIN_EMAIL = "admin@electrohuila.com"
ADMIN_INITIAL_PASSWORD = "Admin123!"


def seed_appointment_statuses(db: Session) -> int:
    """Insert missing appointment statuses; returns how many were added"""
    existing = {row.id for row in db.query(AppointmentStatusRecord.id).all()}
    added = 0
    for order, row in enumerate(APPOINTMENT_STATUS_SEED, start=1):
        status_id, code, name, description, color, icon, allow_cancellation, is_final = row
        if int(status_id) in existing:
            continue
        db.add(
            AppointmentStatusRecord.create(
                code,
                name,
                id=int(status_id),
                description=description,
                color_primary=color,
                color_text="#FFFFFF",
                icon_name=icon,
                display_order=order,
                allow_cancellation=allow_cancellation,
                is_final_state=is_final,
            )
        )
        added += 1
    if added:
        db.commit()
        logger.info(f"🌱 Seeded {added} appointment statuses")
    return added


def _seed_catalog(db: Session, model, rows: list[dict]) -> int:
    existing = {row.code for row in db.query(model.code).all()}
    added = 0
    for order, fields in enumerate(rows, start=1):
        if fields["code"] in existing:
            continue
        db.add(model.create(display_order=order, **fields))
        added += 1
    if added:
        db.commit()
        logger.info(f"🌱 Seeded {added} rows into {model.__tablename__}")
    return added


def seed_catalogs(db: Session) -> int:
    added = _seed_catalog(
        db, PropertyType, [{"code": c, "name": n, "icon_name": i} for c, n, i in PROPERTY_TYPE_SEED]
    )
    added += _seed_catalog(db, ServiceUseType, [{"code": c, "name": n} for c, n in SERVICE_USE_TYPE_SEED])
    added += _seed_catalog(
        db,
        ProjectType,
        [
            {"code": c, "name": n, "description": d, "icon_name": i, "color_primary": color}
            for c, n, d, i, color in PROJECT_TYPE_SEED
        ],
    )
    return added


def seed_default_theme(db: Session) -> bool:
    if db.query(ThemeSettings).count():
        return False
    db.add(ThemeSettings.create_default())
    db.commit()
    logger.info("🎨 Default theme seeded")
    return True


def seed_reference_data(db: Session) -> None:
    seed_appointment_statuses(db)
    seed_catalogs(db)
    seed_default_theme(db)


# ============================================================================
# SECURITY BOOTSTRAP
# ============================================================================


def seed_forms(db: Session) -> int:
    existing = {row.code for row in db.query(Form.code).all()}
    new_forms = [Form(code=code, name=name) for code, name in PORTAL_FORMS if code not in existing]
    if new_forms:
        db.add_all(new_forms)
        db.commit()
        logger.info(f"🌱 Seeded {len(new_forms)} forms")
    return len(new_forms)


def seed_roles(db: Session) -> int:
    existing = {row.code for row in db.query(Rol.code).all()}
    new_roles = [Rol(code=code, name=name) for code, name in DEFAULT_ROLES if code not in existing]
    if new_roles:
        db.add_all(new_roles)
        db.commit()
        logger.info(f"🌱 Seeded {len(new_roles)} roles")
    return len(new_roles)


def seed_admin_permissions(db: Session) -> int:
    """Grant the ADMIN role full access to every form it lacks"""
    admin_role = db.query(Rol).filter(Rol.code == "ADMIN").first()
    if not admin_role:
        return 0
    granted = {row.form_id for row in db.query(RolFormPermission).filter(RolFormPermission.rol_id == admin_role.id)}
    added = 0
    for form in db.query(Form).all():
        if form.id in granted:
            continue
        db.add(
            RolFormPermission(
                rol_id=admin_role.id,
                form_id=form.id,
                can_read=True,
                can_create=True,
                can_update=True,
                can_delete=True,
            )
        )
        added += 1
    if added:
        db.commit()
        logger.info(f"🔐 Granted ADMIN access to {added} forms")
    return added


def seed_admin_user(db: Session) -> bool:
    """Create the initial admin account when there are no users at all"""
    if db.query(User).count():
        logger.info("Users already seeded")
        return False
    admin = User(
        username=ADMIN_USERNAME,
        email=ADMIN_EMAIL,
        password=hash_password(ADMIN_INITIAL_PASSWORD),
        full_name="Administrador",
        allowed_tabs="all",
    )
    admin_role = db.query(Rol).filter(Rol.code == "ADMIN").first()
    if admin_role:
        admin.roles.append(admin_role)
    db.add(admin)
    db.commit()
    logger.info(f"👤 Seeded admin user: {ADMIN_USERNAME}")
    return True


def initialize_database(db: Session) -> dict[str, int]:
    """Full bootstrap: reference data, forms, roles, admin grants and the admin user. Idempotent."""
    counts = {
        "appointment_statuses": seed_appointment_statuses(db),
        "catalogs": seed_catalogs(db),
        "forms": seed_forms(db),
        "roles": seed_roles(db),
        "rol_form_permissions": seed_admin_permissions(db),
        "users": int(seed_admin_user(db)),
    }
    seed_default_theme(db)
    return counts
