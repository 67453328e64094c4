"""
Test configuration and fixtures
"""

import os
import tempfile
from datetime import date, timedelta

# Set test environment variables BEFORE importing app modules
_db_dir = tempfile.mkdtemp(prefix="electrohuila-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only-32chars"
os.environ["ENVIRONMENT"] = "test"
os.environ["EMAIL_ENABLED"] = "false"
os.environ["WHATSAPP_ENABLED"] = "false"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"
os.environ.pop("REDIS_URL", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.database import Base, SessionLocal, engine  # noqa: E402
from app.domain.appointments.service import today_utc  # noqa: E402
from app.main import app  # noqa: E402
from app.models import (  # noqa: E402
    Appointment,
    AppointmentStatus,
    AppointmentType,
    Branch,
    Client,
    Form,
    Rol,
    RolFormPermission,
    User,
)
from app.security_utils import create_access_token, hash_password  # noqa: E402
from app.seed import PORTAL_FORMS, seed_reference_data  # noqa: E402

ADMIN_PASSWORD = "admin123"


def next_bookable_date(days_ahead: int = 1) -> date:
    """A future date that is not a Sunday"""
    day = today_utc() + timedelta(days=days_ahead)
    while day.weekday() == 6:
        day += timedelta(days=1)
    return day


def past_weekday() -> date:
    day = today_utc() - timedelta(days=7)
    while day.weekday() == 6:
        day -= timedelta(days=1)
    return day


def next_sunday() -> date:
    day = today_utc() + timedelta(days=1)
    while day.weekday() != 6:
        day += timedelta(days=1)
    return day


@pytest.fixture(scope="function")
def db_session():
    """Fresh schema with reference data for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    seed_reference_data(db)
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    return TestClient(app)


@pytest.fixture
def lenient_client(db_session):
    """Client that returns 500 responses instead of raising server errors"""
    return TestClient(app, raise_server_exceptions=False)


# ============================================================================
# DATA FACTORIES
# ============================================================================


@pytest.fixture
def branch(db_session):
    branch = Branch(name="Sede Principal", code="NEIVA", address="Cra 5 # 10-20", city="Neiva", is_main=True)
    db_session.add(branch)
    db_session.commit()
    db_session.refresh(branch)
    return branch


@pytest.fixture
def appointment_type(db_session):
    appointment_type = AppointmentType.create(name="Revisión de medidor", code="MED")
    db_session.add(appointment_type)
    db_session.commit()
    db_session.refresh(appointment_type)
    return appointment_type


@pytest.fixture
def customer(db_session):
    customer = Client(
        client_number="CLI-20250101-AAAA1111",
        document_type="CC",
        document_number="1075000111",
        full_name="María Pérez",
        email="maria@example.com",
        mobile="3001234567",
    )
    db_session.add(customer)
    db_session.commit()
    db_session.refresh(customer)
    return customer


@pytest.fixture
def make_appointment(db_session, customer, branch, appointment_type):
    counter = {"n": 0}

    def _make(**overrides) -> Appointment:
        counter["n"] += 1
        values = {
            "appointment_number": f"APT-20250101-{counter['n']:08X}",
            "client_id": customer.id,
            "branch_id": branch.id,
            "appointment_type_id": appointment_type.id,
            "appointment_date": next_bookable_date(),
            "appointment_time": "09:00",
            "status_id": AppointmentStatus.PENDING,
        }
        values.update(overrides)
        appointment = Appointment(**values)
        db_session.add(appointment)
        db_session.commit()
        db_session.refresh(appointment)
        return appointment

    return _make


def grant_all_permissions(db, rol: Rol) -> None:
    for code, name in PORTAL_FORMS:
        form = db.query(Form).filter(Form.code == code).first()
        if not form:
            form = Form(name=name, code=code)
            db.add(form)
            db.flush()
        db.add(
            RolFormPermission(
                rol_id=rol.id,
                form_id=form.id,
                can_read=True,
                can_create=True,
                can_update=True,
                can_delete=True,
            )
        )
    db.commit()


@pytest.fixture
def admin_user(db_session):
    rol = Rol(name="Administrador", code="ADMIN")
    db_session.add(rol)
    db_session.flush()
    grant_all_permissions(db_session, rol)

    user = User(
        username="admin",
        email="admin@electrohuila.com",
        password=hash_password(ADMIN_PASSWORD),
        full_name="Administrador",
        allowed_tabs="appointments,clients",
    )
    user.roles.append(rol)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def token_for(user: User) -> str:
    token, _ = create_access_token(
        user_id=user.id,
        username=user.username,
        email=user.email,
        roles=[rol.code for rol in user.roles],
        permissions=[],
    )
    return token


@pytest.fixture
def auth_headers(admin_user):
    return {"Authorization": f"Bearer {token_for(admin_user)}"}


@pytest.fixture
def plain_user(db_session):
    """Active user without any role"""
    user = User(username="viewer", email="viewer@electrohuila.com", password=hash_password("viewer123"))
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user
