import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from . import config
from .auth import user_id_from_token
from .cache import cache
from .database import (
    DEFAULT_PROVIDER,
    Base,
    engine,
    get_session_factory,
    parse_provider,
)
from .domain.appointment_types.router import router as appointment_types_router
from .domain.appointments.router import router as appointments_router
from .domain.auth.router import router as auth_router
from .domain.available_times.router import router as available_times_router
from .domain.branches.router import router as branches_router
from .domain.catalogs.router import (
    document_types_router,
    project_types_router,
    property_types_router,
    service_use_types_router,
)
from .domain.clients.router import router as clients_router
from .domain.documents.router import router as appointment_documents_router
from .domain.holidays.router import router as holidays_router
from .domain.notifications.router import router as notifications_router
from .domain.notifications.router import templates_router as notification_templates_router
from .domain.public.router import router as public_router
from .domain.roles.router import permissions_router
from .domain.roles.router import router as roles_router
from .domain.settings.router import router as system_settings_router
from .domain.settings.router import theme_router
from .domain.setup.router import router as setup_router
from .domain.statuses.router import router as appointment_statuses_router
from .domain.users.router import assignments_router
from .domain.users.router import router as users_router
from .error_handlers import register_exception_handlers
from .hub import router as hub_router
from .models import User
from .seed import seed_reference_data

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

PROVIDER_HEADER = "X-Database-Provider"

# Oracle has no FROM-less SELECT
PING_QUERIES = {"oracle": "SELECT 1 FROM DUAL"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    db = get_session_factory()()
    try:
        seed_reference_data(db)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to seed reference data: {e}")
    finally:
        db.close()

    if config.REDIS_URL:
        if cache.ping():
            logger.info("Redis connection established")
        else:
            logger.warning("Redis connection failed - cache will operate in fail-open mode")
    else:
        logger.info("REDIS_URL not set - caching disabled")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="ElectroHuila PQR Scheduling API", version="1.0.0", lifespan=lifespan)

register_exception_handlers(app)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Body/query validation errors answer 400 in the same shape as ValidationException"""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())[1:]) or "request"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    logger.warning(f"Validation error for {request.url.path}: {errors}")
    return JSONResponse(status_code=400, content={"error": "Validation failed", "errors": errors})


@app.middleware("http")
async def inactive_user_guard(request: Request, call_next):
    """
    Authenticated requests from deactivated accounts are refused before routing.
    Anonymous or invalid tokens fall through to the route's own auth handling.
    """
    authorization = request.headers.get("authorization", "")
    if not authorization.lower().startswith("bearer "):
        return await call_next(request)

    user_id = user_id_from_token(authorization[7:].strip())
    if user_id is None:
        return await call_next(request)

    db = get_session_factory(getattr(request.state, "database_provider", None))()
    try:
        user = db.query(User).filter(User.id == user_id).first()
        is_inactive = user is not None and not user.is_active
    finally:
        db.close()

    if is_inactive:
        logger.warning(f"⚠️ Inactive user {user_id} attempted {request.method} {request.url.path}")
        return JSONResponse(status_code=403, content={"error": "User account is inactive"})
    return await call_next(request)


@app.middleware("http")
async def database_provider_resolver(request: Request, call_next):
    """
    Select the database for this request from ?database= or the X-Database-Provider
    header. Switching is only honoured in Production/Main; elsewhere the default is used.
    """
    requested = request.query_params.get("database") or request.headers.get(PROVIDER_HEADER)
    provider = DEFAULT_PROVIDER

    if requested:
        if config.ENVIRONMENT.strip().lower() in config.PROVIDER_SWITCH_ENVIRONMENTS:
            parsed = parse_provider(requested)
            if parsed:
                provider = parsed
            else:
                logger.warning(f"⚠️ Unknown database provider '{requested}', using {DEFAULT_PROVIDER.value}")
        else:
            logger.warning(
                f"⚠️ Database provider switch to '{requested}' ignored in {config.ENVIRONMENT} environment"
            )

    request.state.database_provider = provider
    response = await call_next(request)
    response.headers[PROVIDER_HEADER] = provider.value
    return response


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


# Log CORS configuration for debugging
logger.info(f"CORS allowed origins: {config.ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=[PROVIDER_HEADER],
)

# Routes
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(assignments_router)
app.include_router(roles_router)
app.include_router(permissions_router)
app.include_router(appointments_router)
app.include_router(appointment_statuses_router)
app.include_router(appointment_documents_router)
app.include_router(public_router)
app.include_router(clients_router)
app.include_router(branches_router)
app.include_router(appointment_types_router)
app.include_router(available_times_router)
app.include_router(holidays_router)
app.include_router(property_types_router)
app.include_router(service_use_types_router)
app.include_router(project_types_router)
app.include_router(document_types_router)
app.include_router(notifications_router)
app.include_router(notification_templates_router)
app.include_router(system_settings_router)
app.include_router(theme_router)
app.include_router(setup_router)
app.include_router(hub_router)


@app.get("/")
def root():
    return {"message": "ElectroHuila PQR Scheduling API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}


@app.get("/health/database")
def database_health(request: Request):
    """Check connectivity of the database selected for this request"""
    provider = getattr(request.state, "database_provider", DEFAULT_PROVIDER)
    try:
        db = get_session_factory(provider)()
        try:
            db.execute(text(PING_QUERIES.get(db.get_bind().dialect.name, "SELECT 1")))
        finally:
            db.close()
        return {"status": "healthy", "provider": provider.value}
    except Exception as e:
        logger.error(f"❌ Database health check failed for {provider.value}: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "provider": provider.value, "error": str(e)},
        )
