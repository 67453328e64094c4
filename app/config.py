import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Environment name - only Production/Main honor per-request database switching
ENVIRONMENT = os.getenv("ENVIRONMENT", "Development")
PROVIDER_SWITCH_ENVIRONMENTS = ("production", "main")

# Database Configuration
# DATABASE_URL, when set, is used for the default engine regardless of provider
DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_PROVIDER = os.getenv("DATABASE_PROVIDER", "oracle").lower()
ORACLE_CONNECTION_STRING = os.getenv("ORACLE_CONNECTION_STRING")
SQLSERVER_CONNECTION_STRING = os.getenv("SQLSERVER_CONNECTION_STRING")
POSTGRESQL_CONNECTION_STRING = os.getenv("POSTGRESQL_CONNECTION_STRING")
MYSQL_CONNECTION_STRING = os.getenv("MYSQL_CONNECTION_STRING")

# Security - CRITICAL: No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# JWT Configuration
JWT_ISSUER = os.getenv("JWT_ISSUER", "ElectroHuila.Api")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "ElectroHuila.Client")
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "1"))
REFRESH_TOKEN_DAYS = int(os.getenv("REFRESH_TOKEN_DAYS", "7"))

# WhatsApp gateway (external Node service)
WHATSAPP_API_URL = os.getenv("WHATSAPP_API_URL", "http://localhost:3000")
WHATSAPP_API_KEY = os.getenv("WHATSAPP_API_KEY")
WHATSAPP_ENABLED = os.getenv("WHATSAPP_ENABLED", "false").lower() == "true"

# Email gateway (external Node service)
EMAIL_API_URL = os.getenv("EMAIL_API_URL", "http://localhost:4000")
EMAIL_API_KEY = os.getenv("EMAIL_API_KEY")
EMAIL_ENABLED = os.getenv("EMAIL_ENABLED", "true").lower() == "true"

GATEWAY_TIMEOUT_SECONDS = float(os.getenv("GATEWAY_TIMEOUT_SECONDS", "30"))

# Link included in cancellation messages
RESCHEDULE_URL = os.getenv("RESCHEDULE_URL", "https://electrohuila.com/reagendar")

# Redis (cache + arq worker); unset disables caching
REDIS_URL = os.getenv("REDIS_URL")

# CORS
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:3001,http://127.0.0.1:3000"
    ).split(",")
    if origin.strip()
]
