"""Human-readable identifiers: PREFIX-YYYYMMDD-XXXXXXXX"""

import uuid
from datetime import datetime

APPOINTMENT_PREFIX = "APT"
CLIENT_PREFIX = "CLI"
REQUEST_PREFIX = "REQ"


def _generate(prefix: str) -> str:
    return f"{prefix}-{datetime.utcnow():%Y%m%d}-{uuid.uuid4().hex[:8].upper()}"


def generate_appointment_number() -> str:
    return _generate(APPOINTMENT_PREFIX)


def generate_client_number() -> str:
    return _generate(CLIENT_PREFIX)


def generate_request_number() -> str:
    return _generate(REQUEST_PREFIX)


def is_valid_number(value: str, prefix: str) -> bool:
    """A number is valid when it starts with PREFIX- and has at least 3 dash-separated parts"""
    if not value or not value.startswith(f"{prefix}-"):
        return False
    return len(value.split("-")) >= 3
