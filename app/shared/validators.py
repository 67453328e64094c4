"""Shared validation utilities"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# Common Colombian mobile prefixes; other 3xx prefixes are accepted with a warning
COMMON_MOBILE_PREFIXES = {f"{n}" for n in range(300, 306)} | {f"{n}" for n in range(310, 352)}

HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


@dataclass
class PhoneValidation:
    valid: bool
    normalized: Optional[str] = None
    formatted: Optional[str] = None
    display: Optional[str] = None
    original: Optional[str] = None
    error: Optional[str] = None


def _clean_phone(phone: str) -> str:
    return re.sub(r"[\s\-()+]", "", str(phone))


def validate_colombian_phone(phone: Optional[str]) -> PhoneValidation:
    """
    Validate and normalize a Colombian mobile number for WhatsApp delivery.

    Args:
        phone: Phone number in any common format (+57 300 123 4567, 3001234567, ...)

    Returns:
        PhoneValidation with normalized (57XXXXXXXXXX), formatted (57XXXXXXXXXX@c.us)
        and display (+57 XXX XXX XXXX) values, or an error message when invalid
    """
    if not phone:
        return PhoneValidation(valid=False, error="Número de teléfono requerido")

    digits = _clean_phone(phone)

    if digits.startswith("57"):
        digits = digits[2:]

    if not digits.isdigit():
        return PhoneValidation(
            valid=False, original=phone, error="El número de teléfono debe contener solo dígitos"
        )

    if len(digits) != 10:
        return PhoneValidation(
            valid=False,
            original=phone,
            error=f"Número inválido. Debe tener 10 dígitos (actual: {len(digits)})",
        )

    if not digits.startswith("3"):
        return PhoneValidation(
            valid=False,
            original=phone,
            error="El número debe empezar con 3 (números móviles colombianos)",
        )

    prefix = digits[:3]
    if prefix not in COMMON_MOBILE_PREFIXES:
        logger.warning(f"⚠️ Prefix {prefix} is not a common Colombian mobile prefix, processing anyway")

    normalized = f"57{digits}"
    return PhoneValidation(
        valid=True,
        normalized=normalized,
        formatted=f"{normalized}@c.us",
        display=f"+57 {digits[:3]} {digits[3:6]} {digits[6:]}",
        original=phone,
    )


def validate_colombian_phones(phones: list[str]) -> dict[str, list]:
    """Validate several numbers, splitting them into valid results and invalid entries"""
    if not isinstance(phones, list):
        raise ValueError("Se esperaba una lista de números de teléfono")

    valid: list[PhoneValidation] = []
    invalid: list[dict] = []
    for phone in phones:
        result = validate_colombian_phone(phone)
        if result.valid:
            valid.append(result)
        else:
            invalid.append({"phone": phone, "error": result.error})
    return {"valid": valid, "invalid": invalid}


def format_for_whatsapp(phone: str) -> str:
    """Return the 57XXXXXXXXXX@c.us form or raise ValueError"""
    result = validate_colombian_phone(phone)
    if not result.valid:
        raise ValueError(result.error)
    return result.formatted


def to_e164_phone(mobile: Optional[str], phone: Optional[str]) -> Optional[str]:
    """
    Pick the client's mobile (falling back to phone) and format it as +57XXXXXXXXXX.
    Numbers that are not local 10-digit mobiles are passed through with a leading +.
    """
    value = mobile or phone
    if not value:
        return None

    digits = _clean_phone(value)
    if len(digits) == 10 and digits.startswith("3"):
        digits = f"57{digits}"
    return f"+{digits}"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_hex_color(value: Optional[str]) -> Optional[str]:
    """Validate #RRGGBB colors, returning them upper-cased"""
    if not value:
        return value
    if not HEX_COLOR_PATTERN.match(value):
        raise ValueError(f"Invalid color '{value}'. Expected format #RRGGBB")
    return value.upper()


def validate_time_slot(value: Optional[str]) -> Optional[str]:
    """Validate HH:MM (24h) time strings"""
    if value is None:
        return value
    value = value.strip()
    if len(value) == 8 and value.endswith(":00"):
        value = value[:5]
    if not TIME_PATTERN.match(value):
        raise ValueError(f"Invalid time '{value}'. Expected format HH:MM")
    return value
