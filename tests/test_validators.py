"""Tests for shared validators and number generation"""

import re

import pytest

from app.shared.numbers import (
    generate_appointment_number,
    generate_client_number,
    generate_request_number,
    is_valid_number,
)
from app.shared.validators import (
    format_for_whatsapp,
    to_e164_phone,
    validate_colombian_phone,
    validate_colombian_phones,
    validate_email,
    validate_hex_color,
    validate_time_slot,
)


class TestColombianPhone:
    @pytest.mark.parametrize("raw", ["3001234567", "+57 300 123 4567", "57-300-123-4567", "(300) 123 4567"])
    def test_valid_formats_normalize(self, raw):
        result = validate_colombian_phone(raw)
        assert result.valid is True
        assert result.normalized == "573001234567"
        assert result.formatted == "573001234567@c.us"
        assert result.display == "+57 300 123 4567"

    def test_missing_phone(self):
        result = validate_colombian_phone("")
        assert result.valid is False
        assert result.error == "Número de teléfono requerido"

    def test_wrong_length(self):
        result = validate_colombian_phone("300123")
        assert result.valid is False
        assert "10 dígitos" in result.error

    def test_landline_rejected(self):
        result = validate_colombian_phone("6088712345")
        assert result.valid is False
        assert "empezar con 3" in result.error

    def test_letters_rejected(self):
        result = validate_colombian_phone("300ABC4567")
        assert result.valid is False

    def test_uncommon_prefix_still_valid(self):
        assert validate_colombian_phone("3991234567").valid is True

    def test_batch_split(self):
        result = validate_colombian_phones(["3001234567", "123"])
        assert len(result["valid"]) == 1
        assert result["invalid"][0]["phone"] == "123"

    def test_batch_requires_list(self):
        with pytest.raises(ValueError):
            validate_colombian_phones("3001234567")

    def test_format_for_whatsapp_raises_on_invalid(self):
        assert format_for_whatsapp("3001234567") == "573001234567@c.us"
        with pytest.raises(ValueError):
            format_for_whatsapp("12")


class TestE164:
    def test_prefers_mobile(self):
        assert to_e164_phone("3001234567", "3109999999") == "+573001234567"

    def test_falls_back_to_phone(self):
        assert to_e164_phone(None, "310 999 9999") == "+573109999999"

    def test_foreign_number_passthrough(self):
        assert to_e164_phone("+1 555 123 4567", None) == "+15551234567"

    def test_no_number(self):
        assert to_e164_phone(None, None) is None


class TestFieldValidators:
    def test_email_lowercased(self):
        assert validate_email("  Maria@Example.COM ") == "maria@example.com"

    def test_email_invalid(self):
        with pytest.raises(ValueError):
            validate_email("not-an-email")

    def test_hex_color(self):
        assert validate_hex_color("#1797d5") == "#1797D5"
        with pytest.raises(ValueError):
            validate_hex_color("blue")

    def test_time_slot(self):
        assert validate_time_slot("08:30") == "08:30"
        assert validate_time_slot("14:00:00") == "14:00"
        with pytest.raises(ValueError):
            validate_time_slot("25:00")


class TestNumbers:
    def test_format(self):
        pattern = re.compile(r"^APT-\d{8}-[0-9A-F]{8}$")
        assert pattern.match(generate_appointment_number())
        assert generate_client_number().startswith("CLI-")
        assert generate_request_number().startswith("REQ-")

    def test_numbers_are_unique(self):
        numbers = {generate_appointment_number() for _ in range(200)}
        assert len(numbers) == 200

    def test_is_valid_number(self):
        assert is_valid_number("APT-20250101-ABCDEF12", "APT")
        assert not is_valid_number("CLI-20250101-ABCDEF12", "APT")
        assert not is_valid_number("APT-", "APT")
        assert not is_valid_number("", "APT")
