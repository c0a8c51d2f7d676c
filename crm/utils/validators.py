# crm/utils/validators.py
import re
from typing import Any, Mapping

PHONE_NUMBER_PATTERN = re.compile(r"[0-9]{10}")
PIN_CODE_PATTERN = re.compile(r"[0-9]{5,6}")


def _is_text(value: Any, min_length: int) -> bool:
    return isinstance(value, str) and len(value.strip()) >= min_length


def _matches(value: Any, pattern: re.Pattern) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def validate_customer(data: Mapping[str, Any]) -> str | None:
    """
    Checks a customer payload. Returns None when it is valid, otherwise the
    message for the first failing field (first name, last name, phone number).
    """
    if not _is_text(data.get("first_name"), 2):
        return "First name is required and must be at least 2 characters"
    if not _is_text(data.get("last_name"), 2):
        return "Last name is required and must be at least 2 characters"
    if not _matches(data.get("phone_number"), PHONE_NUMBER_PATTERN):
        return "Phone number is required and must be a valid 10-digit number"
    return None


def validate_address(data: Mapping[str, Any]) -> str | None:
    """
    Checks an address payload. Returns None when it is valid, otherwise the
    message for the first failing field (details, city, state, pin code).
    """
    if not _is_text(data.get("address_details"), 5):
        return "Address details are required and must be at least 5 characters"
    if not _is_text(data.get("city"), 2):
        return "City is required and must be at least 2 characters"
    if not _is_text(data.get("state"), 2):
        return "State is required and must be at least 2 characters"
    if not _matches(data.get("pin_code"), PIN_CODE_PATTERN):
        return "Pin code is required and must be a valid 5 or 6-digit code"
    return None


def clean_customer(data: Mapping[str, Any]) -> dict:
    """Values to persist for a validated customer: names trimmed, phone number as given."""
    return {
        "first_name": data["first_name"].strip(),
        "last_name": data["last_name"].strip(),
        "phone_number": data["phone_number"],
    }


def clean_address(data: Mapping[str, Any]) -> dict:
    return {
        "address_details": data["address_details"].strip(),
        "city": data["city"].strip(),
        "state": data["state"].strip(),
        "pin_code": data["pin_code"],
    }
