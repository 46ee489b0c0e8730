"""
Input validation utilities for the HRM System
"""
import re
from datetime import datetime
from typing import Optional, Tuple, Dict, Any, Iterable

from config import WORKING_STATUSES, MARITAL_STATUSES


class ValidationError(Exception):
    """Custom exception for validation errors"""
    pass


# Optional free-text columns and their maximum lengths
TEXT_FIELDS = {
    'police_area': 100,
    'transport_route': 100,
    'address': 500,
    'job_role': 100,
    'department': 100,
}

DATE_FIELDS = {
    'dob': "Date of Birth",
    'date_of_join': "Date of Join",
    'date_of_resign': "Date of Resign",
}

PHONE_FIELDS = {
    'mobile_1': "Mobile 1",
    'mobile_2': "Mobile 2",
}


def validate_required(value: Any, field_name: str) -> str:
    """
    Validate that a required field is not empty

    Args:
        value: The value to validate
        field_name: Name of the field for error messages

    Returns:
        Stripped string value

    Raises:
        ValidationError: If value is empty or None
    """
    if value is None:
        raise ValidationError(f"{field_name} is required")

    value_str = str(value).strip()
    if not value_str:
        raise ValidationError(f"{field_name} is required")

    return value_str


def validate_length(value: str, field_name: str, min_length: int = None, max_length: int = None) -> str:
    """
    Validate string length

    Args:
        value: The string to validate
        field_name: Name of the field for error messages
        min_length: Minimum length (optional)
        max_length: Maximum length (optional)

    Returns:
        Validated string

    Raises:
        ValidationError: If length constraints are not met
    """
    value_str = str(value).strip()
    length = len(value_str)

    if min_length is not None and length < min_length:
        raise ValidationError(f"{field_name} must be at least {min_length} characters long")

    if max_length is not None and length > max_length:
        raise ValidationError(f"{field_name} must be no more than {max_length} characters long")

    return value_str


def validate_phone(phone: Optional[str], field_name: str = "Phone number") -> Optional[str]:
    """
    Validate phone number format (flexible - allows various formats)

    Returns:
        Validated phone number or None if empty

    Raises:
        ValidationError: If phone format is invalid
    """
    if not phone or not str(phone).strip():
        return None

    phone = str(phone).strip()

    # Remove common separators for validation
    digits_only = re.sub(r'[\s\-\(\)\+]', '', phone)

    if not re.match(r'^[0-9]{7,15}$', digits_only):
        raise ValidationError(f"{field_name} has an invalid format")

    return phone


def validate_date(date_str: Optional[str], field_name: str = "Date", date_format: str = "%Y-%m-%d") -> Optional[str]:
    """
    Validate date format

    Args:
        date_str: Date string to validate
        field_name: Name of the field for error messages
        date_format: Expected date format (default: YYYY-MM-DD)

    Returns:
        Validated date string or None if empty

    Raises:
        ValidationError: If date format is invalid
    """
    if not date_str or not str(date_str).strip():
        return None

    date_str = str(date_str).strip()

    try:
        datetime.strptime(date_str, date_format)
        return date_str
    except ValueError:
        raise ValidationError(f"{field_name} must be in format {date_format}")


def validate_epf_number(epf_number: Any) -> str:
    """
    Validate EPF number format

    Args:
        epf_number: EPF number to validate

    Returns:
        Validated EPF number (uppercase)

    Raises:
        ValidationError: If EPF number format is invalid
    """
    epf_number = validate_required(epf_number, "EPF Number")
    epf_number = validate_length(epf_number, "EPF Number", min_length=1, max_length=20)

    if not re.match(r'^[A-Za-z0-9\-/]+$', epf_number):
        raise ValidationError("EPF Number can only contain letters, numbers, dashes, and slashes")

    return epf_number.upper()


def validate_name(name: Any, field_name: str = "Name") -> str:
    """
    Validate person name (any script or punctuation; only blank is rejected)

    Args:
        name: Name to validate
        field_name: Name of the field for error messages

    Returns:
        Validated name

    Raises:
        ValidationError: If name is empty or too long
    """
    name = validate_required(name, field_name)
    return validate_length(name, field_name, max_length=255)


def validate_choice(value: Any, field_name: str, choices: Iterable[str]) -> Optional[str]:
    """
    Validate that an optional value is one of the allowed choices

    Returns:
        Lowercased choice or None if empty

    Raises:
        ValidationError: If the value is not an allowed choice
    """
    if value is None or not str(value).strip():
        return None

    value = str(value).strip().lower()
    if value not in choices:
        raise ValidationError(f"{field_name} must be one of: {', '.join(choices)}")

    return value


def validate_service_dates(date_of_join: Optional[str], date_of_resign: Optional[str]) -> None:
    """
    Check that a resignation does not precede joining (ISO dates compare as text)

    Raises:
        ValidationError: If date_of_resign is earlier than date_of_join
    """
    if date_of_join and date_of_resign and date_of_resign < date_of_join:
        raise ValidationError("Date of Resign cannot be earlier than Date of Join")


def sanitize_string(value: Any, max_length: int = None) -> Optional[str]:
    """
    Sanitize string input (strip whitespace, limit length)

    Args:
        value: String to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized string, or None if empty
    """
    if value is None:
        return None

    sanitized = str(value).strip()

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized or None


def validate_employee_data(data: Dict[str, Any], partial: bool = False) -> Tuple[Dict[str, Any], list]:
    """
    Validate employee form data

    Args:
        data: Dictionary containing submitted fields
        partial: If True, only validate the fields present (used for updates);
            the EPF number is never changed on update

    Returns:
        Tuple of (validated_data, errors_list)
    """
    validated = {}
    errors = []

    def present(field):
        return not partial or field in data

    def check(field, func, *args):
        try:
            validated[field] = func(data.get(field), *args)
        except ValidationError as e:
            errors.append(str(e))

    if not partial:
        check('epf_number', validate_epf_number)
    if present('name_with_initials'):
        check('name_with_initials', validate_name, "Name with Initials")
    if present('full_name'):
        check('full_name', validate_name, "Full Name")

    for field, label in DATE_FIELDS.items():
        if present(field):
            check(field, validate_date, label)

    for field, label in PHONE_FIELDS.items():
        if present(field):
            check(field, validate_phone, label)

    for field, max_length in TEXT_FIELDS.items():
        if present(field):
            validated[field] = sanitize_string(data.get(field), max_length=max_length)

    if present('working_status'):
        check('working_status', validate_choice, "Working Status", WORKING_STATUSES)
        if validated.get('working_status') is None:
            validated['working_status'] = 'active'
    if present('marital_status'):
        check('marital_status', validate_choice, "Marital Status", MARITAL_STATUSES)

    try:
        validate_service_dates(validated.get('date_of_join'), validated.get('date_of_resign'))
    except ValidationError as e:
        errors.append(str(e))

    return validated, errors
