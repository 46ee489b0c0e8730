"""
Utility modules for the HRM System
"""
from .logger import get_logger, setup_logger
from .validators import (
    ValidationError,
    validate_required,
    validate_length,
    validate_phone,
    validate_date,
    validate_epf_number,
    validate_name,
    validate_choice,
    sanitize_string,
    validate_employee_data
)

__all__ = [
    'get_logger',
    'setup_logger',
    'ValidationError',
    'validate_required',
    'validate_length',
    'validate_phone',
    'validate_date',
    'validate_epf_number',
    'validate_name',
    'validate_choice',
    'sanitize_string',
    'validate_employee_data'
]
