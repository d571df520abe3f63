"""Utility functions and classes."""

from jobtracker.utils.sanitize import sanitize_search_input, sanitize_text
from jobtracker.utils.validators import ValidationResult, validate_application_data

__all__ = [
    "ValidationResult",
    "sanitize_search_input",
    "sanitize_text",
    "validate_application_data",
]
