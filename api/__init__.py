"""API endpoints and route handlers."""

from .endpoints import (
    get_supported_formats,
    health_check,
    set_file_validator,
    set_supported_formats,
    validate_schedule_file,
)

__all__ = [
    "validate_schedule_file",
    "get_supported_formats",
    "health_check",
    "set_file_validator",
    "set_supported_formats",
]
