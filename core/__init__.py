"""Core configuration and utilities."""

from .config import (
    AppConfig,
    create_fastapi_app,
    setup_middleware,
    create_file_validator,
    setup_logging
)

__all__ = [
    'AppConfig',
    'create_fastapi_app',
    'setup_middleware',
    'create_file_validator',
    'setup_logging'
]
