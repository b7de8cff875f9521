"""Core configuration and utility functions."""

import logging
import os
from typing import Dict, Optional, Set

from dotenv import load_dotenv
from fastapi import FastAPI

from error_handling.handlers import ErrorHandler, ErrorHandlingMiddleware
from models.errors import ConfigurationError
from models.validation import (
    DEFAULT_ALLOWED_MIME_TYPES,
    DEFAULT_FILE_SIZE_LIMITS,
    MB,
    SUPPORTED_EXTENSIONS,
    FileValidationConfig,
)
from validation.validators import FileValidator

# Load environment variables
load_dotenv()

# File validation configuration constants
SPECIAL_CHAR_RATIO_THRESHOLD = 0.1
BINARY_RATIO_THRESHOLD = 0.01
LARGE_FILE_THRESHOLD = 10 * MB  # recommend trimming above this size
DEFAULT_LOG_LEVEL = "INFO"


class AppConfig:
    """Application configuration settings."""

    def __init__(self):
        self.size_limits = {
            extension: self._read_int(f"MAX_{extension.upper()}_FILE_SIZE", DEFAULT_FILE_SIZE_LIMITS[extension])
            for extension in SUPPORTED_EXTENSIONS
        }
        self.allowed_mime_types = (
            self._parse_mime_types(os.getenv("ALLOWED_MIME_TYPES", "")) or set(DEFAULT_ALLOWED_MIME_TYPES)
        )
        self.special_char_ratio_threshold = self._read_ratio(
            "SPECIAL_CHAR_RATIO_THRESHOLD", SPECIAL_CHAR_RATIO_THRESHOLD
        )
        self.binary_ratio_threshold = self._read_ratio("BINARY_RATIO_THRESHOLD", BINARY_RATIO_THRESHOLD)
        self.large_file_threshold = self._read_int("LARGE_FILE_THRESHOLD", LARGE_FILE_THRESHOLD)
        self.log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)

    def _read_int(self, name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError:
            raise ConfigurationError(f"{name} must be an integer number of bytes, got {raw!r}")
        if value <= 0:
            raise ConfigurationError(f"{name} must be positive, got {value}")
        return value

    def _read_ratio(self, name: str, default: float) -> float:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = float(raw)
        except ValueError:
            raise ConfigurationError(f"{name} must be a number between 0 and 1, got {raw!r}")
        if not 0.0 <= value <= 1.0:
            raise ConfigurationError(f"{name} must be between 0 and 1, got {value}")
        return value

    def _parse_mime_types(self, mime_types_str: str) -> Optional[Set[str]]:
        """Parse comma-separated MIME types from environment variable."""
        if not mime_types_str:
            return None
        return {mt.strip() for mt in mime_types_str.split(",") if mt.strip()}

    def get_file_validation_config(self) -> FileValidationConfig:
        """Get file validation configuration."""
        return FileValidationConfig(
            size_limits=dict(self.size_limits),
            allowed_mime_types=set(self.allowed_mime_types),
            special_char_ratio_threshold=self.special_char_ratio_threshold,
            binary_ratio_threshold=self.binary_ratio_threshold,
            large_file_threshold=self.large_file_threshold,
        )

    def get_supported_formats(self) -> Dict[str, object]:
        """Describe accepted uploads for clients."""
        return {
            "extensions": list(SUPPORTED_EXTENSIONS),
            "size_limits": dict(self.size_limits),
            "mime_types": sorted(self.allowed_mime_types),
        }


def create_fastapi_app() -> FastAPI:
    """Create and configure FastAPI application instance."""
    app = FastAPI(
        title="Schedule File Validator",
        description="Validates uploaded academic schedule files before import",
        version="1.0.0",
    )

    return app


def setup_middleware(app: FastAPI) -> None:
    """Configure FastAPI middleware."""
    error_handler = ErrorHandler()
    app.add_middleware(ErrorHandlingMiddleware, error_handler=error_handler)


def create_file_validator(config: AppConfig) -> FileValidator:
    """Create file validator instance with configuration."""
    file_validation_config = config.get_file_validation_config()
    return FileValidator(file_validation_config)


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure application logging."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    # Suppress some noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
