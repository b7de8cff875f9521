"""Intake checks on file name, extension, size and declared MIME type."""

import logging
from dataclasses import dataclass, field
from typing import List

from models.errors import ErrorSeverity
from models.validation import (
    ErrorCode,
    FileValidationConfig,
    ScheduleFile,
    ValidationError,
    ValidationWarning,
    WarningCode,
    WarningImpact,
)
from validation.patterns import SUSPICIOUS_FILENAME_PATTERNS


def get_file_extension(file_name: str) -> str:
    """Lowercase text after the last dot, or an empty string when there is none."""
    if not file_name or "." not in file_name:
        return ""
    return file_name.rsplit(".", 1)[-1].lower()


def format_file_size(size: int) -> str:
    """Human-readable size such as ``12.5 MB``."""
    units = ["B", "KB", "MB", "GB"]
    value = float(size)
    unit_index = 0
    while value >= 1024 and unit_index < len(units) - 1:
        value /= 1024
        unit_index += 1
    return f"{value:.1f} {units[unit_index]}"


def contains_suspicious_filename_pattern(file_name: str) -> bool:
    return any(pattern.search(file_name) for pattern in SUSPICIOUS_FILENAME_PATTERNS)


@dataclass
class IntakeResult:
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)


class IntakeGate:
    """Validates file metadata against the static upload policy."""

    def __init__(self, config: FileValidationConfig):
        self.config = config

    def check(self, file: ScheduleFile) -> IntakeResult:
        """
        Run every metadata check and accumulate the findings.

        Args:
            file: The uploaded schedule file

        Returns:
            IntakeResult: Errors and warnings from all applicable checks
        """
        result = IntakeResult()
        name = file.name or ""
        extension = get_file_extension(name)
        size = file.declared_size

        if not name.strip():
            result.errors.append(
                ValidationError(
                    code=ErrorCode.INVALID_FILENAME,
                    message="File name is empty or invalid",
                    severity=ErrorSeverity.HIGH,
                    recoverable=False,
                    field="file_name",
                    suggestion="Ensure the file has a valid name",
                )
            )

        if extension not in self.config.supported_extensions:
            shown = f".{extension}" if extension else "(no extension)"
            result.errors.append(
                ValidationError(
                    code=ErrorCode.UNSUPPORTED_FILE_TYPE,
                    message=f"File type {shown} is not supported",
                    severity=ErrorSeverity.CRITICAL,
                    recoverable=False,
                    field="file_type",
                    suggestion="Please upload a CSV, PDF, Excel, ICS, JSON, or text file",
                )
            )

        max_size = self.config.size_limit_for(extension)
        if size > max_size:
            result.errors.append(
                ValidationError(
                    code=ErrorCode.FILE_TOO_LARGE,
                    message=f"File size ({format_file_size(size)}) exceeds limit ({format_file_size(max_size)})",
                    severity=ErrorSeverity.HIGH,
                    recoverable=False,
                    field="file_size",
                    suggestion="Try compressing the file or removing unnecessary data",
                )
            )

        if size == 0 or file.raw_size == 0:
            result.errors.append(
                ValidationError(
                    code=ErrorCode.EMPTY_FILE,
                    message="File appears to be empty",
                    severity=ErrorSeverity.CRITICAL,
                    recoverable=False,
                    field="file_size",
                    suggestion="Upload a file with content",
                )
            )

        mime_type = file.declared_mime_type or ""
        if mime_type and mime_type not in self.config.allowed_mime_types:
            result.warnings.append(
                ValidationWarning(
                    code=WarningCode.UNEXPECTED_MIME_TYPE,
                    message=f"Unexpected MIME type: {mime_type}",
                    impact=WarningImpact.MINOR,
                    suggestion="File may still be valid, but MIME type is unusual",
                )
            )

        if contains_suspicious_filename_pattern(name):
            logging.warning(f"Suspicious file name rejected: {name!r}")
            result.errors.append(
                ValidationError(
                    code=ErrorCode.SUSPICIOUS_FILENAME,
                    message="File name contains suspicious patterns",
                    severity=ErrorSeverity.HIGH,
                    recoverable=True,
                    field="file_name",
                    suggestion="Rename the file with a simple, descriptive name",
                )
            )

        return result
